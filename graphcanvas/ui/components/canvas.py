"""
Canvas rendering for GraphCanvas.

Translates the Visual Model into streamlit-agraph ``Node``/``Edge`` objects.
Positions come from the model and physics is off, so the drawing matches the
stored x/y exactly; layout is done by the ForceAtlas2 action instead.
"""
import logging
import re
from typing import Any

from streamlit_agraph import Config, Edge, Node, agraph

from graphcanvas.core.schemas import VisualEdge, VisualModel, VisualNode
from graphcanvas.graph.styles import DEFAULT_NODE_SIZE, EDGE_COLOR

logger = logging.getLogger(__name__)

_BORDER_RE = re.compile(r"(?P<width>\d+(?:\.\d+)?)px\s+(?P<kind>\w+)\s+(?P<color>\S+)")


def parse_border(border: str | None) -> tuple[float, str, bool]:
    """Split a CSS border shorthand into (width, colour, dashed)."""
    match = _BORDER_RE.match(border or "")
    if not match:
        return 1.0, "#777", False
    return float(match["width"]), match["color"], match["kind"] == "dashed"


def _size(style: dict[str, Any]) -> float:
    try:
        return float(style.get("width", DEFAULT_NODE_SIZE)) / 2
    except (TypeError, ValueError):
        return DEFAULT_NODE_SIZE / 2


def to_agraph_node(node: VisualNode, selected: bool = False) -> Node:
    style = node.style
    border_width, border_color, dashed = parse_border(style.get("border"))
    if selected:
        border_color = "#1976d2"
        border_width = max(border_width, 3)

    kwargs: dict[str, Any] = {
        "label": node.label,
        "title": f"{node.label} ({node.id})",
        "x": node.position.x,
        "y": node.position.y,
        "shape": "dot",
        "size": _size(style),
        "color": {"background": style.get("backgroundColor", "#fff"), "border": border_color},
        "borderWidth": border_width,
        "opacity": float(style.get("opacity", 1)),
        "font": {"color": "#000" if float(style.get("opacity", 1)) >= 0.5 else "#bbb"},
    }
    if dashed:
        kwargs["shapeProperties"] = {"borderDashes": [5, 5]}
    if style.get("boxShadow", "none") != "none":
        kwargs["shadow"] = {"enabled": True, "color": border_color, "size": 25}
    return Node(id=node.id, **kwargs)


def to_agraph_edge(edge: VisualEdge) -> Edge:
    style = edge.style
    return Edge(
        source=edge.source,
        target=edge.target,
        id=edge.id,
        label=edge.label,
        color={"color": style.get("stroke", EDGE_COLOR), "opacity": float(style.get("opacity", 1))},
        width=style.get("strokeWidth", 1),
        dashes=bool(style.get("animated", False)),
    )


def build_elements(model: VisualModel, selected_node: str | None = None) -> tuple[list[Node], list[Edge]]:
    nodes = [to_agraph_node(n, selected=n.id == selected_node) for n in model.nodes]
    # Dangling edges would make vis.js throw; the analytical graph skips them too
    ids = model.node_ids()
    edges = [to_agraph_edge(e) for e in model.edges if e.source in ids and e.target in ids]
    return nodes, edges


def render_canvas(model: VisualModel, selected_node: str | None = None, height: int = 650) -> str | None:
    """
    Draw the model and return the id of the clicked node, if any.

    streamlit-agraph only reports the most recent click, so callers must
    compare against the value from the previous run to detect a new one.
    """
    nodes, edges = build_elements(model, selected_node)
    config = Config(
        width="100%",
        height=height,
        directed=True,
        physics=False,
        hierarchical=False,
        nodeHighlightBehavior=False,
        node={"labelProperty": "label"},
        link={"labelProperty": "label", "renderLabel": True},
    )
    logger.debug(f"Rendering {len(nodes)} nodes, {len(edges)} edges")
    return agraph(nodes=nodes, edges=edges, config=config)
