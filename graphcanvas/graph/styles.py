"""
Node and edge presentation attributes written by the editor and analytics.

Styles are plain dicts (canvas CSS-like keys). Helpers here always return new
dicts; a node's previous style is merged, never edited in place.
"""
from typing import Any

from graphcanvas.core.schemas import VisualEdge, VisualModel, VisualNode

DEFAULT_NODE_SIZE = 60
PLACEHOLDER_NODE_SIZE = 50
EDGE_COLOR = "#b1b1b7"

HIGHLIGHT_COLOR = "#E91E63"   # shortest path
SEARCH_COLOR = "#FF5722"
BRIDGE_BORDER = "4px double #9C27B0"


def default_node_style(background: str = "#fff") -> dict[str, Any]:
    return {
        "width": DEFAULT_NODE_SIZE,
        "height": DEFAULT_NODE_SIZE,
        "borderRadius": "50%",
        "border": "1px solid #777",
        "backgroundColor": background,
    }


def placeholder_node_style() -> dict[str, Any]:
    """Dashed orange look for nodes inferred from edge imports."""
    return {
        "width": PLACEHOLDER_NODE_SIZE,
        "height": PLACEHOLDER_NODE_SIZE,
        "borderRadius": "50%",
        "border": "2px dashed #ff9800",
        "backgroundColor": "#fffde7",
        "fontSize": "10px",
    }


def default_edge_style() -> dict[str, Any]:
    return {"stroke": EDGE_COLOR, "strokeWidth": 1, "opacity": 1, "animated": False}


def restyle(style: dict[str, Any], **changes: Any) -> dict[str, Any]:
    """Return ``style`` updated with ``changes``."""
    return {**style, **changes}


def sized(style: dict[str, Any], size: float) -> dict[str, Any]:
    return restyle(style, width=size, height=size)


def _reset_node(node: VisualNode) -> dict[str, Any]:
    # Placeholders keep their smaller footprint
    small = node.is_placeholder or node.style.get("width") == PLACEHOLDER_NODE_SIZE
    size = PLACEHOLDER_NODE_SIZE if small else DEFAULT_NODE_SIZE
    return restyle(
        node.style,
        border="1px solid #777",
        opacity=1,
        backgroundColor="#fff",
        color="#000",
        width=size,
        height=size,
        boxShadow="none",
        zIndex=0,
    )


def _reset_edge(edge: VisualEdge) -> dict[str, Any]:
    return default_edge_style()


def reset_styles(model: VisualModel) -> VisualModel:
    """Clear every analytics/search colouring back to the neutral look."""
    return model.map_node_styles(_reset_node).map_edge_styles(_reset_edge)


def dim_node(style: dict[str, Any]) -> dict[str, Any]:
    return restyle(style, opacity=0.2, border="1px solid #ddd", zIndex=0)


def dim_edge(style: dict[str, Any], opacity: float = 0.2) -> dict[str, Any]:
    return restyle(style, stroke="#ddd", strokeWidth=1, opacity=opacity, animated=False)
