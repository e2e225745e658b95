"""
Direct editing operations: add, delete, relabel, restore demo data.
"""
import logging

from graphcanvas.core.schemas import (
    Outcome,
    Position,
    Selection,
    SelectionKind,
    VisualEdge,
    VisualModel,
    VisualNode,
)
from graphcanvas.graph.styles import default_edge_style, default_node_style

logger = logging.getLogger(__name__)

NEW_NODE_POSITION = Position(x=400, y=300)


def sample_model() -> VisualModel:
    """Small demo graph shown on first load and on "restore demo data"."""
    layout = [
        ("1", "Graph", 0, 0),
        ("2", "Hello", -150, -100),
        ("3", "World", -150, 100),
        ("4", "System", 200, 0),
        ("5", "Vesper", 400, 0),
        ("6", "Gin", 400, 150),
    ]
    links = [
        ("1", "2", "contains"),
        ("1", "3", "contains"),
        ("2", "3", "combines"),
        ("1", "4", "runs on"),
        ("4", "5", "belongs to"),
        ("5", "6", "owns"),
    ]
    nodes = [
        VisualNode(id=nid, label=label, position=Position(x=x, y=y), style=default_node_style())
        for nid, label, x, y in layout
    ]
    edges = [
        VisualEdge(id=f"e{s}-{t}", source=s, target=t, label=label, style=default_edge_style())
        for s, t, label in links
    ]
    return VisualModel(nodes=tuple(nodes), edges=tuple(edges))


def create_node(model: VisualModel) -> tuple[str, VisualModel]:
    """Add a blank node at the default drop point."""
    node_id, model = model.allocate_id("n")
    node = VisualNode(
        id=node_id,
        label=f"Node {len(model.nodes) + 1}",
        position=NEW_NODE_POSITION,
        style=default_node_style(),
    )
    return node_id, model.add_node(node)


def delete_selection(model: VisualModel, selection: Selection | None) -> Outcome:
    """Remove the selected node (with its edges) or edge."""
    if selection is None:
        return Outcome(model=model)
    if selection.kind == SelectionKind.NODE:
        new_model = model.remove_node(selection.element_id)
    else:
        new_model = model.remove_edge(selection.element_id)
    logger.info(f"Deleted {selection.kind.value} {selection.element_id}")
    return Outcome.success(new_model, f"Deleted {selection.kind.value} {selection.element_id}.")


def relabel_selection(model: VisualModel, selection: Selection | None, label: str) -> VisualModel:
    if selection is None:
        return model
    if selection.kind == SelectionKind.NODE:
        return model.relabel_node(selection.element_id, label)
    return model.relabel_edge(selection.element_id, label)


def selection_label(model: VisualModel, selection: Selection | None) -> str:
    """Current label of the selected element, or an empty string."""
    if selection is None:
        return ""
    if selection.kind == SelectionKind.NODE:
        node = model.node(selection.element_id)
        return node.label if node else ""
    edge = model.edge(selection.element_id)
    return edge.label if edge else ""
