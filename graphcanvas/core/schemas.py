"""
Pydantic schemas for the visual graph model.

The Visual Model is the authoritative, editable node/edge collection behind
the canvas. It is immutable: every mutation returns a new model so the
rendering surface never sees a half-applied change.
"""
from enum import Enum
from typing import Any, Callable, Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ============================================================
# Visual Elements
# ============================================================

class Position(BaseModel):
    """Canvas coordinates."""
    model_config = ConfigDict(frozen=True)

    x: float = 0.0
    y: float = 0.0


class VisualNode(BaseModel):
    """A node as drawn on the canvas."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique node identifier")
    position: Position = Field(default_factory=Position)
    label: str = Field(default="", description="Display text, defaults to the id")
    data: dict[str, Any] = Field(default_factory=dict, description="Extra fields copied to the analytical node")
    style: dict[str, Any] = Field(default_factory=dict, description="Presentation attributes")

    @model_validator(mode="before")
    @classmethod
    def _default_label(cls, values: Any) -> Any:
        # Accept the canvas-library shape where the label lives in data
        if isinstance(values, dict) and not values.get("label"):
            values = dict(values)
            data = values.get("data") or {}
            label = data.get("label") if isinstance(data, dict) else None
            values["label"] = str(label) if label else str(values.get("id", ""))
        return values

    @property
    def is_placeholder(self) -> bool:
        return bool(self.data.get("placeholder"))


class VisualEdge(BaseModel):
    """A directed relation as drawn on the canvas."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    source: str
    target: str
    label: str = ""
    style: dict[str, Any] = Field(default_factory=dict)


class VisualModel(BaseModel):
    """
    Immutable node/edge collection with pure transformations.

    Node ids are unique. Ids handed out by ``allocate_id`` come from a
    monotonic sequence and are never reused within a session, even after
    the node that carried them is deleted.
    """
    model_config = ConfigDict(frozen=True)

    nodes: tuple[VisualNode, ...] = ()
    edges: tuple[VisualEdge, ...] = ()
    sequence: int = Field(default=0, ge=0, description="Last allocated id number")

    @model_validator(mode="after")
    def _unique_node_ids(self) -> "VisualModel":
        seen = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"Duplicate node id: {node.id}")
            seen.add(node.id)
        return self

    # ---- Lookups ----

    def node_ids(self) -> set[str]:
        return {n.id for n in self.nodes}

    def has_node(self, node_id: str) -> bool:
        return any(n.id == node_id for n in self.nodes)

    def node(self, node_id: str) -> VisualNode | None:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def edge(self, edge_id: str) -> VisualEdge | None:
        for e in self.edges:
            if e.id == edge_id:
                return e
        return None

    def has_edge_between(self, source: str, target: str) -> bool:
        """True if a directed edge source → target exists."""
        return any(e.source == source and e.target == target for e in self.edges)

    # ---- Id allocation ----

    def allocate_id(self, prefix: str = "n") -> tuple[str, "VisualModel"]:
        """
        Reserve a fresh id.

        Returns the id and the model with its sequence advanced. Ids already
        used by a node or edge are skipped.
        """
        taken = self.node_ids() | {e.id for e in self.edges}
        seq = self.sequence
        while True:
            seq += 1
            candidate = f"{prefix}-{seq}"
            if candidate not in taken:
                return candidate, self.model_copy(update={"sequence": seq})

    # ---- Whole-collection transformations ----

    def replace(self, nodes: Iterable[VisualNode] | None = None,
                edges: Iterable[VisualEdge] | None = None) -> "VisualModel":
        """Swap out either collection; ``None`` keeps the current one."""
        return VisualModel(
            nodes=tuple(nodes) if nodes is not None else self.nodes,
            edges=tuple(edges) if edges is not None else self.edges,
            sequence=self.sequence,
        )

    def map_node_styles(self, fn: Callable[[VisualNode], dict[str, Any]]) -> "VisualModel":
        """Apply ``fn`` to every node; its result becomes the node's new style."""
        nodes = tuple(n.model_copy(update={"style": fn(n)}) for n in self.nodes)
        return self.model_copy(update={"nodes": nodes})

    def map_edge_styles(self, fn: Callable[[VisualEdge], dict[str, Any]]) -> "VisualModel":
        edges = tuple(e.model_copy(update={"style": fn(e)}) for e in self.edges)
        return self.model_copy(update={"edges": edges})

    def set_positions(self, positions: dict[str, tuple[float, float]]) -> "VisualModel":
        """Move every node listed in ``positions``; others keep theirs."""
        nodes = tuple(
            n.model_copy(update={"position": Position(x=positions[n.id][0], y=positions[n.id][1])})
            if n.id in positions else n
            for n in self.nodes
        )
        return self.model_copy(update={"nodes": nodes})

    # ---- Node transformations ----

    def add_node(self, node: VisualNode) -> "VisualModel":
        if self.has_node(node.id):
            raise ValueError(f"Node already exists: {node.id}")
        return self.model_copy(update={"nodes": self.nodes + (node,)})

    def add_nodes(self, nodes: Iterable[VisualNode]) -> "VisualModel":
        """Append nodes whose id is not present yet; others are skipped."""
        existing = self.node_ids()
        fresh = []
        for n in nodes:
            if n.id not in existing:
                fresh.append(n)
                existing.add(n.id)
        return self.model_copy(update={"nodes": self.nodes + tuple(fresh)})

    def remove_node(self, node_id: str) -> "VisualModel":
        """Delete a node together with every edge touching it."""
        return self.model_copy(update={
            "nodes": tuple(n for n in self.nodes if n.id != node_id),
            "edges": tuple(e for e in self.edges if e.source != node_id and e.target != node_id),
        })

    def relabel_node(self, node_id: str, label: str) -> "VisualModel":
        nodes = tuple(
            n.model_copy(update={"label": label})
            if n.id == node_id else n
            for n in self.nodes
        )
        return self.model_copy(update={"nodes": nodes})

    def move_node(self, node_id: str, x: float, y: float) -> "VisualModel":
        """Record a drag-induced position change."""
        return self.set_positions({node_id: (x, y)})

    # ---- Edge transformations ----

    def add_edge(self, edge: VisualEdge) -> "VisualModel":
        missing = [nid for nid in (edge.source, edge.target) if not self.has_node(nid)]
        if missing:
            raise ValueError(f"Edge {edge.id} references unknown node(s): {', '.join(missing)}")
        if self.edge(edge.id) is not None:
            raise ValueError(f"Edge already exists: {edge.id}")
        return self.model_copy(update={"edges": self.edges + (edge,)})

    def add_edges(self, edges: Iterable[VisualEdge]) -> "VisualModel":
        model = self
        for edge in edges:
            model = model.add_edge(edge)
        return model

    def remove_edge(self, edge_id: str) -> "VisualModel":
        return self.model_copy(update={"edges": tuple(e for e in self.edges if e.id != edge_id)})

    def relabel_edge(self, edge_id: str, label: str) -> "VisualModel":
        edges = tuple(e.model_copy(update={"label": label}) if e.id == edge_id else e for e in self.edges)
        return self.model_copy(update={"edges": edges})


# ============================================================
# Selection
# ============================================================

class SelectionKind(str, Enum):
    NODE = "node"
    EDGE = "edge"


class Selection(BaseModel):
    """Exactly one selected node or edge."""
    model_config = ConfigDict(frozen=True)

    kind: SelectionKind
    element_id: str


def select(node_ids: Iterable[str] = (), edge_ids: Iterable[str] = ()) -> Selection | None:
    """Collapse a selection change into a single element, or nothing.

    Only a lone node or a lone edge counts as a selection; multi-selects and
    mixed node+edge sets clear it.
    """
    node_ids, edge_ids = list(node_ids), list(edge_ids)
    if len(node_ids) == 1 and not edge_ids:
        return Selection(kind=SelectionKind.NODE, element_id=node_ids[0])
    if len(edge_ids) == 1 and not node_ids:
        return Selection(kind=SelectionKind.EDGE, element_id=edge_ids[0])
    return None


# ============================================================
# Notifications
# ============================================================

class NoticeKind(str, Enum):
    """Classification shown alongside every user-facing message."""
    SUCCESS = "success"
    INPUT_MALFORMED = "input_malformed"      # unreadable file, bad JSON
    GESTURE_INVALID = "gesture_invalid"      # self-loop, duplicate edge, no path
    EMPTY_RESULT = "empty_result"            # nothing to import / analyze


class Notice(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: NoticeKind
    message: str

    @property
    def ok(self) -> bool:
        return self.kind == NoticeKind.SUCCESS


class Outcome(BaseModel):
    """New model plus the message describing how it was produced."""
    model_config = ConfigDict(frozen=True)

    model: VisualModel
    notice: Notice | None = None

    @classmethod
    def success(cls, model: VisualModel, message: str) -> "Outcome":
        return cls(model=model, notice=Notice(kind=NoticeKind.SUCCESS, message=message))

    @classmethod
    def empty(cls, model: VisualModel, message: str) -> "Outcome":
        return cls(model=model, notice=Notice(kind=NoticeKind.EMPTY_RESULT, message=message))

    @classmethod
    def malformed(cls, model: VisualModel, message: str) -> "Outcome":
        return cls(model=model, notice=Notice(kind=NoticeKind.INPUT_MALFORMED, message=message))

    @classmethod
    def invalid(cls, model: VisualModel, message: str) -> "Outcome":
        return cls(model=model, notice=Notice(kind=NoticeKind.GESTURE_INVALID, message=message))
