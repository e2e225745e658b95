"""
Two-click gesture handling for link creation and path queries.

The interaction state is an explicit value (mode + optional anchor). Each
control toggle or node click is fed to a reducer that returns the next state,
the next Visual Model and an optional notice; nothing is suspended between
clicks.
"""
import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

from graphcanvas.core.schemas import Notice, NoticeKind, VisualEdge, VisualModel
from graphcanvas.graph.analytics import AnalyticsEngine
from graphcanvas.graph.styles import default_edge_style, reset_styles
from graphcanvas.graph.synchronizer import GraphSynchronizer

logger = logging.getLogger(__name__)

DEFAULT_LINK_LABEL = "Link"


class InteractionMode(str, Enum):
    NORMAL = "normal"
    LINK_CREATION = "link_creation"
    PATH_QUERY = "path_query"


class InteractionState(BaseModel):
    """Current mode and the first node of a pending two-click gesture."""
    model_config = ConfigDict(frozen=True)

    mode: InteractionMode = InteractionMode.NORMAL
    anchor: str | None = None

    def enter(self, mode: InteractionMode) -> "InteractionState":
        """Switch mode; any pending anchor is dropped."""
        return InteractionState(mode=mode)

    def with_anchor(self, node_id: str | None) -> "InteractionState":
        return InteractionState(mode=self.mode, anchor=node_id)


class ClickResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    state: InteractionState
    model: VisualModel
    notice: Notice | None = None
    consumed: bool = True
    path: list[str] | None = None


def _notice(kind: NoticeKind, message: str) -> Notice:
    return Notice(kind=kind, message=message)


# ── Control toggles ─────────────────────────────────────────────

def toggle_link_mode(state: InteractionState) -> InteractionState:
    if state.mode == InteractionMode.LINK_CREATION:
        return state.enter(InteractionMode.NORMAL)
    return state.enter(InteractionMode.LINK_CREATION)


def toggle_path_mode(state: InteractionState, model: VisualModel) -> tuple[InteractionState, VisualModel]:
    """Enter or leave path query; leaving clears the path highlight."""
    if state.mode == InteractionMode.PATH_QUERY:
        return state.enter(InteractionMode.NORMAL), reset_styles(model)
    return state.enter(InteractionMode.PATH_QUERY), model


# ── Node clicks ─────────────────────────────────────────────────

def handle_node_click(
    state: InteractionState,
    model: VisualModel,
    node_id: str,
    synchronizer: GraphSynchronizer | None = None,
    engine: AnalyticsEngine | None = None,
) -> ClickResult:
    """
    Advance the gesture for a click on ``node_id``.

    In NORMAL mode the click is not consumed and should be treated as a
    plain selection by the caller.
    """
    if state.mode == InteractionMode.NORMAL:
        return ClickResult(state=state, model=model, consumed=False)

    label = model.node(node_id).label if model.has_node(node_id) else node_id

    if state.anchor is None:
        verb = "Link" if state.mode == InteractionMode.LINK_CREATION else "Path"
        return ClickResult(
            state=state.with_anchor(node_id),
            model=model,
            notice=_notice(NoticeKind.SUCCESS, f"{verb} start: {label}. Now click the end node."),
        )

    if state.mode == InteractionMode.LINK_CREATION:
        return _complete_link(state, model, node_id, synchronizer)
    return _complete_path(state, model, node_id, engine or AnalyticsEngine(synchronizer))


def _complete_link(state, model, node_id, synchronizer) -> ClickResult:
    anchor = state.anchor
    if anchor == node_id:
        return ClickResult(state=state, model=model,
                           notice=_notice(NoticeKind.GESTURE_INVALID, "Cannot link a node to itself."))

    cleared = state.with_anchor(None)
    if not model.has_node(anchor) or not model.has_node(node_id):
        return ClickResult(state=cleared, model=model,
                           notice=_notice(NoticeKind.GESTURE_INVALID,
                                          "One end of the link no longer exists; pick both ends again."))
    if model.has_edge_between(anchor, node_id):
        return ClickResult(state=cleared, model=model,
                           notice=_notice(NoticeKind.GESTURE_INVALID, "That link already exists."))

    edge_id, model = model.allocate_id("e")
    edge = VisualEdge(id=edge_id, source=anchor, target=node_id,
                      label=DEFAULT_LINK_LABEL, style=default_edge_style())
    model = model.add_edge(edge)
    if synchronizer is not None:
        synchronizer.append_edge(anchor, node_id, label=DEFAULT_LINK_LABEL)

    logger.info(f"Linked {anchor} -> {node_id}")
    return ClickResult(state=cleared, model=model,
                       notice=_notice(NoticeKind.SUCCESS, f"Linked {anchor} → {node_id}."))


def _complete_path(state, model, node_id, engine) -> ClickResult:
    result = engine.shortest_path(model, state.anchor, node_id)
    return ClickResult(
        state=state.enter(InteractionMode.NORMAL),
        model=result.model,
        notice=result.notice,
        path=result.path,
    )
