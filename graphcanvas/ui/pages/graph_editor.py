"""
GraphCanvas: Graph Editor page.

Single-page workbench around the canvas:
- Search and spotlight a node
- Add, link, relabel and delete elements
- JSON / CSV import (replace or append) and export
- Analytics: layout, degree, betweenness, Louvain, PageRank, shortest path
"""
import logging

import streamlit as st

from graphcanvas.core.config import get_settings
from graphcanvas.core.schemas import NoticeKind, Outcome, SelectionKind, select
from graphcanvas.graph.analytics import AnalyticsEngine, search_nodes
from graphcanvas.graph.styles import reset_styles
from graphcanvas.graph.synchronizer import GraphSynchronizer
from graphcanvas.ingestion.codec import PayloadError, decode_payload, import_json
from graphcanvas.ingestion.importer import MergePolicy, plan_edge_import, plan_node_import
from graphcanvas.interaction.editor import (
    create_node,
    delete_selection,
    relabel_selection,
    sample_model,
    selection_label,
)
from graphcanvas.interaction.state_machine import (
    InteractionMode,
    InteractionState,
    handle_node_click,
    toggle_link_mode,
    toggle_path_mode,
)
from graphcanvas.ui.components.canvas import render_canvas
from graphcanvas.ui.components.export_utils import export_model_as_csv, export_model_as_json
from graphcanvas.ui.theme import inject_css, mode_badge, panel_caption

logger = logging.getLogger(__name__)

_NOTICE_RENDERERS = {
    NoticeKind.SUCCESS: st.success,
    NoticeKind.EMPTY_RESULT: st.info,
    NoticeKind.GESTURE_INVALID: st.warning,
    NoticeKind.INPUT_MALFORMED: st.error,
}

_NO_EDGE = "(none)"

_POLICY_LABELS = {
    "Append to canvas": MergePolicy.APPEND,
    "Replace canvas": MergePolicy.REPLACE,
}


def render():
    """Main render function for the Graph Editor."""
    inject_css()
    _init_state()

    st.markdown(
        '<div class="hero-title">🕸️ GraphCanvas</div>'
        '<div class="hero-subtitle">Draw, import and analyze a directed graph</div>',
        unsafe_allow_html=True,
    )

    with st.sidebar:
        _render_search_panel()
        _render_editor_panel()
        _render_io_panel()
        _render_analytics_panel()

    state = st.session_state.gc_interaction
    st.markdown(mode_badge(state.mode.value, state.anchor), unsafe_allow_html=True)
    _show_notice()

    col_canvas, col_props = st.columns([3, 1])
    with col_props:
        _render_property_panel()
    with col_canvas:
        _render_canvas()


# ============================================================
# Session state
# ============================================================

def _init_state():
    if "gc_model" not in st.session_state:
        st.session_state.gc_model = sample_model()
    if "gc_interaction" not in st.session_state:
        st.session_state.gc_interaction = InteractionState()
    if "gc_selection" not in st.session_state:
        st.session_state.gc_selection = None
    if "gc_synchronizer" not in st.session_state:
        st.session_state.gc_synchronizer = GraphSynchronizer()
    if "gc_last_click" not in st.session_state:
        st.session_state.gc_last_click = None
    if "gc_notice" not in st.session_state:
        st.session_state.gc_notice = None


def _engine() -> AnalyticsEngine:
    return AnalyticsEngine(st.session_state.gc_synchronizer, get_settings())


def _commit(model, notice=None):
    """Store the new model, keep the analytical graph in step, queue a notice."""
    st.session_state.gc_model = model
    st.session_state.gc_synchronizer.rebuild(model)
    if notice is not None:
        st.session_state.gc_notice = notice


def _commit_outcome(outcome: Outcome):
    _commit(outcome.model, outcome.notice)


def _drop_anchor():
    """Forget a pending gesture start; its node may no longer exist."""
    state = st.session_state.gc_interaction
    st.session_state.gc_interaction = state.with_anchor(None)


def _show_notice():
    notice = st.session_state.gc_notice
    if notice is None:
        return
    _NOTICE_RENDERERS.get(notice.kind, st.info)(notice.message)


def _run(action_name, fn):
    """Run a UI handler; unexpected failures are logged and shown, not raised."""
    try:
        fn()
    except Exception as e:
        logger.exception(f"{action_name} failed")
        st.error(f"{action_name} failed: {e}")


# ============================================================
# Sidebar panels
# ============================================================

def _render_search_panel():
    st.markdown(panel_caption("Search"), unsafe_allow_html=True)
    query = st.text_input("Node name or id", key="gc_query", label_visibility="collapsed",
                          placeholder="Node name or id")
    col_find, col_clear = st.columns(2)
    with col_find:
        if st.button("🔍 Find", use_container_width=True):
            def _search():
                result = search_nodes(st.session_state.gc_model, query.strip())
                _commit(result.model, result.notice)
                if result.focus:
                    st.session_state.gc_selection = select(node_ids=[result.focus])
            _run("Search", _search)
    with col_clear:
        if st.button("✖ Clear", use_container_width=True):
            _commit(reset_styles(st.session_state.gc_model))
            st.session_state.gc_notice = None


def _render_editor_panel():
    st.markdown(panel_caption("Editor"), unsafe_allow_html=True)
    state = st.session_state.gc_interaction

    if st.button("➕ Add node", use_container_width=True):
        node_id, model = create_node(st.session_state.gc_model)
        _commit(model)
        st.session_state.gc_selection = select(node_ids=[node_id])

    linking = state.mode == InteractionMode.LINK_CREATION
    if st.button("🔗 Stop linking" if linking else "🔗 Link mode", use_container_width=True,
                 type="primary" if linking else "secondary"):
        st.session_state.gc_interaction = toggle_link_mode(state)
        st.session_state.gc_last_click = None
        st.rerun()

    if st.button("🗑️ Delete selected", use_container_width=True,
                 disabled=st.session_state.gc_selection is None):
        outcome = delete_selection(st.session_state.gc_model, st.session_state.gc_selection)
        _commit_outcome(outcome)
        st.session_state.gc_selection = None
        _drop_anchor()


def _render_io_panel():
    st.markdown(panel_caption("Import / Export"), unsafe_allow_html=True)
    model = st.session_state.gc_model

    export_model_as_json(model)
    export_model_as_csv(model)

    with st.expander("Import", expanded=False):
        policy = _POLICY_LABELS[st.radio(
            "When the canvas is not empty",
            list(_POLICY_LABELS),
            key="gc_policy",
            help="Replace clears the canvas first; append keeps existing nodes and edges.",
        )]

        json_file = st.file_uploader("JSON model", type=["json"], key="gc_json_upload")
        if json_file is not None and st.button("Import JSON", use_container_width=True):
            _run("JSON import", lambda: _import_json(json_file.getvalue()))

        nodes_file = st.file_uploader("Nodes CSV", type=["csv"], key="gc_nodes_upload")
        if nodes_file is not None and st.button("Import nodes", use_container_width=True):
            _run("Node import", lambda: _import_nodes(nodes_file.getvalue(), policy))

        edges_file = st.file_uploader("Edges CSV", type=["csv"], key="gc_edges_upload")
        if edges_file is not None and st.button("Import edges", use_container_width=True):
            _run("Edge import", lambda: _import_edges(edges_file.getvalue(), policy))


def _decode(raw: bytes) -> str | None:
    try:
        return decode_payload(raw)
    except PayloadError as e:
        logger.warning(f"Rejected upload: {e}")
        _commit_outcome(Outcome.malformed(st.session_state.gc_model, str(e)))
        return None


def _import_json(raw: bytes):
    text = _decode(raw)
    if text is None:
        return
    _commit_outcome(import_json(text, st.session_state.gc_model))
    st.session_state.gc_selection = None
    _drop_anchor()


def _import_nodes(raw: bytes, policy: MergePolicy):
    text = _decode(raw)
    if text is None:
        return
    model = st.session_state.gc_model
    plan = plan_node_import(text, get_settings().importing)
    # An empty canvas has nothing to replace
    _commit_outcome(plan.apply(model, policy if model.nodes else MergePolicy.APPEND))
    st.session_state.gc_selection = None
    _drop_anchor()


def _import_edges(raw: bytes, policy: MergePolicy):
    text = _decode(raw)
    if text is None:
        return
    model = st.session_state.gc_model
    plan = plan_edge_import(text, get_settings().importing)
    _commit_outcome(plan.apply(model, policy if model.nodes else MergePolicy.APPEND))
    st.session_state.gc_selection = None
    _drop_anchor()


def _render_analytics_panel():
    st.markdown(panel_caption("Analytics"), unsafe_allow_html=True)
    engine = _engine()
    model = st.session_state.gc_model

    actions = [
        ("✨ Auto layout", engine.auto_layout),
        ("📊 Degree centrality", engine.degree_centrality),
        ("🌉 Betweenness", engine.betweenness),
        ("🎨 Louvain communities", engine.louvain),
        ("👑 PageRank", engine.pagerank),
    ]
    for label, action in actions:
        if st.button(label, use_container_width=True):
            def _analyze(action=action):
                result = action(model)
                _commit(result.model, result.notice)
            _run(label.split(" ", 1)[1], _analyze)

    state = st.session_state.gc_interaction
    querying = state.mode == InteractionMode.PATH_QUERY
    if st.button("❌ Cancel path query" if querying else "📍 Shortest path", use_container_width=True,
                 type="primary" if querying else "secondary"):
        new_state, new_model = toggle_path_mode(state, model)
        st.session_state.gc_interaction = new_state
        st.session_state.gc_last_click = None
        _commit(new_model)
        st.rerun()

    col_reset, col_demo = st.columns(2)
    with col_reset:
        if st.button("🧹 Reset styles", use_container_width=True):
            _commit(reset_styles(model))
            st.session_state.gc_notice = None
    with col_demo:
        if st.button("↺ Demo data", use_container_width=True):
            _commit(sample_model())
            st.session_state.gc_selection = None
            st.session_state.gc_interaction = InteractionState()
            st.session_state.gc_notice = None


# ============================================================
# Main area
# ============================================================

def _render_property_panel():
    model = st.session_state.gc_model
    st.markdown(panel_caption("Properties"), unsafe_allow_html=True)

    edge_ids = [e.id for e in model.edges]
    picked = st.selectbox(
        "Select edge",
        [_NO_EDGE] + edge_ids,
        key="gc_edge_pick",
        format_func=lambda eid: eid if eid == _NO_EDGE else _edge_caption(model, eid),
    )
    if picked != _NO_EDGE and st.button("Select", use_container_width=True):
        st.session_state.gc_selection = select(edge_ids=[picked])

    selection = st.session_state.gc_selection
    if selection is None:
        st.caption("Click a node or pick an edge to edit its label.")
        st.caption(f"{len(model.nodes)} nodes · {len(model.edges)} edges")
        return

    exists = model.has_node(selection.element_id) if selection.kind == SelectionKind.NODE \
        else model.edge(selection.element_id) is not None
    if not exists:
        st.session_state.gc_selection = None
        return

    st.markdown(
        f'<div class="property-panel"><b>{selection.kind.value.title()}</b> '
        f'<code>{selection.element_id}</code></div>',
        unsafe_allow_html=True,
    )
    current = selection_label(model, selection)
    label = st.text_input("Label", value=current, key=f"gc_label_{selection.element_id}")
    if label != current:
        _commit(relabel_selection(model, selection, label))
        st.rerun()


def _edge_caption(model, edge_id):
    edge = model.edge(edge_id)
    if edge is None:
        return edge_id
    return f"{edge.source} → {edge.target} ({edge.label or edge.id})"


def _render_canvas():
    model = st.session_state.gc_model
    state = st.session_state.gc_interaction
    selection = st.session_state.gc_selection

    highlight = state.anchor
    if highlight is None and selection is not None and selection.kind == SelectionKind.NODE:
        highlight = selection.element_id

    try:
        clicked = render_canvas(model, selected_node=highlight)
    except Exception as e:
        st.error(f"Failed to render graph: {e}")
        logger.exception("Graph rendering error")
        return

    # The component keeps returning its last click; only react to a change
    if clicked is None:
        st.session_state.gc_last_click = None
        return
    # A repeat click on the same node is indistinguishable from a rerun, so the
    # self-link rejection in the link reducer is only reached by other surfaces
    if clicked == st.session_state.gc_last_click:
        return
    st.session_state.gc_last_click = clicked
    _handle_click(clicked)


def _handle_click(node_id):
    state = st.session_state.gc_interaction
    try:
        result = handle_node_click(
            state,
            st.session_state.gc_model,
            node_id,
            synchronizer=st.session_state.gc_synchronizer,
            engine=_engine(),
        )
    except Exception as e:
        logger.exception(f"Click on {node_id} failed")
        st.session_state.gc_interaction = state.with_anchor(None)
        st.error(f"Click on {node_id} failed: {e}")
        return
    if not result.consumed:
        st.session_state.gc_selection = select(node_ids=[node_id])
    else:
        st.session_state.gc_interaction = result.state
        st.session_state.gc_model = result.model
        if result.notice is not None:
            st.session_state.gc_notice = result.notice
    st.rerun()
