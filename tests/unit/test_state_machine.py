"""
Unit tests for the two-click interaction reducer.
"""
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from graphcanvas.core.schemas import NoticeKind
from graphcanvas.graph.analytics import AnalyticsEngine
from graphcanvas.graph.synchronizer import GraphSynchronizer
from graphcanvas.interaction.state_machine import (
    DEFAULT_LINK_LABEL,
    InteractionMode,
    InteractionState,
    handle_node_click,
    toggle_link_mode,
    toggle_path_mode,
)


class TestToggles:

    def test_link_toggle_round_trip(self):
        state = toggle_link_mode(InteractionState())
        assert state.mode == InteractionMode.LINK_CREATION
        assert toggle_link_mode(state).mode == InteractionMode.NORMAL

    def test_toggle_clears_anchor(self):
        state = InteractionState(mode=InteractionMode.LINK_CREATION, anchor="A")
        assert toggle_link_mode(state).anchor is None

    def test_switching_modes_clears_anchor(self, chain_model):
        state = InteractionState(mode=InteractionMode.LINK_CREATION, anchor="A")
        new_state, _ = toggle_path_mode(state, chain_model)
        assert new_state.mode == InteractionMode.PATH_QUERY
        assert new_state.anchor is None

    def test_leaving_path_mode_resets_styles(self, chain_model, settings):
        highlighted = AnalyticsEngine(settings=settings).shortest_path(chain_model, "A", "B").model
        state = InteractionState(mode=InteractionMode.PATH_QUERY)
        new_state, model = toggle_path_mode(state, highlighted)
        assert new_state.mode == InteractionMode.NORMAL
        assert all(n.style["opacity"] == 1 for n in model.nodes)
        assert all(e.style["stroke"] == "#b1b1b7" for e in model.edges)


class TestNormalMode:

    def test_click_not_consumed(self, chain_model):
        result = handle_node_click(InteractionState(), chain_model, "A")
        assert result.consumed is False
        assert result.model is chain_model
        assert result.notice is None


class TestLinkCreation:

    def test_two_clicks_create_one_edge(self, chain_model):
        sync = GraphSynchronizer()
        sync.rebuild(chain_model)
        state = toggle_link_mode(InteractionState())

        first = handle_node_click(state, chain_model, "C", synchronizer=sync)
        assert first.state.anchor == "C"
        assert first.notice.ok
        assert first.model is chain_model

        second = handle_node_click(first.state, first.model, "A", synchronizer=sync)
        assert second.state.mode == InteractionMode.LINK_CREATION
        assert second.state.anchor is None
        assert len(second.model.edges) == len(chain_model.edges) + 1
        edge = second.model.edges[-1]
        assert (edge.source, edge.target, edge.label) == ("C", "A", DEFAULT_LINK_LABEL)
        assert sync.graph.has_edge("C", "A")

    def test_self_link_rejected_and_anchor_kept(self, chain_model):
        state = InteractionState(mode=InteractionMode.LINK_CREATION, anchor="A")
        result = handle_node_click(state, chain_model, "A")
        assert result.notice.kind == NoticeKind.GESTURE_INVALID
        assert result.state.anchor == "A"
        assert result.model is chain_model

    def test_duplicate_link_rejected(self, chain_model):
        state = InteractionState(mode=InteractionMode.LINK_CREATION, anchor="A")
        result = handle_node_click(state, chain_model, "B")
        assert result.notice.kind == NoticeKind.GESTURE_INVALID
        assert result.state.anchor is None
        assert result.model is chain_model

    def test_deleted_start_node_rejected(self, chain_model):
        model = chain_model.remove_node("A")
        state = InteractionState(mode=InteractionMode.LINK_CREATION, anchor="A")
        result = handle_node_click(state, model, "C")
        assert result.notice.kind == NoticeKind.GESTURE_INVALID
        assert result.state.mode == InteractionMode.LINK_CREATION
        assert result.state.anchor is None
        assert result.model is model

    def test_reverse_direction_allowed(self, chain_model):
        state = InteractionState(mode=InteractionMode.LINK_CREATION, anchor="B")
        result = handle_node_click(state, chain_model, "A")
        assert result.notice.ok
        assert result.model.has_edge_between("B", "A")

    def test_edge_ids_are_unique(self, chain_model):
        state = InteractionState(mode=InteractionMode.LINK_CREATION)
        model = chain_model
        for source, target in [("C", "A"), ("C", "B"), ("A", "C")]:
            state = handle_node_click(state, model, source).state
            result = handle_node_click(state, model, target)
            state, model = result.state, result.model
        ids = [e.id for e in model.edges]
        assert len(ids) == len(set(ids)) == 5


class TestPathQuery:

    def test_path_found_returns_to_normal(self, chain_model, settings):
        engine = AnalyticsEngine(settings=settings)
        state = InteractionState(mode=InteractionMode.PATH_QUERY)
        state = handle_node_click(state, chain_model, "A", engine=engine).state
        result = handle_node_click(state, chain_model, "C", engine=engine)
        assert result.path == ["A", "B", "C"]
        assert result.state.mode == InteractionMode.NORMAL
        assert result.notice.ok

    def test_no_path(self, chain_model, settings):
        engine = AnalyticsEngine(settings=settings)
        state = InteractionState(mode=InteractionMode.PATH_QUERY, anchor="C")
        result = handle_node_click(state, chain_model, "A", engine=engine)
        assert result.path is None
        assert result.notice.kind == NoticeKind.GESTURE_INVALID
        assert result.state.mode == InteractionMode.NORMAL
