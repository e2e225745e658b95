"""
Unit tests for analytics orchestration and search.
"""
import math

import pytest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from graphcanvas.core.schemas import NoticeKind, VisualModel
from graphcanvas.graph.analytics import AnalyticsEngine, search_nodes
from graphcanvas.graph.network_analysis import COMMUNITY_COLORS
from graphcanvas.graph.styles import BRIDGE_BORDER, HIGHLIGHT_COLOR, SEARCH_COLOR
from graphcanvas.interaction.editor import create_node


@pytest.fixture
def engine(settings):
    return AnalyticsEngine(settings=settings)


class TestEmptyGraph:

    @pytest.mark.parametrize("operation", [
        "degree_centrality", "betweenness", "pagerank", "louvain", "auto_layout",
    ])
    def test_empty_result_and_model_untouched(self, engine, operation):
        model = VisualModel()
        result = getattr(engine, operation)(model)
        assert result.notice.kind == NoticeKind.EMPTY_RESULT
        assert result.model is model


class TestDegreeCentrality:

    def test_ratios_normalized(self, engine, star_model):
        result = engine.degree_centrality(star_model)
        assert result.notice.ok
        assert all(0.0 <= r <= 1.0 for r in result.scores.values())
        assert max(result.scores.values()) == 1.0
        assert result.scores["H"] == 1.0
        assert result.scores["L1"] == pytest.approx(0.25)

    def test_hub_is_biggest_and_reddest(self, engine, star_model):
        model = engine.degree_centrality(star_model).model
        hub = model.node("H").style
        leaf = model.node("L1").style
        assert hub["width"] == 90
        assert hub["backgroundColor"] == "rgb(55, 100, 100)"
        assert leaf["width"] == pytest.approx(52.5)
        assert leaf["backgroundColor"] == "rgb(205, 100, 100)"
        assert hub["color"] == "#fff"

    def test_isolated_nodes_only(self, engine, model_factory):
        result = engine.degree_centrality(model_factory(["a", "b"]))
        assert result.scores == {"a": 0.0, "b": 0.0}
        assert result.model.node("a").style["width"] == 40

    def test_input_not_mutated(self, engine, star_model):
        before = star_model.model_dump()
        engine.degree_centrality(star_model)
        assert star_model.model_dump() == before


class TestBetweenness:

    def test_middle_node_is_bridge(self, engine, chain_model):
        result = engine.betweenness(chain_model)
        assert result.notice.ok
        model = result.model
        assert model.node("B").style["border"] == BRIDGE_BORDER
        assert model.node("A").style["border"] == "1px solid #ccc"
        assert model.node("B").style["width"] == 90

    def test_no_bridges(self, engine, model_factory):
        model = model_factory(["a", "b"], [("a", "b")])
        result = engine.betweenness(model)
        assert result.notice.kind == NoticeKind.EMPTY_RESULT
        assert result.model is model


class TestPageRank:

    def test_ratios_normalized(self, engine, chain_model):
        result = engine.pagerank(chain_model)
        assert max(result.scores.values()) == pytest.approx(1.0)
        assert all(0.0 <= r <= 1.0 for r in result.scores.values())
        # Sink of the chain collects the most rank
        assert result.scores["C"] == pytest.approx(1.0)

    def test_only_size_changes(self, engine, chain_model):
        model = engine.pagerank(chain_model).model
        for before, after in zip(chain_model.nodes, model.nodes):
            assert after.style["backgroundColor"] == before.style["backgroundColor"]
        assert model.node("C").style["width"] == pytest.approx(100)


class TestLouvain:

    def test_colours_from_palette(self, engine, model_factory):
        model = model_factory(
            ["a", "b", "c", "x", "y", "z"],
            [("a", "b"), ("b", "c"), ("c", "a"), ("x", "y"), ("y", "z"), ("z", "x")],
        )
        result = engine.louvain(model)
        colours = {n.id: n.style["backgroundColor"] for n in result.model.nodes}
        assert set(colours.values()) <= set(COMMUNITY_COLORS)
        assert colours["a"] == colours["b"] == colours["c"]
        assert colours["a"] != colours["x"]
        assert "2 communities" in result.notice.message


class TestAutoLayout:

    def test_moves_nodes(self, engine, chain_model):
        result = engine.auto_layout(chain_model)
        assert result.notice.ok
        assert set(result.scores) == {"A", "B", "C"}
        for node in result.model.nodes:
            assert (node.position.x, node.position.y) == result.scores[node.id]

    def test_single_node_is_noop(self, engine, model_factory):
        model = model_factory(["solo"])
        result = engine.auto_layout(model)
        assert result.notice.ok
        assert result.model is model

    def test_nodes_added_at_the_same_spot(self, engine):
        model = VisualModel()
        for _ in range(3):
            _, model = create_node(model)
        result = engine.auto_layout(model)
        assert result.notice.ok
        coords = [(n.position.x, n.position.y) for n in result.model.nodes]
        assert all(math.isfinite(v) for xy in coords for v in xy)
        assert len(set(coords)) == 3


class TestShortestPath:

    def test_directed_chain(self, engine, chain_model):
        result = engine.shortest_path(chain_model, "A", "C")
        assert result.path == ["A", "B", "C"]
        assert result.hops == 2
        assert "2 hop" in result.notice.message

    def test_highlighting(self, engine, model_factory):
        model = model_factory(["A", "B", "C", "D"], [("A", "B"), ("B", "C"), ("A", "D")])
        painted = engine.shortest_path(model, "A", "C").model
        assert painted.node("B").style["border"] == f"4px solid {HIGHLIGHT_COLOR}"
        assert painted.node("B").style["zIndex"] == 1000
        assert painted.node("D").style["opacity"] == 0.2
        assert painted.edge("eA-B").style["stroke"] == HIGHLIGHT_COLOR
        assert painted.edge("eA-B").style["animated"] is True
        assert painted.edge("eA-D").style["stroke"] == "#ddd"

    def test_reverse_has_no_path(self, engine, chain_model):
        result = engine.shortest_path(chain_model, "C", "A")
        assert result.notice.kind == NoticeKind.GESTURE_INVALID
        assert result.path is None
        assert result.model is chain_model


class TestSearch:

    def test_label_substring(self, chain_model):
        model = chain_model.relabel_node("B", "Bravo")
        result = search_nodes(model, "rav")
        assert result.focus == "B"
        target = result.model.node("B").style
        assert target["border"] == f"3px solid {SEARCH_COLOR}"
        assert result.model.node("A").style["opacity"] == 0.2
        assert all(e.style["opacity"] == 0.1 for e in result.model.edges)

    def test_exact_id(self, chain_model):
        assert search_nodes(chain_model, "C").focus == "C"

    def test_not_found(self, chain_model):
        result = search_nodes(chain_model, "zzz")
        assert result.notice.kind == NoticeKind.EMPTY_RESULT
        assert result.model is chain_model

    def test_empty_query_noop(self, chain_model):
        result = search_nodes(chain_model, "")
        assert result.model is chain_model
        assert result.focus is None
