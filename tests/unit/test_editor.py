"""
Unit tests for direct editing operations and style reset.
"""
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from graphcanvas.core.schemas import select
from graphcanvas.graph.analytics import AnalyticsEngine
from graphcanvas.graph.styles import reset_styles
from graphcanvas.interaction.editor import (
    create_node,
    delete_selection,
    relabel_selection,
    sample_model,
    selection_label,
)


class TestSampleModel:

    def test_demo_graph(self):
        model = sample_model()
        assert [n.label for n in model.nodes] == ["Graph", "Hello", "World", "System", "Vesper", "Gin"]
        assert len(model.edges) == 6
        assert model.edge("e1-2").label == "contains"


class TestCreateNode:

    def test_label_and_position(self, chain_model):
        node_id, model = create_node(chain_model)
        node = model.node(node_id)
        assert node.label == "Node 4"
        assert (node.position.x, node.position.y) == (400, 300)

    def test_ids_not_reused_after_delete(self, chain_model):
        first, model = create_node(chain_model)
        model = delete_selection(model, select(node_ids=[first])).model
        second, _ = create_node(model)
        assert first != second


class TestDeleteSelection:

    def test_delete_node_cascades(self, chain_model):
        outcome = delete_selection(chain_model, select(node_ids=["A"]))
        assert not outcome.model.has_node("A")
        assert [e.id for e in outcome.model.edges] == ["eB-C"]
        assert outcome.notice.ok

    def test_delete_edge(self, chain_model):
        outcome = delete_selection(chain_model, select(edge_ids=["eB-C"]))
        assert len(outcome.model.nodes) == 3
        assert [e.id for e in outcome.model.edges] == ["eA-B"]

    def test_nothing_selected(self, chain_model):
        outcome = delete_selection(chain_model, None)
        assert outcome.model is chain_model
        assert outcome.notice is None


class TestRelabel:

    def test_node_and_edge(self, chain_model):
        node_sel = select(node_ids=["B"])
        edge_sel = select(edge_ids=["eA-B"])
        model = relabel_selection(chain_model, node_sel, "Beta")
        model = relabel_selection(model, edge_sel, "leads to")
        assert selection_label(model, node_sel) == "Beta"
        assert selection_label(model, edge_sel) == "leads to"

    def test_missing_selection(self, chain_model):
        assert relabel_selection(chain_model, None, "x") is chain_model
        assert selection_label(chain_model, select(node_ids=["ghost"])) == ""


class TestResetStyles:

    def test_clears_analytics_colouring(self, star_model, settings):
        painted = AnalyticsEngine(settings=settings).degree_centrality(star_model).model
        model = reset_styles(painted)
        for node in model.nodes:
            assert node.style["backgroundColor"] == "#fff"
            assert node.style["border"] == "1px solid #777"
            assert node.style["width"] == 60
            assert node.style["boxShadow"] == "none"

    def test_placeholders_stay_small(self, star_model):
        from graphcanvas.core.schemas import VisualNode
        model = star_model.add_node(VisualNode(id="p", data={"placeholder": True}))
        assert reset_styles(model).node("p").style["width"] == 50

    def test_edges_back_to_default(self, chain_model, settings):
        painted = AnalyticsEngine(settings=settings).shortest_path(chain_model, "A", "C").model
        for edge in reset_styles(painted).edges:
            assert edge.style == {"stroke": "#b1b1b7", "strokeWidth": 1, "opacity": 1, "animated": False}
