"""
Analytics orchestration: run an algorithm and paint the result onto the canvas.

Every operation rebuilds the analytical graph from the current model, runs
one algorithm, normalizes scores against the maximum and returns a new
model with updated styles. The input model is never modified; an empty
graph yields an EMPTY_RESULT notice and the model unchanged.
"""
import logging
import math
from typing import Any

from pydantic import BaseModel, ConfigDict

from graphcanvas.core.config import Settings, get_settings
from graphcanvas.core.schemas import Notice, NoticeKind, VisualModel
from graphcanvas.graph import network_analysis as na
from graphcanvas.graph.styles import (
    BRIDGE_BORDER,
    HIGHLIGHT_COLOR,
    SEARCH_COLOR,
    dim_edge,
    dim_node,
    reset_styles,
    restyle,
    sized,
)
from graphcanvas.graph.synchronizer import GraphSynchronizer

logger = logging.getLogger(__name__)

EMPTY_GRAPH_MESSAGE = "The graph is empty; add or import nodes first."


class AnalyticsResult(BaseModel):
    """Outcome of one analytics run."""
    model_config = ConfigDict(frozen=True)

    model: VisualModel
    notice: Notice
    scores: dict[str, Any] = {}
    path: list[str] | None = None
    focus: str | None = None

    @property
    def hops(self) -> int | None:
        return len(self.path) - 1 if self.path else None


def _result(model, kind, message, **extra) -> AnalyticsResult:
    return AnalyticsResult(model=model, notice=Notice(kind=kind, message=message), **extra)


def _empty(model: VisualModel) -> AnalyticsResult:
    return _result(model, NoticeKind.EMPTY_RESULT, EMPTY_GRAPH_MESSAGE)


def _ratios(scores: dict[str, float]) -> dict[str, float]:
    """Divide by the largest score; an all-zero map divides by 1."""
    top = max(scores.values(), default=0) or 1
    return {node: score / top for node, score in scores.items()}


class AnalyticsEngine:
    """Runs graph algorithms against a freshly synchronized graph."""

    def __init__(self, synchronizer: GraphSynchronizer | None = None, settings: Settings | None = None):
        self.synchronizer = synchronizer or GraphSynchronizer()
        self.settings = settings or get_settings()

    # ── Centrality ──────────────────────────────────────────────

    def degree_centrality(self, model: VisualModel) -> AnalyticsResult:
        """Bigger and redder nodes have more connections."""
        G = self.synchronizer.rebuild(model)
        if G.number_of_nodes() == 0:
            return _empty(model)

        degrees = na.compute_degree(G)
        ratios = _ratios(degrees)

        def paint(node):
            ratio = ratios.get(node.id, 0.0)
            intensity = math.floor(ratio * 200)
            return sized(
                restyle(node.style, backgroundColor=f"rgb({255 - intensity}, 100, 100)", color="#fff"),
                40 + ratio * 50,
            )

        logger.info(f"Degree centrality over {len(degrees)} nodes, max degree {max(degrees.values())}")
        return _result(
            model.map_node_styles(paint),
            NoticeKind.SUCCESS,
            "Degree centrality done: larger, redder nodes have more connections.",
            scores=ratios,
        )

    def betweenness(self, model: VisualModel) -> AnalyticsResult:
        """Flag bridge nodes with a double purple border."""
        G = self.synchronizer.rebuild(model)
        if G.number_of_nodes() == 0:
            return _empty(model)

        scores = na.compute_betweenness(G)
        top = max(scores.values(), default=0)
        if top == 0:
            return _result(model, NoticeKind.EMPTY_RESULT, "No bridging structure found.", scores=scores)

        threshold = self.settings.analytics.bridge_threshold * top
        bridges = {n for n, s in scores.items() if s > threshold}

        def paint(node):
            score = scores.get(node.id, 0.0)
            border = BRIDGE_BORDER if node.id in bridges else "1px solid #ccc"
            return sized(restyle(node.style, border=border), 40 + (score / top) * 50)

        logger.info(f"Betweenness: {len(bridges)} bridge nodes out of {len(scores)}")
        message = (
            f"Betweenness done: {len(bridges)} bridge node(s) marked with a double purple border."
            if bridges else
            "Betweenness done: the structure is dispersed, no clear bridge nodes."
        )
        return _result(model.map_node_styles(paint), NoticeKind.SUCCESS, message,
                       scores={n: s / top for n, s in scores.items()})

    def pagerank(self, model: VisualModel) -> AnalyticsResult:
        """Scale node size by PageRank; colours are left alone."""
        G = self.synchronizer.rebuild(model)
        if G.number_of_nodes() == 0:
            return _empty(model)

        raw = na.compute_pagerank(G, alpha=self.settings.analytics.pagerank_alpha)
        ratios = _ratios(raw)
        new_model = model.map_node_styles(lambda n: sized(n.style, 30 + ratios.get(n.id, 0.0) * 70))
        return _result(new_model, NoticeKind.SUCCESS,
                       "PageRank done: larger nodes carry more authority.", scores=ratios)

    # ── Communities ─────────────────────────────────────────────

    def louvain(self, model: VisualModel) -> AnalyticsResult:
        G = self.synchronizer.rebuild(model)
        if G.number_of_nodes() == 0:
            return _empty(model)

        communities = na.detect_communities(G, seed=self.settings.analytics.louvain_seed)
        for node, community in communities.items():
            G.nodes[node]["community"] = community

        def paint(node):
            community = G.nodes[node.id]["community"] if node.id in G else 0
            return restyle(node.style, backgroundColor=na.community_color(community), color="#fff")

        count = len(set(communities.values()))
        logger.info(f"Louvain found {count} communities")
        return _result(model.map_node_styles(paint), NoticeKind.SUCCESS,
                       f"Community detection done: {count} communities, one colour each.",
                       scores=communities)

    # ── Layout ──────────────────────────────────────────────────

    def auto_layout(self, model: VisualModel) -> AnalyticsResult:
        """ForceAtlas2 with overlap prevention; copies x/y back onto the canvas."""
        G = self.synchronizer.rebuild(model)
        if G.number_of_nodes() == 0:
            return _empty(model)
        if G.number_of_nodes() == 1:
            return _result(model, NoticeKind.SUCCESS, "Only one node; nothing to lay out.")

        cfg = self.settings.layout
        positions = na.compute_force_layout(
            G,
            iterations=cfg.iterations,
            gravity=cfg.gravity,
            scaling_ratio=cfg.scaling_ratio,
            node_size=cfg.node_size,
            seed=cfg.seed,
        )
        return _result(model.set_positions(positions), NoticeKind.SUCCESS,
                       f"Layout done: {len(positions)} nodes placed.", scores=positions)

    # ── Paths ───────────────────────────────────────────────────

    def shortest_path(self, model: VisualModel, source: str, target: str) -> AnalyticsResult:
        """
        Highlight the shortest directed path source → target.

        Edges are followed in their direction only, so B → A is unreachable
        when the graph holds just A → B.
        """
        G = self.synchronizer.rebuild(model)
        if G.number_of_nodes() == 0:
            return _empty(model)

        path = na.find_shortest_path(G, source, target)
        if path is None:
            return _result(model, NoticeKind.GESTURE_INVALID, "No path connects the two nodes.")

        on_path = set(path)
        steps = set(zip(path, path[1:]))

        def paint_node(node):
            if node.id in on_path:
                return restyle(node.style, opacity=1, border=f"4px solid {HIGHLIGHT_COLOR}", zIndex=1000)
            return dim_node(node.style)

        def paint_edge(edge):
            if (edge.source, edge.target) in steps:
                return restyle(edge.style, stroke=HIGHLIGHT_COLOR, strokeWidth=3, opacity=1, animated=True)
            return dim_edge(edge.style)

        hops = len(path) - 1
        logger.info(f"Shortest path {source} -> {target}: {hops} hops")
        return _result(
            model.map_node_styles(paint_node).map_edge_styles(paint_edge),
            NoticeKind.SUCCESS,
            f"Path found: {hops} hop(s).",
            path=path,
        )


# ── Search ──────────────────────────────────────────────────────

def search_nodes(model: VisualModel, query: str) -> AnalyticsResult:
    """
    Spotlight the first node whose label contains ``query`` or whose id equals it.

    Everything else is faded; an empty query leaves the model untouched.
    """
    if not query:
        return _result(model, NoticeKind.EMPTY_RESULT, "Type a name or id to search.")

    target = next((n for n in model.nodes if query in n.label or n.id == query), None)
    if target is None:
        return _result(model, NoticeKind.EMPTY_RESULT, f'No node matches "{query}".')

    def paint_node(node):
        if node.id == target.id:
            return restyle(node.style, boxShadow=f"0 0 25px 8px {SEARCH_COLOR}",
                           border=f"3px solid {SEARCH_COLOR}", opacity=1)
        return restyle(node.style, boxShadow="none", opacity=0.2)

    base = reset_styles(model)
    highlighted = base.map_node_styles(paint_node).map_edge_styles(lambda e: dim_edge(e.style, opacity=0.1))
    return _result(highlighted, NoticeKind.SUCCESS, f"Found {target.label}.", focus=target.id)
