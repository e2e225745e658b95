"""
Graph synchronization: Visual Model → NetworkX DiGraph.

The analytical graph is a disposable view of the Visual Model. It is rebuilt
in full before every algorithm run so it can never drift from what is on the
canvas; nothing reads it back as ground truth.
"""
import logging
from typing import Iterable

import networkx as nx

from graphcanvas.core.schemas import VisualEdge, VisualModel, VisualNode

logger = logging.getLogger(__name__)


def synchronize(nodes: Iterable[VisualNode], edges: Iterable[VisualEdge]) -> nx.DiGraph:
    """
    Build a directed analytical graph from visual nodes and edges.

    Node attributes are ``x``, ``y``, the node's extra data fields and its
    label. A repeated node id keeps the first occurrence. Edges whose
    endpoints are missing are dropped without error; a repeated ordered pair
    collapses into one analytical edge.
    """
    G = nx.DiGraph()

    for node in nodes:
        if node.id in G:
            continue
        attrs = {**node.data, "x": node.position.x, "y": node.position.y, "label": node.label}
        G.add_node(node.id, **attrs)

    dropped = 0
    for edge in edges:
        if edge.source in G and edge.target in G:
            G.add_edge(edge.source, edge.target, label=edge.label)
        else:
            dropped += 1

    if dropped:
        logger.debug(f"Skipped {dropped} edges with missing endpoints")
    return G


def synchronize_model(model: VisualModel) -> nx.DiGraph:
    return synchronize(model.nodes, model.edges)


class GraphSynchronizer:
    """
    Holds the most recently built analytical graph.

    Link creation appends to the retained graph instead of rebuilding it on
    every click; all analytics call ``rebuild`` first.
    """

    def __init__(self):
        self._graph: nx.DiGraph = nx.DiGraph()

    @property
    def graph(self) -> nx.DiGraph:
        return self._graph

    def rebuild(self, model: VisualModel) -> nx.DiGraph:
        self._graph = synchronize_model(model)
        logger.debug(
            f"Synchronized graph: {self._graph.number_of_nodes()} nodes, "
            f"{self._graph.number_of_edges()} edges"
        )
        return self._graph

    def append_edge(self, source: str, target: str, label: str = "") -> None:
        """Mirror a just-added visual edge; unknown endpoints are ignored."""
        if source in self._graph and target in self._graph:
            self._graph.add_edge(source, target, label=label)
