"""
NetworkX analytics for GraphCanvas.

Thin wrappers over the standard algorithms run against the synchronized
analytical graph:
- Centrality metrics (degree, betweenness, PageRank)
- Community detection (Louvain)
- ForceAtlas2 layout
- Unweighted bidirectional shortest path

All functions take a graph and return plain dicts/lists; mapping the results
onto the canvas happens in ``graphcanvas.graph.analytics``.
"""
import logging

import networkx as nx
import numpy as np

logger = logging.getLogger(__name__)


# ── Centrality ──────────────────────────────────────────────────

def compute_degree(G: nx.DiGraph) -> dict[str, int]:
    """Total incident-edge count per node (in + out)."""
    return {node: deg for node, deg in G.degree()}


def compute_betweenness(G: nx.DiGraph) -> dict[str, float]:
    """Unweighted betweenness over the directed graph."""
    if G.number_of_nodes() == 0:
        return {}
    return nx.betweenness_centrality(G)


def compute_pagerank(G: nx.DiGraph, alpha: float = 0.85) -> dict[str, float]:
    """PageRank scores; they sum to 1 over all nodes."""
    if G.number_of_nodes() == 0:
        return {}
    return nx.pagerank(G, alpha=alpha)


# ── Communities ─────────────────────────────────────────────────

def detect_communities(G: nx.DiGraph, seed: int | None = None) -> dict[str, int]:
    """
    Detect communities with Louvain modularity optimization.

    Runs on the undirected view of the graph. Falls back to weakly connected
    components if Louvain fails. Disconnected and single-node graphs give a
    trivial partition.

    Returns: dict mapping node_id → community_index
    """
    if G.number_of_nodes() == 0:
        return {}

    try:
        communities = nx.community.louvain_communities(G.to_undirected(), seed=seed)
        mapping = {}
        for i, community in enumerate(communities):
            for node in community:
                mapping[node] = i
        return mapping
    except Exception as e:
        logger.warning(f"Louvain failed ({e}); using weakly connected components")
        mapping = {}
        for i, component in enumerate(nx.weakly_connected_components(G)):
            for node in component:
                mapping[node] = i
        return mapping


# ── Layout ──────────────────────────────────────────────────────

def _spread_starts(
    current: dict[str, tuple[float, float]],
    spread: float,
    seed: int | None,
) -> dict[str, np.ndarray]:
    """Starting positions as arrays, with coincident points nudged apart."""
    rng = np.random.default_rng(seed)
    taken = set()
    starts = {}
    for n, xy in current.items():
        p = np.array(xy, dtype=float)
        while (round(p[0], 6), round(p[1], 6)) in taken:
            p = p + rng.uniform(-spread, spread, size=2)
        taken.add((round(p[0], 6), round(p[1], 6)))
        starts[n] = p
    return starts


def compute_force_layout(
    G: nx.DiGraph,
    iterations: int = 150,
    gravity: float = 0.001,
    scaling_ratio: float = 2000.0,
    node_size: float = 50.0,
    seed: int | None = None,
) -> dict[str, tuple[float, float]]:
    """
    ForceAtlas2 placement with overlap prevention.

    Every node gets a uniform ``size`` attribute; passing the sizes to the
    layout turns on the no-overlap adjustment. Starts from each node's
    current ``x``/``y``; nodes sharing a position are first scattered by a
    seeded jitter of up to ``node_size``, since the force model is undefined
    at zero distance. Graphs with fewer than two nodes are returned
    unchanged.
    """
    current = {n: (float(d.get("x", 0.0)), float(d.get("y", 0.0))) for n, d in G.nodes(data=True)}
    if G.number_of_nodes() < 2:
        return current

    nx.set_node_attributes(G, node_size, "size")
    params = dict(
        max_iter=iterations,
        gravity=gravity,
        scaling_ratio=scaling_ratio,
        strong_gravity=False,
        node_size={n: node_size for n in G.nodes},
        seed=seed,
    )
    pos = nx.forceatlas2_layout(G, pos=_spread_starts(current, node_size, seed), **params)
    if not all(np.isfinite(p).all() for p in pos.values()):
        logger.warning("ForceAtlas2 diverged from the current positions; retrying from a random start")
        pos = nx.forceatlas2_layout(G, pos=None, **params)
    return {n: (float(p[0]), float(p[1])) for n, p in pos.items()}


# ── Paths ───────────────────────────────────────────────────────

def find_shortest_path(G: nx.DiGraph, source: str, target: str) -> list[str] | None:
    """
    Unweighted bidirectional search following edge direction only.

    Returns the node sequence, or None when the target is unreachable or
    either id is not in the graph.
    """
    try:
        return nx.bidirectional_shortest_path(G, source, target)
    except (nx.NetworkXNoPath, nx.NodeNotFound):
        return None


# ── Color Palette ───────────────────────────────────────────────

COMMUNITY_COLORS = [
    "#FFC107", "#1E88E5", "#F44336", "#4CAF50", "#9C27B0",
    "#FF9800", "#795548", "#009688", "#E91E63",
]


def community_color(community_id: int) -> str:
    """Get a color for a community index."""
    return COMMUNITY_COLORS[community_id % len(COMMUNITY_COLORS)]
