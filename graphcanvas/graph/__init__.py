"""
Graph module - Synchronization and NetworkX analytics.

Provides:
- synchronize / GraphSynchronizer: rebuild the analytical DiGraph from the Visual Model
- AnalyticsEngine: centrality, communities, layout and shortest path mapped onto node styles
- search_nodes, reset_styles: spotlight and clear presentation state
"""
from .synchronizer import synchronize, synchronize_model, GraphSynchronizer
from .analytics import AnalyticsEngine, AnalyticsResult, search_nodes
from .network_analysis import (
    compute_degree,
    compute_betweenness,
    compute_pagerank,
    detect_communities,
    compute_force_layout,
    find_shortest_path,
    community_color,
)
from .styles import reset_styles

__all__ = [
    "synchronize",
    "synchronize_model",
    "GraphSynchronizer",
    "AnalyticsEngine",
    "AnalyticsResult",
    "search_nodes",
    "compute_degree",
    "compute_betweenness",
    "compute_pagerank",
    "detect_communities",
    "compute_force_layout",
    "find_shortest_path",
    "community_color",
    "reset_styles",
]
