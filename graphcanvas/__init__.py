"""
GraphCanvas - Interactive graph editing and structural analytics

Build, import, edit and analyze a labeled directed graph on a canvas:
- Immutable Visual Model with pure transformations
- NetworkX analytics (degree, betweenness, PageRank, Louvain, ForceAtlas2, shortest path)
- CSV node/edge import with header-based column detection and replace/append merge
- JSON and CSV export
- Two-click gestures for link creation and path queries

Modules:
    core        - Configuration, Visual Model schemas, notices
    graph       - Synchronizer, NetworkX analytics, style mapping
    ingestion   - CSV parsing, import planning, JSON/CSV codec
    interaction - Gesture state machine, editor operations
    ui          - Streamlit editor page (streamlit-agraph canvas)
"""

__version__ = "0.3.0"
