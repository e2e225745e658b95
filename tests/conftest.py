"""
Pytest configuration and fixtures.
"""
import random

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from graphcanvas.core.config import Settings
from graphcanvas.core.schemas import Position, VisualEdge, VisualModel, VisualNode
from graphcanvas.graph.styles import default_edge_style, default_node_style


def make_model(node_ids, links=()):
    """Build a model from ids and (source, target[, label]) tuples."""
    nodes = [
        VisualNode(id=nid, label=nid, position=Position(x=i * 100, y=0), style=default_node_style())
        for i, nid in enumerate(node_ids)
    ]
    edges = []
    for link in links:
        source, target = link[0], link[1]
        label = link[2] if len(link) > 2 else ""
        edges.append(VisualEdge(id=f"e{source}-{target}", source=source, target=target,
                                label=label, style=default_edge_style()))
    return VisualModel(nodes=tuple(nodes), edges=tuple(edges))


@pytest.fixture
def model_factory():
    return make_model


@pytest.fixture
def chain_model():
    """A → B → C."""
    return make_model(["A", "B", "C"], [("A", "B"), ("B", "C")])


@pytest.fixture
def star_model():
    """Hub H pointing at four leaves."""
    return make_model(["H", "L1", "L2", "L3", "L4"],
                      [("H", "L1"), ("H", "L2"), ("H", "L3"), ("H", "L4")])


@pytest.fixture
def empty_model():
    return VisualModel()


@pytest.fixture
def settings():
    """Default settings with fixed seeds so layout and Louvain are repeatable."""
    s = Settings()
    layout = s.layout.model_copy(update={"seed": 7, "iterations": 50})
    analytics = s.analytics.model_copy(update={"louvain_seed": 7})
    return s.model_copy(update={"layout": layout, "analytics": analytics})


@pytest.fixture
def rng():
    return random.Random(42)
