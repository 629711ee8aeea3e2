"""Shared fixtures: small graphs with known shortest paths."""

from __future__ import annotations

import logging
import random

import pytest

from citygraph.graph import CityGraph
from citygraph.logging import set_global_log_level


@pytest.fixture(autouse=True)
def _restore_log_level():
    """Keep one test's --quiet/--verbose from leaking into the next."""
    yield
    set_global_log_level(logging.INFO)


@pytest.fixture
def triangle():
    #        [5]       [3]
    #   A◄───────►B◄───────►C
    #   ▲                   ▲
    #   └───────────────────┘
    #           [10]
    g = CityGraph()
    g.add_edge("A", "B", 5)
    g.add_edge("B", "C", 3)
    g.add_edge("A", "C", 10)
    return g


@pytest.fixture
def disconnected():
    #   A◄──[1]──►B      C◄──[1]──►D
    g = CityGraph()
    g.add_edge("A", "B", 1)
    g.add_edge("C", "D", 1)
    return g


@pytest.fixture
def square_ties():
    # Two equal-cost routes A->D. Insertion order reaches Z first,
    # lexicographic order prefers C.
    #
    #        [1]       [1]
    #   A◄───────►Z◄───────►D
    #   ▲                   ▲
    #   │  [1]        [1]   │
    #   └───────►C◄─────────┘
    g = CityGraph()
    g.add_edge("A", "Z", 1)
    g.add_edge("Z", "D", 1)
    g.add_edge("A", "C", 1)
    g.add_edge("C", "D", 1)
    return g


@pytest.fixture
def line4():
    #   A◄──[2]──►B◄──[2]──►C◄──[2]──►D
    g = CityGraph()
    g.add_edge("A", "B", 2)
    g.add_edge("B", "C", 2)
    g.add_edge("C", "D", 2)
    return g


def make_random_graph(seed: int, nodes: int = 12, edges: int = 24) -> CityGraph:
    """Build a reproducible random graph; some seeds leave nodes disconnected."""
    rng = random.Random(seed)
    names = [f"N{i}" for i in range(nodes)]
    g = CityGraph()
    attempts = 0
    while g.edge_count() < edges and attempts < edges * 20:
        attempts += 1
        a, b = rng.sample(names, 2)
        if g.has_edge(a, b):
            continue
        g.add_edge(a, b, rng.randint(0, 20))
    return g


@pytest.fixture(params=[1, 7, 42, 2024])
def random_graph(request):
    return make_random_graph(request.param)
