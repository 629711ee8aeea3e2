"""citygraph: shortest paths between named locations.

Build an undirected weighted graph from ``(city1, city2, distance)`` triples
and query minimum-cost paths between two cities or between every pair.

Primary API:
    CityGraph - Graph with duplicate-free, symmetric edge insertion
    PathFinder - Uniform-cost search and all-pairs mode
    SearchResult - Path and cost of one query, or an unreachable outcome

Example:
    from citygraph import CityGraph, PathFinder

    g = CityGraph()
    g.add_edge("A", "B", 5)
    g.add_edge("B", "C", 3)
    g.add_edge("A", "C", 10)

    result = PathFinder(g).find_path("A", "C")
    result.path  # ("A", "B", "C")
    result.cost  # 8
"""

from __future__ import annotations

from citygraph import cli, logging
from citygraph._version import __version__
from citygraph.config import OutputConfig, SearchConfig
from citygraph.errors import (
    CityGraphError,
    DuplicateEdgeError,
    InvalidWeightError,
    MalformedInputError,
    SelfLoopError,
)
from citygraph.graph import CityGraph, Edge, GraphView
from citygraph.io import EdgeSpec, build_graph, iter_edge_lines, load_edges_file
from citygraph.search import PathFinder, SearchResult, find_path

__all__ = [
    # Version
    "__version__",
    # Model
    "CityGraph",
    "Edge",
    "GraphView",
    # Search
    "PathFinder",
    "SearchResult",
    "find_path",
    # Configuration
    "SearchConfig",
    "OutputConfig",
    # Errors
    "CityGraphError",
    "DuplicateEdgeError",
    "SelfLoopError",
    "InvalidWeightError",
    "MalformedInputError",
    # Input
    "EdgeSpec",
    "build_graph",
    "iter_edge_lines",
    "load_edges_file",
    # Utilities
    "cli",
    "logging",
]
