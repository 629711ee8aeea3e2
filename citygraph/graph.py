"""Undirected weighted graph of named locations.

`CityGraph` stores every undirected connection as two adjacency entries
(A->B and B->A) carrying the same weight, rejects duplicate connections in
either argument order, and keeps insertion order for nodes and neighbours so
that searches and all-pairs enumeration are reproducible. Storage is a
``networkx.Graph``; `GraphView` is the read-only capability handed to path
searches.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional

import networkx as nx

from citygraph.errors import DuplicateEdgeError, InvalidWeightError, SelfLoopError
from citygraph.logging import get_logger

logger = get_logger(__name__)

NodeName = str
Weight = int


@dataclass(frozen=True)
class Edge:
    """Directed adjacency entry from ``source`` to ``target``.

    Attributes:
        source: Node the edge leaves.
        target: Node the edge reaches.
        weight: Non-negative distance between the two nodes.
    """

    source: NodeName
    target: NodeName
    weight: Weight


def _validate_weight(weight: Any) -> Weight:
    # bool is an Integral subclass but never a distance
    if isinstance(weight, bool) or not isinstance(weight, numbers.Integral):
        raise InvalidWeightError(weight)
    if weight < 0:
        raise InvalidWeightError(weight)
    return int(weight)


class CityGraph:
    """Undirected graph with at most one weighted edge per pair of nodes.

    This class enforces:
      - No duplicate edges: a second edge between A and B, given as (A, B) or
        (B, A), raises ``DuplicateEdgeError``.
      - No self-loops: ``add_edge(A, A, w)`` raises ``SelfLoopError``.
      - Weights are non-negative integers (``InvalidWeightError`` otherwise).
      - Nodes are created lazily by ``add_edge``; there is no removal.

    Example:
        ```python
        g = CityGraph()
        g.add_edge("A", "B", 5)
        g.neighbors("B")  # [Edge(source="B", target="A", weight=5)]
        ```
    """

    def __init__(self) -> None:
        self._graph: nx.Graph = nx.Graph()
        # Undirected edges in insertion order, each stored once as given.
        self._edges: List[Edge] = []

    #
    # Mutation
    #
    def add_edge(self, node_a: NodeName, node_b: NodeName, weight: Weight) -> None:
        """Add an undirected edge between ``node_a`` and ``node_b``.

        Args:
            node_a: First endpoint name.
            node_b: Second endpoint name.
            weight: Non-negative integer distance.

        Raises:
            SelfLoopError: If both endpoints are the same node.
            InvalidWeightError: If weight is negative or not an integer.
            DuplicateEdgeError: If an edge already exists between the nodes.
        """
        if node_a == node_b:
            raise SelfLoopError(node_a)
        weight = _validate_weight(weight)
        if self.has_edge(node_a, node_b):
            raise DuplicateEdgeError(node_a, node_b)

        # nx.Graph appends to both adjacency dicts, so A->B and B->A share
        # one attribute dict and stay consistent.
        self._graph.add_edge(node_a, node_b, weight=weight)
        self._edges.append(Edge(node_a, node_b, weight))
        logger.debug("Added edge %s - %s (%d)", node_a, node_b, weight)

    #
    # Read access
    #
    def neighbors(self, node: NodeName) -> List[Edge]:
        """Return outgoing edges of ``node`` in insertion order.

        Unknown nodes yield an empty list rather than an error.
        """
        if node not in self._graph:
            return []
        return [
            Edge(node, target, attrs["weight"])
            for target, attrs in self._graph.adj[node].items()
        ]

    def node_names(self) -> List[NodeName]:
        """Return all node names in insertion order."""
        return list(self._graph.nodes)

    def has_edge(self, node_a: NodeName, node_b: NodeName) -> bool:
        """Return True if an edge connects the two nodes in either direction."""
        return self._graph.has_edge(node_a, node_b)

    def weight(self, node_a: NodeName, node_b: NodeName) -> Optional[Weight]:
        """Return the edge weight between two nodes, or None if not connected."""
        data = self._graph.get_edge_data(node_a, node_b)
        if data is None:
            return None
        return data["weight"]

    def edges(self) -> List[Edge]:
        """Return each undirected edge once, in insertion order."""
        return list(self._edges)

    def edge_count(self) -> int:
        """Return the number of undirected edges."""
        return len(self._edges)

    def view(self) -> GraphView:
        """Return a read-only view over this graph."""
        return GraphView(self)

    def to_networkx(self) -> nx.Graph:
        """Return an independent ``networkx.Graph`` copy with ``weight`` attributes."""
        return self._graph.copy()

    def __contains__(self, node: object) -> bool:
        return node in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __iter__(self) -> Iterator[NodeName]:
        return iter(self._graph.nodes)

    def __repr__(self) -> str:
        return f"CityGraph(nodes={len(self)}, edges={self.edge_count()})"


@dataclass(frozen=True)
class GraphView:
    """Read-only access to a `CityGraph`.

    Exposes only the queries a path search needs. The view reflects the base
    graph; callers must not mutate the base while a search runs.

    Attributes:
        _base: The underlying CityGraph.
    """

    _base: CityGraph

    def neighbors(self, node: NodeName) -> List[Edge]:
        return self._base.neighbors(node)

    def node_names(self) -> List[NodeName]:
        return self._base.node_names()

    def __contains__(self, node: object) -> bool:
        return node in self._base

    def __len__(self) -> int:
        return len(self._base)
