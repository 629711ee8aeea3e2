"""Uniform-cost (Dijkstra) path search over a `CityGraph`.

The search keeps a frontier of discovered but not yet finalized nodes, the
best known cost of every discovered node and the predecessor on its best
known path. Nodes are selected cheapest first; equal costs are ordered by the
configured tie-break rule so that results are reproducible. The goal test
happens when a node is selected, not when it is relaxed, and by default the
frontier is drained completely before the result is reported.

An unknown start or goal, an unreachable goal, and an exhausted iteration
budget all produce an unreachable `SearchResult` instead of an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from heapq import heappop, heappush
from itertools import count
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from citygraph.config import SEARCH_CONFIG, SearchConfig
from citygraph.graph import CityGraph, GraphView, NodeName, Weight
from citygraph.logging import get_logger

logger = get_logger(__name__)

#: Heap entry: (cost, tie-break key..., node). The tie-break part always
#: contains a unique sequence number so nodes themselves never get compared
#: out of order.
FrontierEntry = Tuple[Any, ...]


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a single start/goal search.

    Attributes:
        start: Requested start node.
        goal: Requested goal node.
        path: Node names from start to goal inclusive; empty when unreachable.
        cost: Total path cost, or None when unreachable.
    """

    start: NodeName
    goal: NodeName
    path: Tuple[NodeName, ...] = ()
    cost: Optional[Weight] = None

    @classmethod
    def unreachable(cls, start: NodeName, goal: NodeName) -> SearchResult:
        """Build the "no path found" outcome for ``start``/``goal``."""
        return cls(start=start, goal=goal)

    @property
    def reachable(self) -> bool:
        return self.cost is not None

    def __len__(self) -> int:
        return len(self.path)

    def __iter__(self) -> Iterator[NodeName]:
        return iter(self.path)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        if not self.reachable:
            return {"start": self.start, "goal": self.goal, "unreachable": True}
        return {
            "start": self.start,
            "goal": self.goal,
            "path": list(self.path),
            "cost": self.cost,
        }


class PathFinder:
    """Minimum-cost path search over a read-only graph view.

    Args:
        graph: Graph to search. A `CityGraph` is wrapped in a `GraphView`.
        config: Search configuration; defaults to ``SEARCH_CONFIG``.
    """

    def __init__(
        self,
        graph: Union[CityGraph, GraphView],
        config: Optional[SearchConfig] = None,
    ) -> None:
        self._view: GraphView = graph.view() if isinstance(graph, CityGraph) else graph
        self.config: SearchConfig = config if config is not None else SEARCH_CONFIG

    def _frontier_entry(self, cost: Weight, seq: int, node: NodeName) -> FrontierEntry:
        if self.config.tie_break == "lexicographic":
            return (cost, node, seq, node)
        return (cost, seq, node)

    def find_path(self, start: NodeName, goal: NodeName) -> SearchResult:
        """Find the cheapest path from ``start`` to ``goal``.

        Args:
            start: Start node name.
            goal: Goal node name.

        Returns:
            SearchResult with the path and its cost, or an unreachable result
            when either node is unknown, the goal is disconnected from the
            start, or the iteration budget runs out.
        """
        if start not in self._view or goal not in self._view:
            logger.debug("Unknown node in query %s -> %s", start, goal)
            return SearchResult.unreachable(start, goal)

        best_cost: Dict[NodeName, Weight] = {start: 0}
        predecessor: Dict[NodeName, Optional[NodeName]] = {start: None}
        seq = count()
        frontier: List[FrontierEntry] = [self._frontier_entry(0, next(seq), start)]

        best_goal_cost: Optional[Weight] = None
        max_iterations = self.config.max_iterations
        iterations = 0

        while frontier:
            entry = heappop(frontier)
            current_cost, current = entry[0], entry[-1]
            # Skip entries superseded by a cheaper relaxation; not a selection
            if current_cost > best_cost[current]:
                continue

            if max_iterations is not None and iterations >= max_iterations:
                logger.warning(
                    "Search %s -> %s stopped after %d iterations; reporting no path",
                    start,
                    goal,
                    iterations,
                )
                return SearchResult.unreachable(start, goal)
            iterations += 1

            if current == goal:
                if best_goal_cost is None or current_cost < best_goal_cost:
                    best_goal_cost = current_cost
                if self.config.stop_at_goal:
                    break

            for edge in self._view.neighbors(current):
                new_cost = current_cost + edge.weight
                old_cost = best_cost.get(edge.target)
                if old_cost is None or new_cost < old_cost:
                    best_cost[edge.target] = new_cost
                    predecessor[edge.target] = current
                    heappush(
                        frontier, self._frontier_entry(new_cost, next(seq), edge.target)
                    )

        if best_goal_cost is None:
            logger.debug("No path %s -> %s after %d iterations", start, goal, iterations)
            return SearchResult.unreachable(start, goal)

        path: List[NodeName] = []
        node: Optional[NodeName] = goal
        while node is not None:
            path.append(node)
            node = predecessor[node]
        path.reverse()

        logger.debug(
            "Path %s -> %s: %d hops, cost %d, %d iterations",
            start,
            goal,
            len(path) - 1,
            best_goal_cost,
            iterations,
        )
        return SearchResult(start=start, goal=goal, path=tuple(path), cost=best_goal_cost)

    def all_pairs(self) -> Iterator[SearchResult]:
        """Search every unordered pair of distinct nodes.

        Pairs come from a snapshot of ``node_names()`` in insertion order,
        ``(names[i], names[j])`` for ``i < j``, so N nodes yield exactly
        N * (N - 1) / 2 results. Each search is independent.

        Yields:
            SearchResult for each pair, reachable or not.
        """
        names = self._view.node_names()
        logger.debug(
            "All-pairs search over %d nodes (%d pairs)",
            len(names),
            len(names) * (len(names) - 1) // 2,
        )
        for i in range(len(names)):
            for j in range(i + 1, len(names)):
                yield self.find_path(names[i], names[j])


def find_path(
    graph: Union[CityGraph, GraphView],
    start: NodeName,
    goal: NodeName,
    config: Optional[SearchConfig] = None,
) -> SearchResult:
    """Run a single search on ``graph``. See `PathFinder.find_path`."""
    return PathFinder(graph, config).find_path(start, goal)
