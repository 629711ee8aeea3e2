"""Aggregation of all-pairs search results."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from citygraph.search import SearchResult


def cost_matrix(
    results: Iterable[SearchResult], nodes: Optional[Sequence[str]] = None
) -> pd.DataFrame:
    """Build a symmetric matrix of pairwise path costs.

    Args:
        results: Search results, typically from ``PathFinder.all_pairs``.
        nodes: Row/column order. Defaults to the order in which nodes first
            appear in ``results``.

    Returns:
        DataFrame indexed and columned by node name. The diagonal is 0 and
        unreachable or missing pairs are NaN.
    """
    results = list(results)
    if nodes is None:
        seen: Dict[str, None] = {}
        for result in results:
            seen.setdefault(result.start)
            seen.setdefault(result.goal)
        nodes = list(seen)

    matrix = pd.DataFrame(np.nan, index=list(nodes), columns=list(nodes), dtype=float)
    for name in nodes:
        matrix.loc[name, name] = 0.0
    for result in results:
        if not result.reachable:
            continue
        if result.start not in matrix.index or result.goal not in matrix.index:
            continue
        matrix.loc[result.start, result.goal] = result.cost
        matrix.loc[result.goal, result.start] = result.cost
    return matrix


def results_to_dict(results: Iterable[SearchResult]) -> Dict[str, Any]:
    """Return a JSON-ready document with every pair and a summary block."""
    pairs: List[Dict[str, Any]] = [result.to_dict() for result in results]
    reachable = sum(1 for pair in pairs if not pair.get("unreachable", False))
    return {
        "pairs": pairs,
        "summary": {
            "pairs": len(pairs),
            "reachable": reachable,
            "unreachable": len(pairs) - reachable,
        },
    }
