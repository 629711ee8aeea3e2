"""Exception types raised by citygraph.

All errors derive from both ``CityGraphError`` and ``ValueError`` so callers
can catch either the package base class or the built-in type.
"""

from __future__ import annotations

from typing import Any


class CityGraphError(Exception):
    """Base class for citygraph errors."""


class DuplicateEdgeError(CityGraphError, ValueError):
    """An edge between the two nodes already exists."""

    def __init__(self, node_a: str, node_b: str) -> None:
        self.node_a = node_a
        self.node_b = node_b
        super().__init__(f"Edge already exists: {node_a} - {node_b}")


class SelfLoopError(CityGraphError, ValueError):
    """An edge would connect a node to itself."""

    def __init__(self, node: str) -> None:
        self.node = node
        super().__init__(f"Self-loop not allowed: {node} - {node}")


class InvalidWeightError(CityGraphError, ValueError):
    """Edge weight is not a non-negative integer."""

    def __init__(self, weight: Any) -> None:
        self.weight = weight
        super().__init__(
            f"Invalid distance {weight!r}: expected a non-negative integer."
        )


class MalformedInputError(CityGraphError, ValueError):
    """An input line cannot be turned into an edge triple."""

    def __init__(self, message: str, line: str) -> None:
        self.line = line
        super().__init__(message)
