"""Configuration classes for citygraph components."""

from dataclasses import dataclass
from typing import Optional

#: Tie-break rules accepted by ``SearchConfig.tie_break``.
TIE_BREAK_RULES = ("insertion", "lexicographic")


@dataclass
class SearchConfig:
    """Configuration for the uniform-cost path search."""

    # Rule for choosing among frontier nodes with equal cost:
    # "insertion" picks the node that entered the frontier first,
    # "lexicographic" picks the smallest node name.
    tie_break: str = "insertion"

    # Return as soon as the goal is selected instead of draining the frontier.
    stop_at_goal: bool = False

    # Upper bound on node selections per search; None means unbounded.
    max_iterations: Optional[int] = None

    def __post_init__(self) -> None:
        if self.tie_break not in TIE_BREAK_RULES:
            raise ValueError(
                f"Unknown tie_break '{self.tie_break}'. "
                f"Expected one of: {', '.join(TIE_BREAK_RULES)}"
            )
        if self.max_iterations is not None and self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be a positive integer, got {self.max_iterations}"
            )


@dataclass
class OutputConfig:
    """Configuration for human-readable output."""

    # Separator placed between node names of a path
    arrow: str = " --> "

    # Distance unit shown when echoing added edges
    unit: str = "km"

    # Line printed between results in all-pairs output
    separator_line: str = "-" * 24


# Global configuration instances
SEARCH_CONFIG = SearchConfig()
OUTPUT_CONFIG = OutputConfig()
