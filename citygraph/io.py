"""Input parsing, graph building and result formatting.

Turns free-form text (interactive lines or an edge-list file) and YAML
documents into validated ``EdgeSpec`` triples, feeds them into a `CityGraph`,
and renders `SearchResult` values as text. The graph and the search never see
raw text.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator, List, NamedTuple, Optional, Union

import yaml

from citygraph.config import OUTPUT_CONFIG, OutputConfig
from citygraph.errors import CityGraphError, MalformedInputError
from citygraph.graph import CityGraph
from citygraph.logging import get_logger
from citygraph.search import SearchResult

logger = get_logger(__name__)

EXIT_COMMAND = "exit"

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

#: Called with the rejected error for lines or edges that are skipped.
ErrorCallback = Callable[[CityGraphError], None]


class EdgeSpec(NamedTuple):
    """Validated ``(node_a, node_b, weight)`` triple."""

    node_a: str
    node_b: str
    weight: int


def parse_edge_line(line: str, separator: Optional[str] = None) -> EdgeSpec:
    """Parse ``"city1 city2 distance"`` into an EdgeSpec.

    Args:
        line: Raw input line.
        separator: Token separator; None splits on any whitespace.

    Returns:
        The parsed triple. Negative distances parse here and are rejected by
        the graph.

    Raises:
        MalformedInputError: On a wrong token count or a non-integer distance.
    """
    tokens = line.strip().split(separator)
    if len(tokens) != 3:
        raise MalformedInputError(
            "Invalid input. Please enter in format: city1 city2 distance", line
        )
    node_a, node_b, raw_weight = tokens
    # int() alone would also take "1_000" and non-ASCII digits
    if not _INTEGER_RE.fullmatch(raw_weight):
        raise MalformedInputError(
            "Invalid distance. Please enter a valid number for distance.", line
        )
    return EdgeSpec(node_a, node_b, int(raw_weight))


def is_exit_command(line: str) -> bool:
    """Return True if ``line`` is the case-insensitive ``exit`` sentinel."""
    return line.strip().lower() == EXIT_COMMAND


def _report(error: CityGraphError, on_error: Optional[ErrorCallback]) -> None:
    if on_error is not None:
        on_error(error)
    else:
        logger.warning("Skipping input: %s", error)


def iter_edge_lines(
    lines: Iterable[str],
    on_error: Optional[ErrorCallback] = None,
    separator: Optional[str] = None,
    skip_blank: bool = True,
) -> Iterator[EdgeSpec]:
    """Lazily yield validated triples from text lines.

    Iteration stops at the ``exit`` sentinel or when ``lines`` is exhausted.
    Malformed lines go to ``on_error`` (logged as warnings when no callback
    is given) and are skipped.

    Args:
        lines: Iterable of raw text lines (a file object, ``sys.stdin``, a list).
        on_error: Optional callback receiving each ``MalformedInputError``.
        separator: Token separator passed to ``parse_edge_line``.
        skip_blank: Ignore blank lines and ``#`` comments silently. When
            False (interactive input) they are reported as malformed like any
            other line.

    Yields:
        EdgeSpec for each well-formed line.
    """
    for line in lines:
        stripped = line.strip()
        if skip_blank and (not stripped or stripped.startswith("#")):
            continue
        if is_exit_command(stripped):
            return
        try:
            yield parse_edge_line(stripped, separator)
        except MalformedInputError as exc:
            _report(exc, on_error)


def build_graph(
    edges: Iterable[EdgeSpec],
    graph: Optional[CityGraph] = None,
    on_error: Optional[ErrorCallback] = None,
    on_added: Optional[Callable[[EdgeSpec], None]] = None,
) -> CityGraph:
    """Insert triples into a graph, reporting rejected ones without stopping.

    Args:
        edges: Validated triples.
        graph: Graph to extend; a new one is created when None.
        on_error: Receives graph rejections (duplicate edge, self-loop,
            invalid weight). Logged as warnings when None.
        on_added: Called with each triple that was inserted.

    Returns:
        The built or updated graph.
    """
    if graph is None:
        graph = CityGraph()

    for spec in edges:
        try:
            graph.add_edge(spec.node_a, spec.node_b, spec.weight)
        except CityGraphError as exc:
            _report(exc, on_error)
            continue
        if on_added is not None:
            on_added(spec)

    logger.debug(
        "Graph built: %d nodes, %d edges", len(graph), graph.edge_count()
    )
    return graph


def _edge_from_yaml(entry: Any) -> EdgeSpec:
    if isinstance(entry, (list, tuple)):
        if len(entry) != 3:
            raise ValueError(
                f"Edge entry {entry!r} must have exactly 3 items: [city1, city2, distance]"
            )
        node_a, node_b, weight = entry
    elif isinstance(entry, dict):
        missing = [k for k in ("source", "target", "weight") if k not in entry]
        if missing:
            raise ValueError(
                f"Edge entry {entry!r} is missing key(s): {', '.join(missing)}"
            )
        unknown = set(entry) - {"source", "target", "weight"}
        if unknown:
            raise ValueError(
                f"Unrecognized key(s) in edge entry: {', '.join(sorted(map(str, unknown)))}"
            )
        node_a, node_b, weight = entry["source"], entry["target"], entry["weight"]
    else:
        raise ValueError(
            "Each edge must be a [city1, city2, distance] list or a mapping "
            "with 'source', 'target' and 'weight'"
        )
    # YAML scalars such as numbers or booleans become names verbatim
    return EdgeSpec(str(node_a), str(node_b), weight)


def load_edges_yaml(yaml_str: str) -> List[EdgeSpec]:
    """Load edge triples from a YAML document.

    Expected shape::

        edges:
          - [Berlin, Hamburg, 289]
          - {source: Hamburg, target: Bremen, weight: 119}

    Weights are passed through unchanged so the graph can reject invalid ones.

    Raises:
        ValueError: If the document does not have the expected shape.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")
    unknown = set(data) - {"edges"}
    if unknown:
        raise ValueError(
            f"Unrecognized top-level key(s): {', '.join(sorted(map(str, unknown)))}"
        )
    edges = data.get("edges") or []
    if not isinstance(edges, list):
        raise ValueError("'edges' must be a list")
    return [_edge_from_yaml(entry) for entry in edges]


def load_edges_file(
    path: Union[str, Path],
    on_error: Optional[ErrorCallback] = None,
) -> List[EdgeSpec]:
    """Load triples from a YAML file (``.yaml``/``.yml``) or a text edge list.

    Args:
        path: File to read.
        on_error: Callback for malformed text lines (edge-list files only).

    Returns:
        List of triples in file order.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        specs = load_edges_yaml(text)
    else:
        specs = list(iter_edge_lines(text.splitlines(), on_error=on_error))
    logger.debug("Loaded %d edge(s) from %s", len(specs), path)
    return specs


#
# Formatting
#
def format_path(path: Iterable[str], arrow: Optional[str] = None) -> str:
    """Join node names with the configured arrow separator."""
    if arrow is None:
        arrow = OUTPUT_CONFIG.arrow
    return arrow.join(path)


def format_result(
    result: SearchResult, config: Optional[OutputConfig] = None
) -> List[str]:
    """Render a SearchResult as output lines.

    Returns:
        ``["Way: A --> B", "Best way cost: 5"]`` for a found path,
        ``["No way found from A to B"]`` otherwise.
    """
    config = config or OUTPUT_CONFIG
    if not result.reachable:
        return [f"No way found from {result.start} to {result.goal}"]
    return [
        f"Way: {format_path(result.path, config.arrow)}",
        f"Best way cost: {result.cost}",
    ]


def format_edge_added(spec: EdgeSpec, config: Optional[OutputConfig] = None) -> str:
    """Render the confirmation for an inserted edge."""
    config = config or OUTPUT_CONFIG
    return f"Edge added: {spec.node_a} - {spec.node_b} ({spec.weight} {config.unit})"
