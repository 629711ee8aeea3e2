"""Command-line interface for citygraph."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Iterable, List, Optional, TextIO

import yaml

from citygraph.config import OUTPUT_CONFIG, TIE_BREAK_RULES, SearchConfig
from citygraph.errors import CityGraphError
from citygraph.graph import CityGraph
from citygraph.io import (
    build_graph,
    format_edge_added,
    format_result,
    iter_edge_lines,
    load_edges_file,
)
from citygraph.logging import get_logger, set_global_log_level
from citygraph.report import cost_matrix, results_to_dict
from citygraph.search import PathFinder, SearchResult

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _echo_error(error: CityGraphError) -> None:
    print(error)


def _print_result(result: SearchResult) -> None:
    for line in format_result(result, OUTPUT_CONFIG):
        print(line)


def _print_pair_results(results: Iterable[SearchResult]) -> List[SearchResult]:
    """Print each pair block and return the results that were printed."""
    printed: List[SearchResult] = []
    for result in results:
        print(f"Finding path between {result.start} and {result.goal}:")
        _print_result(result)
        print(OUTPUT_CONFIG.separator_line)
        printed.append(result)
    return printed


def _search_config_from_args(args: argparse.Namespace) -> SearchConfig:
    return SearchConfig(
        tie_break=args.tie_break,
        stop_at_goal=args.stop_at_goal,
        max_iterations=args.max_iterations,
    )


def _run_interactive(stream: TextIO, search_config: SearchConfig) -> CityGraph:
    """Read connections until ``exit`` or EOF, then search every pair.

    Args:
        stream: Line source, normally ``sys.stdin``.
        search_config: Configuration for the searches.

    Returns:
        The graph built from the input.
    """
    print("Enter city connections or type 'exit' to stop:")
    graph = build_graph(
        iter_edge_lines(stream, on_error=_echo_error, skip_blank=False),
        on_error=_echo_error,
        on_added=lambda spec: print(format_edge_added(spec, OUTPUT_CONFIG)),
    )
    print("Cities and Edges added Successfully")

    start_time = perf_counter()
    results = _print_pair_results(PathFinder(graph, search_config).all_pairs())
    logger.info(
        "Searched %d pair(s) in %s",
        len(results),
        _format_duration(perf_counter() - start_time),
    )
    return graph


def _run_file(
    path: Path,
    search_config: SearchConfig,
    start: Optional[str] = None,
    goal: Optional[str] = None,
    as_json: bool = False,
    matrix: bool = False,
) -> None:
    """Load edges from ``path`` and run one query or all pairs.

    Args:
        path: Text edge list or YAML document.
        search_config: Configuration for the searches.
        start: Start node for a single query.
        goal: Goal node for a single query.
        as_json: Print a JSON document instead of text blocks.
        matrix: Also print the pairwise cost matrix.
    """
    if not path.is_file():
        logger.error("Edge file not found: %s", path)
        sys.exit(1)

    try:
        specs = load_edges_file(path)
    except (ValueError, yaml.YAMLError) as exc:
        logger.error("Failed to load %s: %s", path, exc)
        sys.exit(1)

    graph = build_graph(specs)
    logger.info(
        "Loaded %d node(s) and %d edge(s) from %s",
        len(graph),
        graph.edge_count(),
        path,
    )

    finder = PathFinder(graph, search_config)
    start_time = perf_counter()
    if start is not None and goal is not None:
        results = [finder.find_path(start, goal)]
    else:
        results = list(finder.all_pairs())
    logger.info(
        "Searched %d pair(s) in %s",
        len(results),
        _format_duration(perf_counter() - start_time),
    )

    if as_json:
        print(json.dumps(results_to_dict(results), indent=2))
    elif len(results) == 1 and start is not None:
        _print_result(results[0])
    else:
        _print_pair_results(results)

    if matrix:
        print(cost_matrix(results, graph.node_names()).to_string())


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``citygraph`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="citygraph",
        description="Build a graph of city connections and find the cheapest paths.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{interactive,run}",
        help="Available commands",
    )

    subparsers.add_parser(
        "interactive",
        help="Enter 'city1 city2 distance' lines on stdin, then search all pairs",
    )

    run_parser = subparsers.add_parser(
        "run", help="Load connections from a file and search paths"
    )
    run_parser.add_argument(
        "edges", type=Path, help="Edge list (city1 city2 distance per line) or YAML"
    )
    run_parser.add_argument("--start", "-s", help="Start city for a single query")
    run_parser.add_argument("--goal", "-g", help="Goal city for a single query")
    run_parser.add_argument(
        "--json", action="store_true", help="Print results as JSON"
    )
    run_parser.add_argument(
        "--matrix", action="store_true", help="Also print the pairwise cost matrix"
    )

    for p in subparsers.choices.values():
        p.add_argument(
            "--tie-break",
            choices=TIE_BREAK_RULES,
            default="insertion",
            help="Order for frontier nodes with equal cost (default: insertion)",
        )
        p.add_argument(
            "--stop-at-goal",
            action="store_true",
            help="Stop each search once the goal is selected",
        )
        p.add_argument(
            "--max-iterations",
            type=int,
            default=None,
            help="Give up on a search after this many node selections",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    try:
        search_config = _search_config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    if args.command == "interactive":
        _run_interactive(sys.stdin, search_config)
    elif args.command == "run":
        if (args.start is None) != (args.goal is None):
            parser.error("--start and --goal must be given together")
        _run_file(
            path=args.edges,
            search_config=search_config,
            start=args.start,
            goal=args.goal,
            as_json=args.json,
            matrix=args.matrix,
        )


if __name__ == "__main__":
    main()
