"""Command-line interface for kspath."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from kspath.config import SearchConfig, parse_search_mode
from kspath.lib.algorithms.base import SearchMode
from kspath.lib.algorithms.ksp import k_shortest_paths
from kspath.lib.algorithms.spf import search_func_for_mode, shortest_path
from kspath.lib.io import graph_summary, load_graph_file
from kspath.lib.path import Path as GraphPath
from kspath.logging import get_logger, level_for_flags, set_global_log_level

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = []
    for col_idx in range(len(headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_cost(value: Any) -> str:
    """Return cost formatted with up to three decimals.

    Uses thousands separators, trims trailing zeros and the decimal point when
    not needed. Falls back to ``str(value)`` if the input cannot be parsed as a
    float.

    Examples:
        0.1 -> "0.1"; 10.0 -> "10"; 1234.567 -> "1,234.567".
    """
    try:
        v = float(value)
    except (TypeError, ValueError):
        return str(value)

    s = f"{v:,.3f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s


def _format_duration(seconds: float) -> str:
    if seconds < 1.0:
        return f"{seconds * 1000:.1f} ms"
    return f"{seconds:.2f} s"


def _parse_node(graph: Any, value: str) -> Any:
    """Map a command-line node label onto a graph node.

    YAML documents may produce integer node ids, while argv is always text.
    """
    if value in graph:
        return value
    try:
        number = int(value)
    except ValueError:
        return value
    return number if number in graph else value


def _print_paths(paths: List[GraphPath], as_json: bool) -> None:
    if as_json:
        print(json.dumps([path.to_dict() for path in paths], indent=2, default=str))
        return
    rows = [
        [
            str(idx),
            _format_cost(path.weight),
            str(len(path) - 1),
            " -> ".join(str(node) for node in path.nodes_seq),
        ]
        for idx, path in enumerate(paths, start=1)
    ]
    print(_format_table(["#", "Cost", "Hops", "Path"], rows, min_width=4))


def _run_search(
    path: Path,
    source: str,
    target: str,
    k: Optional[int],
    mode: Optional[str],
    as_json: bool,
    single: bool = False,
) -> None:
    """Load a graph document and print the shortest path(s) between two nodes.

    Args:
        path: Graph document (YAML or JSON).
        source: Label of the start node.
        target: Label of the end node.
        k: Number of paths to enumerate. ``None`` uses the document's default.
        mode: Search mode name overriding the document's configuration.
        as_json: Print JSON instead of a table.
        single: Run one shortest path search instead of the enumeration.
    """
    _start_time = perf_counter()
    try:
        graph, config = load_graph_file(path)
        search_mode = parse_search_mode(mode) if mode is not None else config.mode
        start_node = _parse_node(graph, source)
        end_node = _parse_node(graph, target)

        if single:
            logger.info(
                f"Searching shortest path {start_node!r} -> {end_node!r} "
                f"in {path} (mode={search_mode.name.lower()})"
            )
            found_path, found = shortest_path(graph, start_node, end_node, search_mode)
            paths = [found_path] if found else []
        else:
            k = config.k if k is None else k
            logger.info(
                f"Searching {k} shortest path(s) {start_node!r} -> {end_node!r} "
                f"in {path} (mode={search_mode.name.lower()})"
            )
            paths = k_shortest_paths(
                graph, start_node, end_node, k, search_func_for_mode(search_mode)
            )

        if paths:
            _print_paths(paths, as_json)
        elif as_json:
            print("[]")
        else:
            print(f"No path found from {source} to {target}")

        _elapsed = perf_counter() - _start_time
        logger.info(f"Found {len(paths)} path(s) in {_format_duration(_elapsed)}")
    except FileNotFoundError:
        logger.error(f"Graph file not found: {path}")
        print(f"❌ ERROR: Graph file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to search paths: {e}")
        print("❌ ERROR: Failed to search paths")
        print(f"  {type(e).__name__}: {e}")
        sys.exit(1)


def _inspect_graph(path: Path, as_json: bool) -> None:
    """Print a summary of a graph document."""
    try:
        graph, config = load_graph_file(path)
        summary = graph_summary(graph)
        if as_json:
            print(
                json.dumps(
                    {"graph": summary, "search": config.to_dict()},
                    indent=2,
                    default=str,
                )
            )
            return

        print(f"Graph: {path}")
        rows = [
            ["Nodes", str(summary["nodes"])],
            ["Edges", str(summary["edges"])],
            ["Min cost", _format_cost(summary["min_cost"])],
            ["Max cost", _format_cost(summary["max_cost"])],
            ["Mode", config.mode.name.lower()],
            ["Default k", str(config.k)],
            ["Cost attr", config.cost_attr],
        ]
        print(_format_table(["Property", "Value"], rows))
        logger.info(f"Graph inspection of {path} completed")
    except FileNotFoundError:
        print(f"❌ ERROR: Graph file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect graph: {e}")
        print("❌ ERROR: Failed to inspect graph")
        print(f"  {type(e).__name__}: {e}")
        sys.exit(1)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``kspath`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="kspath",
        description="Find shortest and k-shortest loopless paths in a graph.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress console output (logs only)"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{path,ksp,inspect}",
        help="Available commands",
    )

    mode_choices = [m.name.lower() for m in SearchMode]

    path_parser = subparsers.add_parser(
        "path", help="Find the shortest path between two nodes"
    )
    ksp_parser = subparsers.add_parser(
        "ksp", help="Find the k shortest loopless paths between two nodes"
    )
    for p in (path_parser, ksp_parser):
        p.add_argument("graph", type=Path, help="Path to graph YAML/JSON")
        p.add_argument("source", help="Start node")
        p.add_argument("target", help="End node")
        p.add_argument(
            "--mode",
            "-m",
            choices=mode_choices,
            default=None,
            help="Search strategy (default: from the graph document, else bidir)",
        )
        p.add_argument("--json", action="store_true", help="Print JSON output")
    ksp_parser.add_argument(
        "-k",
        type=int,
        default=None,
        help=(
            "Number of paths (default: from the graph document, "
            f"else {SearchConfig().k})"
        ),
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Inspect and validate a graph document"
    )
    inspect_parser.add_argument("graph", type=Path, help="Path to graph YAML/JSON")
    inspect_parser.add_argument(
        "--json", action="store_true", help="Print JSON output"
    )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    set_global_log_level(level_for_flags(args.verbose, args.quiet, args.json))
    if args.verbose:
        logger.debug("Debug logging enabled")

    if args.command == "path":
        _run_search(
            args.graph, args.source, args.target, None, args.mode, args.json, True
        )
    elif args.command == "ksp":
        _run_search(args.graph, args.source, args.target, args.k, args.mode, args.json)
    elif args.command == "inspect":
        _inspect_graph(args.graph, args.json)


if __name__ == "__main__":
    main()
