"""Command-line interface for flowmatch."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from flowmatch.adapters.matching import solve_expression_matching
from flowmatch.adapters.quota import solve_quota
from flowmatch.algorithms.max_flow import calc_max_flow
from flowmatch.config import SOLVER_CONFIG
from flowmatch.io import (
    format_matching_result,
    format_quota_result,
    load_edge_list,
    parse_matching_input,
    parse_quota_input,
)
from flowmatch.logging import get_logger, level_for_flags, set_global_log_level

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _read_input(path: Optional[Path]) -> str:
    """Read a problem file, or stdin when ``path`` is None or ``-``."""
    if path is None or str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _fail(message: str) -> None:
    logger.error(message)
    print(f"ERROR: {message}", file=sys.stderr)
    sys.exit(1)


def _run_match(path: Optional[Path]) -> None:
    start = perf_counter()
    pairs = parse_matching_input(_read_input(path))
    result = solve_expression_matching(pairs)
    print(format_matching_result(result))
    logger.info(
        "Matched %d pair(s) (%s) in %s",
        len(pairs),
        "feasible" if result.feasible else "impossible",
        _format_duration(perf_counter() - start),
    )


def _run_quota(path: Optional[Path], assignments: bool) -> None:
    start = perf_counter()
    instance = parse_quota_input(_read_input(path))
    result = solve_quota(instance)
    print(format_quota_result(result, assignments=assignments))
    logger.info(
        "Served %d of %d requester(s) in %s",
        result.total,
        len(instance.requests),
        _format_duration(perf_counter() - start),
    )


def _run_maxflow(path: Path, source: str, sink: str, as_json: bool) -> None:
    start = perf_counter()
    network, node_map, edge_map = load_edge_list(path)
    for name in (source, sink):
        if name not in node_map.to_index:
            raise ValueError(f"Node '{name}' does not appear in {path}.")
    total, summary = calc_max_flow(
        network,
        node_map.to_index[source],
        node_map.to_index[sink],
        return_summary=True,
    )
    if as_json:
        flows = []
        for idx, flow in summary.edge_flow.items():
            u, v, _ = edge_map.to_ref[idx]
            flows.append(
                {
                    "from": u,
                    "to": v,
                    "capacity": network.arena[idx].capacity,
                    "flow": flow,
                }
            )
        payload = {
            "source": source,
            "sink": sink,
            "max_flow": total,
            "phases": summary.phases,
            "augmentations": summary.augmentations,
            "flows": flows,
            "min_cut": [
                {"from": edge_map.to_ref[idx][0], "to": edge_map.to_ref[idx][1]}
                for idx in summary.min_cut
            ],
        }
        print(json.dumps(payload, indent=2))
    else:
        print(total)
    logger.info(
        "Max flow %s->%s = %d in %s",
        source,
        sink,
        total,
        _format_duration(perf_counter() - start),
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``flowmatch`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="flowmatch",
        description="Solve matching and quota assignment problems with max flow.",
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Check capacity and conservation of every computed flow",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{match,quota,maxflow}",
        help="Available commands",
    )

    match_parser = subparsers.add_parser(
        "match", help="Assign + - * to pairs so that all results differ"
    )
    match_parser.add_argument(
        "input", type=Path, nargs="?", default=None, help="Input file (default: stdin)"
    )

    quota_parser = subparsers.add_parser(
        "quota", help="Maximum requesters served under group quotas"
    )
    quota_parser.add_argument(
        "input", type=Path, nargs="?", default=None, help="Input file (default: stdin)"
    )
    quota_parser.add_argument(
        "--assignments",
        "-a",
        action="store_true",
        help="Also print one 'requester item' line per served requester",
    )

    maxflow_parser = subparsers.add_parser(
        "maxflow", help="Max flow on a 'u v capacity' edge list"
    )
    maxflow_parser.add_argument("input", type=Path, help="Edge list file")
    maxflow_parser.add_argument("--source", "-s", required=True, help="Source node")
    maxflow_parser.add_argument("--sink", "-t", required=True, help="Sink node")
    maxflow_parser.add_argument(
        "--json", action="store_true", help="Print flows and min cut as JSON"
    )

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    set_global_log_level(level_for_flags(args.verbose, args.quiet))
    logger.debug("Debug logging enabled")

    previous_verify = SOLVER_CONFIG.verify_flow
    SOLVER_CONFIG.verify_flow = previous_verify or args.verify
    try:
        if args.command == "match":
            _run_match(args.input)
        elif args.command == "quota":
            _run_quota(args.input, args.assignments)
        elif args.command == "maxflow":
            _run_maxflow(args.input, args.source, args.sink, args.json)
    except FileNotFoundError as e:
        _fail(f"Input file not found: {e.filename}")
    except ValueError as e:
        _fail(f"Invalid input: {e}")
    finally:
        SOLVER_CONFIG.verify_flow = previous_verify


if __name__ == "__main__":
    main()
