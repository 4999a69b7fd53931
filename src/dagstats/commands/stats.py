"""
dagstats.commands.stats - Print structural statistics for a database.
"""

from __future__ import annotations

import argparse
import json
import math
import sys

from dagstats.config import ConfigError, get_config
from dagstats.graph import ParseError, PathLimitExceeded, compute_statistics
from dagstats.graph.factory import build_graph


def _fmt(value: float, precision: int) -> str:
    if math.isnan(value):
        return "nan"
    return f"{value:.{precision}f}"


def run(args: argparse.Namespace) -> int:
    """Run the stats command."""
    try:
        config = get_config(args.config)
    except (ConfigError, OSError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    strict = False if getattr(args, "lenient", False) else None
    try:
        graph = build_graph(args.database, config=config, strict=strict)
    except ParseError as e:
        print(f"Error parsing {args.database}: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading {args.database}: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(
            f"Loaded {args.database}: {graph.node_count()} nodes, {graph.edge_count()} edges",
            file=sys.stderr,
        )
        if graph.skipped_lines:
            skipped = ", ".join(str(n) for n in graph.skipped_lines)
            print(f"Skipped lines: {skipped}", file=sys.stderr)

    max_paths = config.get("analysis", {}).get("max_paths", 0)
    try:
        stats = compute_statistics(graph, max_paths=max_paths)
    except PathLimitExceeded as e:
        print(f"Error: {e} (analysis.max_paths = {max_paths})", file=sys.stderr)
        return 1

    if args.quiet:
        return 0

    output = config.get("output", {})
    if args.json or output.get("format") == "json":
        print(json.dumps(stats.to_dict(), indent=2))
        return 0

    depth_precision = output.get("depth_precision", 2)
    ref_precision = output.get("ref_precision", 3)
    print(f"AVG DAG DEPTH: {_fmt(stats.avg_depth, depth_precision)}")
    print(f"AVG NODES PER DEPTH: {_fmt(stats.avg_node_per_depth, depth_precision)}")
    print(f"AVG REF: {_fmt(stats.avg_ref, ref_precision)}")
    print(f"MAX DEPTH: {stats.max_depth}")
    return 0
