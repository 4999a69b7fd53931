"""
dagstats.commands.paths - List every path from a node to the origin.
"""

from __future__ import annotations

import argparse
import sys

from dagstats.config import ConfigError, get_config
from dagstats.graph import DagAnalyzer, ParseError, PathLimitExceeded
from dagstats.graph.factory import build_graph


def format_path(path: tuple[int, ...]) -> str:
    """Render a path as ``6 -> 3 -> 1``."""
    return " -> ".join(str(node) for node in path)


def run(args: argparse.Namespace) -> int:
    """Run the paths command."""
    try:
        config = get_config(args.config)
        graph = build_graph(args.database, config=config)
    except (ConfigError, ParseError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.node not in graph:
        print(f"Node {args.node} is not in {args.database}", file=sys.stderr)
        return 1

    analyzer = DagAnalyzer(graph, max_paths=config.get("analysis", {}).get("max_paths", 0))
    try:
        paths = analyzer.depths(args.node)
    except PathLimitExceeded as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not paths:
        if not args.quiet:
            print(f"Node {args.node} has no path to the origin")
        return 0

    for path in sorted(paths, key=lambda p: (len(p), p)):
        print(format_path(path))

    if args.verbose:
        print(f"{len(paths)} path(s)", file=sys.stderr)
    return 0
