"""
dagstats.cli - Command-line interface.

Main entry point for the dagstats CLI tool.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dagstats import __version__
from dagstats.commands import config_cmd, paths, stats


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dagstats",
        description="Structural statistics for parent-pointer DAG databases",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  dagstats stats db.txt          # Depth and reference statistics
  dagstats stats db.txt --json   # Same, as JSON
  dagstats paths db.txt 6        # Every path from node 6 to node 1
  dagstats config show           # View all settings

Database format:
  The first line holds the node count (ignored). Every following line holds
  the two parent ids of the next node, starting at node 2. Node 1 is the
  origin.

For detailed command help: dagstats <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"dagstats {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # stats command
    stats_parser = subparsers.add_parser(
        "stats",
        help="Print depth and reference statistics",
    )
    stats_parser.add_argument(
        "database",
        type=Path,
        help="Database file to analyze",
    )
    stats_parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Output statistics as JSON",
    )
    stats_parser.add_argument(
        "--lenient",
        action="store_true",
        help="Skip malformed lines instead of failing",
    )

    # paths command
    paths_parser = subparsers.add_parser(
        "paths",
        help="List every path from a node to the origin",
    )
    paths_parser.add_argument(
        "database",
        type=Path,
        help="Database file to analyze",
    )
    paths_parser.add_argument(
        "node",
        type=int,
        help="Node id to start from",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    config_subparsers.add_parser("show", help="Show merged configuration as TOML")
    config_subparsers.add_parser("path", help="Show config file location")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install dagstats[completion]
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "stats":
            return stats.run(args)
        elif args.command == "paths":
            return paths.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
