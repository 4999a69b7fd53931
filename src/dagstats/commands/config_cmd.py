"""
dagstats.commands.config_cmd - Inspect the active configuration.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import tomlkit

from dagstats.config import ConfigError, find_config_file, get_config


def run(args: argparse.Namespace) -> int:
    """Run the config command.

    Subcommands:
    - show: Print the merged configuration as TOML
    - path: Print the location of the config file in use
    """
    action = getattr(args, "config_action", None)

    if action == "path":
        config_path = args.config or find_config_file(Path.cwd())
        if config_path is None:
            print("No .dagstats.toml found (using defaults)", file=sys.stderr)
            return 1
        print(config_path)
        return 0

    if action == "show":
        try:
            config = get_config(args.config)
        except (ConfigError, OSError) as e:
            print(f"Error loading config: {e}", file=sys.stderr)
            return 1
        print(tomlkit.dumps(config), end="")
        return 0

    print("Usage: dagstats config <show|path>", file=sys.stderr)
    return 1
