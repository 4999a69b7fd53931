"""Graph Factory - build a graph from a database file and configuration.

Commands should use this instead of calling the loader directly so that
``parser.strict`` from the configuration is honoured everywhere.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from dagstats.config import get_config
from dagstats.graph.parser import load_file
from dagstats.graph.store import DirectedAcyclicGraph


def build_graph(
    database: str | Path,
    config: dict[str, Any] | None = None,
    config_path: Path | None = None,
    strict: bool | None = None,
) -> DirectedAcyclicGraph:
    """Load a database file into a graph.

    Args:
        database: Path to the parent-pointer database file.
        config: Pre-loaded configuration. Loaded via ``get_config`` if None.
        config_path: Explicit config file, used only when ``config`` is None.
        strict: Overrides ``parser.strict`` from the configuration.

    Raises:
        ParseError: On a malformed data line in strict mode.
        OSError: If the database cannot be read.
    """
    if config is None:
        config = get_config(config_path)
    if strict is None:
        strict = bool(config.get("parser", {}).get("strict", True))
    return load_file(database, strict=strict)
