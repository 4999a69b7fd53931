"""
dagstats - Structural statistics for parent-pointer DAG databases

dagstats loads a line-oriented "parent pointer" database into a directed
acyclic graph and reports how deep its nodes sit below the origin (node 1),
how paths spread across depth levels and how often nodes are referenced.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dagstats")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed

from dagstats.graph import (
    ORIGIN,
    DagAnalyzer,
    DagStatistics,
    DirectedAcyclicGraph,
    ParseError,
    compute_statistics,
    parse_database,
)

__all__ = [
    "__version__",
    "ORIGIN",
    "DagAnalyzer",
    "DagStatistics",
    "DirectedAcyclicGraph",
    "ParseError",
    "compute_statistics",
    "parse_database",
]
