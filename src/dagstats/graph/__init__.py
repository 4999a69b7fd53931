"""
dagstats.graph - Graph store, loader and analyzer.

Exports:
- DirectedAcyclicGraph: node/edge store with consistency pruning
- parse_database / load_file / from_string: parent-pointer database loader
- DagAnalyzer / depths: path enumeration and statistics
- DagStatistics / compute_statistics: statistics report
"""

from dagstats.graph.analyzer import DagAnalyzer, PathLimitExceeded, depths
from dagstats.graph.metrics import DagStatistics, compute_statistics
from dagstats.graph.mutations import MutationEntry, MutationLog
from dagstats.graph.parser import ParseError, from_string, load_file, parse_database
from dagstats.graph.store import ORIGIN, DirectedAcyclicGraph

__all__ = [
    "ORIGIN",
    "DagAnalyzer",
    "DagStatistics",
    "DirectedAcyclicGraph",
    "MutationEntry",
    "MutationLog",
    "ParseError",
    "PathLimitExceeded",
    "compute_statistics",
    "depths",
    "from_string",
    "load_file",
    "parse_database",
]
