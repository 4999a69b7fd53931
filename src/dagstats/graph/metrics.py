"""Statistics report for a DirectedAcyclicGraph.

DagStatistics bundles every statistic the analyzer computes so the command
layer can print or serialize them in one place.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from dagstats.graph.analyzer import DagAnalyzer

if TYPE_CHECKING:
    from dagstats.graph.store import DirectedAcyclicGraph


@dataclass
class DagStatistics:
    """Structural statistics of one graph.

    Attributes:
        node_count: Number of nodes, origin included.
        edge_count: Number of edges.
        avg_depth: Mean shortest depth (in edges) to the origin.
        avg_node_per_depth: Mean number of enumerated paths per path length.
        avg_ref: Mean in-degree per node.
        max_depth: Longest path to the origin, in nodes.
    """

    node_count: int = 0
    edge_count: int = 0
    avg_depth: float = math.nan
    avg_node_per_depth: float = math.nan
    avg_ref: float = math.nan
    max_depth: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-safe dict. NaN values become None."""
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, float) and math.isnan(value):
                data[key] = None
        return data


def compute_statistics(graph: DirectedAcyclicGraph, max_paths: int = 0) -> DagStatistics:
    """Compute every statistic for ``graph``.

    Raises:
        PathLimitExceeded: If ``max_paths`` is set and some node exceeds it.
    """
    analyzer = DagAnalyzer(graph, max_paths=max_paths)
    return DagStatistics(
        node_count=graph.node_count(),
        edge_count=graph.edge_count(),
        avg_depth=analyzer.avg_depth(),
        avg_node_per_depth=analyzer.avg_node_per_depth(),
        avg_ref=analyzer.avg_ref(),
        max_depth=analyzer.max_depth(),
    )


__all__ = ["DagStatistics", "compute_statistics"]
