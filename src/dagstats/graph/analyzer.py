"""Path enumeration and structural statistics over a DirectedAcyclicGraph.

Every statistic re-enumerates paths from scratch; nothing is cached on the
analyzer or the graph, so results always reflect the graph's current state.

Path enumeration is exponential on graphs with many diamond-shaped
branches. For small databases that is acceptable; ``max_paths`` can bound
the work per node when input size is not under the caller's control.
"""

from __future__ import annotations

import math
from collections import defaultdict
from typing import TYPE_CHECKING

from dagstats.graph.store import ORIGIN

if TYPE_CHECKING:
    from dagstats.graph.store import DirectedAcyclicGraph

Path = tuple[int, ...]
SuccessorMap = dict[int, list[int]]


class PathLimitExceeded(RuntimeError):
    """More paths were enumerated for one node than ``max_paths`` allows."""

    def __init__(self, node: int, limit: int) -> None:
        self.node = node
        self.limit = limit
        super().__init__(f"Node {node} has more than {limit} paths to the origin")


def successor_map(graph: DirectedAcyclicGraph) -> SuccessorMap:
    """Group edge targets by their source node."""
    successors: SuccessorMap = defaultdict(list)
    for source, target in graph.edges():
        successors[source].append(target)
    return successors


def enumerate_paths(node: int, successors: SuccessorMap, max_paths: int = 0) -> set[Path]:
    """Enumerate every simple path from ``node`` to the origin.

    Depth-first search over an explicit stack. Each stack entry carries the
    path walked so far, which doubles as the visited set for that branch, so
    no node repeats within a path. A path ends the first time it reaches the
    origin.

    Args:
        node: Starting node id.
        successors: Adjacency from :func:`successor_map`.
        max_paths: Raise once more than this many paths are found (0 = no limit).

    Returns:
        Paths ordered from ``node`` to the origin, both inclusive.

    Raises:
        PathLimitExceeded: If ``max_paths`` is set and exceeded.
    """
    if node == ORIGIN:
        return {(ORIGIN,)}

    paths: set[Path] = set()
    stack: list[Path] = [(node,)]
    while stack:
        path = stack.pop()
        current = path[-1]
        if current == ORIGIN:
            paths.add(path)
            if max_paths and len(paths) > max_paths:
                raise PathLimitExceeded(node, max_paths)
            continue
        for neighbor in successors.get(current, ()):
            if neighbor not in path:
                stack.append(path + (neighbor,))

    return paths


def depths(graph: DirectedAcyclicGraph, node: int, max_paths: int = 0) -> set[Path]:
    """Get all possible paths from ``node`` to the origin.

    A node with no route to the origin, or one absent from the graph, has
    no paths. The origin itself always has exactly the path ``(1,)``.
    """
    return enumerate_paths(node, successor_map(graph), max_paths)


class DagAnalyzer:
    """Read-only statistics over a graph.

    Args:
        graph: The graph to analyze. It is read, never mutated.
        max_paths: Per-node path enumeration limit (0 = unbounded).
    """

    def __init__(self, graph: DirectedAcyclicGraph, max_paths: int = 0) -> None:
        self.graph = graph
        self.max_paths = max_paths

    def depths(self, node: int) -> set[Path]:
        return depths(self.graph, node, self.max_paths)

    def _all_paths(self, include_origin: bool = True):
        """Yield ``(node, paths)`` for every node in the graph."""
        successors = successor_map(self.graph)
        for node in self.graph.nodes():
            if node == ORIGIN and not include_origin:
                continue
            yield node, enumerate_paths(node, successors, self.max_paths)

    def avg_depth(self) -> float:
        """Average depth from all nodes to the origin.

        Each node contributes its shortest path length in edges; the origin
        contributes 0. Returns NaN for an empty graph, or when some node
        has no route to the origin.
        """
        node_count = self.graph.node_count()
        if node_count == 0:
            return math.nan

        total = 0
        for node, paths in self._all_paths(include_origin=False):
            if not paths:
                return math.nan
            total += min(len(path) for path in paths) - 1

        return total / node_count

    def avg_node_per_depth(self) -> float:
        """Average count of enumerated paths per path length, excluding the origin.

        Every path counts, not only shortest ones, so a node with several
        routes to the origin lands in several buckets.
        """
        per_length: dict[int, int] = defaultdict(int)
        for _, paths in self._all_paths(include_origin=False):
            for path in paths:
                per_length[len(path)] += 1

        if not per_length:
            return math.nan
        return sum(per_length.values()) / len(per_length)

    def avg_ref(self) -> float:
        """Average in-reference (in-degree) per node."""
        nodes = self.graph.nodes()
        if not nodes:
            return math.nan

        in_refs: dict[int, int] = defaultdict(int)
        for _, target in self.graph.edges():
            in_refs[target] += 1

        return sum(in_refs[node] for node in nodes) / len(nodes)

    def max_depth(self) -> int:
        """Longest path to the origin, counted in nodes (0 for an empty graph)."""
        longest = 0
        for _, paths in self._all_paths():
            for path in paths:
                longest = max(longest, len(path))
        return longest


__all__ = [
    "DagAnalyzer",
    "Path",
    "PathLimitExceeded",
    "depths",
    "enumerate_paths",
    "successor_map",
]
