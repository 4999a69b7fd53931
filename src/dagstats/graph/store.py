"""DirectedAcyclicGraph - node and edge store with consistency pruning.

The store holds a deduplicated set of integer node ids and a deduplicated
set of directed ``(from, to)`` edges. Node ``1`` is the origin every path
statistic is measured against.

Mutations report success through their boolean return value and never
raise. Removing an edge or a node runs a purge pass that drops dangling
edges and edgeless nodes until the store is stable again.

Note:
    The store never checks that the graph is acyclic, and removing an edge
    may leave the origin unreachable from other nodes. Both are the
    caller's responsibility.
"""

from __future__ import annotations

import copy
from typing import IO, TYPE_CHECKING

from dagstats.graph.mutations import Edge, MutationEntry, MutationLog

if TYPE_CHECKING:
    from pathlib import Path

ORIGIN = 1


class DirectedAcyclicGraph:
    """Nodes and edges of a parent-pointer DAG.

    Attributes:
        skipped_lines: Physical line numbers the loader dropped while
            building this graph (empty for graphs built by hand).
    """

    def __init__(self) -> None:
        self._nodes: set[int] = set()
        self._edges: set[Edge] = set()
        self._mutation_log = MutationLog()
        self.skipped_lines: list[int] = []

    # ─────────────────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_read(cls, reader: IO, strict: bool = True) -> DirectedAcyclicGraph:
        """Create a graph from a readable text or bytes stream.

        See :func:`dagstats.graph.parser.parse_database` for the format.
        """
        from dagstats.graph.parser import parse_database

        return parse_database(reader, strict=strict, graph_class=cls)

    @classmethod
    def from_file(cls, path: str | Path, strict: bool = True) -> DirectedAcyclicGraph:
        """Create a graph from a database file on disk."""
        from dagstats.graph.parser import load_file

        return load_file(path, strict=strict, graph_class=cls)

    def clone(self) -> DirectedAcyclicGraph:
        """Create a fully independent deep copy of this graph."""
        return copy.deepcopy(self)

    # ─────────────────────────────────────────────────────────────────────────
    # Read API
    # ─────────────────────────────────────────────────────────────────────────

    def nodes(self) -> frozenset[int]:
        """Read-only view of the node ids."""
        return frozenset(self._nodes)

    def edges(self) -> frozenset[Edge]:
        """Read-only view of the ``(from, to)`` edges."""
        return frozenset(self._edges)

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def in_degree(self, node: int) -> int:
        """Number of edges pointing at ``node``."""
        return sum(1 for _, target in self._edges if target == node)

    def out_degree(self, node: int) -> int:
        """Number of edges leaving ``node``."""
        return sum(1 for source, _ in self._edges if source == node)

    @property
    def mutation_log(self) -> MutationLog:
        """History of successful mutations, including purge cascades."""
        return self._mutation_log

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nodes={len(self._nodes)}, edges={len(self._edges)})"

    # ─────────────────────────────────────────────────────────────────────────
    # Mutation API
    # ─────────────────────────────────────────────────────────────────────────

    def add_edge(self, source: int, target: int) -> bool:
        """Insert an edge, registering both endpoints as nodes.

        Self-loops are rejected.

        Args:
            source: Start node id.
            target: Destination node id.

        Returns:
            True if the edge set actually grew.
        """
        if source == target:
            return False

        self._nodes.add(source)
        self._nodes.add(target)

        edge = (source, target)
        if edge in self._edges:
            return False

        self._edges.add(edge)
        self._mutation_log.append(MutationEntry(operation="add_edge", target=edge))
        return True

    def remove_edge(self, source: int, target: int) -> bool:
        """Remove an edge and purge any nodes left without edges.

        Warning:
            This does not check whether the origin stays reachable.

        Returns:
            True if the edge existed and was removed.
        """
        edge = (source, target)
        if edge not in self._edges:
            return False

        self._edges.discard(edge)
        removed_nodes, removed_edges = self._purge()
        self._mutation_log.append(
            MutationEntry(
                operation="remove_edge",
                target=edge,
                removed_nodes=removed_nodes,
                removed_edges=sorted([edge, *removed_edges]),
            )
        )
        return True

    def remove_node(self, node: int) -> bool:
        """Remove a node along with every edge that references it.

        The origin can never be removed.

        Returns:
            True if the node existed and was removed.
        """
        if node == ORIGIN or node not in self._nodes:
            return False

        self._nodes.discard(node)
        removed_nodes, removed_edges = self._purge()
        self._mutation_log.append(
            MutationEntry(
                operation="remove_node",
                target=node,
                removed_nodes=sorted([node, *removed_nodes]),
                removed_edges=removed_edges,
            )
        )
        return True

    def _purge(self) -> tuple[list[int], list[Edge]]:
        """Drop dangling edges and edgeless nodes until nothing changes.

        Returns:
            Tuple of (removed nodes, removed edges), each sorted.
        """
        removed_nodes: set[int] = set()
        removed_edges: set[Edge] = set()

        while True:
            stale_edges = {
                (source, target)
                for source, target in self._edges
                if source not in self._nodes or target not in self._nodes
            }
            self._edges -= stale_edges
            removed_edges |= stale_edges

            touched = {n for edge in self._edges for n in edge}
            stale_nodes = {n for n in self._nodes if n != ORIGIN and n not in touched}
            self._nodes -= stale_nodes
            removed_nodes |= stale_nodes

            if not stale_edges and not stale_nodes:
                break

        return sorted(removed_nodes), sorted(removed_edges)

    # ─────────────────────────────────────────────────────────────────────────
    # Statistics (delegates to dagstats.graph.analyzer)
    # ─────────────────────────────────────────────────────────────────────────

    def depths(self, node: int) -> set[tuple[int, ...]]:
        """All paths from ``node`` to the origin."""
        from dagstats.graph.analyzer import depths

        return depths(self, node)

    def avg_depth(self) -> float:
        """Average shortest depth from every node to the origin."""
        from dagstats.graph.analyzer import DagAnalyzer

        return DagAnalyzer(self).avg_depth()

    def avg_node_per_depth(self) -> float:
        """Average number of enumerated paths per path length."""
        from dagstats.graph.analyzer import DagAnalyzer

        return DagAnalyzer(self).avg_node_per_depth()

    def avg_ref(self) -> float:
        """Average in-degree per node."""
        from dagstats.graph.analyzer import DagAnalyzer

        return DagAnalyzer(self).avg_ref()

    def max_depth(self) -> int:
        """Longest enumerated path, counted in nodes."""
        from dagstats.graph.analyzer import DagAnalyzer

        return DagAnalyzer(self).max_depth()


__all__ = ["ORIGIN", "DirectedAcyclicGraph"]
