"""Mutation records for DirectedAcyclicGraph operations.

Each successful mutation of the graph is recorded together with the
cascade of nodes and edges its purge pass removed, so callers can see
exactly what a single ``remove_edge`` or ``remove_node`` took with it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

Edge = tuple[int, int]


@dataclass
class MutationEntry:
    """Single mutation operation record.

    Attributes:
        operation: Operation name ("add_edge", "remove_edge", "remove_node").
        target: The edge or node the caller asked to mutate.
        removed_nodes: Nodes dropped by the purge pass, sorted.
        removed_edges: Edges dropped by the purge pass, sorted.
        id: Unique mutation ID (UUID4 hex).
        timestamp: When the mutation occurred.
    """

    operation: str
    target: int | Edge
    removed_nodes: list[int] = field(default_factory=list)
    removed_edges: list[Edge] = field(default_factory=list)
    id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def cascaded(self) -> bool:
        """True if the purge removed anything beyond the requested target."""
        if self.operation == "remove_node":
            extra_nodes = [n for n in self.removed_nodes if n != self.target]
            return bool(extra_nodes or self.removed_edges)
        if self.operation == "remove_edge":
            extra_edges = [e for e in self.removed_edges if e != self.target]
            return bool(self.removed_nodes or extra_edges)
        return False

    def __str__(self) -> str:
        return f"[{self.id[:8]}] {self.operation}({self.target})"


class MutationLog:
    """Append-only mutation history.

    Example:
        >>> log = MutationLog()
        >>> log.append(MutationEntry(operation="add_edge", target=(2, 1)))
        >>> len(log)
        1
    """

    def __init__(self) -> None:
        self._entries: list[MutationEntry] = []

    def append(self, entry: MutationEntry) -> None:
        """Append a mutation entry to the log."""
        self._entries.append(entry)

    def iter_entries(self) -> Iterator[MutationEntry]:
        """Iterate over all entries in chronological order."""
        yield from self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def last(self) -> MutationEntry | None:
        """Return the most recent entry, or None if empty."""
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        """Clear all entries from the log."""
        self._entries.clear()


__all__ = ["Edge", "MutationEntry", "MutationLog"]
