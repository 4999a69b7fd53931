"""Loader for the parent-pointer database format.

The database structure is::

    N                 <- node count, read and ignored
    <left> <right>    <- parents of node 2
    <left> <right>    <- parents of node 3
    ...

Node ``1`` is the origin of every node and is never a data line itself, so
the data line at 0-based position ``i`` declares node ``i + 2``. Parent
values equal to the declaring node are dropped rather than stored as
self-loops.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import IO

from dagstats.graph.store import ORIGIN, DirectedAcyclicGraph

_NODE_ID = re.compile(r"\d+", re.ASCII)

# Node 1 is the origin, so the first data line declares node 2.
_FIRST_NODE_ID = 2


class ParseError(ValueError):
    """A data line did not hold exactly two non-negative integers.

    Attributes:
        line_number: 1-based physical line number in the stream.
        line: The offending line, without its line terminator.
        reason: Short description of what was wrong.
    """

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {line!r}")


def parse_line(line: str, line_number: int) -> tuple[int, int]:
    """Parse one data line into its ``(left, right)`` parent ids.

    Raises:
        ParseError: If the line is not exactly two non-negative integers.
    """
    tokens = line.split()
    if len(tokens) != 2:
        raise ParseError(line_number, line, f"expected 2 node ids, found {len(tokens)}")

    for token in tokens:
        if not _NODE_ID.fullmatch(token):
            raise ParseError(line_number, line, f"invalid node id {token!r}")

    return int(tokens[0]), int(tokens[1])


def _read_lines(reader: IO) -> Iterator[tuple[int, str | None]]:
    """Yield ``(line_number, text)`` for every line after the header.

    Text streams backed by a binary buffer are read through that buffer so
    decoding happens per line. Lines that cannot be decoded are yielded with
    ``None`` text.
    """
    reader = getattr(reader, "buffer", reader)

    # The header is consumed before the first data line.
    reader.readline()

    line_number = 1
    for raw in reader:
        line_number += 1
        if isinstance(raw, bytes):
            try:
                raw = raw.decode("utf-8")
            except UnicodeDecodeError:
                yield line_number, None
                continue
        yield line_number, raw.rstrip("\r\n")


def _strip_trailing_blank(lines: list[tuple[int, str | None]]) -> list[tuple[int, str | None]]:
    """Drop blank lines after the last data line, keeping unreadable ones."""
    end = len(lines)
    while end and (lines[end - 1][1] is None or not lines[end - 1][1].strip()):
        end -= 1
    return lines[:end] + [entry for entry in lines[end:] if entry[1] is None]


def build_graph(
    lines: Iterable[tuple[int, str | None]],
    strict: bool = True,
    graph_class: type[DirectedAcyclicGraph] = DirectedAcyclicGraph,
) -> DirectedAcyclicGraph:
    """Build a graph from numbered data lines.

    Args:
        lines: ``(physical_line_number, text)`` pairs; ``None`` text marks a
            line that could not be read and is dropped without taking a
            node id.
        strict: Raise on malformed lines instead of skipping them.
        graph_class: Graph type to instantiate.

    Returns:
        The populated graph. The origin is always present.

    Raises:
        ParseError: On the first malformed line when ``strict`` is set.
    """
    dag = graph_class()
    dag._nodes.add(ORIGIN)

    position = 0
    for line_number, text in lines:
        if text is None:
            dag.skipped_lines.append(line_number)
            continue

        node = position + _FIRST_NODE_ID
        position += 1

        try:
            left, right = parse_line(text, line_number)
        except ParseError:
            if strict:
                raise
            dag.skipped_lines.append(line_number)
            continue

        dag._nodes.update((node, left, right))
        if left != node:
            dag._edges.add((node, left))
        if right != node:
            dag._edges.add((node, right))

    return dag


def parse_database(
    reader: IO,
    strict: bool = True,
    graph_class: type[DirectedAcyclicGraph] = DirectedAcyclicGraph,
) -> DirectedAcyclicGraph:
    """Create a graph from anything that can be read line by line.

    Both text and binary streams are accepted. Lines are decoded as UTF-8 one
    at a time (text streams are read through their underlying binary buffer
    when they have one), and lines that fail to decode are silently skipped.
    A text stream without a buffer, such as ``io.StringIO``, is already
    decoded. Blank lines at the end of the stream are ignored.

    Args:
        reader: Readable stream positioned at the header line.
        strict: If True (default) a malformed data line raises
            :class:`ParseError`; otherwise it is skipped and recorded in
            ``skipped_lines``.
        graph_class: Graph type to instantiate.

    Raises:
        ParseError: On a malformed data line in strict mode.
        OSError: If the underlying stream cannot be read.
    """
    lines = _strip_trailing_blank(list(_read_lines(reader)))
    return build_graph(lines, strict=strict, graph_class=graph_class)


def from_string(text: str, strict: bool = True) -> DirectedAcyclicGraph:
    """Create a graph from an in-memory database string."""
    from io import StringIO

    return parse_database(StringIO(text), strict=strict)


def load_file(
    path: str | Path,
    strict: bool = True,
    graph_class: type[DirectedAcyclicGraph] = DirectedAcyclicGraph,
) -> DirectedAcyclicGraph:
    """Create a graph from a database file."""
    with open(path, "rb") as f:
        return parse_database(f, strict=strict, graph_class=graph_class)


__all__ = [
    "ParseError",
    "build_graph",
    "from_string",
    "load_file",
    "parse_database",
    "parse_line",
]
