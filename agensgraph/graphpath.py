"""Paths: reading the ``graphpath`` text representation."""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .edge import BasicEdge, read_edge_element
from .entity import EntityData
from .vertex import BasicVertex, read_vertex_element

_NULL_ELEMENT = b"NULL"
_OPEN = ord("[")
_CLOSE = ord("]")


def _show(data: bytes) -> str:
    return bytes(data).decode("utf-8", "replace")


class PathSaver(ABC):
    """An object that a path can be scanned into."""

    @abstractmethod
    def save_path(self, valid: bool, elements: list[EntityData | None] | None) -> None:
        """Store a path.

        ``elements`` alternates vertices and edges, each of which can be
        passed to ``scan_entity``; it is None when ``valid`` is False.
        """


def _read_path(data: bytes) -> tuple[int, list[EntityData | None]]:
    if data.startswith(_NULL_ELEMENT):
        return len(_NULL_ELEMENT), []

    if not data or data[0] != _OPEN:
        raise ValueError(f"bad graphpath representation: {_show(data)}")

    advance = 1
    elements: list[EntityData | None] = []
    for read in itertools.cycle((read_vertex_element, read_edge_element)):
        if advance >= len(data):
            raise ValueError(f"bad graphpath representation: {_show(data)}")
        if data[advance] == _CLOSE:
            break
        if elements:
            advance += 1  # the comma between elements
        try:
            consumed, element = read(data[advance:])
        except ValueError as exc:
            raise ValueError(f"invalid path element: {exc}") from exc
        advance += consumed
        elements.append(element)

    return advance + 1, elements


def scan_path(src: object, saver: PathSaver) -> None:
    """Read a path from ``src`` and store it by calling ``saver.save_path``.

    ``src`` is the driver's bytes or None for NULL. Raises TypeError for any
    other source and ValueError for a malformed path.
    """
    if src is None:
        saver.save_path(False, None)
        return
    if not isinstance(src, (bytes, bytearray, memoryview)):
        raise TypeError(f"invalid source for graphpath: {type(src).__name__}")
    raw = bytes(src)
    if not raw:
        raise ValueError(f"invalid source for graphpath: {raw!r}")

    advance, elements = _read_path(raw)
    if advance != len(raw):
        raise ValueError(f"bad graphpath representation: {_show(raw)}")

    saver.save_path(True, elements)


@dataclass
class BasicPath(PathSaver):
    """A path kept as its vertices and the edges between them."""

    valid: bool = False
    vertices: list[BasicVertex] = field(default_factory=list)
    edges: list[BasicEdge] = field(default_factory=list)

    def save_path(self, valid: bool, elements: list[EntityData | None] | None) -> None:
        """Split the alternating elements into vertices and edges."""
        self.valid = valid
        self.vertices = []
        self.edges = []
        if not valid or not elements:
            return
        if len(elements) % 2 == 0:
            raise ValueError(
                f"invalid path: {len(elements)} elements do not end with a vertex"
            )

        vertices = []
        for element in elements[0::2]:
            vertex = BasicVertex()
            vertex.scan(element)
            vertices.append(vertex)

        edges = []
        for element in elements[1::2]:
            edge = BasicEdge()
            edge.scan(element)
            edges.append(edge)

        self.vertices = vertices
        self.edges = edges

    def scan(self, src: object) -> None:
        """Read the driver's value into this path."""
        scan_path(src, self)

    def __str__(self) -> str:
        if not self.valid:
            return "NULL"
        if not self.vertices:
            return "[]"
        parts = []
        for vertex, edge in zip(self.vertices, self.edges):
            parts.append(str(vertex))
            parts.append(str(edge))
        parts.append(str(self.vertices[-1]))
        return "[" + ",".join(parts) + "]"