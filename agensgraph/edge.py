"""Edges: reading the ``edge`` and ``_edge`` text representations."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterator

from .entity import Entity, EntityData, scan_entity
from .graphid import GraphId
from .jsonscan import read_json_object

_EDGE_CORE_RE = re.compile(rb"(.+?)\[(\d+\.\d+)\]\[(\d+\.\d+),(\d+\.\d+)\]")
_NULL_ELEMENT = b"NULL"


def _show(data: bytes) -> str:
    return bytes(data).decode("utf-8", "replace")


@dataclass(frozen=True)
class EdgeCore:
    """The data that identifies an edge."""

    label: str
    id: GraphId
    start: GraphId
    end: GraphId


def _scan_id(raw: bytes, what: str) -> GraphId:
    gid = GraphId()
    try:
        gid.scan(raw)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid {what}: {exc}") from exc
    return gid


def _make_edge_data(
    label: bytes, raw_id: bytes, start: bytes, end: bytes, props: bytes
) -> EntityData:
    core = EdgeCore(
        label.decode("utf-8", "replace"),
        _scan_id(raw_id, "edge ID"),
        _scan_id(start, "edge start ID"),
        _scan_id(end, "edge end ID"),
    )
    return EntityData(core, bytes(props))


def read_edge_element(data: bytes) -> tuple[int, EntityData | None]:
    """Read one edge at the start of ``data``.

    Returns the number of bytes consumed and the parsed edge, or None for a
    NULL element.
    """
    data = bytes(data)
    if data.startswith(_NULL_ELEMENT):
        return len(_NULL_ELEMENT), None

    match = _EDGE_CORE_RE.match(data)
    if match is None:
        raise ValueError(f"bad edge representation: {_show(data)}")
    advance = match.end()

    try:
        props = read_json_object(data[advance:])
    except ValueError as exc:
        raise ValueError(f"invalid edge properties: {exc}") from exc
    advance += len(props)

    return advance, _make_edge_data(*match.groups(), props)


def read_edge_elements(data: bytes) -> list[EntityData | None]:
    """Read a bracketed, comma separated list of edges."""
    body = bytes(data)[1:-1]
    elements: list[EntityData | None] = []
    while body:
        if elements:
            body = body[1:]
        advance, element = read_edge_element(body)
        elements.append(element)
        body = body[advance:]
    return elements


@dataclass
class EdgeHeader(Entity):
    """Base for objects that an edge is scanned into.

    ``label``, ``id``, ``start`` and ``end`` are meaningful only while
    ``valid`` is True.
    """

    _reserved_fields: ClassVar[frozenset[str]] = frozenset(
        {"valid", "label", "id", "start", "end"}
    )

    valid: bool = False
    label: str = ""
    id: GraphId = field(default_factory=GraphId)
    start: GraphId = field(default_factory=GraphId)
    end: GraphId = field(default_factory=GraphId)

    def read_entity(self, data: bytes) -> EntityData:
        """Parse a whole edge; the properties are everything after the core."""
        data = bytes(data)
        match = _EDGE_CORE_RE.match(data)
        if match is None:
            raise ValueError(f"bad edge representation: {_show(data)}")
        return _make_edge_data(*match.groups(), data[match.end():])

    def read_elements(self, data: bytes) -> list[EntityData | None]:
        """Parse an ``_edge`` array into its elements."""
        return read_edge_elements(data)

    def save_entity(self, valid: bool, core: Any) -> None:
        """Store the edge core; ``core`` must be an EdgeCore when valid."""
        self.valid = valid
        if not valid:
            return
        if not isinstance(core, EdgeCore):
            raise TypeError(f"invalid edge core: {type(core).__name__}")
        self.label = core.label
        self.id = core.id
        self.start = core.start
        self.end = core.end


@dataclass
class BasicEdge(EdgeHeader):
    """An edge whose properties are kept as a dictionary."""

    properties: dict[str, Any] | None = None

    def save_properties(self, data: bytes) -> None:
        """Decode the JSON object into ``properties``."""
        try:
            props = json.loads(bytes(data))
        except ValueError as exc:
            raise ValueError(f"invalid edge properties: {exc}") from exc
        if props is not None and not isinstance(props, dict):
            raise ValueError(
                f"invalid edge properties: JSON {type(props).__name__} is not an object"
            )
        self.properties = props

    def scan(self, src: object) -> None:
        """Read the driver's value into this edge."""
        scan_entity(src, self)

    def __str__(self) -> str:
        if not self.valid:
            return "NULL"
        props = json.dumps(
            self.properties, separators=(",", ":"), sort_keys=True, ensure_ascii=False
        )
        return f"{self.label}[{self.id}][{self.start},{self.end}]{props}"


@dataclass
class BasicEdgeArray:
    """An ``_edge`` value; ``edges`` is None for NULL."""

    edges: list[BasicEdge] | None = None

    def scan(self, src: object) -> None:
        """Read the driver's value, such as b"[NULL,e[4.1][3.1,3.2]{}]"."""
        if src is None:
            self.edges = None
            return
        if not isinstance(src, (bytes, bytearray, memoryview)):
            raise TypeError(f"invalid source for _edge: {type(src).__name__}")
        raw = bytes(src)
        if not raw:
            raise ValueError(f"invalid source for _edge: {raw!r}")

        try:
            elements = read_edge_elements(raw)
        except ValueError as exc:
            raise ValueError(f"failed to read edge elements: {exc}") from exc

        edges = []
        for element in elements:
            edge = BasicEdge()
            edge.scan(element)
            edges.append(edge)
        self.edges = edges

    def value(self) -> bytes:
        """Edges cannot be passed to the driver; always raises TypeError."""
        raise TypeError("value() on an array of edge is not supported")

    def __iter__(self) -> Iterator[BasicEdge]:
        return iter(self.edges or ())

    def __len__(self) -> int:
        return len(self.edges or ())