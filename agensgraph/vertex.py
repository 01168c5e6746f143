"""Vertices: reading the ``vertex`` and ``_vertex`` text representations."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterator

from .entity import Entity, EntityData, scan_entity
from .graphid import GraphId
from .jsonscan import read_json_object

_VERTEX_CORE_RE = re.compile(rb"(.+?)\[(\d+\.\d+)\]")
_NULL_ELEMENT = b"NULL"


def _show(data: bytes) -> str:
    return bytes(data).decode("utf-8", "replace")


@dataclass(frozen=True)
class VertexCore:
    """The data that identifies a vertex."""

    label: str
    id: GraphId


def _make_vertex_data(label: bytes, raw_id: bytes, props: bytes) -> EntityData:
    gid = GraphId()
    try:
        gid.scan(raw_id)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid vertex ID: {exc}") from exc
    core = VertexCore(label.decode("utf-8", "replace"), gid)
    return EntityData(core, bytes(props))


def read_vertex_element(data: bytes) -> tuple[int, EntityData | None]:
    """Read one vertex at the start of ``data``.

    Returns the number of bytes consumed and the parsed vertex, or None for
    a NULL element.
    """
    data = bytes(data)
    if data.startswith(_NULL_ELEMENT):
        return len(_NULL_ELEMENT), None

    match = _VERTEX_CORE_RE.match(data)
    if match is None:
        raise ValueError(f"bad vertex representation: {_show(data)}")
    advance = match.end()

    try:
        props = read_json_object(data[advance:])
    except ValueError as exc:
        raise ValueError(f"invalid vertex properties: {exc}") from exc
    advance += len(props)

    return advance, _make_vertex_data(match.group(1), match.group(2), props)


def read_vertex_elements(data: bytes) -> list[EntityData | None]:
    """Read a bracketed, comma separated list of vertices."""
    body = bytes(data)[1:-1]
    elements: list[EntityData | None] = []
    while body:
        if elements:
            body = body[1:]
        advance, element = read_vertex_element(body)
        elements.append(element)
        body = body[advance:]
    return elements


@dataclass
class VertexHeader(Entity):
    """Base for objects that a vertex is scanned into.

    ``label`` and ``id`` are meaningful only while ``valid`` is True.
    """

    _reserved_fields: ClassVar[frozenset[str]] = frozenset({"valid", "label", "id"})

    valid: bool = False
    label: str = ""
    id: GraphId = field(default_factory=GraphId)

    def read_entity(self, data: bytes) -> EntityData:
        """Parse a whole vertex; the properties are everything after the core."""
        data = bytes(data)
        match = _VERTEX_CORE_RE.match(data)
        if match is None:
            raise ValueError(f"bad vertex representation: {_show(data)}")
        return _make_vertex_data(match.group(1), match.group(2), data[match.end():])

    def read_elements(self, data: bytes) -> list[EntityData | None]:
        """Parse a ``_vertex`` array into its elements."""
        return read_vertex_elements(data)

    def save_entity(self, valid: bool, core: Any) -> None:
        """Store the vertex core; ``core`` must be a VertexCore when valid."""
        self.valid = valid
        if not valid:
            return
        if not isinstance(core, VertexCore):
            raise TypeError(f"invalid vertex core: {type(core).__name__}")
        self.label = core.label
        self.id = core.id


@dataclass
class BasicVertex(VertexHeader):
    """A vertex whose properties are kept as a dictionary."""

    properties: dict[str, Any] | None = None

    def save_properties(self, data: bytes) -> None:
        """Decode the JSON object into ``properties``."""
        try:
            props = json.loads(bytes(data))
        except ValueError as exc:
            raise ValueError(f"invalid vertex properties: {exc}") from exc
        if props is not None and not isinstance(props, dict):
            raise ValueError(
                f"invalid vertex properties: JSON {type(props).__name__} is not an object"
            )
        self.properties = props

    def scan(self, src: object) -> None:
        """Read the driver's value into this vertex."""
        scan_entity(src, self)

    def __str__(self) -> str:
        if not self.valid:
            return "NULL"
        props = json.dumps(
            self.properties, separators=(",", ":"), sort_keys=True, ensure_ascii=False
        )
        return f"{self.label}[{self.id}]{props}"


@dataclass
class BasicVertexArray:
    """A ``_vertex`` value; ``vertices`` is None for NULL."""

    vertices: list[BasicVertex] | None = None

    def scan(self, src: object) -> None:
        """Read the driver's value, such as b"[NULL,v[3.1]{}]"."""
        if src is None:
            self.vertices = None
            return
        if not isinstance(src, (bytes, bytearray, memoryview)):
            raise TypeError(f"invalid source for _vertex: {type(src).__name__}")
        raw = bytes(src)
        if not raw:
            raise ValueError(f"invalid source for _vertex: {raw!r}")

        try:
            elements = read_vertex_elements(raw)
        except ValueError as exc:
            raise ValueError(f"failed to read vertex elements: {exc}") from exc

        vertices = []
        for element in elements:
            vertex = BasicVertex()
            vertex.scan(element)
            vertices.append(vertex)
        self.vertices = vertices

    def value(self) -> bytes:
        """Vertices cannot be passed to the driver; always raises TypeError."""
        raise TypeError("value() on an array of vertex is not supported")

    def __iter__(self) -> Iterator[BasicVertex]:
        return iter(self.vertices or ())

    def __len__(self) -> int:
        return len(self.vertices or ())