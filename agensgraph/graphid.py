"""Graph identifiers for vertices and edges, and arrays of them.

The types here read and write the text representation used by the
database driver for ``graphid`` and ``_graphid`` values.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

_GRAPH_ID_RE = re.compile(rb"(\d+)\.(\d+)")
_LABEL_MAX = (1 << 16) - 1
_LOCAL_MAX = (1 << 48) - 1
_NULL_ELEMENT = b"NULL"
_SEPARATOR = b","


def _check_part(name: str, digits: bytes, limit: int) -> None:
    value = int(digits)
    if value > limit:
        raise ValueError(f"invalid {name} ID: {digits.decode()} is out of range")
    if value == 0:
        raise ValueError(f"invalid {name} ID: 0")


def _validate(raw: bytes) -> None:
    match = _GRAPH_ID_RE.fullmatch(raw)
    if match is None:
        text = raw.decode("utf-8", "replace")
        raise ValueError(f"bad graphid representation: {text!r}")
    _check_part("label", match.group(1), _LABEL_MAX)
    _check_part("local", match.group(2), _LOCAL_MAX)


def _source_bytes(src: object, what: str) -> bytes:
    if not isinstance(src, (bytes, bytearray, memoryview)):
        raise TypeError(f"invalid source for {what}: {type(src).__name__}")
    raw = bytes(src)
    if not raw:
        raise ValueError(f"invalid source for {what}: {raw!r}")
    return raw


class GraphId:
    """A unique ID of a vertex or an edge; ``valid`` is False for NULL."""

    __slots__ = ("valid", "_raw")

    def __init__(self) -> None:
        self.valid = False
        self._raw = b""

    @classmethod
    def parse(cls, text: str) -> GraphId:
        """Build a GraphId from text between "1.1" and "65535.281474976710655".

        "NULL" gives an invalid GraphId; anything else out of range raises
        ValueError.
        """
        gid = cls()
        if text == "NULL":
            return gid
        raw = text.encode("utf-8")
        _validate(raw)
        gid.valid = True
        gid._raw = raw
        return gid

    def equal(self, other: GraphId) -> bool:
        """Report whether both IDs are valid and the same."""
        if not self.valid or not other.valid:
            return False
        return self._raw == other._raw

    def scan(self, src: object) -> None:
        """Read the driver's value: None for NULL, otherwise bytes."""
        if src is None:
            self.valid = False
            self._raw = b""
            return
        raw = _source_bytes(src, "graphid")
        _validate(raw)
        self.valid = True
        self._raw = raw

    def value(self) -> bytes | None:
        """Return the value handed to the driver."""
        return self._raw if self.valid else None

    def __str__(self) -> str:
        return self._raw.decode("ascii") if self.valid else "NULL"

    def __repr__(self) -> str:
        return f"GraphId({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphId):
            return NotImplemented
        return self.valid == other.valid and self._raw == other._raw

    __hash__ = None  # type: ignore[assignment]


def new_graph_id(text: str) -> GraphId:
    """Return the GraphId for ``text``; see GraphId.parse."""
    return GraphId.parse(text)


@dataclass
class GraphIdArray:
    """A ``_graphid`` value; ``ids`` is None for NULL."""

    ids: list[GraphId] | None = None

    def scan(self, src: object) -> None:
        """Read the driver's value, such as b"{NULL,1.1}"."""
        if src is None:
            self.ids = None
            return
        raw = _source_bytes(src, "_graphid")

        body = raw[1:-1]
        if not body:
            self.ids = []
            return

        ids = []
        for part in body.split(_SEPARATOR):
            gid = GraphId()
            if part != _NULL_ELEMENT:
                try:
                    gid.scan(part)
                except (TypeError, ValueError) as exc:
                    raise ValueError(f"bad _graphid representation: {exc}") from exc
            ids.append(gid)
        self.ids = ids

    def value(self) -> bytes | None:
        """Return the value handed to the driver."""
        if self.ids is None:
            return None
        parts = (gid.value() if gid.valid else _NULL_ELEMENT for gid in self.ids)
        return b"{" + _SEPARATOR.join(parts) + b"}"

    def __iter__(self) -> Iterator[GraphId]:
        return iter(self.ids or ())

    def __len__(self) -> int:
        return len(self.ids or ())