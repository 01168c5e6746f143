"""Locating the JSON object that ends an entity's text representation."""

from __future__ import annotations

_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_OPEN = ord("{")
_CLOSE = ord("}")


def _string_end(data: bytes, start: int) -> int | None:
    """Return the index of the quote closing the string opened at ``start``."""
    escape = False
    for index in range(start + 1, len(data)):
        ch = data[index]
        if ch == _BACKSLASH:
            escape = not escape
        elif ch == _QUOTE:
            if not escape:
                return index
            escape = False
        else:
            escape = False
    return None


def read_json_object(data: bytes) -> bytes:
    """Return the leading JSON object of ``data``, braces included.

    Only braces and strings are tracked; the object itself is not validated.
    Raises ValueError if ``data`` does not start with a complete object.
    """
    data = bytes(data)
    if not data.startswith(b"{"):
        raise ValueError(
            f"invalid JSON object: {data.decode('utf-8', 'replace')}"
        )

    depth = 1
    pos = 1
    while pos < len(data):
        ch = data[pos]
        if ch == _QUOTE:
            # An unmatched quote leaves the position where it is.
            end = _string_end(data, pos)
            if end is not None:
                pos = end
        elif ch == _OPEN:
            depth += 1
        elif ch == _CLOSE:
            depth -= 1
            if depth == 0:
                return data[: pos + 1]
        pos += 1

    raise ValueError(f"invalid JSON object: {data.decode('utf-8', 'replace')}")