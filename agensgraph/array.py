"""Arrays of graph IDs, vertices, edges and user-defined entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from .edge import BasicEdge, BasicEdgeArray
from .graphid import GraphId, GraphIdArray
from .vertex import BasicVertex, BasicVertexArray


class NullArrayError(ValueError):
    """Raised when NULL is scanned into an array of fixed length."""

    def __init__(self) -> None:
        super().__init__("NULL")


@dataclass
class ElementArray:
    """An array of ``element_type``, an entity class with ``read_elements``.

    ``items`` is None for NULL. With ``length`` set the array has a fixed
    size: NULL raises NullArrayError and other sizes raise ValueError.
    """

    element_type: Any
    length: int | None = None
    items: list[Any] | None = None

    def _check_type(self) -> type:
        element_type = self.element_type
        if not isinstance(element_type, type):
            raise TypeError(f"{element_type!r} is not an element type")
        if not callable(getattr(element_type, "read_elements", None)):
            raise TypeError(f"{element_type.__name__} does not read array elements")
        if not callable(getattr(element_type, "scan", None)):
            raise TypeError(f"{element_type.__name__} does not implement scan")
        return element_type

    def scan(self, src: object) -> None:
        """Read the driver's value into ``items``."""
        element_type = self._check_type()

        if src is None:
            if self.length is not None:
                raise NullArrayError()
            self.items = None
            return

        if not isinstance(src, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"invalid source for array of {element_type.__name__}: "
                f"{type(src).__name__}"
            )
        raw = bytes(src)
        if not raw:
            raise ValueError(
                f"invalid source for array of {element_type.__name__}: {raw!r}"
            )

        try:
            elements = element_type().read_elements(raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"failed to read elements: {exc}") from exc

        if self.length is not None and len(elements) != self.length:
            raise ValueError(
                f"number of elements is {len(elements)} but {self.length} expected"
            )

        items = []
        for element in elements:
            item = element_type()
            try:
                item.scan(element)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"invalid element: {exc}") from exc
            items.append(item)
        self.items = items

    def value(self) -> bytes:
        """Entities cannot be passed to the driver; always raises TypeError."""
        raise TypeError(
            f"value() on an array of {getattr(self.element_type, '__name__', self.element_type)!r}"
            " is not supported"
        )

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items or ())

    def __len__(self) -> int:
        return len(self.items or ())


def array(dest: Any) -> GraphIdArray | BasicVertexArray | BasicEdgeArray | ElementArray:
    """Return an array that scans driver values and, for graph IDs, gives them.

    ``dest`` is an element class (GraphId, BasicVertex, BasicEdge or any
    entity class with ``read_elements`` and ``scan``) or a sequence of
    GraphId values to pass to the driver.
    """
    if dest is GraphId:
        return GraphIdArray()
    if dest is BasicVertex:
        return BasicVertexArray()
    if dest is BasicEdge:
        return BasicEdgeArray()
    if isinstance(dest, (list, tuple)) and all(isinstance(g, GraphId) for g in dest):
        return GraphIdArray(list(dest))
    return ElementArray(dest)