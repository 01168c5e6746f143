"""Scanning vertices and edges into user-defined entity objects."""

from __future__ import annotations

import dataclasses
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class EntityData:
    """The parsed core of an entity and its raw JSON properties."""

    core: Any
    properties: bytes


class Entity(ABC):
    """An object that a vertex or an edge can be scanned into.

    Subclasses read the entity's text and store its core; properties are
    stored by ``save_properties``, which by default assigns each JSON key to
    the attribute of the same name, matched exactly or ignoring case.
    """

    _reserved_fields: ClassVar[frozenset[str]] = frozenset()

    @abstractmethod
    def read_entity(self, data: bytes) -> EntityData:
        """Parse the text representation of the entity."""

    @abstractmethod
    def save_entity(self, valid: bool, core: Any) -> None:
        """Store the core; ``valid`` is False and ``core`` None for NULL."""

    def save_properties(self, data: bytes) -> None:
        """Assign the JSON object's members to matching attributes."""
        props = json.loads(bytes(data))
        if props is None:
            return
        if not isinstance(props, dict):
            raise ValueError(
                f"cannot store JSON {type(props).__name__} in {type(self).__name__}"
            )

        names = [
            name
            for name in self._attribute_names()
            if not name.startswith("_") and name not in self._reserved_fields
        ]
        exact = set(names)
        folded = {}
        for name in names:
            folded.setdefault(name.lower(), name)

        for key, value in props.items():
            target = key if key in exact else folded.get(key.lower())
            if target is not None:
                setattr(self, target, value)

    def _attribute_names(self) -> list[str]:
        if dataclasses.is_dataclass(self):
            return [field.name for field in dataclasses.fields(self)]
        return list(getattr(self, "__dict__", {}))


def scan_entity(src: object, entity: Entity) -> None:
    """Read a vertex or an edge from ``src`` and store it in ``entity``.

    ``src`` is the driver's bytes, already parsed EntityData, or None for
    NULL. Raises TypeError for any other source.
    """
    if src is None:
        entity.save_entity(False, None)
        return
    if isinstance(src, EntityData):
        _save_entity_data(src, entity)
        return
    if isinstance(src, (bytes, bytearray, memoryview)):
        raw = bytes(src)
        if not raw:
            raise ValueError(f"invalid source for entity: {raw!r}")
        _save_entity_data(entity.read_entity(raw), entity)
        return
    raise TypeError(f"invalid source for entity: {type(src).__name__}")


def _save_entity_data(data: EntityData, entity: Entity) -> None:
    entity.save_entity(True, data.core)
    entity.save_properties(data.properties)