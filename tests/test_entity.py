import json
import re
from dataclasses import dataclass, field
from typing import Any, NamedTuple

import pytest

from agensgraph.entity import Entity, EntityData, scan_entity
from agensgraph.graphid import GraphId, new_graph_id
from agensgraph.jsonscan import read_json_object

_EDGE_RE = re.compile(rb"(.+?)\[(\d+\.\d+)\]\[(\d+\.\d+),(\d+\.\d+)\]")


class _Core(NamedTuple):
    label: str
    id: GraphId
    start: GraphId
    end: GraphId


def _read_edge(data: bytes) -> EntityData:
    match = _EDGE_RE.match(data)
    if match is None:
        raise ValueError(f"bad edge representation: {data!r}")
    core = _Core(
        match.group(1).decode(),
        new_graph_id(match.group(2).decode()),
        new_graph_id(match.group(3).decode()),
        new_graph_id(match.group(4).decode()),
    )
    return EntityData(core, read_json_object(data[match.end():]))


def _person_core() -> _Core:
    return _Core("p", new_graph_id("4.1"), new_graph_id("3.1"), new_graph_id("3.2"))


@dataclass
class Knows(Entity):
    null: bool = False
    id: GraphId = field(default_factory=GraphId)
    who: GraphId = field(default_factory=GraphId)
    whom: GraphId = field(default_factory=GraphId)
    year: int = 0
    month: int = 0

    def read_entity(self, data):
        return _read_edge(data)

    def save_entity(self, valid, core):
        self.null = not valid
        if not valid:
            return
        if not isinstance(core, _Core):
            raise TypeError(f"invalid edge core: {type(core).__name__}")
        self.id, self.who, self.whom = core.id, core.start, core.end

    def save_properties(self, data):
        body = json.loads(data)
        kind = body["type"]
        if kind == "array":
            self.year, self.month = body["since"]
        elif kind == "object":
            self.year = body["since"]["year"]
            self.month = body["since"]["month"]
        else:
            raise ValueError(f"unknown body type: {kind!r}")

    def __str__(self):
        if self.null:
            return "NULL"
        return f"{self.who} knows {self.whom} since {self.month}, {self.year}"


@dataclass
class Person(Entity):
    _reserved_fields = frozenset({"valid", "label"})

    valid: bool = False
    label: str = ""
    name: str = ""
    Age: int = 0
    age: int = 0

    def read_entity(self, data):
        return _read_edge(data)

    def save_entity(self, valid, core):
        self.valid = valid
        if valid:
            self.label = core.label


@pytest.mark.parametrize(
    "data, expected",
    [
        (b'knows[4.1][3.1,3.2]{"type": "array", "since": [1970, 1]}',
         "3.1 knows 3.2 since 1, 1970"),
        (b'knows[4.2][3.3,3.4]{"type": "object", "since": {"year": 2009, "month": 10}}',
         "3.3 knows 3.4 since 10, 2009"),
    ],
)
def test_scan_entity_example(data, expected):
    knows = Knows()
    scan_entity(data, knows)
    assert str(knows) == expected


def test_scan_entity_null():
    knows = Knows()
    scan_entity(None, knows)
    assert knows.null is True
    assert str(knows) == "NULL"


def test_scan_entity_type():
    with pytest.raises(TypeError):
        scan_entity(0, Knows())


def test_scan_entity_empty():
    with pytest.raises(ValueError):
        scan_entity(b"", Knows())


def test_scan_entity_read_error_propagates():
    with pytest.raises(ValueError, match="bad edge representation"):
        scan_entity(b"e", Knows())


def test_scan_entity_data():
    core = _Core("knows", new_graph_id("4.1"), new_graph_id("3.1"), new_graph_id("3.2"))
    knows = Knows()
    scan_entity(EntityData(core, b'{"type": "array", "since": [2000, 5]}'), knows)
    assert knows.id.equal(new_graph_id("4.1"))
    assert (knows.year, knows.month) == (2000, 5)


def test_save_entity_error_propagates():
    knows = Knows()
    with pytest.raises(TypeError, match="invalid edge core"):
        scan_entity(EntityData("core", b"{}"), knows)


def test_default_properties_case_insensitive():
    person = Person()
    scan_entity(b'p[4.1][3.1,3.2]{"NAME": "go"}', person)
    assert person.valid is True
    assert person.label == "p"
    assert person.name == "go"


def test_default_properties_exact_match_preferred():
    person = Person()
    scan_entity(b'p[4.1][3.1,3.2]{"age": 7}', person)
    assert person.age == 7
    assert person.Age == 0


def test_default_properties_skip_reserved_and_unknown():
    person = Person()
    scan_entity(b'p[4.1][3.1,3.2]{"valid": false, "label": "x", "other": 1}', person)
    assert person.valid is True
    assert person.label == "p"
    assert not hasattr(person, "other")


def test_default_properties_null_json():
    person = Person(name="kept")
    scan_entity(EntityData(_person_core(), b"null"), person)
    assert person.valid is True
    assert person.name == "kept"


def test_default_properties_not_object():
    with pytest.raises(ValueError):
        scan_entity(EntityData(_person_core(), b"[1, 2]"), Person())


def test_default_properties_invalid_json():
    with pytest.raises(ValueError):
        scan_entity(EntityData(_person_core(), b"{oops"), Person())


def test_entity_is_abstract():
    with pytest.raises(TypeError):
        Entity()


def test_entity_data_holds_values():
    data = EntityData(core=("c",), properties=b"{}")
    assert data.core == ("c",)
    assert data.properties == b"{}"


class _Plain(Entity):
    def __init__(self) -> None:
        self.title = ""
        self.saved: Any = None

    def read_entity(self, data):
        return EntityData("core", data)

    def save_entity(self, valid, core):
        self.saved = core


def test_default_properties_on_plain_class():
    plain = _Plain()
    scan_entity(b'{"Title": "t"}', plain)
    assert plain.saved == "core"
    assert plain.title == "t"