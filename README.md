# agensgraph

Types for reading AgensGraph values from the text a PostgreSQL driver
returns for them: graph ids, vertices, edges, paths, and arrays of these.
It needs only Python 3.10 or later and has no dependencies.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## What it does not do

The package does not connect to a database or run queries. You fetch the
raw value with whatever driver you use, and hand the `bytes` (or `None`
for NULL) to the `scan` methods here. The only values that can be turned
back into a query parameter are graph ids and arrays of graph ids.

## Graph ids (`agensgraph.graphid`)

```python
from agensgraph.graphid import GraphId, GraphIdArray, new_graph_id

gid = new_graph_id("1.1")
print(gid)                               # 1.1
print(gid.equal(GraphId.parse("1.1")))   # True

null = new_graph_id("NULL")              # valid is False
print(null)                              # NULL
print(null.equal(null))                  # False: NULL equals nothing
```

A graph id has a label part from 1 to 65535 and a local part from 1 to
2^48 - 1, written `label.local`. Any other text raises `ValueError`.

- `GraphId.scan(src)` reads `bytes` from the driver, or `None` for NULL.
  A source that is not bytes raises `TypeError`; empty or malformed bytes
  raise `ValueError`.
- `GraphId.value()` returns the bytes to pass as a parameter, or `None`
  for NULL.

`GraphIdArray` reads and writes `_graphid` values:

```python
ids = GraphIdArray()
ids.scan(b"{NULL,1.1,65535.281474976710655}")
print(len(ids), [str(g) for g in ids])   # 3 ['NULL', '1.1', '65535.281474976710655']

print(GraphIdArray([new_graph_id("1.1"), new_graph_id("NULL")]).value())
# b'{1.1,NULL}'
```

Scanning `None` sets `ids` to `None`, and `value()` then returns `None`;
`b"{}"` gives an empty list.

## Vertices and edges (`agensgraph.vertex`, `agensgraph.edge`)

```python
from agensgraph.vertex import BasicVertex
from agensgraph.edge import BasicEdge

v = BasicVertex()
v.scan(b'v[3.1]{"name": "go"}')
print(v.valid, v.label, v.id, v.properties)   # True v 3.1 {'name': 'go'}
print(v)                                      # v[3.1]{"name":"go"}

e = BasicEdge()
e.scan(b'knows[4.1][3.1,3.2]{"since": 1970}')
print(e.start, e.end, e.properties)           # 3.1 3.2 {'since': 1970}
```

Scanning `None` leaves the entity with `valid` False, and its string form
is `NULL`.

`BasicVertexArray` and `BasicEdgeArray` read `_vertex` and `_edge` arrays
such as `b'[NULL,v[3.1]{},v[3.2]{}]'`, one `BasicVertex` or `BasicEdge`
per element. They can only be read: `value()` raises `TypeError`.

`read_vertex_element`, `read_vertex_elements`, `read_edge_element` and
`read_edge_elements` expose the lower-level parsing.

## Entities of your own (`agensgraph.entity`)

`VertexHeader` and `EdgeHeader` are dataclasses holding `valid`, `label`,
`id` (and, for edges, `start` and `end`). Subclass one, add fields, and
read with `scan_entity`:

```python
from dataclasses import dataclass
from agensgraph.entity import scan_entity
from agensgraph.vertex import VertexHeader

@dataclass
class Person(VertexHeader):
    name: str = ""

    def scan(self, src):
        scan_entity(src, self)

p = Person()
p.scan(b'person[3.1]{"Name": "go"}')
print(p.label, p.name)   # person go
```

By default `save_properties` assigns each member of the JSON object to the
field of the same name, matched exactly or ignoring case; fields starting
with `_` and the header's own fields are never overwritten. Override
`save_entity` or `save_properties` to store the data another way.

## Paths (`agensgraph.graphpath`)

```python
from agensgraph.graphpath import BasicPath

p = BasicPath()
p.scan(b'[v[3.1]{},e[4.1][3.1,3.2]{},v[3.2]{}]')
print(len(p.vertices), len(p.edges))   # 2 1
```

For a path type of your own, subclass `PathSaver`, implement
`save_path(valid, elements)` and call `scan_path(src, saver)`. Each
element is either `None` (a NULL element) or data that `scan_entity` can
store in a vertex or an edge.

## Arrays of any element (`agensgraph.array`)

`array(dest)` picks the right array type:

- `array(GraphId)` gives a `GraphIdArray`, and a list or tuple of
  `GraphId` values gives a `GraphIdArray` holding them, ready for
  `value()`;
- `array(BasicVertex)` and `array(BasicEdge)` give `BasicVertexArray`
  and `BasicEdgeArray`;
- any other class gives an `ElementArray`. The class must have
  `read_elements` and `scan` (subclasses of `VertexHeader` or
  `EdgeHeader` with a `scan` method do); otherwise `scan` raises
  `TypeError`.

```python
from agensgraph.array import ElementArray, NullArrayError, array

people = array(Person)
people.scan(b'[NULL,person[3.1]{"name": "go"}]')
print(len(people))   # 2

fixed = ElementArray(Person, length=1)
try:
    fixed.scan(None)
except NullArrayError:
    print("NULL into a fixed-length array")
```

An `ElementArray` with `length` set raises `NullArrayError` for NULL and
`ValueError` when the number of elements differs. Its `value()` always
raises `TypeError`.