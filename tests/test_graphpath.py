import pytest

from agensgraph.edge import EdgeCore
from agensgraph.graphpath import BasicPath, PathSaver, scan_path
from agensgraph.vertex import VertexCore


class _Recorder(PathSaver):
    def __init__(self):
        self.calls = []

    def save_path(self, valid, elements):
        self.calls.append((valid, elements))


def test_scan_nil():
    p = BasicPath()
    p.scan(None)
    assert p.valid is False
    assert str(p) == "NULL"


def test_scan_type():
    p = BasicPath()
    with pytest.raises(TypeError):
        p.scan(0)


def test_scan_zero():
    p = BasicPath()
    with pytest.raises(ValueError):
        p.scan(b"")


@pytest.mark.parametrize(
    "src, nv, ne",
    [
        (b"[]", 0, 0),
        (b"[v[3.1]{},e[4.1][3.1,3.2]{},v[3.2]{},NULL,NULL]", 3, 2),
    ],
)
def test_scan(src, nv, ne):
    p = BasicPath()
    p.scan(src)
    assert p.valid is True
    assert len(p.vertices) == nv
    assert len(p.edges) == ne


def test_scan_contents():
    p = BasicPath()
    p.scan(b'[v[3.1]{"a": 1},e[4.1][3.1,3.2]{},v[3.2]{}]')
    assert [v.label for v in p.vertices] == ["v", "v"]
    assert [str(v.id) for v in p.vertices] == ["3.1", "3.2"]
    assert p.vertices[0].properties == {"a": 1}
    assert str(p.edges[0].start) == "3.1"
    assert str(p.edges[0].end) == "3.2"


def test_null_elements_are_invalid_entities():
    p = BasicPath()
    p.scan(b"[v[3.1]{},e[4.1][3.1,3.2]{},v[3.2]{},NULL,NULL]")
    assert p.edges[1].valid is False
    assert p.vertices[2].valid is False
    assert p.vertices[1].valid is True


@pytest.mark.parametrize(
    "text",
    [
        "[]",
        "[v[3.1]{}]",
        "[v[3.1]{},e[4.1][3.1,3.2]{},v[3.2]{}]",
        "[v[3.1]{},e[4.1][3.1,3.2]{},v[3.2]{},NULL,NULL]",
    ],
)
def test_str_round_trip(text):
    p = BasicPath()
    p.scan(text.encode())
    assert str(p) == text


@pytest.mark.parametrize(
    "src",
    [
        b"x",
        b"[]x",
        b"[v[3.1]{}",
        b"[x]",
        b"[v[3.1]{},]",
        b"[v[0.1]{}]",
    ],
)
def test_scan_bad(src):
    p = BasicPath()
    with pytest.raises(ValueError):
        p.scan(src)


def test_bad_element_message():
    p = BasicPath()
    with pytest.raises(ValueError, match="invalid path element"):
        p.scan(b"[x]")


def test_even_element_count_rejected():
    p = BasicPath()
    with pytest.raises(ValueError):
        p.scan(b"[v[3.1]{},NULL]")


def test_scan_path_custom_saver():
    saver = _Recorder()
    scan_path(b"[v[3.1]{},e[4.1][3.1,3.2]{},NULL]", saver)
    assert len(saver.calls) == 1
    valid, elements = saver.calls[0]
    assert valid is True
    assert len(elements) == 3
    assert isinstance(elements[0].core, VertexCore)
    assert isinstance(elements[1].core, EdgeCore)
    assert elements[2] is None


def test_scan_path_custom_saver_null():
    saver = _Recorder()
    scan_path(None, saver)
    assert saver.calls == [(False, None)]


def test_rescan_null_clears():
    p = BasicPath()
    p.scan(b"[v[3.1]{}]")
    assert len(p.vertices) == 1
    p.scan(None)
    assert p.valid is False
    assert p.vertices == []