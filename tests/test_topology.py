from dataclasses import dataclass

import pytest

from meshrefine.errors import IncorrectUnitIndex
from meshrefine.handles import EdgeKey, VertexId
from meshrefine.topology import Face3, TopologyUnit


def _face(a, b, c):
    return Face3(VertexId(a), VertexId(b), VertexId(c))


def test_face3_arity_and_lookup():
    face = _face(4, 7, 9)
    assert Face3.arity() == 3
    assert face.vertex_at(0) == VertexId(4)
    assert face.vertex_at(1) == VertexId(7)
    assert face.vertex_at(2) == VertexId(9)


def test_face3_lookup_beyond_arity_fails():
    face = _face(0, 1, 2)
    with pytest.raises(IncorrectUnitIndex) as excinfo:
        face.vertex_at(3)
    assert excinfo.value.index == 3
    assert excinfo.value.arity == 3
    with pytest.raises(IncorrectUnitIndex):
        face.vertex_at(-1)


def test_for_each_vertex_visits_in_order():
    seen = []
    _face(2, 0, 1).for_each_vertex(seen.append)
    assert seen == [VertexId(2), VertexId(0), VertexId(1)]
    assert list(_face(2, 0, 1)) == seen
    assert _face(2, 0, 1).vertex_ids() == tuple(seen)


def test_face3_edges_are_canonical():
    assert _face(3, 1, 2).edges() == (
        EdgeKey.of(VertexId(1), VertexId(3)),
        EdgeKey.of(VertexId(1), VertexId(2)),
        EdgeKey.of(VertexId(2), VertexId(3)),
    )


def test_face3_display_and_degeneracy():
    assert str(_face(0, 1, 2)) == '(0, 1, 2)'
    assert not _face(0, 1, 2).is_degenerate()
    assert _face(0, 1, 0).is_degenerate()
    assert _face(0, 1, 2) == _face(0, 1, 2)
    assert hash(_face(0, 1, 2)) == hash(_face(0, 1, 2))


@dataclass(frozen=True)
class _Quad(TopologyUnit):
    ids: tuple

    @classmethod
    def arity(cls):
        return 4

    def vertex_at(self, index):
        if not 0 <= index < 4:
            raise IncorrectUnitIndex(index, 4)
        return self.ids[index]


def test_visitor_is_derived_from_vertex_at():
    quad = _Quad(tuple(VertexId(i) for i in (5, 6, 7, 8)))
    seen = []
    quad.for_each_vertex(seen.append)
    assert [v.val for v in seen] == [5, 6, 7, 8]


def test_topology_unit_is_abstract():
    with pytest.raises(TypeError):
        TopologyUnit()


def test_degeneracy_is_derived_from_vertex_at():
    assert not _Quad(tuple(VertexId(i) for i in (5, 6, 7, 8))).is_degenerate()
    assert _Quad(tuple(VertexId(i) for i in (5, 6, 5, 8))).is_degenerate()
