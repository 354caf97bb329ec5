import logging
from fractions import Fraction

import pytest

from meshrefine.capabilities import MeshLike
from meshrefine.checks import coincident_vertices, faces_oriented, mesh_watertight, unique_edges
from meshrefine.errors import (
    IncorrectUnitIndex,
    InvalidFaceId,
    InvalidTopology,
    InvalidVertexId,
    UndefinedMidpoint,
)
from meshrefine.handles import EdgeKey, FaceId, VertexId
from meshrefine.mesh import Mesh, face_normal
from meshrefine.positions import homogeneous_midpoint
from meshrefine.subdivide import linear
from meshrefine.topology import Face3


def _face(a, b, c):
    return Face3(VertexId(a), VertexId(b), VertexId(c))


def _triangle():
    return Mesh([(0.0, 0.0, 0.0), (2.0, 0.0, 0.0), (0.0, 2.0, 0.0)], [(0, 1, 2)])


def _quad():
    return Mesh([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (1.0, 1.0, 0.0)],
                [(0, 1, 2), (1, 2, 3)])


def _tetra():
    return Mesh([(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)],
                [(0, 2, 1), (0, 1, 3), (1, 2, 3), (2, 0, 3)])


def test_single_triangle():
    out = linear(_triangle())

    assert out.num_vertices() == 6
    assert out.num_faces() == 4
    assert out.vertices() == [
        (0.0, 0.0, 0.0),
        (2.0, 0.0, 0.0),
        (0.0, 2.0, 0.0),
        (1.0, 0.0, 0.0),
        (1.0, 1.0, 0.0),
        (0.0, 1.0, 0.0),
    ]
    a, b, c, mab, mbc, mca = range(6)
    assert out.faces() == [
        _face(a, mab, mca),
        _face(mab, b, mbc),
        _face(mab, mbc, mca),
        _face(mca, mbc, c),
    ]


def test_shared_edge_gets_one_midpoint():
    mesh = _quad()
    out = linear(mesh)

    assert out.num_faces() == 8
    assert out.num_vertices() == 4 + 5
    assert len(unique_edges(mesh)) == 5

    # edge (1, 2) is traversed as b-c in face 0 and a-b in face 1
    first = out.face_topology(FaceId(1)).vertex_at(2)
    second = out.face_topology(FaceId(4)).vertex_at(1)
    assert first == second
    assert out.vertex(first) == (0.5, 0.5, 0.0)


def test_counts_for_closed_surface():
    mesh = _tetra()
    out = linear(mesh)

    edges = unique_edges(mesh)
    assert len(edges) == 6
    assert out.num_faces() == 4 * mesh.num_faces()
    assert out.num_vertices() == mesh.num_vertices() + len(edges)
    assert mesh_watertight(out)
    assert faces_oriented(out)


def test_input_vertices_keep_their_ids():
    mesh = _tetra()
    out = linear(mesh)
    for vid in mesh.vertex_ids():
        assert out.vertex(vid) == mesh.vertex(vid)


def test_no_coincident_vertices_introduced():
    out = linear(_tetra(), levels=2)
    assert coincident_vertices(out) == []


def test_winding_matches_input():
    mesh = _tetra()
    out = linear(mesh)
    for fid in mesh.face_ids():
        expected = face_normal(mesh, fid)
        for k in range(4):
            got = face_normal(out, FaceId(4 * fid.val + k))
            assert got == pytest.approx(expected)


def test_repeated_levels():
    mesh = _tetra()
    out = linear(mesh, levels=3)
    assert out.num_faces() == 4 ** 3 * mesh.num_faces()
    assert mesh_watertight(out)
    # closed genus-0 surface: V - E + F == 2
    assert out.num_vertices() - len(unique_edges(out)) + out.num_faces() == 2


def test_reapplying_is_not_a_fixed_point():
    once = linear(_triangle())
    twice = linear(once)
    assert twice.num_faces() == 4 * once.num_faces()


def test_output_is_deterministic():
    first = linear(_tetra(), levels=2)
    second = linear(_tetra(), levels=2)
    assert first.vertices() == second.vertices()
    assert first.faces() == second.faces()


def test_input_mesh_untouched():
    mesh = _quad()
    before = (mesh.vertices(), mesh.faces())
    linear(mesh)
    assert (mesh.vertices(), mesh.faces()) == before


def test_empty_mesh():
    out = linear(Mesh())
    assert out.num_vertices() == 0
    assert out.num_faces() == 0


def test_levels_must_be_positive():
    with pytest.raises(ValueError):
        linear(_triangle(), levels=0)


def test_two_dimensional_and_exact_positions():
    mesh = Mesh([(Fraction(0), Fraction(0)), (Fraction(1), Fraction(0)), (Fraction(0), Fraction(1))],
                [(0, 1, 2)])
    out = linear(mesh)
    assert out.vertex(VertexId(3)) == (Fraction(1, 2), Fraction(0))
    assert out.vertex(VertexId(4)) == (Fraction(1, 2), Fraction(1, 2))


def test_custom_midpoint_function():
    mesh = Mesh([[0, 0, 0, 1], [4, 0, 0, 2], [0, 2, 0, 1]], [(0, 1, 2)])
    out = linear(mesh, midpoint=homogeneous_midpoint)
    assert out.vertex(VertexId(3)) == [1.0, 0.0, 0.0, 1.0]


def test_undefined_midpoint_aborts():
    mesh = Mesh([[0, 0, 0, 1], [1, 0, 0, 0], [0, 1, 0, 1]], [(0, 1, 2)])
    with pytest.raises(UndefinedMidpoint) as excinfo:
        linear(mesh, midpoint=homogeneous_midpoint)
    assert excinfo.value.edge == EdgeKey.of(VertexId(0), VertexId(1))


def test_overflowing_midpoint_aborts():
    mesh = Mesh([(0, 0, 0), (10**400, 0, 0), (0, 10**400, 0)], [(0, 1, 2)])
    with pytest.raises(UndefinedMidpoint) as excinfo:
        linear(mesh)
    assert excinfo.value.edge == EdgeKey.of(VertexId(0), VertexId(1))


def test_custom_factory():
    class TrackedMesh(Mesh):
        pass

    out = linear(_triangle(), TrackedMesh)
    assert isinstance(out, TrackedMesh)
    assert out.num_faces() == 4


def test_factory_must_produce_empty_mesh():
    with pytest.raises(ValueError):
        linear(_triangle(), lambda: Mesh([(0.0, 0.0, 0.0)]))


def test_factory_must_be_write_capable():
    with pytest.raises(TypeError):
        linear(_triangle(), dict)


class _CorruptMesh(MeshLike):
    """Read-only mesh whose second face references a missing vertex."""

    def __init__(self, faces, unit_error=False):
        self._positions = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]
        self._faces = faces
        self._unit_error = unit_error

    def num_vertices(self):
        return len(self._positions)

    def num_faces(self):
        return len(self._faces)

    def vertex(self, vertex_id):
        if vertex_id.val >= len(self._positions):
            raise InvalidVertexId(vertex_id, len(self._positions))
        return self._positions[vertex_id.val]

    def face_topology(self, face_id):
        if self._unit_error and face_id.val == 1:
            raise IncorrectUnitIndex(3, 3)
        if face_id.val >= len(self._faces):
            raise InvalidFaceId(face_id, len(self._faces))
        return _face(*self._faces[face_id.val])


def test_face_with_missing_vertex_fails():
    mesh = _CorruptMesh([(0, 1, 2), (0, 1, 7)])
    with pytest.raises(InvalidTopology) as excinfo:
        linear(mesh)
    assert excinfo.value.face_id == FaceId(1)
    assert isinstance(excinfo.value.__cause__, InvalidVertexId)


def test_unit_lookup_failure_fails():
    mesh = _CorruptMesh([(0, 1, 2), (0, 1, 2)], unit_error=True)
    with pytest.raises(InvalidTopology) as excinfo:
        linear(mesh)
    assert isinstance(excinfo.value.__cause__, IncorrectUnitIndex)


def test_degenerate_face_fails():
    mesh = _CorruptMesh([(0, 1, 1)])
    with pytest.raises(InvalidTopology):
        linear(mesh)


def test_failure_leaves_no_partial_output():
    built = []

    def factory():
        mesh = Mesh()
        built.append(mesh)
        return mesh

    result = None
    with pytest.raises(InvalidTopology):
        result = linear(_CorruptMesh([(0, 1, 2), (0, 1, 7)]), factory)
    assert result is None
    # the discarded mesh only ever held the first face's refinement
    assert built[0].num_faces() == 4


def test_debug_logging(caplog):
    with caplog.at_level(logging.DEBUG, logger='meshrefine'):
        linear(_triangle())
    assert 'subdivision level 1: 6 vertices, 4 faces' in caplog.text
