"""Arena backed triangle mesh and triangulated views of it."""

from __future__ import annotations

import copy
from typing import Iterable, Iterator, List, Sequence, Tuple, TypeVar

from meshrefine.capabilities import FaceEditableMesh, MeshLike, VertexEditableMesh
from meshrefine.errors import InvalidFaceId, InvalidTopology, InvalidVertexId
from meshrefine.geometry_utils import Vec3, to_vec3, triangle_normal
from meshrefine.handles import FaceId, VertexId
from meshrefine.topology import Face3

P = TypeVar("P")
TriTuple = Tuple[Vec3, Vec3, Vec3, Vec3]


class Mesh(VertexEditableMesh[P, Face3], FaceEditableMesh[P, Face3]):
    """Triangle mesh storing positions and connectivity in flat lists.

    Vertices live in a growable list addressed by :class:`VertexId`;
    faces are stored as three consecutive vertex offsets in a second
    list addressed by :class:`FaceId`.  Both arenas are append-only.
    Positions are shallow-copied on the way in and out so two meshes
    never share a mutable position object.

    ``vertices`` and ``faces`` optionally seed the mesh; each face is a
    sequence of three vertex offsets.
    """

    def __init__(self, vertices: Iterable[P] = (), faces: Iterable[Sequence[int]] = ()):
        self._vertices: List[P] = []
        self._topology: List[int] = []
        for position in vertices:
            self.add_vertex(position)
        for face in faces:
            if len(face) != 3:
                raise InvalidTopology(self.num_faces(),
                                      f"expected 3 vertex ids, got {len(face)}")
            self.connect(*(VertexId(i) for i in face))

    def __repr__(self) -> str:
        return f"Mesh(vertices={self.num_vertices()}, faces={self.num_faces()})"

    # read capability

    def num_vertices(self) -> int:
        return len(self._vertices)

    def num_faces(self) -> int:
        return len(self._topology) // 3

    def vertex(self, vertex_id: VertexId) -> P:
        self._check_vertex_id(vertex_id)
        return copy.copy(self._vertices[vertex_id.val])

    def face_topology(self, face_id: FaceId) -> Face3:
        if not isinstance(face_id, FaceId):
            raise TypeError(f"expected FaceId, got {type(face_id).__name__}")
        if face_id.val >= self.num_faces():
            raise InvalidFaceId(face_id, self.num_faces())
        base = 3 * face_id.val
        return Face3(VertexId(self._topology[base]),
                     VertexId(self._topology[base + 1]),
                     VertexId(self._topology[base + 2]))

    def vertices(self) -> List[P]:
        return [copy.copy(p) for p in self._vertices]

    def faces(self) -> List[Face3]:
        return [self.face_topology(fid) for fid in self.face_ids()]

    # write capability

    def add_vertex(self, position: P) -> VertexId:
        self._vertices.append(copy.copy(position))
        return VertexId(len(self._vertices) - 1)

    def change_vertex(self, vertex_id: VertexId, position: P) -> None:
        self._check_vertex_id(vertex_id)
        self._vertices[vertex_id.val] = copy.copy(position)

    def add_face(self, p1: P, p2: P, p3: P) -> FaceId:
        v1 = self.add_vertex(p1)
        v2 = self.add_vertex(p2)
        v3 = self.add_vertex(p3)
        return self._push_face(v1, v2, v3)

    def connect(self, v1: VertexId, v2: VertexId, v3: VertexId) -> FaceId:
        for vid in (v1, v2, v3):
            self._check_vertex_id(vid)
        if Face3(v1, v2, v3).is_degenerate():
            raise InvalidVertexId(
                (v1, v2, v3), self.num_vertices(),
                f"face ({v1}, {v2}, {v3}) repeats a vertex")
        return self._push_face(v1, v2, v3)

    def _push_face(self, v1: VertexId, v2: VertexId, v3: VertexId) -> FaceId:
        self._topology.extend((v1.val, v2.val, v3.val))
        return FaceId(self.num_faces() - 1)

    def _check_vertex_id(self, vertex_id: VertexId) -> None:
        if not isinstance(vertex_id, VertexId):
            raise TypeError(f"expected VertexId, got {type(vertex_id).__name__}")
        if vertex_id.val >= len(self._vertices):
            raise InvalidVertexId(vertex_id, len(self._vertices))


def face_normal(mesh: MeshLike, face_id: FaceId) -> Vec3 | None:
    """Return the unit normal of a triangle face, or ``None`` if degenerate.

    Raises the mesh's lookup errors for an invalid ``face_id``.
    """

    v0, v1, v2 = (to_vec3(p) for p in mesh.face_positions(face_id))
    return triangle_normal(v0, v1, v2)


def mesh_view(mesh: MeshLike) -> Iterator[TriTuple]:
    """Yield triangles of ``mesh`` as ``(normal, v0, v1, v2)``.

    Normals are unit vectors. Vertices are returned as ``(x, y, z)`` tuples.
    Faces with degenerate geometry (zero area) are skipped silently.
    """

    for fid in mesh.face_ids():
        positions = mesh.face_positions(fid)
        if len(positions) != 3:
            continue
        v0, v1, v2 = (to_vec3(p) for p in positions)

        calc_normal = triangle_normal(v0, v1, v2)
        if calc_normal is None:
            continue

        yield calc_normal, v0, v1, v2


__all__ = ["Mesh", "face_normal", "mesh_view"]
