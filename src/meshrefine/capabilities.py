"""Abstract capabilities a mesh storage exposes.

:class:`MeshLike` is the read-only query surface the subdivision engine
consumes.  :class:`VertexEditableMesh` and :class:`FaceEditableMesh`
form the append-only write surface it produces into.  Storage types
subclass whichever of these they support; :class:`meshrefine.mesh.Mesh`
implements all three.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterator, Tuple, TypeVar

from meshrefine.handles import FaceId, VertexId
from meshrefine.topology import TopologyUnit

P = TypeVar("P")
TU = TypeVar("TU", bound=TopologyUnit)


class MeshLike(ABC, Generic[P, TU]):
    """Read capability: counts, vertex lookup and face lookup."""

    @abstractmethod
    def num_vertices(self) -> int:
        """Number of vertices; valid ids are ``0 .. num_vertices() - 1``."""

    @abstractmethod
    def num_faces(self) -> int:
        """Number of faces; valid ids are ``0 .. num_faces() - 1``."""

    @abstractmethod
    def vertex(self, vertex_id: VertexId) -> P:
        """Position of ``vertex_id``; raises ``InvalidVertexId`` when out of range."""

    @abstractmethod
    def face_topology(self, face_id: FaceId) -> TU:
        """Vertex handles of ``face_id``; raises ``InvalidFaceId`` when out of range."""

    def face_positions(self, face_id: FaceId) -> Tuple[P, ...]:
        """Positions of the vertices of ``face_id`` in winding order."""

        unit = self.face_topology(face_id)
        return tuple(self.vertex(unit.vertex_at(i)) for i in range(unit.arity()))

    def vertex_ids(self) -> Iterator[VertexId]:
        for i in range(self.num_vertices()):
            yield VertexId(i)

    def face_ids(self) -> Iterator[FaceId]:
        for i in range(self.num_faces()):
            yield FaceId(i)


class VertexEditableMesh(MeshLike[P, TU]):
    """Write capability for the vertex arena."""

    @abstractmethod
    def add_vertex(self, position: P) -> VertexId:
        """Append ``position`` and return its newly minted id."""

    @abstractmethod
    def change_vertex(self, vertex_id: VertexId, position: P) -> None:
        """Replace the position of an existing vertex."""


class FaceEditableMesh(MeshLike[P, TU]):
    """Write capability for the face arena."""

    @abstractmethod
    def add_face(self, p1: P, p2: P, p3: P) -> FaceId:
        """Append three new vertices and one face joining them."""

    @abstractmethod
    def connect(self, v1: VertexId, v2: VertexId, v3: VertexId) -> FaceId:
        """Append one face referencing three existing vertices."""


__all__ = ["MeshLike", "VertexEditableMesh", "FaceEditableMesh"]
