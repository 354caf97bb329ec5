"""Linear subdivision of triangle meshes.

Every input triangle ``(a, b, c)`` is replaced by four triangles built
from its corners and the midpoints of its three edges::

              c
             / \\
          mca---mbc
          / \\ / \\
         a---mab---b

New vertices are only placed on existing edges, so the surface keeps
its shape; this refines topology, it does not smooth.  An edge shared
by two faces gets a single midpoint vertex, which keeps refined meshes
free of duplicate coincident vertices.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Tuple, TypeVar

from meshrefine.capabilities import FaceEditableMesh, MeshLike, VertexEditableMesh
from meshrefine.errors import (
    IncorrectUnitIndex,
    InvalidFaceId,
    InvalidTopology,
    InvalidVertexId,
    UndefinedMidpoint,
)
from meshrefine.handles import EdgeKey, FaceId, VertexId
from meshrefine.mesh import Mesh
from meshrefine.positions import midpoint as default_midpoint

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=FaceEditableMesh)
MidpointFunc = Callable[[Any, Any], Any]

_Resolved = Tuple[Tuple[VertexId, VertexId, VertexId], Tuple[Any, Any, Any]]


def linear(mesh: MeshLike,
           factory: Callable[[], M] = Mesh,
           *,
           midpoint: MidpointFunc = default_midpoint,
           levels: int = 1) -> M:
    """Subdivide every triangle of ``mesh`` into four.

    ``factory`` builds the empty output mesh; it must implement both
    write capabilities.  The first ``mesh.num_vertices()`` output
    vertices are copies of the input vertices with the same ids, followed
    by one midpoint per distinct undirected edge.  Faces are emitted in
    input order, four per input face, keeping the input winding.

    ``midpoint`` computes the position between two vertices and raises
    :class:`UndefinedMidpoint` when there is none.  ``levels`` applies
    the refinement repeatedly.

    Any defect in the input aborts the whole call; no partially built
    mesh is returned.
    """

    if levels < 1:
        raise ValueError(f"levels must be at least 1, got {levels}")

    current = mesh
    for level in range(levels):
        current = _linear_once(current, factory, midpoint)
        logger.debug("subdivision level %d: %d vertices, %d faces",
                     level + 1, current.num_vertices(), current.num_faces())
    return current


def _linear_once(mesh: MeshLike, factory: Callable[[], M], midpoint: MidpointFunc) -> M:
    output = factory()
    if not isinstance(output, VertexEditableMesh) or not isinstance(output, FaceEditableMesh):
        raise TypeError(
            f"{type(output).__name__} does not implement the mesh write capabilities")
    if output.num_vertices() or output.num_faces():
        raise ValueError("subdivision factory must produce an empty mesh")

    n_vertices = mesh.num_vertices()
    n_faces = mesh.num_faces()

    for i in range(n_vertices):
        output.add_vertex(mesh.vertex(VertexId(i)))

    added_edges: Dict[EdgeKey, VertexId] = {}

    def edge_midpoint(v1: VertexId, v2: VertexId, p1: Any, p2: Any) -> VertexId:
        key = EdgeKey.of(v1, v2)
        vid = added_edges.get(key)
        if vid is None:
            try:
                position = midpoint(p1, p2)
            except UndefinedMidpoint as exc:
                if exc.edge is not None:
                    raise
                raise UndefinedMidpoint(exc.reason, edge=key) from exc
            vid = output.add_vertex(position)
            added_edges[key] = vid
        return vid

    for i in range(n_faces):
        fid = FaceId(i)
        (a, b, c), (pa, pb, pc) = _resolve_face(mesh, fid)

        mab = edge_midpoint(a, b, pa, pb)
        mbc = edge_midpoint(b, c, pb, pc)
        mca = edge_midpoint(c, a, pc, pa)

        output.connect(a, mab, mca)
        output.connect(mab, b, mbc)
        output.connect(mab, mbc, mca)
        output.connect(mca, mbc, c)

    logger.debug("subdivided %d faces: %d edge midpoints added",
                 n_faces, len(added_edges))
    return output


def _resolve_face(mesh: MeshLike, fid: FaceId) -> _Resolved:
    """Look up the three vertex ids and positions of a triangle face."""

    try:
        unit = mesh.face_topology(fid)
        arity = unit.arity()
        if arity != 3:
            raise InvalidTopology(fid, f"expected a triangle, got arity {arity}")
        ids = (unit.vertex_at(0), unit.vertex_at(1), unit.vertex_at(2))
        positions = (mesh.vertex(ids[0]), mesh.vertex(ids[1]), mesh.vertex(ids[2]))
    except (InvalidVertexId, InvalidFaceId, IncorrectUnitIndex) as exc:
        raise InvalidTopology(fid, str(exc)) from exc

    if unit.is_degenerate():
        raise InvalidTopology(fid, f"face {unit} repeats a vertex")
    return ids, positions


__all__ = ["linear"]
