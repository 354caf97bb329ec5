"""Conversion between meshes and numpy arrays or ``trimesh.Trimesh``.

``trimesh`` is optional.  The array helpers only need numpy; the
trimesh helpers raise :class:`RuntimeError` when trimesh is missing.
"""

from __future__ import annotations

from typing import Callable, Tuple, TypeVar

import numpy as np

try:
    import trimesh
except ImportError:  # pragma: no cover - optional dependency
    trimesh = None  # type: ignore[assignment]

from meshrefine.capabilities import FaceEditableMesh, MeshLike
from meshrefine.errors import InvalidTopology
from meshrefine.handles import VertexId
from meshrefine.mesh import Mesh

M = TypeVar("M", bound=FaceEditableMesh)


def trimesh_available() -> bool:
    """Return True when the optional trimesh dependency can be imported."""

    return trimesh is not None


def to_arrays(mesh: MeshLike) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(vertices, faces)`` as float64 ``(V, D)`` and int64 ``(F, 3)`` arrays."""

    positions = [tuple(float(x) for x in mesh.vertex(vid)) for vid in mesh.vertex_ids()]
    if positions:
        verts = np.asarray(positions, dtype=np.float64)
    else:
        verts = np.zeros((0, 3), dtype=np.float64)

    faces = np.zeros((mesh.num_faces(), 3), dtype=np.int64)
    for fid in mesh.face_ids():
        unit = mesh.face_topology(fid)
        if unit.arity() != 3:
            raise InvalidTopology(fid, f"expected a triangle, got arity {unit.arity()}")
        faces[fid.val] = [vid.val for vid in unit.vertex_ids()]
    return verts, faces


def from_arrays(vertices, faces, factory: Callable[[], M] = Mesh) -> M:
    """Build a mesh from a ``(V, D)`` position array and an ``(F, 3)`` index array."""

    verts = np.asarray(vertices, dtype=np.float64)
    tris = np.asarray(faces, dtype=np.int64)
    if verts.size == 0:
        verts = verts.reshape((0, 3))
    if verts.ndim != 2:
        raise ValueError(f"vertices must be a 2D array, got shape {verts.shape}")
    if tris.size == 0:
        tris = tris.reshape((0, 3))
    if tris.ndim != 2 or tris.shape[1] != 3:
        raise InvalidTopology(None, f"faces must have shape (F, 3), got {tris.shape}")
    if (tris < 0).any():
        raise InvalidTopology(None, "faces reference negative vertex ids")

    mesh = factory()
    for row in verts:
        mesh.add_vertex(tuple(float(x) for x in row))
    for a, b, c in tris:
        mesh.connect(VertexId(int(a)), VertexId(int(b)), VertexId(int(c)))
    return mesh


def to_trimesh(mesh: MeshLike) -> "trimesh.Trimesh":
    """Convert a 3D triangle mesh into a ``trimesh.Trimesh`` without processing."""

    if not trimesh_available():
        raise RuntimeError("trimesh is not installed")

    verts, faces = to_arrays(mesh)
    if verts.shape[1] != 3:
        raise ValueError(f"trimesh needs 3D vertices, got dimension {verts.shape[1]}")
    return trimesh.Trimesh(vertices=verts, faces=faces, process=False)


def from_trimesh(tm: "trimesh.Trimesh", factory: Callable[[], M] = Mesh) -> M:
    if not trimesh_available():
        raise RuntimeError("trimesh is not installed")

    return from_arrays(np.asarray(tm.vertices), np.asarray(tm.faces), factory)


__all__ = [
    "trimesh_available",
    "to_arrays",
    "from_arrays",
    "to_trimesh",
    "from_trimesh",
]
