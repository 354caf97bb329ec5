"""Exceptions raised by mesh queries, mesh edits and subdivision.

Every error here describes a structural defect in caller-supplied data.
None of them is transient, so nothing in the package retries.
"""

from __future__ import annotations

from typing import Any, Optional


class MeshError(ValueError):
    """Base class for all mesh related failures."""


class InvalidVertexId(MeshError):
    """A vertex handle does not address a vertex of the mesh."""

    def __init__(self, vertex_id: Any, num_vertices: int, reason: Optional[str] = None):
        self.vertex_id = vertex_id
        self.num_vertices = num_vertices
        if reason is None:
            reason = f"vertex id {vertex_id} out of range for {num_vertices} vertices"
        super().__init__(reason)


class InvalidFaceId(MeshError):
    """A face handle does not address a face of the mesh."""

    def __init__(self, face_id: Any, num_faces: int):
        self.face_id = face_id
        self.num_faces = num_faces
        super().__init__(f"face id {face_id} out of range for {num_faces} faces")


class IncorrectUnitIndex(MeshError):
    """A topology unit was queried beyond its fixed arity."""

    def __init__(self, index: int, arity: int):
        self.index = index
        self.arity = arity
        super().__init__(f"unit index {index} outside of arity {arity}")


class InvalidTopology(MeshError):
    """A face did not resolve to exactly three distinct, valid vertices."""

    def __init__(self, face_id: Any, reason: str):
        self.face_id = face_id
        self.reason = reason
        super().__init__(f"face {face_id}: {reason}")


class UndefinedMidpoint(MeshError):
    """The midpoint of two positions could not be computed."""

    def __init__(self, reason: str, edge: Any = None):
        self.reason = reason
        self.edge = edge
        message = reason if edge is None else f"edge {edge}: {reason}"
        super().__init__(message)


__all__ = [
    "MeshError",
    "InvalidVertexId",
    "InvalidFaceId",
    "IncorrectUnitIndex",
    "InvalidTopology",
    "UndefinedMidpoint",
]
