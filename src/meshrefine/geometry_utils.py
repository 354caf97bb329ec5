"""Triangle helpers shared by the mesh views and checks."""

from __future__ import annotations

from math import sqrt
from typing import Sequence, Tuple

from meshrefine.config import EPSILON

Vec3 = Tuple[float, float, float]


def to_vec3(point_like: Sequence[float]) -> Vec3:
    """Return the XYZ components of a position as a float tuple.

    Two-dimensional positions are lifted into the ``z = 0`` plane.
    """

    if len(point_like) == 2:
        return float(point_like[0]), float(point_like[1]), 0.0
    if len(point_like) < 3:
        raise ValueError("value must have at least two components")
    return float(point_like[0]), float(point_like[1]), float(point_like[2])


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0])


def _edge_cross(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3:
    ab = (v1[0] - v0[0], v1[1] - v0[1], v1[2] - v0[2])
    ac = (v2[0] - v0[0], v2[1] - v0[1], v2[2] - v0[2])
    return _cross(ab, ac)


def triangle_normal(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3 | None:
    """Return the unit normal of a triangle or ``None`` if degenerate."""

    n = _edge_cross(v0, v1, v2)
    length = sqrt(n[0] * n[0] + n[1] * n[1] + n[2] * n[2])
    if length <= EPSILON:
        return None
    return (n[0] / length, n[1] / length, n[2] / length)


__all__ = [
    "Vec3",
    "to_vec3",
    "triangle_normal",
]
