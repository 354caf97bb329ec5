"""Typed handles addressing the vertex and face arenas of a mesh.

``VertexId`` and ``FaceId`` wrap a non-negative integer offset.  They
are ordered and hashable but expose no arithmetic; use ``int(handle)``
or ``handle.val`` to get at the raw offset.  Handles of different kinds
never compare equal, so a face index cannot stand in for a vertex index.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Iterator


def _check_offset(kind: str, val: int) -> int:
    """Validate an offset and return it as a plain int.

    Any integral type is accepted (numpy index arrays yield ``np.int64``);
    booleans are not.
    """

    if isinstance(val, bool) or not isinstance(val, numbers.Integral):
        raise TypeError(f"{kind} expects an int, got {type(val).__name__}")
    val = int(val)
    if val < 0:
        raise ValueError(f"{kind} must be non-negative, got {val}")
    return val


@dataclass(frozen=True, order=True)
class VertexId:
    """Offset of a vertex within a mesh's vertex arena."""

    val: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "val", _check_offset("VertexId", self.val))

    def __int__(self) -> int:
        return self.val

    def __str__(self) -> str:
        return str(self.val)


@dataclass(frozen=True, order=True)
class FaceId:
    """Offset of a face within a mesh's face arena."""

    val: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "val", _check_offset("FaceId", self.val))

    def __int__(self) -> int:
        return self.val

    def __str__(self) -> str:
        return str(self.val)


@dataclass(frozen=True, order=True)
class EdgeKey:
    """Undirected edge between two vertices, stored as ``(low, high)``.

    Build keys with :meth:`EdgeKey.of` so that both traversal
    directions of an edge map onto the same key.
    """

    low: VertexId
    high: VertexId

    def __post_init__(self) -> None:
        if not isinstance(self.low, VertexId) or not isinstance(self.high, VertexId):
            raise TypeError("EdgeKey expects two VertexId handles")
        if self.high < self.low:
            raise ValueError(f"EdgeKey endpoints out of order: ({self.low}, {self.high})")

    @classmethod
    def of(cls, a: VertexId, b: VertexId) -> "EdgeKey":
        """Return the canonical key of the edge joining ``a`` and ``b``."""

        if b < a:
            return cls(b, a)
        return cls(a, b)

    def __iter__(self) -> Iterator[VertexId]:
        yield self.low
        yield self.high

    def __str__(self) -> str:
        return f"({self.low}, {self.high})"


__all__ = ["VertexId", "FaceId", "EdgeKey"]
