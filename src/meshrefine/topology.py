"""Topology units: fixed-size records of vertex handles.

A unit of arity 3 describes a triangle; other arities (segments, quads)
can reuse :class:`TopologyUnit` by implementing ``arity`` and
``vertex_at``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterator, Tuple

from meshrefine.errors import IncorrectUnitIndex
from meshrefine.handles import EdgeKey, VertexId


class TopologyUnit(ABC):
    """Connectivity record referencing a fixed number of vertices."""

    @classmethod
    @abstractmethod
    def arity(cls) -> int:
        """Number of vertex handles every unit of this type holds."""

    @abstractmethod
    def vertex_at(self, index: int) -> VertexId:
        """Return the handle at ``index``.

        Raises :class:`IncorrectUnitIndex` when ``index`` is outside
        ``0 <= index < arity()``.
        """

    def for_each_vertex(self, visitor: Callable[[VertexId], None]) -> None:
        """Call ``visitor`` with every handle of the unit, in order."""

        for index in range(self.arity()):
            visitor(self.vertex_at(index))

    def vertex_ids(self) -> Tuple[VertexId, ...]:
        found = []
        self.for_each_vertex(found.append)
        return tuple(found)

    def is_degenerate(self) -> bool:
        """Return True when the unit references the same vertex twice."""

        return len(set(self.vertex_ids())) < self.arity()

    def __iter__(self) -> Iterator[VertexId]:
        return iter(self.vertex_ids())


@dataclass(frozen=True, order=True)
class Face3(TopologyUnit):
    """Triangle connectivity ``(a, b, c)``; the order defines the winding."""

    a: VertexId
    b: VertexId
    c: VertexId

    @classmethod
    def arity(cls) -> int:
        return 3

    def vertex_at(self, index: int) -> VertexId:
        if index == 0:
            return self.a
        if index == 1:
            return self.b
        if index == 2:
            return self.c
        raise IncorrectUnitIndex(index, 3)

    def edges(self) -> Tuple[EdgeKey, EdgeKey, EdgeKey]:
        """Canonical keys of the edges ``(a, b)``, ``(b, c)`` and ``(c, a)``."""

        return (EdgeKey.of(self.a, self.b),
                EdgeKey.of(self.b, self.c),
                EdgeKey.of(self.c, self.a))

    def __str__(self) -> str:
        return f"({self.a}, {self.b}, {self.c})"


__all__ = ["TopologyUnit", "Face3"]
