"""Validation helpers for triangle meshes."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from math import isfinite, sqrt
from typing import Dict, List, Tuple

from meshrefine.capabilities import MeshLike
from meshrefine.config import EPSILON
from meshrefine.handles import EdgeKey, VertexId


def edge_multiplicity(mesh: MeshLike) -> Counter:
    """Count how many faces use each undirected edge."""

    edges: Counter = Counter()
    for fid in mesh.face_ids():
        ids = mesh.face_topology(fid).vertex_ids()
        for i, vid in enumerate(ids):
            edges[EdgeKey.of(vid, ids[(i + 1) % len(ids)])] += 1
    return edges


def unique_edges(mesh: MeshLike) -> List[EdgeKey]:
    """Return the distinct undirected edges of ``mesh`` in sorted order."""

    return sorted(edge_multiplicity(mesh))


def mesh_watertight(mesh: MeshLike) -> "CheckResult":
    edges = edge_multiplicity(mesh)

    boundary = [edge for edge, count in edges.items() if count == 1]
    invalid = sorted(edge for edge, count in edges.items() if count > 2)

    warnings: List[str] = []
    ok = True
    if boundary:
        ok = False
        warnings.append(f'{len(boundary)} boundary edges detected')
    if invalid:
        ok = False
        warnings.append(f'edges with multiplicity >2: {[str(e) for e in invalid]}')

    return CheckResult(ok, warnings)


def faces_oriented(mesh: MeshLike) -> "CheckResult":
    """Check that neighbouring faces traverse their shared edge in opposite directions."""

    directed: Dict[Tuple[VertexId, VertexId], int] = {}
    inconsistent = []

    for fid in mesh.face_ids():
        ids = mesh.face_topology(fid).vertex_ids()
        for i, vid in enumerate(ids):
            half = (vid, ids[(i + 1) % len(ids)])
            if half in directed:
                inconsistent.append(fid.val)
                break
            directed[half] = fid.val

    if inconsistent:
        return CheckResult(False, [f'inconsistent face orientation indices: {inconsistent}'])
    return CheckResult(True, [])


def coincident_vertices(mesh: MeshLike, tol: float = EPSILON) -> List[Tuple[VertexId, VertexId]]:
    """Return pairs of distinct vertices lying within ``tol`` of each other.

    Positions are bucketed on a grid of cell size ``tol`` so only
    neighbouring cells are compared.  Positions with non-finite
    coordinates have no location and are skipped.
    """

    cell = tol if tol > 0 else EPSILON
    buckets: Dict[Tuple[int, ...], List[Tuple[VertexId, Tuple[float, ...]]]] = {}
    found = set()

    for vid in mesh.vertex_ids():
        try:
            coords = tuple(float(x) for x in mesh.vertex(vid))
        except OverflowError:
            continue
        if not all(isfinite(x) for x in coords):
            continue
        key = tuple(int(x // cell) for x in coords)
        for neighbour in _neighbour_cells(key):
            for other, other_coords in buckets.get(neighbour, ()):
                if len(other_coords) != len(coords):
                    continue
                d = sqrt(sum((x - y) ** 2 for x, y in zip(coords, other_coords)))
                if d <= tol:
                    found.add((other, vid))
        buckets.setdefault(key, []).append((vid, coords))

    return sorted(found)


def _neighbour_cells(key: Tuple[int, ...]):
    if not key:
        yield key
        return
    for rest in _neighbour_cells(key[1:]):
        for delta in (-1, 0, 1):
            yield (key[0] + delta,) + rest


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


__all__ = [
    'CheckResult',
    'edge_multiplicity',
    'unique_edges',
    'mesh_watertight',
    'faces_oriented',
    'coincident_vertices',
]
