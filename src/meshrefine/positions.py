"""Midpoint operations for mesh positions.

The subdivision engine only asks one thing of a position type: that two
positions can be averaged.  :func:`midpoint` covers plain coordinate
tuples, lists and numpy arrays of any dimension, plus any object that
provides its own ``midpoint(other)`` method.  :func:`homogeneous_midpoint`
handles yapCAD style homogeneous points ``[x, y, z, w]``.

Both raise :class:`~meshrefine.errors.UndefinedMidpoint` instead of
inventing a value when no midpoint exists.
"""

from __future__ import annotations

import numbers
from typing import Any, List, Sequence, Tuple

from meshrefine.errors import UndefinedMidpoint

_INF = float("inf")


def _is_coordinate(x: Any) -> bool:
    if isinstance(x, bool):
        return False
    if isinstance(x, numbers.Real):
        return True
    # Decimal registers as a Number but not as Complex
    return isinstance(x, numbers.Number) and not isinstance(x, numbers.Complex)


def _is_finite(x: Any) -> bool:
    return x == x and x != _INF and x != -_INF


def _coordinates(value: Any) -> Sequence[Any]:
    try:
        coords = list(value)
    except TypeError as exc:
        raise UndefinedMidpoint(
            f"positions of type {type(value).__name__} have no midpoint") from exc
    for x in coords:
        if not _is_coordinate(x):
            raise UndefinedMidpoint(f"non-numeric coordinate {x!r}")
    return coords


def midpoint(a: Any, b: Any) -> Any:
    """Return the position halfway between ``a`` and ``b``.

    Sequences are averaged component-wise and returned as a tuple.
    Exact coordinate types such as :class:`fractions.Fraction` stay
    exact.  A dimension mismatch or a non-finite result raises
    :class:`UndefinedMidpoint`.
    """

    method = getattr(a, "midpoint", None)
    if callable(method):
        result = method(b)
        if result is None:
            raise UndefinedMidpoint(
                f"{type(a).__name__}.midpoint returned no value")
        return result

    ca = _coordinates(a)
    cb = _coordinates(b)
    if len(ca) != len(cb):
        raise UndefinedMidpoint(
            f"dimension mismatch: {len(ca)} != {len(cb)}")

    try:
        result: Tuple[Any, ...] = tuple((x + y) / 2 for x, y in zip(ca, cb))
    except (ArithmeticError, TypeError) as exc:
        raise UndefinedMidpoint(f"cannot average coordinates: {exc}") from exc
    for x in result:
        if not _is_finite(x):
            raise UndefinedMidpoint(f"non-finite midpoint {result!r}")
    return result


def homogeneous_midpoint(a: Sequence[float], b: Sequence[float]) -> List[float]:
    """Return the midpoint of two homogeneous points ``[x, y, z, w]``.

    Both inputs must be proper points (``w > 0``); directions and points
    at infinity have no midpoint.  The result is projected back onto the
    ``w = 1`` hyperplane.
    """

    ca = _coordinates(a)
    cb = _coordinates(b)
    if len(ca) != 4 or len(cb) != 4:
        raise UndefinedMidpoint("homogeneous points need four components")
    if not ca[3] > 0 or not cb[3] > 0:
        raise UndefinedMidpoint(
            f"w components must be positive, got {ca[3]} and {cb[3]}")

    try:
        result = [(ca[i] / ca[3] + cb[i] / cb[3]) / 2 for i in range(3)]
    except (ArithmeticError, TypeError) as exc:
        raise UndefinedMidpoint(f"cannot average coordinates: {exc}") from exc
    for x in result:
        if not _is_finite(x):
            raise UndefinedMidpoint(f"non-finite midpoint {result!r}")
    return result + [1.0]


__all__ = ["midpoint", "homogeneous_midpoint"]
