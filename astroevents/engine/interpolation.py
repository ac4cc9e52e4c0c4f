"""Closed-form interpolation helpers."""

from __future__ import annotations

import math
from collections.abc import Callable

from ..core.models import Sample
from ..core.time import Instant

__all__ = ["linear_zero", "quadratic_vertex", "quadratic_vertex_instant"]


def linear_zero(x0: float, x1: float, y0: float, y1: float) -> float:
    """Return where the chord through ``(x0, y0)``–``(x1, y1)`` meets zero.

    Falls back to the midpoint when both ordinates have the same magnitude
    of zero.
    """

    total = abs(y0) + abs(y1)
    if total == 0.0 or not math.isfinite(total):
        return 0.5 * (x0 + x1)
    return x0 + abs(y0) / total * (x1 - x0)


def quadratic_vertex(
    x1: float, x2: float, x3: float, y1: float, y2: float, y3: float
) -> float | None:
    """Vertex abscissa of the parabola through three points.

    Uses the Lagrange coefficients ``a`` and ``b`` and returns ``-b / 2a``.
    Returns ``None`` when the abscissae coincide, the points are collinear
    or the vertex falls outside ``[min(x), max(x)]``.
    """

    denom = (x1 - x2) * (x1 - x3) * (x2 - x3)
    if denom == 0.0:
        return None
    a = (x3 * (y2 - y1) + x2 * (y1 - y3) + x1 * (y3 - y2)) / denom
    b = (x3 * x3 * (y1 - y2) + x2 * x2 * (y3 - y1) + x1 * x1 * (y2 - y3)) / denom
    if a == 0.0 or not math.isfinite(a) or not math.isfinite(b):
        return None
    vertex = -b / (2.0 * a)
    if not min(x1, x2, x3) <= vertex <= max(x1, x2, x3):
        return None
    return vertex


def quadratic_vertex_instant(
    left: Sample,
    center: Sample,
    right: Sample,
    *,
    value_of: Callable[[Sample], float] | None = None,
) -> Instant | None:
    """Vertex instant of the parabola through three samples.

    Abscissae are seconds relative to ``center`` to keep the arithmetic
    well conditioned.
    """

    def value(s: Sample) -> float:
        return value_of(s) if value_of is not None else s.value

    offset = quadratic_vertex(
        left.instant.diff_seconds(center.instant),
        0.0,
        right.instant.diff_seconds(center.instant),
        value(left),
        value(center),
        value(right),
    )
    if offset is None:
        return None
    return center.instant.plus_seconds(offset)
