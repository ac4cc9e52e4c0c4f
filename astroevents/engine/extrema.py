"""Golden-section refinement of a bracketed extremum."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from ..core.models import ExtremumSeek
from ..core.time import Instant
from ..errors import InvalidConfigurationError

__all__ = ["ExtremumResult", "INVERSE_PHI", "golden_section"]

INVERSE_PHI: Final[float] = (math.sqrt(5.0) - 1.0) / 2.0


@dataclass(frozen=True, slots=True)
class ExtremumResult:
    instant: Instant
    value: float
    iterations: int
    evaluations: int
    status: str


def golden_section(
    left: Instant,
    right: Instant,
    evaluate: Callable[[Instant], float],
    seek: ExtremumSeek,
    *,
    tolerance: float = 1e-5,
    max_iterations: int = 200,
) -> ExtremumResult:
    """Locate the extremum of ``evaluate`` in ``[left, right]``.

    The interval shrinks by the golden ratio until it is narrower than
    ``tolerance`` times its initial width or ``max_iterations`` is hit.
    The midpoint of the final interval is returned together with the
    value there. An empty interval returns its midpoint with status
    ``"degenerate"`` instead of raising.
    """

    if not 0.0 < tolerance < 1.0:
        raise InvalidConfigurationError(f"tolerance must lie in (0, 1), got {tolerance}")

    width = right.diff_seconds(left)
    if width <= 0.0:
        mid = left.plus_seconds(0.5 * width)
        return ExtremumResult(mid, evaluate(mid), 0, 1, "degenerate")

    sign = 1.0 if seek is ExtremumSeek.MAXIMUM else -1.0

    a, b = 0.0, width
    c = b - INVERSE_PHI * (b - a)
    d = a + INVERSE_PHI * (b - a)
    fc = evaluate(left.plus_seconds(c))
    fd = evaluate(left.plus_seconds(d))
    evaluations = 2
    iterations = 0
    limit = tolerance * width

    while b - a > limit and iterations < max_iterations:
        iterations += 1
        if sign * fc > sign * fd:
            b, d, fd = d, c, fc
            c = b - INVERSE_PHI * (b - a)
            fc = evaluate(left.plus_seconds(c))
        else:
            a, c, fc = c, d, fd
            d = a + INVERSE_PHI * (b - a)
            fd = evaluate(left.plus_seconds(d))
        evaluations += 1

    mid = left.plus_seconds(0.5 * (a + b))
    status = "ok" if b - a <= limit else "max_iter"
    return ExtremumResult(mid, evaluate(mid), iterations, evaluations + 1, status)
