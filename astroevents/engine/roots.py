"""Root refinement for threshold-crossing brackets."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, Literal

from ..core.models import Bracket
from ..core.time import Instant
from ..errors import InvalidConfigurationError
from .interpolation import linear_zero

__all__ = [
    "DEFAULT_BISECTION_ITERATIONS",
    "RefineResult",
    "bisect_interpolate",
    "refine_crossing",
    "regula_falsi",
]

LOG = logging.getLogger(__name__)

DEFAULT_BISECTION_ITERATIONS: Final[int] = 8

Strategy = Literal["bisection", "regula_falsi"]


@dataclass(frozen=True, slots=True)
class RefineResult:
    """Result metadata returned by the refiners.

    Attributes
    ----------
    instant:
        Refined crossing estimate.
    iterations:
        Number of narrowing steps performed.
    evaluations:
        Number of calls made to the evaluation function.
    method:
        ``"bisection+linear"`` or ``"regula_falsi"``.
    achieved_tol_sec:
        Width of the final bracket in seconds.
    status:
        ``"ok"`` when the method finished normally, ``"exact"`` when an
        evaluation hit the threshold exactly, ``"max_iter"`` when regula
        falsi ran out of iterations before reaching its tolerance.
    widths_sec:
        Bracket width after every narrowing step, in order.
    """

    instant: Instant
    iterations: int
    evaluations: int
    method: str
    achieved_tol_sec: float
    status: str
    widths_sec: tuple[float, ...] = ()


def _above(value: float) -> bool:
    return value > 0.0


def bisect_interpolate(
    bracket: Bracket,
    evaluate: Callable[[Instant], float],
    *,
    iterations: int = DEFAULT_BISECTION_ITERATIONS,
) -> RefineResult:
    """Halve ``bracket`` ``iterations`` times, then interpolate linearly.

    ``evaluate`` returns the quantity relative to its threshold, so the
    crossing is where it changes from ``<= 0`` to ``> 0`` or back. The
    endpoint values carry the direction; whichever side a midpoint agrees
    with is replaced.
    """

    if iterations < 1:
        raise InvalidConfigurationError(f"iterations must be >= 1, got {iterations}")

    origin = bracket.left_instant
    lo, hi = 0.0, bracket.width_seconds
    v_lo, v_hi = bracket.left_value, bracket.right_value
    widths: list[float] = []
    evaluations = 0

    for step in range(1, iterations + 1):
        mid = 0.5 * (lo + hi)
        v_mid = evaluate(origin.plus_seconds(mid))
        evaluations += 1
        if v_mid == 0.0:
            widths.append(hi - lo)
            return RefineResult(
                origin.plus_seconds(mid), step, evaluations, "bisection+linear", 0.0, "exact", tuple(widths)
            )
        if _above(v_mid) == _above(v_lo):
            lo, v_lo = mid, v_mid
        else:
            hi, v_hi = mid, v_mid
        widths.append(hi - lo)

    estimate = linear_zero(lo, hi, v_lo, v_hi)
    return RefineResult(
        origin.plus_seconds(estimate),
        iterations,
        evaluations,
        "bisection+linear",
        hi - lo,
        "ok",
        tuple(widths),
    )


def regula_falsi(
    bracket: Bracket,
    evaluate: Callable[[Instant], float],
    *,
    tolerance_seconds: float = 0.5,
    max_iter: int = 64,
) -> RefineResult:
    """Illinois false-position refinement until the bracket is narrower than ``tolerance_seconds``."""

    if tolerance_seconds <= 0.0:
        raise InvalidConfigurationError("tolerance_seconds must be positive")
    if max_iter < 1:
        raise InvalidConfigurationError(f"max_iter must be >= 1, got {max_iter}")

    origin = bracket.left_instant
    lo, hi = 0.0, bracket.width_seconds
    v_lo, v_hi = bracket.left_value, bracket.right_value
    widths: list[float] = []
    evaluations = 0
    retained = 0  # +1 when lo was kept twice in a row, -1 for hi
    iterations = 0

    while hi - lo > tolerance_seconds and iterations < max_iter:
        iterations += 1
        denom = v_hi - v_lo
        guess = lo - v_lo * (hi - lo) / denom if denom != 0.0 else 0.5 * (lo + hi)
        if not lo < guess < hi:
            guess = 0.5 * (lo + hi)
        v_guess = evaluate(origin.plus_seconds(guess))
        evaluations += 1
        if v_guess == 0.0:
            widths.append(hi - lo)
            return RefineResult(
                origin.plus_seconds(guess), iterations, evaluations, "regula_falsi", 0.0, "exact", tuple(widths)
            )
        if _above(v_guess) == _above(v_lo):
            lo, v_lo = guess, v_guess
            if retained == -1:
                v_hi *= 0.5
            retained = -1
        else:
            hi, v_hi = guess, v_guess
            if retained == 1:
                v_lo *= 0.5
            retained = 1
        widths.append(hi - lo)

    width = hi - lo
    status = "ok" if width <= tolerance_seconds else "max_iter"
    if status == "max_iter":
        LOG.debug("regula falsi stopped at %.3f s after %d iterations", width, iterations)
    return RefineResult(
        origin.plus_seconds(linear_zero(lo, hi, v_lo, v_hi)),
        iterations,
        evaluations,
        "regula_falsi",
        width,
        status,
        tuple(widths),
    )


def refine_crossing(
    bracket: Bracket,
    evaluate: Callable[[Instant], float],
    *,
    strategy: Strategy = "bisection",
    iterations: int = DEFAULT_BISECTION_ITERATIONS,
    tolerance_seconds: float = 0.5,
    max_iter: int = 64,
) -> RefineResult:
    """Dispatch to the configured refinement strategy."""

    if strategy == "bisection":
        return bisect_interpolate(bracket, evaluate, iterations=iterations)
    if strategy == "regula_falsi":
        return regula_falsi(bracket, evaluate, tolerance_seconds=tolerance_seconds, max_iter=max_iter)
    raise InvalidConfigurationError(f"unknown refinement strategy {strategy!r}")
