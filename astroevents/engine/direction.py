"""Post-refinement check that a crossing goes the requested way."""

from __future__ import annotations

import math
from collections.abc import Callable

from ..core.models import CrossingDirection
from ..core.time import Instant
from ..errors import InvalidConfigurationError

__all__ = ["confirm_direction", "rate_of_change"]


def rate_of_change(
    instant: Instant,
    evaluate: Callable[[Instant], float],
    *,
    offset_seconds: float = 60.0,
) -> float:
    """Central-difference rate of ``evaluate`` at ``instant``, per second."""

    if offset_seconds <= 0.0:
        raise InvalidConfigurationError(f"offset_seconds must be positive, got {offset_seconds}")
    before = evaluate(instant.plus_seconds(-offset_seconds))
    after = evaluate(instant.plus_seconds(offset_seconds))
    return (after - before) / (2.0 * offset_seconds)


def confirm_direction(
    instant: Instant,
    direction: CrossingDirection,
    evaluate: Callable[[Instant], float],
    *,
    offset_seconds: float = 60.0,
) -> bool:
    """Return ``True`` when the quantity moves in ``direction`` at ``instant``.

    A zero or non-finite rate never confirms either direction.
    """

    rate = rate_of_change(instant, evaluate, offset_seconds=offset_seconds)
    if not math.isfinite(rate) or rate == 0.0:
        return False
    return rate > 0.0 if direction is CrossingDirection.RISING else rate < 0.0
