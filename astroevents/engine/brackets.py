"""Bracket detection over a sample table."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from ..core.angles import normalize_hour_angle
from ..core.models import Bracket, CrossingDirection, ExtremumBracket, ExtremumSeek, Sample

__all__ = [
    "crossing_brackets",
    "extremum_brackets",
    "hour_angle_brackets",
]


def crossing_brackets(
    samples: Sequence[Sample],
    direction: CrossingDirection,
    *,
    threshold: float = 0.0,
    first_only: bool = False,
) -> list[Bracket]:
    """Return adjacent sample pairs where ``value`` crosses ``threshold``.

    A sample is *above* when its value is strictly greater than the
    threshold. Rising brackets go from not-above to above, setting
    brackets the other way round. Values are usually already relative to
    a per-sample horizon, hence the default threshold of zero.
    """

    brackets: list[Bracket] = []
    for left, right in zip(samples, samples[1:]):
        left_above = left.value > threshold
        right_above = right.value > threshold
        if direction is CrossingDirection.RISING:
            matched = not left_above and right_above
        else:
            matched = left_above and not right_above
        if not matched:
            continue
        brackets.append(
            Bracket(left.instant, right.instant, left.value - threshold, right.value - threshold)
        )
        if first_only:
            break
    return brackets


def hour_angle_brackets(
    samples: Sequence[Sample],
    hour_angle_rad: Callable[[Sample], float],
) -> list[Bracket]:
    """Return pairs bracketing an upper meridian passage.

    Hour angles are normalised into ``(−π, π]``. A pair qualifies when it
    goes from negative to non-negative and the normalised values differ by
    less than π; the jump across ±π also changes sign but is not a
    meridian passage. The bracket values are the normalised hour angles.
    """

    brackets: list[Bracket] = []
    normalised = [normalize_hour_angle(hour_angle_rad(s)) for s in samples]
    for i in range(len(samples) - 1):
        ha1, ha2 = normalised[i], normalised[i + 1]
        if ha1 < 0.0 <= ha2 and abs(ha1 - ha2) < math.pi:
            brackets.append(Bracket(samples[i].instant, samples[i + 1].instant, ha1, ha2))
    return brackets


def extremum_brackets(
    samples: Sequence[Sample],
    seek: ExtremumSeek,
    *,
    key: Callable[[Sample], float] | None = None,
) -> list[ExtremumBracket]:
    """Return sample triples whose centre is a strict local max or min.

    ``key`` selects the compared quantity (``Sample.value`` by default).
    """

    def value_of(s: Sample) -> float:
        return key(s) if key is not None else s.value

    brackets: list[ExtremumBracket] = []
    for i in range(1, len(samples) - 1):
        prev_val = value_of(samples[i - 1])
        current = value_of(samples[i])
        next_val = value_of(samples[i + 1])
        if seek is ExtremumSeek.MAXIMUM:
            hit = current > prev_val and current > next_val
        else:
            hit = current < prev_val and current < next_val
        if hit:
            brackets.append(ExtremumBracket(samples[i - 1], samples[i], samples[i + 1]))
    return brackets
