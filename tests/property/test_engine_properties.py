from __future__ import annotations

import math

import pytest

from astroevents.cache import LRUCache
from astroevents.core.angles import normalize_hour_angle
from astroevents.core.models import Bracket, Event, EventKind, ExtremumSeek
from astroevents.core.time import Instant
from astroevents.engine import bisect_interpolate, golden_section, regula_falsi, remove_duplicates

hypothesis = pytest.importorskip("hypothesis")
given = hypothesis.given
st = hypothesis.strategies
settings = hypothesis.settings

BASE = Instant(2460000.5)
FRACTIONS = st.floats(min_value=0.05, max_value=0.95, allow_nan=False, allow_infinity=False)
SLOPES = st.floats(min_value=1e-3, max_value=1e3, allow_nan=False, allow_infinity=False)
WIDTHS = st.floats(min_value=60.0, max_value=20_000.0, allow_nan=False, allow_infinity=False)
SIGNS = st.sampled_from([1.0, -1.0])


def _linear_bracket(fraction: float, slope: float, width: float, sign: float):
    root = BASE.plus_seconds(fraction * width)
    right = BASE.plus_seconds(width)

    def evaluate(instant: Instant) -> float:
        return sign * slope * instant.diff_seconds(root)

    return root, Bracket(BASE, right, evaluate(BASE), evaluate(right)), evaluate


@settings(deadline=None, max_examples=60)
@given(fraction=FRACTIONS, slope=SLOPES, width=WIDTHS, sign=SIGNS)
def test_bisection_never_widens(fraction: float, slope: float, width: float, sign: float) -> None:
    root, bracket, evaluate = _linear_bracket(fraction, slope, width, sign)
    result = bisect_interpolate(bracket, evaluate)
    widths = (bracket.width_seconds,) + result.widths_sec
    assert all(b <= a for a, b in zip(widths, widths[1:]))
    assert BASE <= result.instant <= bracket.right_instant
    assert abs(result.instant.diff_seconds(root)) < 0.01


@settings(deadline=None, max_examples=60)
@given(fraction=FRACTIONS, slope=SLOPES, width=WIDTHS, sign=SIGNS)
def test_regula_falsi_stays_in_bracket(fraction: float, slope: float, width: float, sign: float) -> None:
    root, bracket, evaluate = _linear_bracket(fraction, slope, width, sign)
    result = regula_falsi(bracket, evaluate, tolerance_seconds=0.5)
    assert BASE <= result.instant <= bracket.right_instant
    assert abs(result.instant.diff_seconds(root)) < 0.5


@settings(deadline=None, max_examples=60)
@given(fraction=FRACTIONS, width=WIDTHS, seek=st.sampled_from(list(ExtremumSeek)))
def test_golden_section_stays_in_bracket(fraction: float, width: float, seek: ExtremumSeek) -> None:
    peak = BASE.plus_seconds(fraction * width)
    right = BASE.plus_seconds(width)
    sign = -1.0 if seek is ExtremumSeek.MAXIMUM else 1.0

    result = golden_section(
        BASE, right, lambda instant: sign * instant.diff_seconds(peak) ** 2, seek
    )
    assert BASE <= result.instant <= right
    assert abs(result.instant.diff_seconds(peak)) <= 1e-5 * width + 1e-3


@settings(deadline=None)
@given(angle=st.floats(min_value=-1e4, max_value=1e4, allow_nan=False, allow_infinity=False))
def test_normalized_hour_angle_interval(angle: float) -> None:
    value = normalize_hour_angle(angle)
    assert -math.pi < value < math.pi


@settings(deadline=None)
@given(
    size=st.integers(min_value=1, max_value=8),
    keys=st.lists(st.integers(min_value=0, max_value=15), max_size=60),
)
def test_lru_keeps_most_recent_distinct_keys(size: int, keys: list[int]) -> None:
    cache = LRUCache(size)
    for key in keys:
        cache.put(key, key)
    assert len(cache) <= size
    expected: list[int] = []
    for key in reversed(keys):
        if key not in expected:
            expected.append(key)
    assert cache.keys() == list(reversed(expected[:size]))


@settings(deadline=None)
@given(
    offsets=st.lists(st.floats(min_value=0.0, max_value=30.0, allow_nan=False), max_size=40),
    threshold=st.floats(min_value=0.0, max_value=5.0, allow_nan=False),
)
def test_deduplicated_events_are_separated(offsets: list[float], threshold: float) -> None:
    events = [Event(BASE.plus_days(offset), EventKind.APOAPSIS) for offset in offsets]
    kept = remove_duplicates(events, threshold)
    for i, a in enumerate(kept):
        for b in kept[i + 1 :]:
            assert abs(a.instant.diff_days(b.instant)) >= threshold
    assert all(event in events for event in kept)
