from __future__ import annotations

import math

import pytest

from astroevents.core.models import Event, EventKind, SearchWindow
from astroevents.core.time import Instant
from astroevents.engine import HorizonKind, HorizonPolicy, filter_boundary_artifacts, remove_duplicates
from astroevents.engine.horizon import MOON_RADIUS_M, STANDARD_REFRACTION_DEG, SUN_REFRACTION_DEG
from astroevents.errors import InvalidConfigurationError
from tests.helpers import DAY0


def _events(*offsets: float) -> list[Event]:
    return [Event(Instant(DAY0 + offset), EventKind.PERIAPSIS) for offset in offsets]


def _offsets(events: list[Event]) -> list[float]:
    return [round(event.instant.jd_tt - DAY0, 6) for event in events]


def test_remove_duplicates_keeps_first_encountered() -> None:
    assert _offsets(remove_duplicates(_events(0.0, 0.2, 1.0), 0.5)) == [0.0, 1.0]
    assert _offsets(remove_duplicates(_events(1.0, 0.2, 0.0), 0.5)) == [1.0, 0.2]


def test_remove_duplicates_zero_threshold_keeps_everything() -> None:
    assert len(remove_duplicates(_events(0.0, 0.0, 0.1), 0.0)) == 3


def test_boundary_filter_drops_edges_and_outsiders() -> None:
    window = SearchWindow(Instant(DAY0), Instant(DAY0 + 10.0))
    events = _events(0.005, 5.0, 9.995, 11.0, -1.0)
    assert _offsets(filter_boundary_artifacts(events, window, 0.01)) == [5.0]


def test_horizon_thresholds() -> None:
    assert HorizonPolicy.standard().threshold_deg() == pytest.approx(-34.0 / 60.0)
    assert HorizonPolicy.sun().threshold_deg() == pytest.approx(-50.0 / 60.0)
    assert STANDARD_REFRACTION_DEG == HorizonPolicy().threshold_deg()
    assert SUN_REFRACTION_DEG < STANDARD_REFRACTION_DEG


def test_moon_threshold_depends_on_distance() -> None:
    policy = HorizonPolicy.moon()
    near = policy.threshold_deg(3.6e8)
    far = policy.threshold_deg(4.0e8)
    expected = -34.0 / 60.0 - math.degrees(MOON_RADIUS_M / 3.6e8)
    assert near == pytest.approx(expected)
    assert near < far < STANDARD_REFRACTION_DEG


def test_moon_threshold_needs_distance() -> None:
    with pytest.raises(InvalidConfigurationError):
        HorizonPolicy.moon().threshold_deg(None)
    with pytest.raises(InvalidConfigurationError):
        HorizonPolicy.moon(radius_m=0.0)


def test_zenith_angle_policy() -> None:
    policy = HorizonPolicy.zenith_angle(96.0)
    assert policy.kind is HorizonKind.FIXED
    assert policy.threshold_deg() == pytest.approx(-6.0)
    with pytest.raises(InvalidConfigurationError):
        HorizonPolicy.zenith_angle(200.0)
