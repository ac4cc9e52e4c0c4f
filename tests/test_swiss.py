from __future__ import annotations

import datetime as dt

import pytest

pytest.importorskip("swisseph")

from astroevents.core.models import SearchWindow
from astroevents.engine import HorizonPolicy
from astroevents.errors import UnsupportedEventError
from astroevents.events import ApsisCalculator, RiseTransitSetCalculator, orbital_period_for
from astroevents.providers.swiss import (
    ObserverLocation,
    SwissDistanceProvider,
    SwissPositionProvider,
    resolve_body,
)

GREENWICH = ObserverLocation(latitude_deg=51.4769, longitude_deg=0.0, elevation_m=46.0)


def _utc(*args: int) -> dt.datetime:
    return dt.datetime(*args, tzinfo=dt.UTC)


def test_unknown_body_is_rejected() -> None:
    with pytest.raises(UnsupportedEventError):
        resolve_body("vulcan")


def test_equinox_sun_at_greenwich() -> None:
    provider = SwissPositionProvider("sun", GREENWICH)
    window = SearchWindow.from_datetimes(_utc(2024, 3, 20), _utc(2024, 3, 20, 23, 59, 59))
    first = RiseTransitSetCalculator(provider, horizon=HorizonPolicy.sun()).event_on(window)
    assert first.rising is not None and first.transit is not None and first.setting is not None

    rising = first.rising.to_datetime()
    transit = first.transit.to_datetime()
    setting = first.setting.to_datetime()
    assert _utc(2024, 3, 20, 5, 50) < rising < _utc(2024, 3, 20, 6, 15)
    assert _utc(2024, 3, 20, 12, 0) < transit < _utc(2024, 3, 20, 12, 15)
    assert _utc(2024, 3, 20, 18, 5) < setting < _utc(2024, 3, 20, 18, 25)
    # Near the equinox the sun rises almost due east.
    assert 80.0 < first.rising.companion_value < 100.0


def test_lunar_perigee_count_over_a_year() -> None:
    provider = SwissDistanceProvider("moon", "earth")
    window = SearchWindow.from_datetimes(_utc(2024, 1, 1), _utc(2025, 1, 1))
    perigees = ApsisCalculator(provider, orbital_period_for("moon")).periapsis_events_between(window)
    assert 12 <= len(perigees) <= 14
    for event in perigees:
        assert 3.5e8 < event.companion_value < 3.71e8
