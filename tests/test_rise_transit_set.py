from __future__ import annotations

import datetime as dt

import pytest

from astroevents.cache import LRUCache, NullCache
from astroevents.config import CrossingCfg, Settings
from astroevents.core.models import CrossingDirection, EventKind
from astroevents.core.time import SECONDS_PER_DAY
from astroevents.engine import CrossingSearch, HorizonPolicy, crossing_brackets
from astroevents.engine.horizon import STANDARD_REFRACTION_DEG, SUN_REFRACTION_DEG
from astroevents.errors import InvalidConfigurationError
from astroevents.events import RiseTransitSetCalculator
from astroevents.providers import ObservationSource
from tests.helpers import (
    DAY0,
    FrozenHourAngleSky,
    GrazingSky,
    SinusoidalSky,
    WrappedHourAngleSky,
    day_window,
)


def _seconds_apart(jd_a: float, jd_b: float) -> float:
    return abs(jd_a - jd_b) * SECONDS_PER_DAY


def test_one_rising_transit_and_setting_per_day(sky: SinusoidalSky) -> None:
    events = RiseTransitSetCalculator(sky).events_between(day_window())
    assert len(events.risings) == len(events.transits) == len(events.settings) == 1

    expected_rise, expected_set = sky.crossing_jds(STANDARD_REFRACTION_DEG)
    rising, transit, setting = events.risings[0], events.transits[0], events.settings[0]
    assert rising.kind is EventKind.RISING
    assert setting.kind is EventKind.SETTING
    assert _seconds_apart(rising.instant.jd_tt, expected_rise) < 1.0
    assert _seconds_apart(setting.instant.jd_tt, expected_set) < 1.0
    assert _seconds_apart(transit.instant.jd_tt, sky.transit_jd) < 1.0
    assert rising.instant < transit.instant < setting.instant


def test_companion_values(sky: SinusoidalSky) -> None:
    first = RiseTransitSetCalculator(sky).event_on(day_window())
    assert first.rising is not None and first.setting is not None and first.transit is not None
    assert 0.0 < first.rising.companion_value < 180.0
    assert 180.0 < first.setting.companion_value < 360.0
    assert first.transit.companion_value == pytest.approx(sky.mean_deg + sky.amplitude_deg, abs=1e-6)


def test_multi_day_window(sky: SinusoidalSky) -> None:
    events = RiseTransitSetCalculator(sky).events_between(day_window(days=3.0))
    assert len(events.risings) == len(events.transits) == len(events.settings) == 3
    for cycle, (rising, setting) in enumerate(zip(events.risings, events.settings)):
        expected_rise, expected_set = sky.crossing_jds(STANDARD_REFRACTION_DEG, cycles=cycle)
        assert _seconds_apart(rising.instant.jd_tt, expected_rise) < 1.0
        assert _seconds_apart(setting.instant.jd_tt, expected_set) < 1.0
    assert events.first().rising == events.risings[0]


def test_circumpolar_body_only_transits() -> None:
    sky = SinusoidalSky(mean_deg=60.0, amplitude_deg=20.0)
    events = RiseTransitSetCalculator(sky).events_between(day_window())
    assert events.risings == () and events.settings == ()
    assert len(events.transits) == 1
    assert events.transits[0].companion_value == pytest.approx(80.0, abs=1e-6)


def test_body_that_never_rises_still_transits() -> None:
    sky = SinusoidalSky(mean_deg=-60.0, amplitude_deg=20.0)
    first = RiseTransitSetCalculator(sky).event_on(day_window())
    assert first.rising is None and first.setting is None
    assert first.transit is not None
    assert first.transit.companion_value < 0.0


def test_transit_falls_back_to_altitude_vertex() -> None:
    # Peak offset from the sample grid so no two samples tie at the top.
    sky = FrozenHourAngleSky(mean_deg=60.0, amplitude_deg=20.0, transit_jd=DAY0 + 0.47)
    events = RiseTransitSetCalculator(sky).events_between(day_window())
    assert len(events.transits) == 1
    assert _seconds_apart(events.transits[0].instant.jd_tt, sky.transit_jd) < 300.0


def test_window_edges_cut_events(sky: SinusoidalSky) -> None:
    # Window opens after the rise and closes before the set.
    window = day_window(start=DAY0 + 0.3, days=0.4)
    events = RiseTransitSetCalculator(sky).events_between(window)
    assert events.risings == () and events.settings == ()
    assert len(events.transits) == 1


def test_sun_horizon_policy_shifts_events(sky: SinusoidalSky) -> None:
    first = RiseTransitSetCalculator(sky, horizon=HorizonPolicy.sun()).event_on(day_window())
    expected_rise, _ = sky.crossing_jds(SUN_REFRACTION_DEG)
    assert first.rising is not None
    assert _seconds_apart(first.rising.instant.jd_tt, expected_rise) < 1.0


def test_moon_horizon_uses_provider_distance() -> None:
    sky = SinusoidalSky(distance_m=3.844e8)
    policy = HorizonPolicy.moon()
    first = RiseTransitSetCalculator(sky, horizon=policy).event_on(day_window())
    expected_rise, _ = sky.crossing_jds(policy.threshold_deg(3.844e8))
    assert first.rising is not None
    assert _seconds_apart(first.rising.instant.jd_tt, expected_rise) < 1.0


def test_moon_horizon_without_distance_is_rejected(sky: SinusoidalSky) -> None:
    calculator = RiseTransitSetCalculator(sky, horizon=HorizonPolicy.moon())
    with pytest.raises(InvalidConfigurationError):
        calculator.events_between(day_window())


def test_regula_falsi_strategy(sky: SinusoidalSky) -> None:
    settings = Settings(crossing=CrossingCfg(strategy="regula_falsi"))
    first = RiseTransitSetCalculator(sky, settings=settings).event_on(day_window())
    expected_rise, expected_set = sky.crossing_jds(STANDARD_REFRACTION_DEG)
    assert _seconds_apart(first.rising.instant.jd_tt, expected_rise) < 1.0
    assert _seconds_apart(first.setting.instant.jd_tt, expected_set) < 1.0


@pytest.mark.parametrize("strategy", ["bisection", "regula_falsi"])
@pytest.mark.parametrize("sky_type", [SinusoidalSky, WrappedHourAngleSky])
def test_transit_refined_between_grid_points(sky_type: type[SinusoidalSky], strategy: str) -> None:
    sky = sky_type(transit_jd=DAY0 + 0.47)
    settings = Settings(crossing=CrossingCfg(strategy=strategy))
    search = CrossingSearch(ObservationSource(sky), cfg=settings.crossing)
    (transit,) = search.transits(day_window())
    assert _seconds_apart(transit.instant.jd_tt, sky.transit_jd) < 1.0

    events = RiseTransitSetCalculator(sky, settings=settings).events_between(day_window())
    assert _seconds_apart(events.transits[0].instant.jd_tt, sky.transit_jd) < 1.0


def test_wrapped_hour_angle_matches_signed_hour_angle() -> None:
    signed = RiseTransitSetCalculator(SinusoidalSky()).events_between(day_window(days=3.0))
    wrapped = RiseTransitSetCalculator(WrappedHourAngleSky()).events_between(day_window(days=3.0))
    assert len(wrapped.transits) == 3
    for a, b in zip(signed.transits, wrapped.transits):
        assert _seconds_apart(a.instant.jd_tt, b.instant.jd_tt) < 1e-3


def test_grazing_crossing_fails_direction_check() -> None:
    sky = GrazingSky()
    search = CrossingSearch(ObservationSource(sky))
    samples = search.sample(day_window())
    # The grid sees a rising bracket, but refinement lands on the brief spike
    # whose altitude is lower a minute later than a minute earlier.
    assert len(crossing_brackets(samples, CrossingDirection.RISING)) == 1
    assert search.crossings(day_window(), CrossingDirection.RISING, samples=samples) == []

    events = RiseTransitSetCalculator(sky).events_between(day_window())
    assert events.risings == () and events.settings == ()


def test_cache_does_not_change_results(sky: SinusoidalSky) -> None:
    uncached = RiseTransitSetCalculator(sky, cache=NullCache()).events_between(day_window())
    cached = RiseTransitSetCalculator(SinusoidalSky(), cache=LRUCache(1000)).events_between(day_window())
    assert uncached == cached


def test_cache_avoids_repeat_evaluations(sky: SinusoidalSky, cached_settings: Settings) -> None:
    calculator = RiseTransitSetCalculator(sky, settings=cached_settings)
    calculator.events_between(day_window())
    calls = sky.calls
    calculator.events_between(day_window())
    assert sky.calls == calls
    assert len(calculator.cache) > 0


def test_events_on_calendar_day(sky: SinusoidalSky) -> None:
    first = RiseTransitSetCalculator(sky).events_on(dt.date(2023, 2, 24))
    assert first.rising is not None and first.transit is not None and first.setting is not None
    assert first.transit.to_datetime().date() == dt.date(2023, 2, 24)


def test_as_dict_serialises_absent_events() -> None:
    sky = SinusoidalSky(mean_deg=60.0, amplitude_deg=20.0)
    payload = RiseTransitSetCalculator(sky).event_on(day_window()).as_dict()
    assert payload["rising"] is None
    assert payload["transit"]["kind"] == "transit"
