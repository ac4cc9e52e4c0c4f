from __future__ import annotations

import datetime as dt
import math

import pytest

from astroevents.core.angles import (
    HOUR_ANGLE_EPSILON,
    normalize_degrees,
    normalize_hour_angle,
    signed_delta,
)
from astroevents.core.time import SECONDS_PER_DAY, Instant, julian_day


def test_julian_day_j2000() -> None:
    assert julian_day(dt.datetime(2000, 1, 1, 12, tzinfo=dt.UTC)) == pytest.approx(2451545.0)


def test_naive_datetimes_are_utc() -> None:
    naive = dt.datetime(2024, 3, 20, 6, 30)
    aware = naive.replace(tzinfo=dt.UTC)
    assert Instant.from_datetime(naive) == Instant.from_datetime(aware)


def test_instant_round_trips_through_utc() -> None:
    moment = dt.datetime(2024, 6, 1, 18, 45, 12, 250000, tzinfo=dt.UTC)
    back = Instant.from_datetime(moment).to_datetime()
    assert abs((back - moment).total_seconds()) < 1e-3


def test_tt_runs_ahead_of_utc_by_delta_t() -> None:
    instant = Instant.from_datetime(dt.datetime(2024, 1, 1, tzinfo=dt.UTC))
    assert 60.0 < instant.delta_t_seconds < 80.0
    assert (instant.jd_tt - instant.jd_utc) * SECONDS_PER_DAY == pytest.approx(instant.delta_t_seconds)


def test_rounded_datetime_rounds_half_up() -> None:
    late = Instant.from_datetime(dt.datetime(2024, 1, 1, 0, 0, 0, 600000, tzinfo=dt.UTC))
    early = Instant.from_datetime(dt.datetime(2024, 1, 1, 0, 0, 0, 400000, tzinfo=dt.UTC))
    assert late.rounded_datetime() == dt.datetime(2024, 1, 1, 0, 0, 1, tzinfo=dt.UTC)
    assert early.rounded_datetime() == dt.datetime(2024, 1, 1, tzinfo=dt.UTC)


def test_instant_arithmetic() -> None:
    start = Instant(2460000.5)
    later = start.plus_seconds(90.0)
    assert later.diff_seconds(start) == pytest.approx(90.0)
    assert start.plus_days(2.0).diff_days(start) == pytest.approx(2.0)
    assert start < later


def test_normalize_degrees_wraps() -> None:
    assert normalize_degrees(-30.0) == pytest.approx(330.0)
    assert normalize_degrees(720.0) == 0.0
    assert normalize_degrees(360.0 - 1e-12) == 0.0


def test_signed_delta_range() -> None:
    assert signed_delta(190.0) == pytest.approx(-170.0)
    assert signed_delta(-190.0) == pytest.approx(170.0)
    assert signed_delta(180.0) == pytest.approx(-180.0)


def test_normalize_hour_angle_interval() -> None:
    assert normalize_hour_angle(-math.pi / 2) == pytest.approx(-math.pi / 2)
    assert normalize_hour_angle(2.0 * math.pi + 0.1) == pytest.approx(0.1)
    assert normalize_hour_angle(-0.1) == pytest.approx(-0.1)


def test_normalize_hour_angle_nudges_seam_inward() -> None:
    assert normalize_hour_angle(math.pi) == math.pi - HOUR_ANGLE_EPSILON
    assert normalize_hour_angle(-math.pi) == math.pi - HOUR_ANGLE_EPSILON
