"""Time helpers used across the event-finding engine.

Every search runs in Terrestrial Time (TT) expressed as a Julian day.
Callers hand in timezone-aware ``datetime`` values (naive values are
treated as UTC) and receive :class:`Instant` objects back; the engine
itself never looks at civil time.  ΔT (TT − UT) is derived from a
polynomial approximation of the United States Naval Observatory's
published expressions, which stays within about a second over the
1900–2100 interval.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import Final

__all__ = [
    "Instant",
    "SECONDS_PER_DAY",
    "delta_t_seconds",
    "ensure_utc",
    "jd_to_datetime",
    "julian_day",
]


SECONDS_PER_DAY: Final[float] = 86_400.0
_UNIX_EPOCH_JD: Final[float] = 2440587.5
_UNIX_EPOCH: Final[_dt.datetime] = _dt.datetime(1970, 1, 1, tzinfo=_dt.UTC)


def ensure_utc(moment: _dt.datetime) -> _dt.datetime:
    """Return ``moment`` converted to UTC."""

    tzinfo = moment.tzinfo
    if tzinfo is None:
        return moment.replace(tzinfo=_dt.UTC)
    return moment.astimezone(_dt.UTC)


def julian_day(moment: _dt.datetime) -> float:
    """Return the Julian day for a UTC ``moment``."""

    moment = ensure_utc(moment)
    year = moment.year
    month = moment.month
    day = moment.day
    frac = (
        moment.hour + moment.minute / 60.0 + (moment.second + moment.microsecond / 1e6) / 3600.0
    ) / 24.0

    if month <= 2:
        year -= 1
        month += 12

    a = year // 100
    b = 2 - a + (a // 4)
    jd = int(365.25 * (year + 4716)) + int(30.6001 * (month + 1)) + day + b - 1524.5
    return jd + frac


def jd_to_datetime(jd_utc: float) -> _dt.datetime:
    """Return the UTC ``datetime`` for a Julian day expressed in UTC."""

    seconds = (jd_utc - _UNIX_EPOCH_JD) * SECONDS_PER_DAY
    return _UNIX_EPOCH + _dt.timedelta(seconds=seconds)


def delta_t_seconds(moment: _dt.datetime) -> float:
    """Polynomial approximation of ΔT with second precision."""

    year = moment.year + (moment.timetuple().tm_yday - 0.5) / 365.25

    if 1900 <= year <= 2050:
        t = year - 2000.0
        return 62.92 + 0.32217 * t + 0.005589 * t * t

    t = (year - 1820.0) / 100.0
    return 32.0 * (t * t) - 20.0


@dataclass(frozen=True, order=True, slots=True)
class Instant:
    """Immutable point on the TT time scale.

    ``jd_tt`` is the Terrestrial Time Julian day.  Arithmetic helpers work
    in seconds or days and always return new instances.
    """

    jd_tt: float

    @classmethod
    def from_terrestrial_time(cls, jd_tt: float) -> Instant:
        return cls(float(jd_tt))

    @classmethod
    def from_datetime(cls, moment: _dt.datetime) -> Instant:
        """Convert a civil timestamp (naive means UTC) to TT."""

        utc = ensure_utc(moment)
        jd_utc = julian_day(utc)
        return cls(jd_utc + delta_t_seconds(utc) / SECONDS_PER_DAY)

    @property
    def delta_t_seconds(self) -> float:
        return delta_t_seconds(jd_to_datetime(self.jd_tt))

    @property
    def jd_utc(self) -> float:
        return self.jd_tt - self.delta_t_seconds / SECONDS_PER_DAY

    def to_datetime(self) -> _dt.datetime:
        """Return the instant as an aware UTC ``datetime``."""

        return jd_to_datetime(self.jd_utc)

    def rounded_datetime(self) -> _dt.datetime:
        """Return :meth:`to_datetime` rounded to the nearest whole second."""

        moment = self.to_datetime()
        floored = moment.replace(microsecond=0)
        if moment.microsecond >= 500_000:
            floored += _dt.timedelta(seconds=1)
        return floored

    def plus_seconds(self, seconds: float) -> Instant:
        return Instant(self.jd_tt + float(seconds) / SECONDS_PER_DAY)

    def plus_days(self, days: float) -> Instant:
        return Instant(self.jd_tt + float(days))

    def diff_days(self, other: Instant) -> float:
        """Return ``self - other`` in days."""

        return self.jd_tt - other.jd_tt

    def diff_seconds(self, other: Instant) -> float:
        """Return ``self - other`` in seconds."""

        return (self.jd_tt - other.jd_tt) * SECONDS_PER_DAY

    def isoformat(self) -> str:
        return self.to_datetime().isoformat().replace("+00:00", "Z")
