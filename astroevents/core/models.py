"""Value types flowing through a search.

Samples and brackets live for a single search invocation; :class:`Event`
is the only type handed back to callers.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import InvalidConfigurationError
from .time import SECONDS_PER_DAY, Instant

__all__ = [
    "Bracket",
    "CrossingDirection",
    "Event",
    "EventKind",
    "ExtremumBracket",
    "ExtremumSeek",
    "Observation",
    "Sample",
    "SearchWindow",
]


class CrossingDirection(str, Enum):
    """Direction of a threshold crossing."""

    RISING = "rising"
    SETTING = "setting"

    @property
    def sign(self) -> int:
        return 1 if self is CrossingDirection.RISING else -1


class ExtremumSeek(str, Enum):
    MAXIMUM = "maximum"
    MINIMUM = "minimum"


class EventKind(str, Enum):
    RISING = "rising"
    TRANSIT = "transit"
    SETTING = "setting"
    APOAPSIS = "apoapsis"
    PERIAPSIS = "periapsis"


@dataclass(frozen=True, slots=True)
class Observation:
    """Quantities returned by a position provider for one instant."""

    altitude_deg: float
    azimuth_deg: float
    hour_angle_deg: float
    distance_m: float | None = None


@dataclass(frozen=True, slots=True)
class Sample:
    """One evaluation of the driving quantity.

    ``value`` is the scalar the detectors look at (altitude above the
    horizon threshold, hour angle or distance); ``aux`` carries whatever
    the caller needs afterwards, usually the :class:`Observation`.
    """

    instant: Instant
    value: float
    aux: Any = None


@dataclass(frozen=True, slots=True)
class Bracket:
    """Adjacent sample pair believed to contain exactly one crossing."""

    left_instant: Instant
    right_instant: Instant
    left_value: float
    right_value: float

    @classmethod
    def from_samples(cls, left: Sample, right: Sample) -> Bracket:
        return cls(left.instant, right.instant, left.value, right.value)

    @property
    def width_seconds(self) -> float:
        return self.right_instant.diff_seconds(self.left_instant)


@dataclass(frozen=True, slots=True)
class ExtremumBracket:
    """Three consecutive samples whose centre is a local extremum."""

    left: Sample
    center: Sample
    right: Sample

    @property
    def width_seconds(self) -> float:
        return self.right.instant.diff_seconds(self.left.instant)


@dataclass(frozen=True, slots=True)
class SearchWindow:
    """Closed interval of TT instants searched for events."""

    start: Instant
    end: Instant

    def __post_init__(self) -> None:
        if not self.start < self.end:
            raise InvalidConfigurationError(
                "search window start must be before its end "
                f"(start={self.start.jd_tt!r}, end={self.end.jd_tt!r})"
            )

    @classmethod
    def from_datetimes(cls, start: _dt.datetime, end: _dt.datetime) -> SearchWindow:
        return cls(Instant.from_datetime(start), Instant.from_datetime(end))

    @classmethod
    def for_day(cls, day: _dt.date, utc_offset_hours: float = 0.0) -> SearchWindow:
        """Return the window ``00:00:00``–``23:59:59`` local time on ``day``."""

        tz = _dt.timezone(_dt.timedelta(hours=utc_offset_hours))
        start = _dt.datetime(day.year, day.month, day.day, tzinfo=tz)
        end = start + _dt.timedelta(hours=23, minutes=59, seconds=59)
        return cls.from_datetimes(start, end)

    @property
    def duration_days(self) -> float:
        return self.end.diff_days(self.start)

    @property
    def duration_seconds(self) -> float:
        return self.duration_days * SECONDS_PER_DAY

    def contains_strictly(self, instant: Instant) -> bool:
        return self.start < instant < self.end

    def near_edge(self, instant: Instant, buffer_days: float) -> bool:
        """Return ``True`` when ``instant`` is within ``buffer_days`` of an edge."""

        return (
            abs(instant.diff_days(self.start)) < buffer_days
            or abs(instant.diff_days(self.end)) < buffer_days
        )


@dataclass(frozen=True, slots=True)
class Event:
    """Refined event instant with an optional companion value.

    ``companion_value`` is the azimuth (degrees) for rise/set, the
    altitude (degrees) for transits and the distance (metres) for apsides.
    """

    instant: Instant
    kind: EventKind
    companion_value: float | None = None

    def to_datetime(self) -> _dt.datetime:
        """UTC timestamp rounded to the nearest second."""

        return self.instant.rounded_datetime()

    def as_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "time": self.to_datetime().isoformat().replace("+00:00", "Z"),
            "jd_tt": self.instant.jd_tt,
            "companion_value": self.companion_value,
        }
