"""Core value types shared by the event-finding engine."""

from __future__ import annotations

from .angles import normalize_degrees, normalize_hour_angle, signed_delta
from .models import (
    Bracket,
    CrossingDirection,
    Event,
    EventKind,
    ExtremumBracket,
    ExtremumSeek,
    Observation,
    Sample,
    SearchWindow,
)
from .time import SECONDS_PER_DAY, Instant, ensure_utc, julian_day

__all__ = [
    "Bracket",
    "CrossingDirection",
    "Event",
    "EventKind",
    "ExtremumBracket",
    "ExtremumSeek",
    "Instant",
    "Observation",
    "SECONDS_PER_DAY",
    "Sample",
    "SearchWindow",
    "ensure_utc",
    "julian_day",
    "normalize_degrees",
    "normalize_hour_angle",
    "signed_delta",
]
