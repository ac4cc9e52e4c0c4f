"""Event-type policies built on the search engine."""

from __future__ import annotations

from .apsides import ORBITAL_PERIODS_DAYS, ApsisCalculator, orbital_period_for
from .rise_transit_set import RiseTransitSetCalculator, RiseTransitSetEvent, RiseTransitSetEvents
from .twilight import (
    TWILIGHT_ZENITH_ANGLES_DEG,
    PeriodOfDay,
    Twilight,
    TwilightCalculator,
    TwilightEvents,
)

__all__ = [
    "ApsisCalculator",
    "ORBITAL_PERIODS_DAYS",
    "PeriodOfDay",
    "RiseTransitSetCalculator",
    "RiseTransitSetEvent",
    "RiseTransitSetEvents",
    "TWILIGHT_ZENITH_ANGLES_DEG",
    "Twilight",
    "TwilightCalculator",
    "TwilightEvents",
    "orbital_period_for",
]
