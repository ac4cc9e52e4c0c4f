"""astroevents package bootstrap and curated public API surface."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version as _get_version

from .cache import LRUCache, NullCache
from .config import Settings, default_settings, load_settings
from .core import CrossingDirection, Event, EventKind, ExtremumSeek, Instant, Observation, SearchWindow
from .engine import HorizonPolicy
from .errors import (
    AstroEventsError,
    InvalidConfigurationError,
    PositionProviderError,
    UnsupportedEventError,
)
from .events import (
    ApsisCalculator,
    PeriodOfDay,
    RiseTransitSetCalculator,
    Twilight,
    TwilightCalculator,
    orbital_period_for,
)

LOG = logging.getLogger(__name__)

try:
    __version__ = _get_version("astroevents")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0"


def get_version() -> str:
    """Return the resolved astroevents package version."""

    return __version__


__all__ = [
    "ApsisCalculator",
    "AstroEventsError",
    "CrossingDirection",
    "Event",
    "EventKind",
    "ExtremumSeek",
    "HorizonPolicy",
    "Instant",
    "InvalidConfigurationError",
    "LRUCache",
    "NullCache",
    "Observation",
    "PeriodOfDay",
    "PositionProviderError",
    "RiseTransitSetCalculator",
    "SearchWindow",
    "Settings",
    "Twilight",
    "TwilightCalculator",
    "UnsupportedEventError",
    "__version__",
    "default_settings",
    "get_version",
    "load_settings",
    "orbital_period_for",
]
