"""Apoapsis and periapsis of a body relative to its primary."""

from __future__ import annotations

from typing import Final

from ..cache import PositionCache
from ..config.settings import Settings, build_cache, default_settings
from ..core.models import Event, ExtremumSeek, SearchWindow
from ..engine.search import ExtremumSearch
from ..errors import UnsupportedEventError
from ..providers.base import DistanceProvider, DistanceSource

__all__ = ["ApsisCalculator", "ORBITAL_PERIODS_DAYS", "orbital_period_for"]

# Sidereal periods in days; the Moon uses the anomalistic month.
ORBITAL_PERIODS_DAYS: Final[dict[str, float]] = {
    "moon": 27.504339,
    "mercury": 87.969,
    "venus": 224.701,
    "earth": 365.256,
    "mars": 686.98,
    "jupiter": 4332.59,
    "saturn": 10759.22,
    "uranus": 30688.5,
    "neptune": 60182.0,
}


def orbital_period_for(name: str) -> float:
    """Return the tabulated orbital period of ``name`` in days."""

    try:
        return ORBITAL_PERIODS_DAYS[name.strip().lower()]
    except KeyError as exc:
        raise UnsupportedEventError(
            f"no orbital period for {name!r}; expected one of {', '.join(ORBITAL_PERIODS_DAYS)}"
        ) from exc


class ApsisCalculator:
    def __init__(
        self,
        provider: DistanceProvider,
        orbital_period_days: float,
        *,
        settings: Settings | None = None,
        cache: PositionCache | None = None,
    ) -> None:
        self.settings = settings or default_settings()
        self.cache = cache if cache is not None else build_cache(self.settings.cache)
        self.source = DistanceSource(
            provider,
            cache=self.cache,
            precision=self.settings.cache.precision_for(DistanceSource.kind),
        )
        self.search = ExtremumSearch(self.source, orbital_period_days, self.settings.extremum)

    def find_extrema(self, window: SearchWindow, seek: ExtremumSeek | str) -> list[Event]:
        return self.search.find(window, seek)

    def apoapsis_events_between(self, window: SearchWindow) -> list[Event]:
        return self.find_extrema(window, ExtremumSeek.MAXIMUM)

    def periapsis_events_between(self, window: SearchWindow) -> list[Event]:
        return self.find_extrema(window, ExtremumSeek.MINIMUM)
