"""Rising, upper transit and setting of a body for one observer."""

from __future__ import annotations

import datetime as _dt
import logging
from dataclasses import dataclass

from ..cache import PositionCache
from ..config.settings import Settings, build_cache, default_settings
from ..core.models import CrossingDirection, Event, SearchWindow
from ..engine.horizon import HorizonPolicy
from ..engine.search import CrossingSearch
from ..providers.base import ObservationSource, PositionProvider

__all__ = [
    "RiseTransitSetCalculator",
    "RiseTransitSetEvent",
    "RiseTransitSetEvents",
]

LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RiseTransitSetEvent:
    """First rising, transit and setting in a window; ``None`` when absent."""

    rising: Event | None = None
    transit: Event | None = None
    setting: Event | None = None

    def as_dict(self) -> dict[str, object]:
        return {
            "rising": self.rising.as_dict() if self.rising else None,
            "transit": self.transit.as_dict() if self.transit else None,
            "setting": self.setting.as_dict() if self.setting else None,
        }


@dataclass(frozen=True, slots=True)
class RiseTransitSetEvents:
    """Every rising, transit and setting in a window, in time order."""

    risings: tuple[Event, ...] = ()
    transits: tuple[Event, ...] = ()
    settings: tuple[Event, ...] = ()

    def first(self) -> RiseTransitSetEvent:
        return RiseTransitSetEvent(
            self.risings[0] if self.risings else None,
            self.transits[0] if self.transits else None,
            self.settings[0] if self.settings else None,
        )

    def as_dict(self) -> dict[str, object]:
        return {
            "risings": [event.as_dict() for event in self.risings],
            "transits": [event.as_dict() for event in self.transits],
            "settings": [event.as_dict() for event in self.settings],
        }


class RiseTransitSetCalculator:
    """Find rise, transit and set events of a body.

    Parameters
    ----------
    provider:
        Position provider for the body and observer.
    horizon:
        Horizon-threshold policy; :meth:`HorizonPolicy.standard` by default.
        Use :meth:`HorizonPolicy.sun` for the Sun and
        :meth:`HorizonPolicy.moon` for the Moon.
    settings:
        Engine settings; defaults when omitted.
    cache:
        Explicit cache handle. When omitted one is built from
        ``settings.cache`` and owned by this calculator.
    """

    def __init__(
        self,
        provider: PositionProvider,
        *,
        horizon: HorizonPolicy | None = None,
        settings: Settings | None = None,
        cache: PositionCache | None = None,
    ) -> None:
        self.settings = settings or default_settings()
        self.cache = cache if cache is not None else build_cache(self.settings.cache)
        self.source = ObservationSource(
            provider,
            cache=self.cache,
            precision=self.settings.cache.precision_for(ObservationSource.kind),
        )
        self.search = CrossingSearch(self.source, horizon, self.settings.crossing)

    def events_between(self, window: SearchWindow) -> RiseTransitSetEvents:
        samples = self.search.sample(window)
        result = RiseTransitSetEvents(
            tuple(self.search.crossings(window, CrossingDirection.RISING, samples=samples)),
            tuple(self.search.transits(window, samples=samples)),
            tuple(self.search.crossings(window, CrossingDirection.SETTING, samples=samples)),
        )
        LOG.debug(
            "rise/transit/set: %d risings, %d transits, %d settings",
            len(result.risings),
            len(result.transits),
            len(result.settings),
        )
        return result

    def event_on(self, window: SearchWindow) -> RiseTransitSetEvent:
        samples = self.search.sample(window)

        def first(events: list[Event]) -> Event | None:
            return events[0] if events else None

        return RiseTransitSetEvent(
            first(self.search.crossings(window, CrossingDirection.RISING, samples=samples, first_only=True)),
            first(self.search.transits(window, samples=samples, first_only=True)),
            first(self.search.crossings(window, CrossingDirection.SETTING, samples=samples, first_only=True)),
        )

    def events_on(self, day: _dt.date, utc_offset_hours: float = 0.0) -> RiseTransitSetEvent:
        """Convenience wrapper over :meth:`event_on` for one local calendar day."""

        return self.event_on(SearchWindow.for_day(day, utc_offset_hours))
