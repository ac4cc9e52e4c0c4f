"""Civil, nautical and astronomical twilight."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from ..cache import PositionCache
from ..config.settings import Settings, build_cache, default_settings
from ..core.models import CrossingDirection, Event, Sample, SearchWindow
from ..engine.horizon import HorizonPolicy
from ..engine.search import CrossingSearch
from ..errors import UnsupportedEventError
from ..providers.base import ObservationSource, PositionProvider

__all__ = [
    "PeriodOfDay",
    "TWILIGHT_ZENITH_ANGLES_DEG",
    "Twilight",
    "TwilightCalculator",
    "TwilightEvents",
]


class Twilight(str, Enum):
    CIVIL = "civil"
    NAUTICAL = "nautical"
    ASTRONOMICAL = "astronomical"


class PeriodOfDay(str, Enum):
    MORNING = "morning"
    EVENING = "evening"

    @property
    def direction(self) -> CrossingDirection:
        return CrossingDirection.RISING if self is PeriodOfDay.MORNING else CrossingDirection.SETTING


TWILIGHT_ZENITH_ANGLES_DEG: Final[dict[Twilight, float]] = {
    Twilight.CIVIL: 96.0,
    Twilight.NAUTICAL: 102.0,
    Twilight.ASTRONOMICAL: 108.0,
}


def _coerce_period(value: PeriodOfDay | str) -> PeriodOfDay:
    try:
        return PeriodOfDay(value)
    except ValueError as exc:
        raise UnsupportedEventError(
            f"unsupported period of the day {value!r}; expected 'morning' or 'evening'"
        ) from exc


def _coerce_twilight(value: Twilight | str) -> Twilight:
    try:
        return Twilight(value)
    except ValueError as exc:
        raise UnsupportedEventError(f"unsupported twilight {value!r}") from exc


@dataclass(frozen=True, slots=True)
class TwilightEvents:
    """Morning and evening crossings for each twilight, in time order.

    Morning twilight starts when the Sun rises through the zenith angle;
    evening twilight ends when it sets through it.
    """

    morning_civil: tuple[Event, ...] = ()
    evening_civil: tuple[Event, ...] = ()
    morning_nautical: tuple[Event, ...] = ()
    evening_nautical: tuple[Event, ...] = ()
    morning_astronomical: tuple[Event, ...] = ()
    evening_astronomical: tuple[Event, ...] = ()

    def get(self, twilight: Twilight | str, period: PeriodOfDay | str) -> tuple[Event, ...]:
        twilight = _coerce_twilight(twilight)
        period = _coerce_period(period)
        return getattr(self, f"{period.value}_{twilight.value}")

    def as_dict(self) -> dict[str, list[dict[str, object]]]:
        return {
            f"{period.value}_{twilight.value}": [
                event.as_dict() for event in self.get(twilight, period)
            ]
            for twilight in Twilight
            for period in PeriodOfDay
        }


class TwilightCalculator:
    """Twilight instants from a solar position provider."""

    def __init__(
        self,
        provider: PositionProvider,
        *,
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
        self.search = CrossingSearch(self.source, HorizonPolicy.sun(), self.settings.crossing)

    def _crossings(
        self,
        window: SearchWindow,
        zenith_angle_deg: float,
        period: PeriodOfDay,
        samples: list[Sample],
        *,
        first_only: bool = False,
    ) -> list[Event]:
        search = self.search.with_horizon(HorizonPolicy.zenith_angle(zenith_angle_deg))
        return search.crossings(
            window, period.direction, samples=search.rebase(samples), first_only=first_only
        )

    def events_between(self, window: SearchWindow) -> TwilightEvents:
        samples = self.search.sample(window)
        found: dict[str, tuple[Event, ...]] = {}
        for twilight, zenith in TWILIGHT_ZENITH_ANGLES_DEG.items():
            for period in PeriodOfDay:
                found[f"{period.value}_{twilight.value}"] = tuple(
                    self._crossings(window, zenith, period, samples)
                )
        return TwilightEvents(**found)

    def time_for_zenith_angle(
        self,
        window: SearchWindow,
        period_of_the_day: PeriodOfDay | str,
        zenith_angle_deg: float,
    ) -> Event | None:
        """First crossing of ``zenith_angle_deg`` in the given period, or ``None``."""

        period = _coerce_period(period_of_the_day)
        events = self._crossings(
            window, zenith_angle_deg, period, self.search.sample(window), first_only=True
        )
        return events[0] if events else None

    def time_for(
        self,
        window: SearchWindow,
        twilight: Twilight | str,
        period_of_the_day: PeriodOfDay | str,
    ) -> Event | None:
        """First crossing of a named twilight in the given period, or ``None``."""

        zenith = TWILIGHT_ZENITH_ANGLES_DEG[_coerce_twilight(twilight)]
        return self.time_for_zenith_angle(window, period_of_the_day, zenith)
