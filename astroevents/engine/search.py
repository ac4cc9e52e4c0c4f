"""Search orchestration: sample, bracket, refine, validate, filter.

:class:`CrossingSearch` drives rise/set/twilight crossings and upper
transits from an :class:`~astroevents.providers.base.ObservationSource`;
:class:`ExtremumSearch` drives apsides from a
:class:`~astroevents.providers.base.DistanceSource`.  Both are pure
functions of their window, provider and configuration.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Sequence

from ..config.settings import CrossingCfg, ExtremumCfg
from ..core.angles import normalize_hour_angle
from ..core.models import (
    CrossingDirection,
    Event,
    EventKind,
    ExtremumSeek,
    Observation,
    Sample,
    SearchWindow,
)
from ..core.time import Instant
from ..errors import InvalidConfigurationError, UnsupportedEventError
from ..observability import SEARCH_DURATION
from ..providers.base import DistanceSource, ObservationSource
from .brackets import crossing_brackets, extremum_brackets, hour_angle_brackets
from .direction import confirm_direction
from .extrema import golden_section
from .filters import filter_boundary_artifacts, remove_duplicates
from .horizon import HorizonPolicy
from .interpolation import quadratic_vertex_instant
from .roots import refine_crossing
from .sampling import linspace, sample_count_for_days, sample_count_for_period

__all__ = ["CrossingSearch", "ExtremumSearch", "coerce_direction", "coerce_seek"]

LOG = logging.getLogger(__name__)

_CROSSING_KINDS = {
    CrossingDirection.RISING: EventKind.RISING,
    CrossingDirection.SETTING: EventKind.SETTING,
}
_EXTREMUM_KINDS = {
    ExtremumSeek.MAXIMUM: EventKind.APOAPSIS,
    ExtremumSeek.MINIMUM: EventKind.PERIAPSIS,
}


def _hour_angle_rad(observation: Observation) -> float:
    # Brackets and refinement must see the same (−π, π] wrap.
    return normalize_hour_angle(math.radians(observation.hour_angle_deg))


def coerce_direction(value: CrossingDirection | str) -> CrossingDirection:
    try:
        return CrossingDirection(value)
    except ValueError as exc:
        raise UnsupportedEventError(f"unsupported crossing direction {value!r}") from exc


def coerce_seek(value: ExtremumSeek | str) -> ExtremumSeek:
    try:
        return ExtremumSeek(value)
    except ValueError as exc:
        raise UnsupportedEventError(
            f"unsupported extremum type {value!r}; expected 'maximum' or 'minimum'"
        ) from exc


class CrossingSearch:
    """Threshold crossings and upper transits for one body and observer."""

    def __init__(
        self,
        source: ObservationSource,
        horizon: HorizonPolicy | None = None,
        cfg: CrossingCfg | None = None,
    ) -> None:
        self.source = source
        self.horizon = horizon or HorizonPolicy.standard()
        self.cfg = cfg or CrossingCfg()

    def with_horizon(self, horizon: HorizonPolicy) -> CrossingSearch:
        """Return a search sharing this source and configuration."""

        return CrossingSearch(self.source, horizon, self.cfg)

    # -------------------- evaluation --------------------

    def relative_altitude(self, observation: Observation) -> float:
        return observation.altitude_deg - self.horizon.threshold_deg(observation.distance_m)

    def _relative_at(self, instant: Instant, stage: str) -> float:
        return self.relative_altitude(self.source.observe(instant, stage=stage))

    def _hour_angle_at(self, instant: Instant, stage: str) -> float:
        return _hour_angle_rad(self.source.observe(instant, stage=stage))

    # -------------------- sampling --------------------

    def sample(self, window: SearchWindow) -> list[Sample]:
        """Observe the window on the uniform grid; ``aux`` holds the :class:`Observation`."""

        count = sample_count_for_days(window.duration_days, self.cfg.samples_per_day)
        samples = []
        for instant in linspace(window, count):
            observation = self.source.observe(instant, stage="sample")
            samples.append(Sample(instant, self.relative_altitude(observation), observation))
        LOG.debug("crossing search sampled %d points", len(samples))
        return samples

    def rebase(self, samples: Sequence[Sample]) -> list[Sample]:
        """Recompute sample values against this search's horizon without re-observing."""

        return [Sample(s.instant, self.relative_altitude(s.aux), s.aux) for s in samples]

    # -------------------- crossings --------------------

    def crossings(
        self,
        window: SearchWindow,
        direction: CrossingDirection | str,
        *,
        samples: Sequence[Sample] | None = None,
        first_only: bool = False,
    ) -> list[Event]:
        """Return refined, direction-confirmed crossings strictly inside ``window``."""

        direction = coerce_direction(direction)
        started = time.perf_counter()
        if samples is None:
            samples = self.sample(window)
        brackets = crossing_brackets(samples, direction)
        LOG.debug("found %d %s brackets", len(brackets), direction.value)

        events: list[Event] = []
        for bracket in brackets:
            result = refine_crossing(
                bracket,
                lambda instant: self._relative_at(instant, "refine"),
                strategy=self.cfg.strategy,
                iterations=self.cfg.bisection_iterations,
                tolerance_seconds=self.cfg.regula_falsi_tolerance_seconds,
                max_iter=self.cfg.regula_falsi_max_iter,
            )
            LOG.debug(
                "refined %s crossing at JD(TT) %.8f (%s, %d evaluations)",
                direction.value,
                result.instant.jd_tt,
                result.status,
                result.evaluations,
            )
            confirmed = confirm_direction(
                result.instant,
                direction,
                lambda instant: self._relative_at(instant, "direction"),
                offset_seconds=self.cfg.direction_offset_seconds,
            )
            if not confirmed:
                LOG.debug("rejected %s crossing at JD(TT) %.8f: wrong direction", direction.value, result.instant.jd_tt)
                continue
            if not window.contains_strictly(result.instant):
                LOG.debug("dropped %s crossing outside the window", direction.value)
                continue
            azimuth = self.source.observe(result.instant, stage="companion").azimuth_deg
            events.append(Event(result.instant, _CROSSING_KINDS[direction], azimuth))
            if first_only:
                break

        SEARCH_DURATION.labels(search=direction.value).observe(time.perf_counter() - started)
        return events

    # -------------------- transits --------------------

    def transits(
        self,
        window: SearchWindow,
        *,
        samples: Sequence[Sample] | None = None,
        first_only: bool = False,
    ) -> list[Event]:
        """Return upper meridian passages strictly inside ``window``.

        Hour-angle brackets are refined as roots of the normalised hour
        angle. When the window contains no hour-angle crossing, altitude
        maxima are located with the quadratic vertex of the surrounding
        samples instead (the middle sample when the fit degenerates).
        """

        started = time.perf_counter()
        if samples is None:
            samples = self.sample(window)

        instants: list[Instant] = []
        brackets = hour_angle_brackets(samples, lambda s: _hour_angle_rad(s.aux))
        if brackets:
            for bracket in brackets:
                result = refine_crossing(
                    bracket,
                    lambda instant: self._hour_angle_at(instant, "refine"),
                    strategy=self.cfg.strategy,
                    iterations=self.cfg.bisection_iterations,
                    tolerance_seconds=self.cfg.regula_falsi_tolerance_seconds,
                    max_iter=self.cfg.regula_falsi_max_iter,
                )
                instants.append(result.instant)
        else:
            peaks = extremum_brackets(
                samples, ExtremumSeek.MAXIMUM, key=lambda s: s.aux.altitude_deg
            )
            LOG.debug("no hour-angle crossing; %d altitude maxima", len(peaks))
            for peak in peaks:
                vertex = quadratic_vertex_instant(
                    peak.left, peak.center, peak.right, value_of=lambda s: s.aux.altitude_deg
                )
                instants.append(vertex if vertex is not None else peak.center.instant)

        events: list[Event] = []
        for instant in instants:
            if not window.contains_strictly(instant):
                continue
            altitude = self.source.observe(instant, stage="companion").altitude_deg
            events.append(Event(instant, EventKind.TRANSIT, altitude))
            if first_only:
                break

        SEARCH_DURATION.labels(search="transit").observe(time.perf_counter() - started)
        return events


class ExtremumSearch:
    """Distance extrema (apsides) for one body pair."""

    def __init__(
        self,
        source: DistanceSource,
        orbital_period_days: float,
        cfg: ExtremumCfg | None = None,
    ) -> None:
        if not orbital_period_days > 0.0:
            raise InvalidConfigurationError(
                f"orbital period must be positive, got {orbital_period_days}"
            )
        self.source = source
        self.orbital_period_days = float(orbital_period_days)
        self.cfg = cfg or ExtremumCfg()

    def sample(self, window: SearchWindow) -> list[Sample]:
        intervals = sample_count_for_period(
            window.duration_days,
            self.orbital_period_days,
            self.cfg.samples_per_period,
            self.cfg.min_samples,
        )
        samples = [
            Sample(instant, self.source.distance_m(instant, stage="sample"))
            for instant in linspace(window, intervals + 1)
        ]
        LOG.debug("extremum search sampled %d points", len(samples))
        return samples

    def find(self, window: SearchWindow, seek: ExtremumSeek | str) -> list[Event]:
        """Return refined extrema of ``seek`` type, de-duplicated and away from the edges."""

        seek = coerce_seek(seek)
        started = time.perf_counter()
        samples = self.sample(window)
        brackets = extremum_brackets(samples, seek)
        LOG.debug("found %d %s brackets", len(brackets), seek.value)

        refined: list[Event] = []
        for bracket in brackets:
            result = golden_section(
                bracket.left.instant,
                bracket.right.instant,
                lambda instant: self.source.distance_m(instant, stage="golden_section"),
                seek,
                tolerance=self.cfg.golden_section_tolerance,
                max_iterations=self.cfg.max_iterations,
            )
            refined.append(Event(result.instant, _EXTREMUM_KINDS[seek], result.value))

        unique = remove_duplicates(refined, self.cfg.duplicate_threshold_days)
        events = filter_boundary_artifacts(unique, window, self.cfg.boundary_buffer_days)
        if len(events) != len(refined):
            LOG.debug("filtered %d of %d %s events", len(refined) - len(events), len(refined), seek.value)

        SEARCH_DURATION.labels(search=seek.value).observe(time.perf_counter() - started)
        return events
