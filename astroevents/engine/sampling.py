"""Uniform time sampling of a search window."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from typing import Any

from ..core.models import Sample, SearchWindow
from ..core.time import Instant
from ..errors import InvalidConfigurationError

__all__ = [
    "linspace",
    "sample",
    "sample_count_for_days",
    "sample_count_for_period",
]

LOG = logging.getLogger(__name__)


def sample_count_for_days(duration_days: float, samples_per_day: int) -> int:
    """Return the number of sample points for a crossing scan.

    A one-day (or shorter) window gets exactly ``samples_per_day`` points;
    longer windows keep the same density.
    """

    if samples_per_day < 2:
        raise InvalidConfigurationError(f"samples_per_day must be >= 2, got {samples_per_day}")
    return max(samples_per_day, math.ceil(duration_days * samples_per_day))


def sample_count_for_period(
    duration_days: float,
    period_days: float,
    samples_per_period: int,
    minimum: int,
) -> int:
    """Return the number of sampling intervals for an extremum scan.

    ``samples_per_period × (duration / period)``, floored, but never below
    ``minimum`` so short windows still resolve an extremum.
    """

    if period_days <= 0.0:
        raise InvalidConfigurationError(f"orbital period must be positive, got {period_days}")
    if samples_per_period < 1 or minimum < 1:
        raise InvalidConfigurationError("sample counts must be positive")
    base = int(duration_days / period_days * samples_per_period)
    return max(base, minimum)


def linspace(window: SearchWindow, count: int) -> list[Instant]:
    """Return ``count`` evenly spaced instants from ``window.start`` to ``window.end``."""

    if count < 2:
        raise InvalidConfigurationError(f"at least two sample points are required, got {count}")
    span = window.duration_days
    last = count - 1
    instants = [window.start.plus_days(span * i / last) for i in range(last)]
    instants.append(window.end)
    return instants


def sample(
    window: SearchWindow,
    count: int,
    evaluate: Callable[[Instant], tuple[float, Any]],
) -> list[Sample]:
    """Evaluate ``evaluate`` once per instant of :func:`linspace`.

    ``evaluate`` returns ``(value, aux)`` for an instant.
    """

    samples: list[Sample] = []
    for instant in linspace(window, count):
        value, aux = evaluate(instant)
        samples.append(Sample(instant, value, aux))
    LOG.debug("sampled %d points over %.4f days", len(samples), window.duration_days)
    return samples
