"""Prometheus metric definitions shared across the search engine."""

from __future__ import annotations

from collections.abc import Iterable

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

__all__ = [
    "CACHE_HITS",
    "CACHE_MISSES",
    "PROVIDER_EVALUATIONS",
    "PROVIDER_FAILURES",
    "SEARCH_DURATION",
    "ensure_metrics_registered",
]


CACHE_HITS = Counter(
    "astroevents_cache_hits_total",
    "Total position lookups served from the memoisation cache.",
    ("kind",),
    registry=None,
)

CACHE_MISSES = Counter(
    "astroevents_cache_misses_total",
    "Total position lookups that required a provider evaluation.",
    ("kind",),
    registry=None,
)

PROVIDER_EVALUATIONS = Counter(
    "astroevents_provider_evaluations_total",
    "Total provider evaluations grouped by search stage.",
    ("stage",),
    registry=None,
)

PROVIDER_FAILURES = Counter(
    "astroevents_provider_failures_total",
    "Total provider failures grouped by search stage.",
    ("stage",),
    registry=None,
)

SEARCH_DURATION = Histogram(
    "astroevents_search_duration_seconds",
    "Wall-clock duration of complete event searches.",
    ("search",),
    registry=None,
)


def _iter_metrics() -> Iterable[Counter | Histogram]:
    yield CACHE_HITS
    yield CACHE_MISSES
    yield PROVIDER_EVALUATIONS
    yield PROVIDER_FAILURES
    yield SEARCH_DURATION


def ensure_metrics_registered(
    registry: CollectorRegistry | None = None,
) -> None:
    """Register shared metrics with ``registry`` if not already present."""

    target = registry or REGISTRY
    for metric in _iter_metrics():
        try:
            target.register(metric)
        except ValueError:
            # Prometheus raises when a metric name already exists in the registry.
            continue
