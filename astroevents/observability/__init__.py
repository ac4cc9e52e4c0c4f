"""Runtime observability primitives for the search engine."""

from __future__ import annotations

from .metrics import (
    CACHE_HITS,
    CACHE_MISSES,
    PROVIDER_EVALUATIONS,
    PROVIDER_FAILURES,
    SEARCH_DURATION,
    ensure_metrics_registered,
)

__all__ = [
    "CACHE_HITS",
    "CACHE_MISSES",
    "PROVIDER_EVALUATIONS",
    "PROVIDER_FAILURES",
    "SEARCH_DURATION",
    "ensure_metrics_registered",
]
