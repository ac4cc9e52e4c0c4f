"""Front-ends between the search engine and position providers.

A *position provider* is anything that can report where a body appears
for one observer at one :class:`~astroevents.core.time.Instant`; a
*distance provider* reports the separation between two bodies.  Both are
expensive, so the engine never calls them directly.  It goes through
:class:`ObservationSource` / :class:`DistanceSource`, which

* round the instant to the configured cache precision and evaluate the
  provider at the rounded instant, so results are identical whether or
  not a real cache is attached;
* memoise results in the supplied cache handle;
* wrap provider failures in :class:`~astroevents.errors.PositionProviderError`
  naming the instant and search stage.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from typing import Final, Protocol, TypeVar, runtime_checkable

from ..cache import CacheKey, NullCache, PositionCache
from ..core.models import Observation
from ..core.time import Instant
from ..errors import PositionProviderError
from ..observability import CACHE_HITS, CACHE_MISSES, PROVIDER_EVALUATIONS, PROVIDER_FAILURES

__all__ = [
    "DistanceProvider",
    "DistanceSource",
    "ObservationSource",
    "PositionProvider",
]

LOG = logging.getLogger(__name__)

T = TypeVar("T")
_MISSING: Final = object()


@runtime_checkable
class PositionProvider(Protocol):
    def observe(self, instant: Instant) -> Observation: ...


@runtime_checkable
class DistanceProvider(Protocol):
    def distance_m(self, instant: Instant) -> float: ...


class _ProviderIdentity:
    """Identity-based cache discriminator that keeps its provider alive.

    The provider's address cannot be reused by another object while any
    cache entry keyed on it exists.
    """

    __slots__ = ("provider",)

    def __init__(self, provider: object) -> None:
        self.provider = provider

    def __hash__(self) -> int:
        return id(self.provider)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _ProviderIdentity) and other.provider is self.provider

    def __repr__(self) -> str:
        return f"_ProviderIdentity({type(self.provider).__name__}@{id(self.provider):#x})"


class _MemoisedSource:
    kind: str = ""

    def __init__(
        self,
        provider: object,
        *,
        cache: PositionCache | None = None,
        precision: int = 8,
        discriminator: Hashable | None = None,
    ) -> None:
        self.provider = provider
        self.cache: PositionCache = cache if cache is not None else NullCache()
        self.precision = precision
        if discriminator is None:
            discriminator = getattr(provider, "cache_token", None)
        if discriminator is None:
            discriminator = _ProviderIdentity(provider)
        self.discriminator: Hashable = discriminator
        self.evaluations = 0

    def _lookup(self, instant: Instant, stage: str, compute: Callable[[Instant], T]) -> T:
        key = CacheKey.generate(self.kind, instant.jd_tt, self.discriminator, precision=self.precision)
        cached = self.cache.get(key, _MISSING)
        if cached is not _MISSING:
            CACHE_HITS.labels(kind=self.kind).inc()
            return cached
        CACHE_MISSES.labels(kind=self.kind).inc()

        rounded = Instant(CacheKey.round_terrestrial_time(instant.jd_tt, self.precision))
        PROVIDER_EVALUATIONS.labels(stage=stage).inc()
        self.evaluations += 1
        try:
            value = compute(rounded)
        except Exception as exc:
            PROVIDER_FAILURES.labels(stage=stage).inc()
            LOG.warning(
                "%s provider failed during %s at JD(TT) %.8f: %s",
                self.kind,
                stage,
                rounded.jd_tt,
                exc,
            )
            raise PositionProviderError(rounded, stage, f"{self.kind} provider failed: {exc}") from exc
        self.cache.put(key, value)
        return value


class ObservationSource(_MemoisedSource):
    """Memoising wrapper around a :class:`PositionProvider`."""

    kind = "observed_by"

    def __init__(
        self,
        provider: PositionProvider,
        *,
        cache: PositionCache | None = None,
        precision: int = 8,
        discriminator: Hashable | None = None,
    ) -> None:
        super().__init__(provider, cache=cache, precision=precision, discriminator=discriminator)

    def observe(self, instant: Instant, *, stage: str = "sample") -> Observation:
        return self._lookup(instant, stage, self.provider.observe)


class DistanceSource(_MemoisedSource):
    """Memoising wrapper around a :class:`DistanceProvider`."""

    kind = "distance"

    def __init__(
        self,
        provider: DistanceProvider,
        *,
        cache: PositionCache | None = None,
        precision: int = 8,
        discriminator: Hashable | None = None,
    ) -> None:
        super().__init__(provider, cache=cache, precision=precision, discriminator=discriminator)

    def distance_m(self, instant: Instant, *, stage: str = "sample") -> float:
        return self._lookup(instant, stage, self.provider.distance_m)
