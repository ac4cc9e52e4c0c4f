"""Post-processing of refined extremum events."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol, TypeVar

from ..core.models import SearchWindow
from ..core.time import Instant

__all__ = ["filter_boundary_artifacts", "remove_duplicates"]


class _Timed(Protocol):
    @property
    def instant(self) -> Instant: ...


T = TypeVar("T", bound=_Timed)


def remove_duplicates(events: Iterable[T], min_separation_days: float) -> list[T]:
    """Drop events closer than ``min_separation_days`` to an already kept one.

    The first event encountered wins; input order is preserved.
    """

    kept: list[T] = []
    for event in events:
        if any(abs(event.instant.diff_days(other.instant)) < min_separation_days for other in kept):
            continue
        kept.append(event)
    return kept


def filter_boundary_artifacts(
    events: Sequence[T],
    window: SearchWindow,
    buffer_days: float,
) -> list[T]:
    """Keep events strictly inside ``window`` and at least ``buffer_days`` from its edges."""

    return [
        event
        for event in events
        if window.contains_strictly(event.instant) and not window.near_edge(event.instant, buffer_days)
    ]
