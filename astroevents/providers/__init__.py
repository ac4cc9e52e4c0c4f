"""Position and distance providers consumed by the search engine."""

from __future__ import annotations

from .base import DistanceProvider, DistanceSource, ObservationSource, PositionProvider

__all__ = [
    "DistanceProvider",
    "DistanceSource",
    "ObservationSource",
    "PositionProvider",
]
