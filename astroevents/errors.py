"""Exception taxonomy for the event-finding engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .core.time import Instant

__all__ = [
    "AstroEventsError",
    "InvalidConfigurationError",
    "PositionProviderError",
    "UnsupportedEventError",
]


class AstroEventsError(Exception):
    """Base class for errors raised by :mod:`astroevents`."""


class InvalidConfigurationError(AstroEventsError, ValueError):
    """Raised when a search is configured with values it cannot honour."""


class UnsupportedEventError(InvalidConfigurationError):
    """Raised for an unknown event kind, twilight or period of the day."""


class PositionProviderError(AstroEventsError, RuntimeError):
    """Raised when the underlying position provider fails.

    The failing ``instant`` and the search ``stage`` that requested it are
    kept on the exception; the provider's own exception is chained as
    ``__cause__``.
    """

    def __init__(self, instant: Instant, stage: str, message: str | None = None) -> None:
        self.instant = instant
        self.stage = stage
        detail = message or "position provider failed"
        super().__init__(f"{detail} during {stage} at JD(TT) {instant.jd_tt:.8f}")
