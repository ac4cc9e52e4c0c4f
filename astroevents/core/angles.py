"""Angular utilities shared by the crossing detectors.

Hour angles arrive from providers in degrees with no particular wrap.
The meridian-crossing detector compares consecutive samples after
reducing them into ``(−π, π]``; a value sitting right on the ±π seam
would flip sign from one evaluation to the next purely through
floating-point jitter, so :func:`normalize_hour_angle` pulls such values
inward by :data:`HOUR_ANGLE_EPSILON`.
"""

from __future__ import annotations

import math
from typing import Final

__all__ = [
    "EPSILON_DEG",
    "HOUR_ANGLE_EPSILON",
    "normalize_degrees",
    "normalize_hour_angle",
    "signed_delta",
]


EPSILON_DEG: Final[float] = 1e-9
HOUR_ANGLE_EPSILON: Final[float] = 1e-9
TAU: Final[float] = 2.0 * math.pi


def normalize_degrees(angle: float) -> float:
    """Return ``angle`` normalised to the ``[0, 360)`` interval.

    Values within ``1e-9`` of ``360`` are coerced to ``0`` so azimuths
    compare consistently across the wrap.
    """

    wrapped = float(angle) % 360.0
    if wrapped >= 360.0 - EPSILON_DEG:
        wrapped = 0.0
    return wrapped if wrapped >= 0.0 else wrapped + 360.0


def signed_delta(angle: float) -> float:
    """Return ``angle`` (degrees) wrapped to the ``[-180, 180)`` interval."""

    return (float(angle) + 180.0) % 360.0 - 180.0


def normalize_hour_angle(angle_rad: float, *, epsilon: float = HOUR_ANGLE_EPSILON) -> float:
    """Reduce an hour angle in radians into ``(−π, π]``.

    Results closer than ``epsilon`` to either end of the interval are
    nudged inward by ``epsilon``.
    """

    wrapped = float(angle_rad) % TAU
    if wrapped > math.pi:
        wrapped -= TAU
    if wrapped > math.pi - epsilon:
        return math.pi - epsilon
    if wrapped < -math.pi + epsilon:
        return -math.pi + epsilon
    return wrapped
