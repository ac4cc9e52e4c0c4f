"""Horizon-threshold policies.

The engine never looks at body identity. Callers choose one of these
policies to say what altitude counts as "risen" for the body they search.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Final

from ..errors import InvalidConfigurationError

__all__ = [
    "HorizonKind",
    "HorizonPolicy",
    "MOON_RADIUS_M",
    "STANDARD_REFRACTION_DEG",
    "SUN_REFRACTION_DEG",
]

STANDARD_REFRACTION_DEG: Final[float] = -34.0 / 60.0
SUN_REFRACTION_DEG: Final[float] = -50.0 / 60.0
MOON_RADIUS_M: Final[float] = 1.7374e6


class HorizonKind(str, Enum):
    STANDARD = "standard"
    SUN = "sun"
    MOON = "moon"
    FIXED = "fixed"


@dataclass(frozen=True, slots=True)
class HorizonPolicy:
    """Altitude threshold, optionally dependent on the body's distance.

    * ``standard``: −34′ of refraction, for planets and stars.
    * ``sun``: −50′, refraction plus the solar semi-diameter.
    * ``moon``: −34′ minus the angular radius ``radius_m / distance``.
    * ``fixed``: a constant altitude, used for twilight zenith angles.
    """

    kind: HorizonKind = HorizonKind.STANDARD
    radius_m: float = MOON_RADIUS_M
    altitude_deg: float = 0.0

    @classmethod
    def standard(cls) -> HorizonPolicy:
        return cls(HorizonKind.STANDARD)

    @classmethod
    def sun(cls) -> HorizonPolicy:
        return cls(HorizonKind.SUN)

    @classmethod
    def moon(cls, radius_m: float = MOON_RADIUS_M) -> HorizonPolicy:
        if radius_m <= 0.0:
            raise InvalidConfigurationError(f"moon radius must be positive, got {radius_m}")
        return cls(HorizonKind.MOON, radius_m=radius_m)

    @classmethod
    def fixed(cls, altitude_deg: float) -> HorizonPolicy:
        return cls(HorizonKind.FIXED, altitude_deg=float(altitude_deg))

    @classmethod
    def zenith_angle(cls, zenith_angle_deg: float) -> HorizonPolicy:
        """Threshold reached when the body is ``zenith_angle_deg`` from the zenith."""

        if not 0.0 <= zenith_angle_deg <= 180.0:
            raise InvalidConfigurationError(
                f"zenith angle must lie in [0, 180] degrees, got {zenith_angle_deg}"
            )
        return cls.fixed(90.0 - zenith_angle_deg)

    def threshold_deg(self, distance_m: float | None = None) -> float:
        if self.kind is HorizonKind.SUN:
            return SUN_REFRACTION_DEG
        if self.kind is HorizonKind.MOON:
            if distance_m is None or distance_m <= 0.0:
                raise InvalidConfigurationError(
                    "the moon horizon policy needs a positive distance from the provider"
                )
            return STANDARD_REFRACTION_DEG - math.degrees(self.radius_m / distance_m)
        if self.kind is HorizonKind.FIXED:
            return self.altitude_deg
        return STANDARD_REFRACTION_DEG
