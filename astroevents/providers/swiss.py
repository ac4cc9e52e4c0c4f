"""Swiss Ephemeris backed position and distance providers.

These are concrete implementations of the provider protocols in
:mod:`astroevents.providers.base` for real solar-system bodies.  They
require the optional ``pyswisseph`` dependency; the engine itself never
imports this module.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Final

from ..core.angles import normalize_degrees, signed_delta
from ..core.models import Observation
from ..core.time import Instant
from ..errors import UnsupportedEventError
from .swe import swe

__all__ = [
    "AU_M",
    "BODY_NAMES",
    "ObserverLocation",
    "SwissDistanceProvider",
    "SwissPositionProvider",
    "resolve_body",
]

LOG = logging.getLogger(__name__)

AU_M: Final[float] = 149_597_870_700.0

BODY_NAMES: Final[dict[str, str]] = {
    "sun": "SUN",
    "moon": "MOON",
    "mercury": "MERCURY",
    "venus": "VENUS",
    "earth": "EARTH",
    "mars": "MARS",
    "jupiter": "JUPITER",
    "saturn": "SATURN",
    "uranus": "URANUS",
    "neptune": "NEPTUNE",
    "pluto": "PLUTO",
}


@dataclass(frozen=True, slots=True)
class ObserverLocation:
    """Geodetic observer position (degrees east/north, metres)."""

    latitude_deg: float
    longitude_deg: float
    elevation_m: float = 0.0

    def as_geopos(self) -> tuple[float, float, float]:
        return (self.longitude_deg, self.latitude_deg, self.elevation_m)


def resolve_body(body: str | int) -> int:
    """Return the Swiss Ephemeris code for a body name or code."""

    if isinstance(body, int):
        return body
    attr = BODY_NAMES.get(body.strip().lower())
    if attr is None:
        raise UnsupportedEventError(
            f"unknown body {body!r}; expected one of {', '.join(sorted(BODY_NAMES))}"
        )
    return int(getattr(swe(), attr))


def _init_ephemeris(ephemeris_path: str | None) -> None:
    if ephemeris_path:
        swe().set_ephe_path(ephemeris_path)


class SwissPositionProvider:
    """Topocentric apparent altitude, azimuth, hour angle and distance.

    Azimuth is measured from north through east. Altitude is the
    geometric (unrefracted) altitude; refraction is accounted for by the
    horizon policy.
    """

    def __init__(
        self,
        body: str | int,
        observer: ObserverLocation,
        *,
        ephemeris_path: str | None = None,
    ) -> None:
        _init_ephemeris(ephemeris_path)
        self.body = resolve_body(body)
        self.observer = observer
        self.cache_token = ("swiss", self.body, observer.as_geopos())
        self._flags = swe().FLG_SWIEPH | swe().FLG_EQUATORIAL | swe().FLG_TOPOCTR

    def observe(self, instant: Instant) -> Observation:
        module = swe()
        lon, lat, elev = self.observer.as_geopos()
        module.set_topo(lon, lat, elev)
        xx, _ = module.calc(instant.jd_tt, self.body, self._flags)
        ra_deg, dec_deg, distance_au = xx[0], xx[1], xx[2]

        jd_ut = instant.jd_utc
        azimuth_south, altitude, _apparent = module.azalt(
            jd_ut,
            module.EQU2HOR,
            (lon, lat, elev),
            0.0,
            0.0,
            (ra_deg, dec_deg, distance_au),
        )
        lst_deg = module.sidtime(jd_ut) * 15.0 + lon
        return Observation(
            altitude_deg=altitude,
            azimuth_deg=normalize_degrees(azimuth_south + 180.0),
            hour_angle_deg=signed_delta(lst_deg - ra_deg),
            distance_m=distance_au * AU_M,
        )


class SwissDistanceProvider:
    """Distance between ``body`` and ``primary`` from barycentric vectors."""

    def __init__(
        self,
        body: str | int,
        primary: str | int,
        *,
        ephemeris_path: str | None = None,
    ) -> None:
        _init_ephemeris(ephemeris_path)
        self.body = resolve_body(body)
        self.primary = resolve_body(primary)
        self.cache_token = ("swiss-distance", self.body, self.primary)
        self._flags = swe().FLG_SWIEPH | swe().FLG_XYZ | swe().FLG_BARYCTR

    def _vector(self, code: int, jd_tt: float) -> tuple[float, float, float]:
        xx, _ = swe().calc(jd_tt, code, self._flags)
        return (xx[0], xx[1], xx[2])

    def distance_m(self, instant: Instant) -> float:
        bx, by, bz = self._vector(self.body, instant.jd_tt)
        px, py, pz = self._vector(self.primary, instant.jd_tt)
        return math.dist((bx, by, bz), (px, py, pz)) * AU_M
