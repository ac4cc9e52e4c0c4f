"""Synthetic providers shared across the test suites."""

from .synthetic import (
    DAY0,
    FailingSky,
    FrozenHourAngleSky,
    GrazingSky,
    SinusoidalOrbit,
    SinusoidalSky,
    WrappedHourAngleSky,
    day_window,
)

__all__ = [
    "DAY0",
    "FailingSky",
    "FrozenHourAngleSky",
    "GrazingSky",
    "SinusoidalOrbit",
    "SinusoidalSky",
    "WrappedHourAngleSky",
    "day_window",
]
