"""Numerical event-finding engine."""

from __future__ import annotations

from .brackets import crossing_brackets, extremum_brackets, hour_angle_brackets
from .direction import confirm_direction, rate_of_change
from .extrema import ExtremumResult, golden_section
from .filters import filter_boundary_artifacts, remove_duplicates
from .horizon import HorizonKind, HorizonPolicy
from .interpolation import linear_zero, quadratic_vertex, quadratic_vertex_instant
from .roots import RefineResult, bisect_interpolate, refine_crossing, regula_falsi
from .sampling import linspace, sample, sample_count_for_days, sample_count_for_period
from .search import CrossingSearch, ExtremumSearch

__all__ = [
    "CrossingSearch",
    "ExtremumResult",
    "ExtremumSearch",
    "HorizonKind",
    "HorizonPolicy",
    "RefineResult",
    "bisect_interpolate",
    "confirm_direction",
    "crossing_brackets",
    "extremum_brackets",
    "filter_boundary_artifacts",
    "golden_section",
    "hour_angle_brackets",
    "linear_zero",
    "linspace",
    "quadratic_vertex",
    "quadratic_vertex_instant",
    "rate_of_change",
    "refine_crossing",
    "regula_falsi",
    "remove_duplicates",
    "sample",
    "sample_count_for_days",
    "sample_count_for_period",
]
