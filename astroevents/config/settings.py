"""Configuration models and helpers for astroevents settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..cache import LRUCache, NullCache, PositionCache
from ..errors import InvalidConfigurationError

CURRENT_SETTINGS_SCHEMA_VERSION = 1
CONFIG_FILENAME = "config.yaml"
DEFAULT_PRECISION = 9

# -------------------- Settings Schema --------------------


class CacheCfg(BaseModel):
    """Memoisation of provider lookups.

    ``precisions`` maps a quantity kind to the number of decimal places
    of the TT Julian day kept in cache keys (8 places ≈ 0.9 ms).
    """

    enabled: bool = False
    max_size: int = 10_000
    precisions: Dict[str, int] = Field(
        default_factory=lambda: {
            "observed_by": 8,
            "distance": 8,
        }
    )

    @field_validator("max_size")
    @classmethod
    def _positive_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError(f"max_size must be positive, got {value}")
        return value

    @field_validator("precisions")
    @classmethod
    def _non_negative_precisions(cls, data: Dict[str, int]) -> Dict[str, int]:
        for kind, places in data.items():
            if places < 0:
                raise ValueError(f"precision for {kind!r} must be >= 0, got {places}")
        return data

    def precision_for(self, kind: str) -> int:
        return self.precisions.get(kind, DEFAULT_PRECISION)


class CrossingCfg(BaseModel):
    """Sampling and refinement of rise/set/transit/twilight crossings."""

    samples_per_day: int = 10
    strategy: Literal["bisection", "regula_falsi"] = "bisection"
    bisection_iterations: int = 8
    regula_falsi_tolerance_seconds: float = 0.5
    regula_falsi_max_iter: int = 64
    direction_offset_seconds: float = 60.0

    @field_validator("samples_per_day")
    @classmethod
    def _min_samples(cls, value: int) -> int:
        if value < 3:
            raise ValueError(f"samples_per_day must be at least 3, got {value}")
        return value

    @field_validator("bisection_iterations", "regula_falsi_max_iter")
    @classmethod
    def _positive_iterations(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"iteration counts must be >= 1, got {value}")
        return value

    @field_validator("regula_falsi_tolerance_seconds", "direction_offset_seconds")
    @classmethod
    def _positive_seconds(cls, value: float) -> float:
        if value <= 0.0:
            raise ValueError(f"durations must be positive, got {value}")
        return value


class ExtremumCfg(BaseModel):
    """Sampling, golden-section refinement and filtering of apsides.

    ``duplicate_threshold_days`` and ``boundary_buffer_days`` should be
    chosen in proportion to the orbital period being searched.
    """

    samples_per_period: int = 60
    min_samples: int = 20
    golden_section_tolerance: float = 1e-5
    max_iterations: int = 200
    duplicate_threshold_days: float = 0.5
    boundary_buffer_days: float = 0.01

    @field_validator("samples_per_period", "min_samples")
    @classmethod
    def _min_samples(cls, value: int) -> int:
        if value < 3:
            raise ValueError(f"sample counts must be at least 3, got {value}")
        return value

    @field_validator("golden_section_tolerance")
    @classmethod
    def _relative_tolerance(cls, value: float) -> float:
        if not 0.0 < value < 1.0:
            raise ValueError(f"golden_section_tolerance must lie in (0, 1), got {value}")
        return value

    @field_validator("max_iterations")
    @classmethod
    def _positive_iterations(cls, value: int) -> int:
        if value < 1:
            raise ValueError(f"max_iterations must be >= 1, got {value}")
        return value

    @field_validator("duplicate_threshold_days", "boundary_buffer_days")
    @classmethod
    def _non_negative_days(cls, value: float) -> float:
        if value < 0.0:
            raise ValueError(f"day thresholds must be >= 0, got {value}")
        return value


class Settings(BaseModel):
    """Top-level settings document."""

    schema_version: int = CURRENT_SETTINGS_SCHEMA_VERSION
    cache: CacheCfg = Field(default_factory=CacheCfg)
    crossing: CrossingCfg = Field(default_factory=CrossingCfg)
    extremum: ExtremumCfg = Field(default_factory=ExtremumCfg)


# -------------------- Helpers --------------------


def build_cache(cfg: CacheCfg) -> PositionCache:
    """Return a fresh cache handle honouring ``cfg``."""

    if not cfg.enabled:
        return NullCache()
    return LRUCache(cfg.max_size)


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    return Path(os.environ.get("ASTROEVENTS_HOME", str(Path.home() / ".astroevents")))


def config_path() -> Path:
    """Return the full path to the configuration file, creating directories as needed."""

    home = get_config_home()
    home.mkdir(parents=True, exist_ok=True)
    return home / CONFIG_FILENAME


def default_settings() -> Settings:
    """Instantiate a Settings object populated with defaults."""

    return Settings()


def validate_settings(data: dict[str, object]) -> Settings:
    """Build :class:`Settings` from ``data`` or raise :class:`InvalidConfigurationError`."""

    try:
        return Settings(**data)
    except ValidationError as exc:
        raise InvalidConfigurationError(f"invalid settings: {exc}") from exc


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, creating defaults if missing."""

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        settings = default_settings()
        save_settings(settings, source_path)
        return settings
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raise InvalidConfigurationError(
            f"settings file {source_path} must contain a mapping, got {type(raw).__name__}"
        )
    return validate_settings(raw)
