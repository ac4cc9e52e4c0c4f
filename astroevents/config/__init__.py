"""Configuration helpers exposed at :mod:`astroevents.config`."""

from __future__ import annotations

from .settings import (
    CacheCfg,
    CrossingCfg,
    ExtremumCfg,
    Settings,
    build_cache,
    config_path,
    default_settings,
    get_config_home,
    load_settings,
    save_settings,
    validate_settings,
)

__all__ = [
    "CacheCfg",
    "CrossingCfg",
    "ExtremumCfg",
    "Settings",
    "build_cache",
    "config_path",
    "default_settings",
    "get_config_home",
    "load_settings",
    "save_settings",
    "validate_settings",
]
