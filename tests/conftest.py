from __future__ import annotations

import importlib.util
import warnings

import pytest

from astroevents.config import Settings
from tests.helpers import SinusoidalOrbit, SinusoidalSky

if importlib.util.find_spec("swisseph") is None:
    warnings.warn(
        "pyswisseph not installed; Swiss-backed tests will be skipped.",
        RuntimeWarning,
        stacklevel=1,
    )


@pytest.fixture
def sky() -> SinusoidalSky:
    return SinusoidalSky()


@pytest.fixture
def orbit() -> SinusoidalOrbit:
    return SinusoidalOrbit()


@pytest.fixture
def cached_settings() -> Settings:
    settings = Settings()
    settings.cache.enabled = True
    return settings


@pytest.fixture(autouse=True)
def _isolated_config_home(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ASTROEVENTS_HOME", str(tmp_path / "astroevents-home"))
