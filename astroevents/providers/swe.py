"""Deferred import of the optional Swiss Ephemeris bindings."""

from __future__ import annotations

import importlib
import logging
import os
from functools import lru_cache
from typing import Any, Final

from ..errors import InvalidConfigurationError

__all__ = ["EPHE_PATH_ENV", "swe"]

LOG = logging.getLogger(__name__)

EPHE_PATH_ENV: Final[str] = "SE_EPHE_PATH"


@lru_cache(maxsize=1)
def swe() -> Any:
    """Return the ``swisseph`` module, importing it on first use.

    A data directory named by ``SE_EPHE_PATH`` becomes the default search
    path; providers constructed with an explicit path override it. A
    missing installation raises :class:`InvalidConfigurationError` and is
    retried on the next call.
    """

    try:
        module = importlib.import_module("swisseph")
    except ModuleNotFoundError as exc:
        raise InvalidConfigurationError(
            "Swiss Ephemeris not available; install the 'astroevents[ephem]' extra "
            "(package: 'pyswisseph') to use the Swiss-backed providers"
        ) from exc
    path = os.environ.get(EPHE_PATH_ENV)
    if path:
        LOG.debug("using Swiss Ephemeris data from %s", path)
        module.set_ephe_path(path)
    return module
