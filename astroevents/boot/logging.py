"""Logging bootstrap for the astroevents command line."""

from __future__ import annotations

import logging
import os
from typing import Any

__all__ = ["configure_logging", "resolve_level"]

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
_ENV_VARS = ("ASTROEVENTS_LOG_LEVEL", "LOG_LEVEL")


def resolve_level(value: str | int | None = None, *, verbose: int = 0) -> int:
    """Return the logging level for ``value``.

    ``value`` may be a level name (case insensitive) or number. When it is
    ``None`` the ``ASTROEVENTS_LOG_LEVEL`` and ``LOG_LEVEL`` environment
    variables are consulted in that order. Each ``verbose`` step lowers the
    result by one level (``WARNING`` → ``INFO`` → ``DEBUG``). Unknown names
    resolve to ``WARNING``.
    """

    if value is None:
        value = next((os.environ[name] for name in _ENV_VARS if os.environ.get(name)), None)

    level = logging.WARNING
    if isinstance(value, int):
        level = value
    elif isinstance(value, str) and value.strip():
        candidate = value.strip()
        if candidate.isdigit():
            level = int(candidate)
        else:
            resolved = logging.getLevelName(candidate.upper())
            if isinstance(resolved, int):
                level = resolved

    return max(logging.DEBUG, level - 10 * max(verbose, 0))


def configure_logging(
    *, level: str | int | None = None, verbose: int = 0, **kwargs: Any
) -> int:
    """Configure the root logger and return the effective level.

    Extra ``kwargs`` are forwarded to :func:`logging.basicConfig`.
    """

    effective_level = resolve_level(level, verbose=verbose)
    logging.basicConfig(
        level=effective_level,
        format=kwargs.pop("format", _DEFAULT_FORMAT),
        datefmt=kwargs.pop("datefmt", _DEFAULT_DATEFMT),
        force=kwargs.pop("force", True),
        **kwargs,
    )
    return effective_level
