"""Allow ``python -m astroevents.cli``."""

from __future__ import annotations

from . import run

if __name__ == "__main__":  # pragma: no cover
    run()
