"""Primary Typer application for the astroevents CLI."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer

from ..boot import configure_logging
from ..config.settings import Settings, default_settings, load_settings
from ..core.models import SearchWindow
from ..engine.horizon import HorizonPolicy
from ..errors import AstroEventsError, InvalidConfigurationError
from ..events.apsides import ApsisCalculator, orbital_period_for
from ..events.rise_transit_set import RiseTransitSetCalculator
from ..events.twilight import TwilightCalculator
from ..providers.base import DistanceProvider, PositionProvider

app = typer.Typer(help="Find rise, transit, set, twilight and apsis events.")

_STATE: dict[str, object] = {"settings": None}


def _build_position_provider(
    body: str,
    latitude: float,
    longitude: float,
    elevation: float,
    ephemeris_path: Optional[str],
) -> PositionProvider:
    from ..providers.swiss import ObserverLocation, SwissPositionProvider

    return SwissPositionProvider(
        body,
        ObserverLocation(latitude, longitude, elevation),
        ephemeris_path=ephemeris_path,
    )


def _build_distance_provider(
    body: str, primary: str, ephemeris_path: Optional[str]
) -> DistanceProvider:
    from ..providers.swiss import SwissDistanceProvider

    return SwissDistanceProvider(body, primary, ephemeris_path=ephemeris_path)


def _horizon_for(body: str) -> HorizonPolicy:
    name = body.strip().lower()
    if name == "sun":
        return HorizonPolicy.sun()
    if name == "moon":
        return HorizonPolicy.moon()
    return HorizonPolicy.standard()


def _parse_moment(value: str, option: str) -> datetime:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError as exc:
        raise typer.BadParameter(f"{option} must be an ISO-8601 timestamp, got {value!r}") from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _window(start: str, end: str) -> SearchWindow:
    return SearchWindow.from_datetimes(_parse_moment(start, "--start"), _parse_moment(end, "--end"))


def _settings() -> Settings:
    settings = _STATE.get("settings")
    return settings if isinstance(settings, Settings) else default_settings()


def _emit(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _fail(exc: AstroEventsError) -> typer.Exit:
    typer.echo(f"error: {exc}", err=True)
    return typer.Exit(1)


@app.callback()
def main(
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase log verbosity."),
    config: Optional[Path] = typer.Option(
        None, "--config", help="Read settings from this YAML file instead of the defaults."
    ),
) -> None:
    """Configure logging and settings shared by every command."""

    configure_logging(verbose=verbose)
    if config is None:
        _STATE["settings"] = default_settings()
        return
    try:
        _STATE["settings"] = load_settings(config)
    except InvalidConfigurationError as exc:
        raise _fail(exc) from exc


@app.command("rise-transit-set")
def rise_transit_set(
    body: str = typer.Option(..., "--body", help="Body name, e.g. sun, moon, mars."),
    latitude: float = typer.Option(..., "--lat", help="Observer latitude in degrees north."),
    longitude: float = typer.Option(..., "--lon", help="Observer longitude in degrees east."),
    elevation: float = typer.Option(0.0, "--elevation", help="Observer elevation in metres."),
    start: str = typer.Option(..., "--start", help="Window start (ISO-8601, UTC when naive)."),
    end: str = typer.Option(..., "--end", help="Window end (ISO-8601, UTC when naive)."),
    first: bool = typer.Option(False, "--first", help="Report only the first event of each kind."),
    ephemeris_path: Optional[str] = typer.Option(None, "--ephe-path", help="Swiss Ephemeris data directory."),
) -> None:
    """Report risings, upper transits and settings as JSON."""

    try:
        window = _window(start, end)
        provider = _build_position_provider(body, latitude, longitude, elevation, ephemeris_path)
        calculator = RiseTransitSetCalculator(provider, horizon=_horizon_for(body), settings=_settings())
        if first:
            _emit(calculator.event_on(window).as_dict())
        else:
            _emit(calculator.events_between(window).as_dict())
    except AstroEventsError as exc:
        raise _fail(exc) from exc


@app.command("twilight")
def twilight(
    latitude: float = typer.Option(..., "--lat", help="Observer latitude in degrees north."),
    longitude: float = typer.Option(..., "--lon", help="Observer longitude in degrees east."),
    elevation: float = typer.Option(0.0, "--elevation", help="Observer elevation in metres."),
    start: str = typer.Option(..., "--start", help="Window start (ISO-8601, UTC when naive)."),
    end: str = typer.Option(..., "--end", help="Window end (ISO-8601, UTC when naive)."),
    zenith_angle: Optional[float] = typer.Option(
        None, "--zenith-angle", help="Custom zenith angle in degrees; requires --period."
    ),
    period: Optional[str] = typer.Option(None, "--period", help="morning or evening."),
    ephemeris_path: Optional[str] = typer.Option(None, "--ephe-path", help="Swiss Ephemeris data directory."),
) -> None:
    """Report civil, nautical and astronomical twilight as JSON."""

    try:
        window = _window(start, end)
        provider = _build_position_provider("sun", latitude, longitude, elevation, ephemeris_path)
        calculator = TwilightCalculator(provider, settings=_settings())
        if zenith_angle is None:
            _emit(calculator.events_between(window).as_dict())
            return
        if period is None:
            raise typer.BadParameter("--period is required with --zenith-angle")
        event = calculator.time_for_zenith_angle(window, period.lower(), zenith_angle)
        _emit(event.as_dict() if event is not None else None)
    except AstroEventsError as exc:
        raise _fail(exc) from exc


@app.command("apsides")
def apsides(
    body: str = typer.Option(..., "--body", help="Orbiting body, e.g. moon or mars."),
    primary: str = typer.Option(..., "--primary", help="Primary body, e.g. earth or sun."),
    start: str = typer.Option(..., "--start", help="Window start (ISO-8601, UTC when naive)."),
    end: str = typer.Option(..., "--end", help="Window end (ISO-8601, UTC when naive)."),
    period_days: Optional[float] = typer.Option(
        None, "--period-days", help="Orbital period in days; looked up from the body name when omitted."
    ),
    seek: Optional[str] = typer.Option(None, "--seek", help="maximum or minimum; both when omitted."),
    ephemeris_path: Optional[str] = typer.Option(None, "--ephe-path", help="Swiss Ephemeris data directory."),
) -> None:
    """Report apoapsis and periapsis events as JSON."""

    try:
        window = _window(start, end)
        period = period_days if period_days is not None else orbital_period_for(body)
        provider = _build_distance_provider(body, primary, ephemeris_path)
        calculator = ApsisCalculator(provider, period, settings=_settings())
        if seek is None:
            payload = {
                "apoapsis": [e.as_dict() for e in calculator.apoapsis_events_between(window)],
                "periapsis": [e.as_dict() for e in calculator.periapsis_events_between(window)],
            }
        else:
            kind = seek.strip().lower()
            payload = {kind: [e.as_dict() for e in calculator.find_extrema(window, kind)]}
        _emit(payload)
    except AstroEventsError as exc:
        raise _fail(exc) from exc
