"""PocketWeather CLI application.

This module provides the command-line interface: current weather and
forecast by device location or city, favorites management, the cloud map
and configuration helpers. Every screen can also be written as HTML.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Any, Final, Optional

import typer
import yaml
from pydantic import ValidationError

from pocketweather.app import WeatherApp
from pocketweather.common.enums import ScreenPhase, Theme, ThemePreference, UnitSystem
from pocketweather.display.tiles import compose_cloud_tile, fetch_base_tile, tile_for_coordinate
from pocketweather.errors import StorageWriteError, WeatherAppError
from pocketweather.settings import UserSettings
from pocketweather.state import ScreenState, UnitsChanged
from pocketweather.utils import format_percentage, format_temperature
from pocketweather.utils.formatting import format_pressure, format_wind_speed

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="PocketWeather CLI", add_completion=False)
favorites_app = typer.Typer(help="Manage favorite cities")
config_app = typer.Typer(help="Config helpers")
app.add_typer(favorites_app, name="favorites")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "pocketweather.cli"

# Options shared by several commands
CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
HTML_OPTION = typer.Option(None, "--html", help="Write the rendered screen to this file")
SYSTEM_THEME_OPTION = typer.Option(
    None, "--system-theme", help="Appearance reported by the system (light|dark)"
)
THEME_OPTION = typer.Option(None, "--theme", help="light, dark or system")
CITY_ARGUMENT = typer.Argument(..., help="City name")
DST_ARGUMENT = typer.Argument(..., help="Output config.yaml")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _load_app(config: Optional[Path], debug: bool) -> WeatherApp:
    _configure_logging(debug)
    try:
        settings = UserSettings.load(config)
    except (RuntimeError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    return WeatherApp(settings)


def _write_html(path: Path, html: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    typer.echo(f"Wrote {path}")


def _summary(state: ScreenState) -> str:
    """Plain-text rendering of a ready weather screen."""
    assert state.report is not None
    snapshot = state.report.snapshot
    units = state.report.units
    star = "★" if state.is_favorite else "☆"
    lines = [
        f"{snapshot.city_name} {star}",
        f"{format_temperature(snapshot.temperature, units)}  {snapshot.description}",
        f"Feels like {format_temperature(snapshot.feels_like)}"
        f" · Humidity {format_percentage(snapshot.humidity)}"
        f" · Wind {format_wind_speed(snapshot.wind_speed, units)}"
        f" · Pressure {format_pressure(snapshot.pressure)}",
    ]
    if state.report.forecast:
        lines.append(
            "  ".join(
                f"{sample.weekday_short} {format_temperature(sample.temperature)}"
                for sample in state.report.forecast
            )
        )
    return "\n".join(lines)


# ───────────────────────── weather ───────────────────────────────────────────
@app.command()
def weather(
    city: Optional[str] = typer.Option(
        None, "--city", help="Search a city instead of the device location"
    ),
    units: Optional[UnitSystem] = typer.Option(None, "--units", help="metric or imperial"),
    theme: Optional[ThemePreference] = THEME_OPTION,
    system_theme: Optional[Theme] = SYSTEM_THEME_OPTION,
    html: Optional[Path] = HTML_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Show current weather and the 5-day forecast."""
    weather_app = _load_app(config, debug)
    if theme is not None:
        weather_app.settings.theme = theme

    async def _run() -> ScreenState:
        screen = weather_app.screen
        await screen.load_favorites()
        if units is not None:
            screen.dispatch(UnitsChanged(units))
        if city:
            return await screen.search(city)
        return await screen.show_device_weather()

    state = asyncio.run(_run())

    if html is not None:
        theme_now = weather_app.theme(system_theme)
        page = weather_app.renderer.render_weather(state, theme_now, city or "")
        _write_html(html, page)

    if state.phase is ScreenPhase.ERROR:
        typer.secho(state.error or "Unknown error", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    if state.report is None:
        typer.echo("Nothing to show: enter a city name.")
        return
    typer.echo(_summary(state))


# ───────────────────────── favorites sub-commands ────────────────────────────
@favorites_app.command("list")
def favorites_list(config: Optional[Path] = CONFIG_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """List favorite cities."""
    weather_app = _load_app(config, debug)
    favorites = asyncio.run(weather_app.favorites.load())
    if not favorites:
        typer.echo("No favorites yet.")
        return
    for city in favorites:
        typer.echo(city)


def _mutate_favorites(config: Optional[Path], debug: bool, op: str, city: str) -> None:
    weather_app = _load_app(config, debug)

    async def _run() -> list[str]:
        await weather_app.favorites.load()
        return await getattr(weather_app.favorites, op)(city)

    try:
        favorites = asyncio.run(_run())
    except StorageWriteError as exc:
        typer.secho(exc.message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(", ".join(favorites) if favorites else "No favorites yet.")


@favorites_app.command("add")
def favorites_add(
    city: str = CITY_ARGUMENT, config: Optional[Path] = CONFIG_OPTION, debug: bool = DEBUG_OPTION
) -> None:
    """Add a city to favorites."""
    _mutate_favorites(config, debug, "add", city)


@favorites_app.command("remove")
def favorites_remove(
    city: str = CITY_ARGUMENT, config: Optional[Path] = CONFIG_OPTION, debug: bool = DEBUG_OPTION
) -> None:
    """Remove a city from favorites."""
    _mutate_favorites(config, debug, "remove", city)


@favorites_app.command("toggle")
def favorites_toggle(
    city: str = CITY_ARGUMENT, config: Optional[Path] = CONFIG_OPTION, debug: bool = DEBUG_OPTION
) -> None:
    """Add the city if absent, remove it if present."""
    _mutate_favorites(config, debug, "toggle", city)


@favorites_app.command("render")
def favorites_render(
    html: Path = typer.Option(..., "--html", help="Output HTML file"),
    theme: Optional[ThemePreference] = THEME_OPTION,
    system_theme: Optional[Theme] = SYSTEM_THEME_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Render the favorites / info screen."""
    weather_app = _load_app(config, debug)
    if theme is not None:
        weather_app.settings.theme = theme
    favorites = asyncio.run(weather_app.favorites.load())
    page = weather_app.renderer.render_favorites(favorites, weather_app.theme(system_theme))
    _write_html(html, page)


# ───────────────────────── map ───────────────────────────────────────────────
@app.command("map")
def cloud_map(
    html: Optional[Path] = HTML_OPTION,
    png: Optional[Path] = typer.Option(None, "--png", help="Write the composited cloud tile here"),
    zoom: int = typer.Option(6, "--zoom", min=0, max=18, help="Zoom level of the PNG tile"),
    theme: Optional[ThemePreference] = THEME_OPTION,
    system_theme: Optional[Theme] = SYSTEM_THEME_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Show the cloud map around the last fetched location."""
    weather_app = _load_app(config, debug)
    if theme is not None:
        weather_app.settings.theme = theme
    settings = weather_app.settings
    coordinate = asyncio.run(weather_app.last_location.load())

    if html is not None:
        _write_html(
            html,
            weather_app.renderer.render_map(
                coordinate,
                weather_app.api.tile_url(),
                weather_app.theme(system_theme),
                opacity=settings.tile_opacity,
                delta=settings.map_delta,
            ),
        )

    if coordinate is None:
        typer.echo("No location yet: run 'pocketweather weather' first.")
        return
    typer.echo(f"Last location: {coordinate.latitude}, {coordinate.longitude}")

    if png is not None:
        x, y = tile_for_coordinate(coordinate, zoom)
        try:
            base = fetch_base_tile(zoom, x, y, timeout=settings.timeout)
            clouds = weather_app.api.fetch_tile(zoom, x, y)
        except WeatherAppError as exc:
            typer.secho(exc.message, fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from exc
        png.parent.mkdir(parents=True, exist_ok=True)
        png.write_bytes(compose_cloud_tile(base, clouds, settings.tile_opacity))
        typer.echo(f"Wrote {png}")


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except (RuntimeError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "api_key": typer.prompt("OpenWeather API key", hide_input=True),
            "units": typer.prompt("Units [metric|imperial]", default="metric"),
            "lang": typer.prompt("Language", default="es"),
            "theme": typer.prompt("Theme [light|dark|system]", default="system"),
        }
        try:
            cfg = UserSettings(**data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                typer.secho(f"  • {e['loc'][0]} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(
        yaml.safe_dump(cfg.model_dump(mode="json", include=set(data)), sort_keys=False),
        encoding="utf-8",
    )
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


# ───────────────────────── module entrypoint ────────────────────────────────
def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    main()
