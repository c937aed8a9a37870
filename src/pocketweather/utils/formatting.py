"""Text and number formatting utilities."""

from __future__ import annotations

from pocketweather.common.enums import UnitSystem


def format_temperature(temp: float, units: UnitSystem | None = None) -> str:
    """Format temperature value rounded to whole degrees.

    Args:
        temp: Temperature value
        units: Unit system; only the degree sign is appended when None

    Returns:
        Formatted temperature string (e.g. ``15°C``)
    """
    symbol = units.temperature_symbol if units is not None else "°"
    return f"{round(temp)}{symbol}"


def format_percentage(value: int | float) -> str:
    """Format an already-scaled 0-100 value as a percentage."""
    return f"{round(value)}%"


def format_wind_speed(speed: float, units: UnitSystem) -> str:
    """Format wind speed with the unit label of ``units``."""
    return f"{speed:g} {units.wind_speed_label}"


def format_pressure(pressure: float) -> str:
    """Format pressure in hectopascals."""
    return f"{pressure:g} hPa"
