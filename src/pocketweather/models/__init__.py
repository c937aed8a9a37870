"""Data models for pocketweather.

This package holds the request-scoped domain values (coordinate, snapshot,
forecast samples) that the pipeline builds from raw provider payloads.
"""

from pocketweather.models.base import FrozenModel
from pocketweather.models.weather import (
    Coordinate,
    ForecastSample,
    WeatherReport,
    WeatherSnapshot,
)

__all__ = [
    "Coordinate",
    "ForecastSample",
    "FrozenModel",
    "WeatherReport",
    "WeatherSnapshot",
]
