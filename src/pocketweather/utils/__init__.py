"""Common utility functions and helpers for the pocketweather package."""

from pocketweather.utils.formatting import format_percentage, format_temperature
from pocketweather.utils.time import TimeUtils

__all__ = [
    "TimeUtils",
    "format_percentage",
    "format_temperature",
]
