"""Weather package - holds API client, pipeline, models and custom errors."""

from .api import WeatherAPI
from .errors import (
    AuthenticationError,
    NetworkError,
    ParseError,
    UpstreamError,
    WeatherAPIError,
)
from .forecast import MIDDAY_MARKER, daily_samples, filter_daily
from .models import CurrentConditions, ForecastEntry, ForecastResponse, GeocodeResult
from .pipeline import WeatherPipeline
from .utils import WeatherIcons

# Define what gets imported with: from pocketweather.weather import *
__all__ = [
    "MIDDAY_MARKER",
    "AuthenticationError",
    "CurrentConditions",
    "ForecastEntry",
    "ForecastResponse",
    "GeocodeResult",
    "NetworkError",
    "ParseError",
    "UpstreamError",
    "WeatherAPI",
    "WeatherAPIError",
    "WeatherIcons",
    "WeatherPipeline",
    "daily_samples",
    "filter_daily",
]
