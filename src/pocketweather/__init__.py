"""PocketWeather - current conditions, 5-day forecast, favorites and cloud map."""

__version__ = "0.1.0"
