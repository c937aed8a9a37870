"""Weather utility classes."""

from pocketweather.weather.utils.icons import WeatherIcons

__all__ = ["WeatherIcons"]
