"""Exception classes for the weather pipeline and local persistence.

Provider (HTTP) failures live in :mod:`pocketweather.weather.errors`; the
classes here cover everything that happens on the device side of the
pipeline: location permission, geocoding misses and the key-value store.
"""

from __future__ import annotations

from typing import Optional


class WeatherAppError(Exception):
    """Base class for every error the application reports to the user."""

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
        """
        super().__init__(message)
        self.message: str = message


class PermissionDeniedError(WeatherAppError):
    """Raised when access to the device location is refused."""

    def __init__(self, message: str = "Location permission denied") -> None:
        super().__init__(message)


class LocationUnavailableError(WeatherAppError):
    """Raised when the location provider cannot produce a position."""

    def __init__(
        self,
        message: str = "Could not determine the current location",
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class CityNotFoundError(WeatherAppError):
    """Raised when geocoding a city name returns no match."""

    def __init__(self, city: str) -> None:
        super().__init__(f"City not found: {city}")
        self.city = city


class MalformedPersistedDataError(WeatherAppError):
    """Raised when stored data cannot be decoded.

    Callers recover locally by substituting an empty default.
    """

    def __init__(self, key: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(f"Malformed data stored under '{key}'")
        self.key = key
        self.original_error = original_error


class StorageWriteError(WeatherAppError):
    """Raised when a value cannot be written to the key-value store."""

    def __init__(self, key: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(f"Could not save '{key}': {original_error}")
        self.key = key
        self.original_error = original_error
