"""Exception classes for weather provider interactions.

This module defines a hierarchy of exception classes for handling
the error conditions that come back from the OpenWeather endpoints.
Every class here is an upstream error from the application's point of
view; ``UpstreamError`` is exported as an alias of the base class.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pocketweather.errors import WeatherAppError


class WeatherAPIError(WeatherAppError):
    """Error during an OpenWeather request or response parsing.

    Raised when the provider answers with a non-success status, when the
    network call itself fails, or when the payload cannot be parsed.
    ``message`` carries the provider's own message when it sent one.
    """

    def __init__(
        self, code: int, message: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code or custom error code
            message: Human-readable error message
            response: Optional raw API response for debugging
        """
        super().__init__(message)
        self.args = (f"[{code}] {message}",)
        self.code: int = code
        self.response: Optional[Dict[str, Any]] = response

    @property
    def is_client_error(self) -> bool:
        """Check if this is a client-side error (4xx)."""
        return 400 <= self.code < 500

    @property
    def is_server_error(self) -> bool:
        """Check if this is a server-side error (5xx)."""
        return self.code >= 500

    @classmethod
    def from_response(
        cls, response: Dict[str, Any], status_code: int = 0, default: str | None = None
    ) -> WeatherAPIError:
        """Create an error from an API response.

        Args:
            response: Decoded error body (may be empty)
            status_code: HTTP status code
            default: Message used when the body carries none

        Returns:
            Appropriate WeatherAPIError subclass
        """
        message = response.get("message") or default

        if status_code in (401, 403):
            return AuthenticationError(
                status_code, message or "Authentication failed", response
            )
        if status_code == 404:
            return NotFoundError(status_code, message or "Resource not found", response)
        if status_code == 429:
            return RateLimitError(status_code, message or "Rate limit exceeded", response)
        if 400 <= status_code < 500:
            return ClientError(status_code, message or "Client error", response)
        if status_code >= 500:
            return ServerError(status_code, message or "Server error", response)

        return cls(status_code, message or "Unknown error", response)


UpstreamError = WeatherAPIError


class NetworkError(WeatherAPIError):
    """Raised when a network issue prevents API communication."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with network error details.

        Args:
            message: Description of the network error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.original_error = original_error


class AuthenticationError(WeatherAPIError):
    """Raised when API authentication fails (missing or invalid API key)."""


class NotFoundError(WeatherAPIError):
    """Raised when a requested resource doesn't exist."""


class RateLimitError(WeatherAPIError):
    """Raised when rate limits are exceeded."""


class ClientError(WeatherAPIError):
    """Raised for general 4xx client errors."""


class ServerError(WeatherAPIError):
    """Raised for 5xx server errors."""


class ParseError(WeatherAPIError):
    """Raised when API response parsing fails."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with parsing error details.

        Args:
            message: Description of the parsing error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.original_error = original_error
