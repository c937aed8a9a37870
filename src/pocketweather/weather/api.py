"""Weather API client for OpenWeather."""

from __future__ import annotations

import logging
from typing import Any, Final, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from pocketweather.common.enums import UnitSystem
from pocketweather.models import Coordinate
from pocketweather.settings import UserSettings

from .errors import NetworkError, ParseError, WeatherAPIError
from .models import CurrentConditions, ForecastResponse, GeocodeResult

logger = logging.getLogger(__name__)

# API endpoints
API_BASE: Final = "https://api.openweathermap.org"
GEOCODE_PATH: Final = "/geo/1.0/direct"
CURRENT_PATH: Final = "/data/2.5/weather"
FORECAST_PATH: Final = "/data/2.5/forecast"
TILE_URL: Final = "https://tile.openweathermap.org/map/{layer}/{{z}}/{{x}}/{{y}}.png?appid={key}"

# Human‑readable explanations for common HTTP errors
HTTP_ERROR_MAP: Final = {
    400: "Bad request - check lat/lon or parameters",
    401: "Invalid or missing API key",
    403: "Account blocked / key revoked",
    404: "Requested location returned no data",
    429: "Rate limit exceeded",
    500: "OpenWeather internal error",
    502: "Bad gateway at OpenWeather",
    503: "Service unavailable (maintenance)",
    504: "Gateway timeout",
}

M = TypeVar("M", bound=BaseModel)


class WeatherAPI:
    """OpenWeather API client for geocoding, current weather and forecast.

    Wraps the three JSON endpoints the screens need plus the map tile
    layer. Failures are raised as WeatherAPIError subclasses carrying the
    provider's own message when it sent one; successful bodies are
    validated into typed models.

    The client is synchronous. The pipeline runs calls in worker threads
    when it needs them concurrently.
    """

    def __init__(
        self,
        config: UserSettings,
        timeout: float | None = None,
        base_url: str = API_BASE,
    ) -> None:
        """Initialize the weather API client.

        Args:
            config: User settings with API key, language and tile layer
            timeout: Timeout for API requests in seconds (default: from settings)
            base_url: Scheme and host of the JSON endpoints
        """
        self.config = config
        self.timeout = timeout if timeout is not None else config.timeout
        self.base_url = base_url.rstrip("/")

    # ── JSON endpoints ──────────────────────────────────────────────────────

    def geocode(self, name: str, limit: int = 1) -> list[GeocodeResult]:
        """Resolve a city name into candidate coordinates.

        Args:
            name: Free-form city name
            limit: Maximum number of matches requested

        Returns:
            Matches in provider order; empty when nothing matched
        """
        params = {"q": name, "limit": limit, "appid": self.config.api_key}
        data = self._get_json(GEOCODE_PATH, params, "Could not look up city")
        if not isinstance(data, list):
            raise ParseError(f"Unexpected geocoding payload: {type(data).__name__}")

        try:
            return [GeocodeResult.model_validate(item) for item in data]
        except ValidationError as exc:
            raise ParseError(f"Invalid geocoding payload: {exc}", exc) from exc

    def fetch_current(
        self, coordinate: Coordinate, units: UnitSystem = UnitSystem.METRIC
    ) -> CurrentConditions:
        """Retrieve current conditions for a coordinate.

        Raises:
            NetworkError: When network connectivity issues occur
            AuthenticationError: When the API key is missing or invalid
            WeatherAPIError: For other API-related errors
        """
        data = self._get_json(
            CURRENT_PATH,
            self._weather_params(coordinate, units),
            "Could not fetch current weather",
        )
        return self._validate(CurrentConditions, data)

    def fetch_forecast(
        self, coordinate: Coordinate, units: UnitSystem = UnitSystem.METRIC
    ) -> ForecastResponse:
        """Retrieve the 5 day / 3 hour forecast for a coordinate."""
        data = self._get_json(
            FORECAST_PATH,
            self._weather_params(coordinate, units),
            "Could not fetch the forecast",
        )
        return self._validate(ForecastResponse, data)

    # ── map tiles ───────────────────────────────────────────────────────────

    def tile_url(self, layer: str | None = None) -> str:
        """URL template with ``{z}/{x}/{y}`` placeholders for a tile layer."""
        return TILE_URL.format(
            layer=layer or self.config.tile_layer, key=self.config.api_key
        )

    def fetch_tile(self, z: int, x: int, y: int, layer: str | None = None) -> bytes:
        """Download one raster tile of a weather map layer.

        Returns:
            PNG bytes as served by the tile server
        """
        url = self.tile_url(layer).format(z=z, x=x, y=y)
        resp = self._request(url, None)
        if resp.status_code != 200:
            raise self._error_from(resp, "Could not fetch map tile")
        return resp.content

    # Private helper methods
    def _weather_params(
        self, coordinate: Coordinate, units: UnitSystem
    ) -> dict[str, Any]:
        return {
            **coordinate.as_params(),
            "appid": self.config.api_key,
            "units": units.value,
            "lang": self.config.lang,
        }

    def _request(self, url: str, params: dict[str, Any] | None) -> requests.Response:
        try:
            return requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Weather API network error: %s", exc)
            raise NetworkError(f"Network error: {exc}", exc) from exc

    def _get_json(self, path: str, params: dict[str, Any], fallback: str) -> Any:
        resp = self._request(f"{self.base_url}{path}", params)

        if resp.status_code != 200:
            raise self._error_from(resp, fallback)

        try:
            return resp.json()
        except ValueError as exc:
            logger.error("Weather API returned invalid JSON for %s", path)
            raise ParseError(f"Invalid JSON from {path}", exc) from exc

    def _error_from(self, resp: requests.Response, fallback: str) -> WeatherAPIError:
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        err = WeatherAPIError.from_response(
            body,
            resp.status_code,
            default=HTTP_ERROR_MAP.get(resp.status_code, fallback),
        )
        logger.error("Weather API error: %s - %s", resp.status_code, err.message)
        return err

    @staticmethod
    def _validate(model: type[M], data: Any) -> M:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.error("Weather API payload failed validation: %s", exc)
            raise ParseError(f"Invalid {model.__name__} payload", exc) from exc
