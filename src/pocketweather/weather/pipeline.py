"""Location -> coordinates -> concurrent weather/forecast fetch -> report.

The pipeline holds no state between calls; each method is a complete
request/response cycle. The only side effect is the last-location write
after a successful fetch; a failed write is logged and does not fail the
fetch.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Final

from pocketweather.common.enums import PermissionStatus, UnitSystem
from pocketweather.errors import (
    CityNotFoundError,
    LocationUnavailableError,
    PermissionDeniedError,
    StorageWriteError,
    WeatherAppError,
)
from pocketweather.location import LocationProvider
from pocketweather.models import Coordinate, WeatherReport
from pocketweather.storage import LastLocationCache
from pocketweather.weather.api import WeatherAPI
from pocketweather.weather.forecast import MIDDAY_MARKER, daily_samples

logger: Final = logging.getLogger(__name__)


class WeatherPipeline:
    """Resolve a location and fetch its weather.

    Ambiguous city names resolve to the provider's first geocoding match,
    and the forecast keeps only the samples stamped at ``forecast_marker``
    (12:00 UTC by default). Neither is corrected for the viewer's time
    zone or for feeds with other sampling intervals.
    """

    def __init__(
        self,
        api: WeatherAPI,
        location_provider: LocationProvider,
        last_location: LastLocationCache,
        units: UnitSystem = UnitSystem.METRIC,
        forecast_marker: str = MIDDAY_MARKER,
    ) -> None:
        """Initialize the pipeline.

        Args:
            api: Provider client
            location_provider: Source of the device position
            last_location: Cache written after every successful fetch
            units: Unit system used when a call does not name one
            forecast_marker: Reference-hour text used to pick daily samples
        """
        self.api = api
        self.location_provider = location_provider
        self.last_location = last_location
        self.units = units
        self.forecast_marker = forecast_marker

    async def resolve_by_device(self, units: UnitSystem | None = None) -> WeatherReport:
        """Fetch weather for the device's current position.

        Raises:
            PermissionDeniedError: If the location permission is refused
            LocationUnavailableError: If the position cannot be read
            WeatherAPIError: If the provider fails
        """
        status = await self.location_provider.request_permission()
        if status is not PermissionStatus.GRANTED:
            logger.info("Location permission denied")
            raise PermissionDeniedError()

        try:
            coordinate = await self.location_provider.current_position()
        except WeatherAppError:
            raise
        except Exception as exc:
            logger.warning("Location provider failed: %s", exc)
            raise LocationUnavailableError(original_error=exc) from exc

        return await self.fetch(coordinate, units)

    async def resolve_by_city(
        self, name: str, units: UnitSystem | None = None
    ) -> WeatherReport | None:
        """Fetch weather for a city name.

        Returns:
            The report, or None when ``name`` is blank

        Raises:
            CityNotFoundError: If geocoding finds no match
            WeatherAPIError: If the provider fails
        """
        query = name.strip() if name else ""
        if not query:
            return None

        matches = await asyncio.to_thread(self.api.geocode, query, 1)
        if not matches:
            logger.info("No geocoding match for %r", query)
            raise CityNotFoundError(query)

        first = matches[0]
        logger.debug("Geocoded %r to %s, %s", query, first.lat, first.lon)
        return await self.fetch(first.to_coordinate(), units)

    async def fetch(
        self, coordinate: Coordinate, units: UnitSystem | None = None
    ) -> WeatherReport:
        """Fetch current conditions and forecast for ``coordinate``.

        Both requests run concurrently and must both succeed. A new
        ``units`` value always means a new round trip.

        Raises:
            WeatherAPIError: If either request fails
        """
        units = units or self.units
        current, forecast = await asyncio.gather(
            asyncio.to_thread(self.api.fetch_current, coordinate, units),
            asyncio.to_thread(self.api.fetch_forecast, coordinate, units),
        )

        report = WeatherReport(
            snapshot=current.to_snapshot(coordinate),
            forecast=daily_samples(forecast.entries, self.forecast_marker),
            units=units,
        )
        logger.info(
            "Fetched weather for %s (%d forecast days)",
            report.snapshot.city_name or coordinate,
            len(report.forecast),
        )

        try:
            await self.last_location.save(coordinate)
        except StorageWriteError as exc:
            # The report is still valid; the map falls back to the older value.
            logger.error("Last location not saved: %s", exc.message)
        return report
