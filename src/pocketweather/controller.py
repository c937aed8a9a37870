"""Core controller for the weather screen."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Awaitable, Callable
from typing import Final

from pocketweather.common.enums import UnitSystem
from pocketweather.errors import CityNotFoundError, StorageWriteError, WeatherAppError
from pocketweather.models import WeatherReport
from pocketweather.state import (
    Action,
    FavoritesChanged,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    NoticeRaised,
    ScreenState,
    UnitsChanged,
    reduce,
)
from pocketweather.storage import FavoritesStore
from pocketweather.weather.pipeline import WeatherPipeline

logger: Final = logging.getLogger(__name__)


class WeatherScreen:
    """Controller for the main weather screen.

    This class orchestrates the screen workflow:
    - Triggering fetches by device location or city search
    - Re-running the last trigger on refresh
    - Refetching with the other unit system on a units toggle
    - Toggling the displayed city in the favorites list

    Every fetch gets a fresh request id; the reducer ignores completions
    that are not the latest, so overlapping fetches cannot flicker.
    """

    def __init__(
        self,
        pipeline: WeatherPipeline,
        favorites: FavoritesStore,
        units: UnitSystem = UnitSystem.METRIC,
    ) -> None:
        """Initialize the controller.

        Args:
            pipeline: Weather pipeline used for every fetch
            favorites: Favorites adapter
            units: Initial unit system
        """
        self.pipeline = pipeline
        self.favorites = favorites
        self.state = ScreenState(units=units)
        self._request_ids = itertools.count(1)
        self._last_city: str | None = None

    def dispatch(self, action: Action) -> ScreenState:
        self.state = reduce(self.state, action)
        return self.state

    async def load_favorites(self) -> ScreenState:
        """Reload favorites from storage and reconcile the star."""
        favorites = await self.favorites.load()
        return self.dispatch(FavoritesChanged(tuple(favorites)))

    async def show_device_weather(self) -> ScreenState:
        """Fetch weather for the device location."""
        self._last_city = None
        return await self._run(lambda: self.pipeline.resolve_by_device(self.state.units))

    async def search(self, city: str) -> ScreenState:
        """Fetch weather for ``city``; a blank query changes nothing."""
        query = city.strip() if city else ""
        if not query:
            return self.state

        self._last_city = query
        return await self._run(lambda: self._fetch_city(query))

    async def refresh(self) -> ScreenState:
        """Re-run the last trigger (city search or device location)."""
        if self._last_city:
            return await self.search(self._last_city)
        return await self.show_device_weather()

    async def toggle_units(self) -> ScreenState:
        """Switch unit system and refetch the displayed coordinate.

        While a fetch is in flight the pending trigger is re-run with the new
        units, which supersedes the request issued with the old ones.
        """
        units = self.state.units.toggled()
        self.dispatch(UnitsChanged(units))

        if self.state.is_loading:
            return await self.refresh()

        report = self.state.report
        if report is None:
            return self.state

        coordinate = report.snapshot.coordinate
        return await self._run(lambda: self.pipeline.fetch(coordinate, units))

    async def toggle_favorite(self) -> ScreenState:
        """Add or remove the displayed city from favorites."""
        city = self.state.city_name
        if not city:
            return self.state

        try:
            await self.favorites.toggle(city)
            self.dispatch(NoticeRaised(None))
        except StorageWriteError as err:
            logger.error("Favorite change not persisted: %s", err.message)
            self.dispatch(NoticeRaised(err.message))

        return self.dispatch(FavoritesChanged(tuple(self.favorites.favorites)))

    # Private helper methods
    async def _fetch_city(self, query: str) -> WeatherReport:
        report = await self.pipeline.resolve_by_city(query, self.state.units)
        if report is None:
            raise CityNotFoundError(query)
        return report

    async def _run(self, fetch: Callable[[], Awaitable[WeatherReport]]) -> ScreenState:
        request_id = next(self._request_ids)
        self.dispatch(FetchStarted(request_id))

        try:
            report = await fetch()
        except WeatherAppError as err:
            logger.error("Weather fetch %d failed: %s", request_id, err.message)
            return self.dispatch(FetchFailed(request_id, err.message))

        return self.dispatch(FetchSucceeded(request_id, report))
