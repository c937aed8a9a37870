"""Application wiring: builds every component from user settings."""

from __future__ import annotations

from pocketweather.common.enums import Theme
from pocketweather.controller import WeatherScreen
from pocketweather.display.render import ScreenRenderer
from pocketweather.display.theme import resolve_theme
from pocketweather.location import IPLocationProvider, LocationProvider, StaticLocationProvider
from pocketweather.settings import UserSettings
from pocketweather.storage import (
    FavoritesStore,
    JsonFileStore,
    KeyValueStore,
    LastLocationCache,
)
from pocketweather.weather.api import WeatherAPI
from pocketweather.weather.pipeline import WeatherPipeline


def default_location_provider(settings: UserSettings) -> LocationProvider:
    """Static provider when coordinates are configured, IP lookup otherwise."""
    coordinate = settings.device_coordinate
    if coordinate is not None:
        return StaticLocationProvider(coordinate, granted=settings.allow_location)
    return IPLocationProvider(allowed=settings.allow_location, timeout=settings.timeout)


class WeatherApp:
    """Application container.

    Combines user configuration with the default implementation of each
    collaborator. Any component can be injected instead, which is how the
    tests swap in memory stores and fake providers.

    Examples:
        app = WeatherApp(UserSettings.load())
        state = asyncio.run(app.screen.search("Madrid"))
        html = app.renderer.render_weather(state, app.theme())
    """

    def __init__(
        self,
        settings: UserSettings,
        api: WeatherAPI | None = None,
        store: KeyValueStore | None = None,
        location_provider: LocationProvider | None = None,
        renderer: ScreenRenderer | None = None,
    ) -> None:
        self.settings = settings
        self.api = api or WeatherAPI(settings)
        self.store = store or JsonFileStore(settings.store_path)
        self.location_provider = location_provider or default_location_provider(settings)
        self.renderer = renderer or ScreenRenderer()

        self.favorites = FavoritesStore(self.store)
        self.last_location = LastLocationCache(self.store)
        self.pipeline = WeatherPipeline(
            self.api,
            self.location_provider,
            self.last_location,
            units=settings.units,
            forecast_marker=settings.forecast_marker,
        )
        self.screen = WeatherScreen(self.pipeline, self.favorites, units=settings.units)

    def theme(self, system: Theme | None = None) -> Theme:
        """Resolve the theme for one render pass."""
        return resolve_theme(system, self.settings.theme)
