"""Screen rendering components."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Final, Optional, cast

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from pocketweather.common.enums import ScreenPhase, Theme
from pocketweather.display.theme import palette_for
from pocketweather.models import Coordinate
from pocketweather.state import ScreenState
from pocketweather.utils import TimeUtils, format_percentage, format_temperature
from pocketweather.utils.formatting import format_pressure, format_wind_speed
from pocketweather.weather.utils import WeatherIcons

TEMPLATES_DIR: Final = Path(__file__).parent / "templates"


class ScreenRenderer:
    """Handles the Jinja2 environment and renders the three screens.

    Capabilities:
    - Weather screen for each phase (loading, error, welcome, ready)
    - Favorites / info screen with the theme selector
    - Map screen with the cloud tile overlay

    Templates receive the resolved palette rather than a theme name, so a
    theme change only needs a new render pass.
    """

    def __init__(self, templates_dir: Optional[Path] = None) -> None:
        """Initialize the renderer.

        Args:
            templates_dir: Directory containing templates (default: packaged templates)
        """
        self.templates_dir = templates_dir or TEMPLATES_DIR
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=select_autoescape(["html", "j2"]),
        )
        self._register_filters()

    def _register_filters(self) -> None:
        """Register custom filters with the Jinja environment."""
        self.env.filters.update(
            {
                "weather_icon": WeatherIcons.get_icon_name,
                "temperature": format_temperature,
                "percentage": format_percentage,
                "wind_speed": format_wind_speed,
                "pressure": format_pressure,
                "weekday": TimeUtils.weekday_short,
            }
        )

    def _render(self, name: str, theme: Theme, **context: Any) -> str:
        template: Template = self.env.get_template(name)
        return cast(str, template.render(theme=theme, palette=palette_for(theme), **context))

    def render_weather(self, state: ScreenState, theme: Theme, query: str = "") -> str:
        """Render the weather screen for ``state``.

        Loading and error phases replace the whole content area; before the
        first fetch a welcome prompt is shown.
        """
        if state.phase is ScreenPhase.LOADING:
            view = "loading"
        elif state.phase is ScreenPhase.ERROR:
            view = "error"
        elif state.report is None:
            view = "welcome"
        else:
            view = "ready"

        return self._render(
            "weather.html.j2",
            theme,
            view=view,
            state=state,
            report=state.report,
            units=state.units,
            query=query,
            favorite_icon=WeatherIcons.favorite_icon(state.is_favorite),
        )

    def render_favorites(self, favorites: list[str] | tuple[str, ...], theme: Theme) -> str:
        """Render the favorites / info screen."""
        return self._render("favorites.html.j2", theme, favorites=list(favorites))

    def render_map(
        self,
        coordinate: Coordinate | None,
        tile_url: str,
        theme: Theme,
        opacity: float = 0.6,
        delta: float = 0.5,
    ) -> str:
        """Render the cloud map, or a prompt when no location is known yet."""
        bounds = None
        if coordinate is not None:
            half = delta / 2
            bounds = [
                [coordinate.latitude - half, coordinate.longitude - half],
                [coordinate.latitude + half, coordinate.longitude + half],
            ]
        return self._render(
            "map.html.j2",
            theme,
            coordinate=coordinate,
            bounds=bounds,
            tile_url=tile_url,
            opacity=opacity,
        )
