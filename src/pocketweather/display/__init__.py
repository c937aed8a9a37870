"""Presentation helpers: theme resolution, screen rendering and map tiles."""

from pocketweather.display.render import ScreenRenderer
from pocketweather.display.theme import PALETTES, Palette, palette_for, resolve_theme
from pocketweather.display.tiles import compose_cloud_tile, tile_for_coordinate

__all__ = [
    "PALETTES",
    "Palette",
    "ScreenRenderer",
    "compose_cloud_tile",
    "palette_for",
    "resolve_theme",
    "tile_for_coordinate",
]
