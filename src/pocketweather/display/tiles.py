"""Raster helpers for the cloud map overlay."""

from __future__ import annotations

import io
import logging
import math
from typing import Final

import requests
from PIL import Image

from pocketweather.models import Coordinate
from pocketweather.weather.errors import NetworkError, WeatherAPIError

logger: Final = logging.getLogger(__name__)

DEFAULT_OPACITY: Final = 0.6
BASE_TILE_URL: Final = "https://tile.openstreetmap.org/{z}/{x}/{y}.png"
USER_AGENT: Final = "pocketweather/0.1 (cloud map preview)"


def tile_for_coordinate(coordinate: Coordinate, zoom: int) -> tuple[int, int]:
    """Web-Mercator tile (x, y) containing ``coordinate`` at ``zoom``."""
    n = 2**zoom
    lat = math.radians(max(min(coordinate.latitude, 85.0511), -85.0511))
    x = int((coordinate.longitude + 180.0) / 360.0 * n)
    y = int((1.0 - math.asinh(math.tan(lat)) / math.pi) / 2.0 * n)
    return min(x, n - 1), min(y, n - 1)


def fetch_base_tile(z: int, x: int, y: int, timeout: float = 10.0) -> bytes:
    """Download one OpenStreetMap base tile.

    Raises:
        NetworkError: When the tile server cannot be reached
        WeatherAPIError: When it answers with a non-success status
    """
    url = BASE_TILE_URL.format(z=z, x=x, y=y)
    try:
        resp = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("Base tile network error: %s", exc)
        raise NetworkError(f"Network error: {exc}", exc) from exc

    if resp.status_code != 200:
        logger.error("Base tile error: %s", resp.status_code)
        raise WeatherAPIError(resp.status_code, "Could not fetch base map tile")
    return resp.content


def compose_cloud_tile(
    base_png: bytes, cloud_png: bytes, opacity: float = DEFAULT_OPACITY
) -> bytes:
    """Blend a cloud tile over a base map tile.

    The cloud tile's own alpha channel is scaled by ``opacity`` before
    compositing, so transparent sky stays transparent.

    Args:
        base_png: Base map tile
        cloud_png: Weather layer tile of the same z/x/y
        opacity: Overlay opacity between 0 and 1

    Returns:
        PNG bytes of the composited tile
    """
    if not 0.0 <= opacity <= 1.0:
        raise ValueError(f"opacity must be between 0 and 1, got {opacity}")

    base = Image.open(io.BytesIO(base_png)).convert("RGBA")
    cloud = Image.open(io.BytesIO(cloud_png)).convert("RGBA")
    if cloud.size != base.size:
        logger.debug("Resizing cloud tile %s to base tile %s", cloud.size, base.size)
        cloud = cloud.resize(base.size)

    alpha = cloud.getchannel("A").point(lambda a: round(a * opacity))
    cloud.putalpha(alpha)

    out = io.BytesIO()
    Image.alpha_composite(base, cloud).save(out, format="PNG")
    return out.getvalue()
