"""Device location providers.

A provider answers two questions, each behind an awaitable call: may the
app read the location, and where is the device. The pipeline never asks
for a position before the permission prompt returned ``granted``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Final, Protocol, runtime_checkable

import requests

from pocketweather.common.enums import PermissionStatus
from pocketweather.errors import LocationUnavailableError
from pocketweather.models import Coordinate

logger: Final = logging.getLogger(__name__)


@runtime_checkable
class LocationProvider(Protocol):
    """Source of the device's current coordinate."""

    async def request_permission(self) -> PermissionStatus:
        """Prompt for (or report) the location permission."""
        ...

    async def current_position(self) -> Coordinate:
        """Return the current coordinate.

        Raises:
            LocationUnavailableError: If no position can be obtained
        """
        ...


class StaticLocationProvider:
    """Provider for a fixed, configured coordinate.

    Permission is denied when no coordinate is configured, which mirrors a
    device that has location services switched off.
    """

    def __init__(self, coordinate: Coordinate | None, granted: bool = True) -> None:
        self.coordinate = coordinate
        self.granted = granted

    async def request_permission(self) -> PermissionStatus:
        if self.granted and self.coordinate is not None:
            return PermissionStatus.GRANTED
        return PermissionStatus.DENIED

    async def current_position(self) -> Coordinate:
        if self.coordinate is None:
            raise LocationUnavailableError()
        return self.coordinate


def _parse_ip_api(data: dict[str, Any]) -> Coordinate | None:
    if data.get("status") == "fail":
        logger.debug("ip-api failed: %s", data.get("message"))
        return None
    return Coordinate(latitude=data["lat"], longitude=data["lon"])


def _parse_ipapi_co(data: dict[str, Any]) -> Coordinate | None:
    if data.get("error"):
        logger.debug("ipapi.co failed: %s", data.get("reason"))
        return None
    return Coordinate(latitude=data["latitude"], longitude=data["longitude"])


class IPLocationProvider:
    """Approximate the device position from its public IP address.

    Services are tried in order; the first usable answer wins.
    """

    SERVICES: Final[list[tuple[str, str, Callable[[dict[str, Any]], Coordinate | None]]]] = [
        ("ip-api.com", "http://ip-api.com/json/", _parse_ip_api),
        ("ipapi.co", "https://ipapi.co/json/", _parse_ipapi_co),
    ]

    def __init__(self, allowed: bool = True, timeout: float = 5.0) -> None:
        """Initialize the provider.

        Args:
            allowed: Outcome of the permission prompt
            timeout: Per-service HTTP timeout in seconds
        """
        self.allowed = allowed
        self.timeout = timeout

    async def request_permission(self) -> PermissionStatus:
        return PermissionStatus.GRANTED if self.allowed else PermissionStatus.DENIED

    async def current_position(self) -> Coordinate:
        return await asyncio.to_thread(self._locate)

    def _locate(self) -> Coordinate:
        for name, url, parser in self.SERVICES:
            try:
                resp = requests.get(url, timeout=self.timeout)
            except requests.RequestException as exc:
                logger.warning("%s network error: %s", name, exc)
                continue

            if resp.status_code != 200:
                logger.warning("%s returned HTTP %s", name, resp.status_code)
                continue

            try:
                coordinate = parser(resp.json())
            except (ValueError, KeyError, TypeError) as exc:
                logger.warning("%s returned an unusable payload: %s", name, exc)
                continue

            if coordinate is not None:
                logger.info("Location detected via %s", name)
                return coordinate

        logger.warning("All location services failed")
        raise LocationUnavailableError()
