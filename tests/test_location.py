import asyncio
from unittest.mock import Mock, patch

import pytest
import requests

from pocketweather.common.enums import PermissionStatus
from pocketweather.errors import LocationUnavailableError
from pocketweather.location import IPLocationProvider, LocationProvider, StaticLocationProvider
from pocketweather.models import Coordinate

from conftest import MADRID, make_response


def test_providers_satisfy_protocol() -> None:
    assert isinstance(StaticLocationProvider(MADRID), LocationProvider)
    assert isinstance(IPLocationProvider(), LocationProvider)


def test_static_provider() -> None:
    provider = StaticLocationProvider(MADRID)
    assert asyncio.run(provider.request_permission()) is PermissionStatus.GRANTED
    assert asyncio.run(provider.current_position()) == MADRID


@pytest.mark.parametrize(
    "coordinate, granted", [(MADRID, False), (None, True)]
)
def test_static_provider_denied(coordinate: Coordinate | None, granted: bool) -> None:
    provider = StaticLocationProvider(coordinate, granted=granted)
    assert asyncio.run(provider.request_permission()) is PermissionStatus.DENIED


def test_static_provider_without_coordinate() -> None:
    with pytest.raises(LocationUnavailableError):
        asyncio.run(StaticLocationProvider(None).current_position())


def test_ip_provider_permission() -> None:
    assert asyncio.run(IPLocationProvider(allowed=False).request_permission()) is (
        PermissionStatus.DENIED
    )


def test_ip_provider_first_service() -> None:
    with patch("pocketweather.location.requests.get") as mock_get:
        mock_get.return_value = make_response(
            200, {"status": "success", "lat": 40.4168, "lon": -3.7038}
        )

        coordinate = asyncio.run(IPLocationProvider(timeout=2.0).current_position())

    assert coordinate == MADRID
    assert mock_get.call_count == 1
    assert mock_get.call_args.kwargs["timeout"] == 2.0


def test_ip_provider_falls_back_to_second_service() -> None:
    responses = [
        make_response(200, {"status": "fail", "message": "reserved range"}),
        make_response(200, {"latitude": 40.4168, "longitude": -3.7038}),
    ]
    with patch("pocketweather.location.requests.get", side_effect=responses) as mock_get:
        coordinate = asyncio.run(IPLocationProvider().current_position())

    assert coordinate == MADRID
    assert mock_get.call_args.args[0] == "https://ipapi.co/json/"


def test_ip_provider_all_services_fail() -> None:
    side_effect = [
        requests.ConnectionError("offline"),
        Mock(status_code=429),
    ]
    with patch("pocketweather.location.requests.get", side_effect=side_effect):
        with pytest.raises(LocationUnavailableError):
            asyncio.run(IPLocationProvider().current_position())


def test_ip_provider_unusable_payload() -> None:
    responses = [
        make_response(200, {"status": "success"}),
        make_response(200, {"error": True, "reason": "RateLimited"}),
    ]
    with patch("pocketweather.location.requests.get", side_effect=responses):
        with pytest.raises(LocationUnavailableError):
            asyncio.run(IPLocationProvider().current_position())
