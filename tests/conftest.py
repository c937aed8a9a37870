from __future__ import annotations

import json
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from pathlib import Path
from typing import Any
from unittest.mock import Mock, patch

import pytest

from pocketweather.common.enums import ConditionCode, UnitSystem
from pocketweather.models import Coordinate, WeatherReport, WeatherSnapshot
from pocketweather.settings.user import UserSettings

MADRID = Coordinate(latitude=40.4168, longitude=-3.7038)

# First forecast step: 2024-05-03 00:00:00 UTC
FORECAST_START = 1714694400


@pytest.fixture
def settings(tmp_path: Path) -> UserSettings:
    return UserSettings(
        api_key="fake-api-key",
        units="metric",
        lang="es",
        timeout=5,
        store_path=tmp_path / "store.json",
    )


def make_current(
    name: str = "Madrid",
    temp: float = 15.2,
    main: str = "Clouds",
    coord: Coordinate = MADRID,
) -> dict[str, Any]:
    return {
        "coord": {"lon": coord.longitude, "lat": coord.latitude},
        "weather": [{"id": 803, "main": main, "description": "nubes rotas", "icon": "04d"}],
        "main": {
            "temp": temp,
            "feels_like": 14.1,
            "temp_min": 13.0,
            "temp_max": 17.0,
            "pressure": 1016,
            "humidity": 62,
        },
        "wind": {"speed": 3.6, "deg": 250},
        "dt": 1714737600,
        "name": name,
        "cod": 200,
    }


def make_forecast(days: int = 5, start: int = FORECAST_START) -> dict[str, Any]:
    """40 three-hour steps starting at midnight UTC, like the real feed."""
    entries = []
    for step in range(days * 8):
        ts = start + step * 3 * 3600
        dt = datetime.fromtimestamp(ts, tz=UTC)
        entries.append(
            {
                "dt": ts,
                "dt_txt": dt.strftime("%Y-%m-%d %H:%M:%S"),
                "main": {
                    "temp": 10.0 + step,
                    "feels_like": 9.0 + step,
                    "pressure": 1015,
                    "humidity": 50,
                },
                "weather": [
                    {"id": 500, "main": "Rain", "description": "lluvia ligera", "icon": "10d"}
                ],
            }
        )
    return {"cod": "200", "cnt": len(entries), "list": entries, "city": {"name": "Madrid"}}


def make_response(status: int, body: Any = None, content: bytes = b"") -> Mock:
    resp = Mock()
    resp.status_code = status
    resp.content = content
    if body is None:
        resp.json.side_effect = ValueError("no json")
        resp.text = ""
    else:
        resp.json.return_value = body
        resp.text = json.dumps(body)
    return resp


Routes = dict[str, Mock]


@pytest.fixture
def route_get() -> Iterator[Callable[[Routes], Mock]]:
    """Patch requests.get and answer by URL path suffix.

    The pipeline issues its requests from worker threads, so routing by URL
    keeps the tests independent of completion order.
    """
    with patch("pocketweather.weather.api.requests.get") as mock_get:

        def install(routes: Routes) -> Mock:
            def _get(url: str, params: Any = None, **kwargs: Any) -> Mock:
                for suffix, resp in routes.items():
                    if url.endswith(suffix):
                        return resp
                raise AssertionError(f"unexpected request to {url}")

            mock_get.side_effect = _get
            return mock_get

        yield install


@pytest.fixture
def madrid_routes() -> Routes:
    return {
        "/geo/1.0/direct": make_response(
            200, [{"name": "Madrid", "lat": 40.4168, "lon": -3.7038, "country": "ES"}]
        ),
        "/data/2.5/weather": make_response(200, make_current()),
        "/data/2.5/forecast": make_response(200, make_forecast()),
    }


def make_report(city: str = "Madrid", units: UnitSystem = UnitSystem.METRIC) -> WeatherReport:
    snapshot = WeatherSnapshot(
        city_name=city,
        coordinate=MADRID,
        temperature=15.2,
        feels_like=14.1,
        humidity=62,
        wind_speed=3.6,
        pressure=1016,
        condition_code=ConditionCode.CLOUDS,
        description="nubes rotas",
        observed_at=1714737600,
    )
    return WeatherReport(snapshot=snapshot, forecast=(), units=units)
