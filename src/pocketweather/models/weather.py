"""Domain models produced by the weather pipeline."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from pocketweather.common.enums import ConditionCode, UnitSystem
from pocketweather.models.base import FrozenModel
from pocketweather.utils.time import TimeUtils


class Coordinate(FrozenModel):
    """Geographic position in decimal degrees."""

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    def as_params(self) -> dict[str, float]:
        """Query parameters understood by the OpenWeather endpoints."""
        return {"lat": self.latitude, "lon": self.longitude}


class WeatherSnapshot(FrozenModel):
    """Current conditions for one resolved coordinate at one fetch time."""

    city_name: str
    coordinate: Coordinate
    temperature: float
    feels_like: float
    humidity: int = Field(..., ge=0, le=100)
    wind_speed: float
    pressure: float
    condition_code: ConditionCode
    description: str
    observed_at: int

    @property
    def observed_datetime(self) -> datetime:
        return TimeUtils.epoch_to_datetime(self.observed_at)


class ForecastSample(FrozenModel):
    """One daily-representative data point of the forecast feed."""

    timestamp: int
    temperature: float
    condition_code: ConditionCode

    @property
    def weekday_short(self) -> str:
        return TimeUtils.weekday_short(self.timestamp)


class WeatherReport(FrozenModel):
    """Everything one successful fetch cycle produces."""

    snapshot: WeatherSnapshot
    forecast: tuple[ForecastSample, ...]
    units: UnitSystem = UnitSystem.METRIC
