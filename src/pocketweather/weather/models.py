"""Typed models for OpenWeather 2.5 responses.

Only the fields used by the screens are modelled; everything else the
provider sends is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pocketweather.common.enums import ConditionCode
from pocketweather.models import Coordinate, ForecastSample, WeatherSnapshot

# ─────────────────────────── primitives ──────────────────────────────────────


class ProviderModel(BaseModel):
    """Base for raw payload models; unknown fields are dropped."""

    model_config = ConfigDict(extra="ignore")


class Coord(ProviderModel):
    """Geographic coordinates as echoed by the provider."""

    lat: float
    lon: float

    def to_coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.lat, longitude=self.lon)


class WeatherCondition(ProviderModel):
    """Weather condition information from OpenWeather."""

    id: int = 0
    main: str = ""
    description: str = ""
    icon: str = ""

    @property
    def condition_code(self) -> ConditionCode:
        return ConditionCode.from_main(self.main)


class MainBlock(ProviderModel):
    """Temperature, pressure and humidity block."""

    temp: float
    feels_like: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    pressure: float = 0.0
    humidity: int = Field(0, ge=0, le=100)


class Wind(ProviderModel):
    speed: float = 0.0
    deg: int | None = None


class GeocodeResult(ProviderModel):
    """One match of the direct geocoding endpoint."""

    name: str = ""
    lat: float
    lon: float
    country: str | None = None
    state: str | None = None

    def to_coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.lat, longitude=self.lon)


# ─────────────────────────── current conditions ──────────────────────────────


class CurrentConditions(ProviderModel):
    """Payload of the current weather endpoint."""

    name: str = ""
    coord: Coord | None = None
    main: MainBlock
    weather: list[WeatherCondition] = Field(default_factory=list)
    wind: Wind = Field(default_factory=Wind)
    dt: int = 0

    @property
    def weather_main(self) -> WeatherCondition | None:
        """First weather condition in the list or None if not available."""
        return self.weather[0] if self.weather else None

    def to_snapshot(self, coordinate: Coordinate | None = None) -> WeatherSnapshot:
        """Build the domain snapshot from this payload.

        Args:
            coordinate: Coordinate the request was made for; falls back to
                the provider's echoed ``coord`` block when omitted

        Returns:
            A complete WeatherSnapshot
        """
        if coordinate is None:
            if self.coord is None:
                raise ValueError("current conditions carry no coordinate")
            coordinate = self.coord.to_coordinate()

        condition = self.weather_main
        return WeatherSnapshot(
            city_name=self.name,
            coordinate=coordinate,
            temperature=self.main.temp,
            feels_like=(
                self.main.feels_like
                if self.main.feels_like is not None
                else self.main.temp
            ),
            humidity=self.main.humidity,
            wind_speed=self.wind.speed,
            pressure=self.main.pressure,
            condition_code=(
                condition.condition_code if condition else ConditionCode.OTHER
            ),
            description=condition.description if condition else "",
            observed_at=self.dt,
        )


# ─────────────────────────── forecast ────────────────────────────────────────


class ForecastEntry(ProviderModel):
    """One 3-hour step of the forecast feed."""

    dt: int
    dt_txt: str = ""
    main: MainBlock
    weather: list[WeatherCondition] = Field(default_factory=list)

    def to_sample(self) -> ForecastSample:
        condition = self.weather[0] if self.weather else None
        return ForecastSample(
            timestamp=self.dt,
            temperature=self.main.temp,
            condition_code=(
                condition.condition_code if condition else ConditionCode.OTHER
            ),
        )


class ForecastCity(ProviderModel):
    name: str = ""
    coord: Coord | None = None
    timezone: int = 0


class ForecastResponse(ProviderModel):
    """Payload of the 5 day / 3 hour forecast endpoint."""

    entries: list[ForecastEntry] = Field(default_factory=list, alias="list")
    city: ForecastCity | None = None
