from __future__ import annotations

from enum import Enum


class ConditionCode(str, Enum):
    """Coarse weather condition groups shown in the UI.

    Values match the ``main`` field of OpenWeather condition entries; any
    other group (Mist, Fog, Haze, ...) folds into ``OTHER``.
    """

    CLEAR = "Clear"
    CLOUDS = "Clouds"
    RAIN = "Rain"
    SNOW = "Snow"
    THUNDERSTORM = "Thunderstorm"
    DRIZZLE = "Drizzle"
    OTHER = "Other"

    @classmethod
    def from_main(cls, main: str | None) -> ConditionCode:
        """Map an OpenWeather ``main`` group onto a condition code."""
        try:
            return cls((main or "").strip())
        except ValueError:
            return cls.OTHER


class UnitSystem(str, Enum):
    """Measurement system requested from the provider."""

    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def temperature_symbol(self) -> str:
        return "°C" if self is UnitSystem.METRIC else "°F"

    @property
    def wind_speed_label(self) -> str:
        return "m/s" if self is UnitSystem.METRIC else "mph"

    def toggled(self) -> UnitSystem:
        """Return the other unit system."""
        if self is UnitSystem.METRIC:
            return UnitSystem.IMPERIAL
        return UnitSystem.METRIC


class Theme(str, Enum):
    """Resolved appearance used for a render pass."""

    LIGHT = "light"
    DARK = "dark"


class ThemePreference(str, Enum):
    """User appearance preference; SYSTEM defers to the OS report."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class PermissionStatus(str, Enum):
    """Outcome of a location permission prompt."""

    GRANTED = "granted"
    DENIED = "denied"


class ScreenPhase(str, Enum):
    """Externally observable phases of the weather screen."""

    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"
    READY = "ready"
