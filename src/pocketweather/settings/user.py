"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from pocketweather.common.enums import ThemePreference, UnitSystem
from pocketweather.models import Coordinate

# Load environment variables from .env file(s)
load_dotenv()

API_KEY_ENV = "OPENWEATHER_API_KEY"
CONFIG_ENV = "POCKETWEATHER_CONFIG"


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class UserSettings(BaseModel):
    """User settings for the provider, the screens and local storage.

    Every field has a default so the application can start from nothing
    but an ``OPENWEATHER_API_KEY`` environment variable. An empty API key
    is accepted; the provider then rejects each request and the screen
    shows that error.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/pocketweather/config.yaml").expanduser(),
    ]

    # Provider settings
    api_key: str = Field("", description="OpenWeather API key")
    units: UnitSystem = UnitSystem.METRIC
    lang: str = Field("es", min_length=2, description="Language of condition descriptions")
    timeout: float = Field(10.0, gt=0, description="HTTP timeout in seconds")

    # Device location (static provider); None leaves permission denied
    latitude: float | None = Field(None, ge=-90.0, le=90.0)
    longitude: float | None = Field(None, ge=-180.0, le=180.0)
    allow_location: bool = Field(True, description="Grant the location permission prompt")

    # Presentation
    theme: ThemePreference = ThemePreference.SYSTEM
    forecast_marker: str = Field(
        "12:00:00", min_length=1, description="Forecast dt_txt marker kept as the daily sample"
    )

    # Map
    tile_layer: str = Field("clouds_new", description="OpenWeather map layer for the overlay")
    tile_opacity: float = Field(0.6, ge=0.0, le=1.0)
    map_delta: float = Field(0.5, gt=0.0, description="Map span around the location (degrees)")

    # Files
    store_path: Path = Field(
        Path("~/.local/share/pocketweather/store.json").expanduser(),
        description="JSON file backing the key-value store",
    )

    # ---- validators ----
    @field_validator("store_path")
    @classmethod
    def expand_home(cls, v: Path) -> Path:
        return v.expanduser()

    @model_validator(mode="after")
    def check_coordinate_pair(self) -> UserSettings:
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be set together")
        return self

    # ---- convenience methods ----
    @property
    def device_coordinate(self) -> Coordinate | None:
        """Configured device position, if any."""
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    @property
    def is_metric(self) -> bool:
        """Whether the user has selected metric units."""
        return self.units is UnitSystem.METRIC

    @classmethod
    def from_env(cls) -> UserSettings:
        """Build settings from the environment alone."""
        return cls(api_key=os.environ.get(API_KEY_ENV, ""))

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations
                and falls back to the environment if None)

        Returns:
            Validated UserSettings object

        Raises:
            FileNotFoundError: If an explicitly named config file is missing
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            env_path = os.environ.get(CONFIG_ENV)
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from {CONFIG_ENV} not found: {path}")
            else:
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    return cls.from_env()
        elif not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text(encoding="utf-8"))
            data = yaml.safe_load(raw) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        if not isinstance(data, dict):
            raise RuntimeError("Invalid configuration: top level must be a mapping")

        data.setdefault("api_key", os.environ.get(API_KEY_ENV, ""))

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
