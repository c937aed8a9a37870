"""Enumerations shared across the pocketweather packages."""

from pocketweather.common.enums import (
    ConditionCode,
    PermissionStatus,
    ScreenPhase,
    Theme,
    ThemePreference,
    UnitSystem,
)

__all__ = [
    "ConditionCode",
    "PermissionStatus",
    "ScreenPhase",
    "Theme",
    "ThemePreference",
    "UnitSystem",
]
