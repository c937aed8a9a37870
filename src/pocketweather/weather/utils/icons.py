"""Weather icon utilities and mappings."""

from __future__ import annotations

from typing import ClassVar, Final

from pocketweather.common.enums import ConditionCode

FALLBACK_ICON: Final = "partly-sunny"


class WeatherIcons:
    """Map condition codes to Ionicons glyph names.

    Codes without a dedicated glyph (including ``OTHER``) get the
    partly-sunny fallback.
    """

    _icon_map: ClassVar[dict[ConditionCode, str]] = {
        ConditionCode.CLEAR: "sunny",
        ConditionCode.CLOUDS: "cloudy",
        ConditionCode.RAIN: "rainy",
        ConditionCode.SNOW: "snow",
        ConditionCode.THUNDERSTORM: "thunderstorm",
        ConditionCode.DRIZZLE: "rainy-outline",
    }

    @classmethod
    def get_icon_name(cls, code: ConditionCode | str | None) -> str:
        """Get the icon name for a condition code or raw ``main`` string.

        Args:
            code: ConditionCode, or an OpenWeather ``main`` value

        Returns:
            Ionicons glyph name
        """
        if not isinstance(code, ConditionCode):
            code = ConditionCode.from_main(code)
        return cls._icon_map.get(code, FALLBACK_ICON)

    @staticmethod
    def favorite_icon(is_favorite: bool) -> str:
        """Star glyph for the favorite toggle."""
        return "star" if is_favorite else "star-outline"

    @classmethod
    def get_icon_map(cls) -> dict[ConditionCode, str]:
        """Get the complete icon mapping dictionary."""
        return dict(cls._icon_map)
