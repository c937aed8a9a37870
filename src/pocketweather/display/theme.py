"""Theme resolution and colour palettes.

The active theme is derived on every render from two inputs, the
appearance the system reports and the user's preference; nothing global is
mutated when either changes.
"""

from __future__ import annotations

from dataclasses import dataclass

from pocketweather.common.enums import Theme, ThemePreference


@dataclass(frozen=True)
class Palette:
    """Colours used by the screen templates."""

    text: str
    background: str
    card: str
    icon: str
    input_background: str
    placeholder: str
    detail_box: str
    gradient: tuple[str, str]
    accent: str = "#007AFF"


PALETTES: dict[Theme, Palette] = {
    Theme.LIGHT: Palette(
        text="#000",
        background="#f0f2f5",
        card="#fff",
        icon="#000",
        input_background="#fff",
        placeholder="#8e8e93",
        detail_box="rgba(0, 0, 0, 0.1)",
        gradient=("#4A90E2", "#007AFF"),
    ),
    Theme.DARK: Palette(
        text="#fff",
        background="#121212",
        card="#1e1e1e",
        icon="#fff",
        input_background="rgba(255, 255, 255, 0.2)",
        placeholder="#E0E0E0",
        detail_box="rgba(255, 255, 255, 0.2)",
        gradient=("#003973", "#232526"),
    ),
}


def resolve_theme(
    system: Theme | None, preference: ThemePreference = ThemePreference.SYSTEM
) -> Theme:
    """Pick the theme for this render pass.

    Args:
        system: Appearance reported by the system, None if unknown
        preference: User override; SYSTEM defers to ``system``

    Returns:
        The theme to render with (light when nothing is known)
    """
    if preference is ThemePreference.LIGHT:
        return Theme.LIGHT
    if preference is ThemePreference.DARK:
        return Theme.DARK
    return system or Theme.LIGHT


def palette_for(theme: Theme) -> Palette:
    return PALETTES[theme]
