from pathlib import Path

import pytest

from pocketweather.common.enums import ConditionCode, ScreenPhase, Theme, UnitSystem
from pocketweather.display.render import TEMPLATES_DIR, ScreenRenderer
from pocketweather.models import Coordinate, ForecastSample
from pocketweather.state import (
    FavoritesChanged,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    NoticeRaised,
    ScreenState,
    reduce,
)

from conftest import make_report


@pytest.fixture
def renderer() -> ScreenRenderer:
    return ScreenRenderer()


@pytest.fixture
def ready_state() -> ScreenState:
    report = make_report().model_copy(
        update={
            "forecast": (
                ForecastSample(
                    timestamp=1714737600, temperature=21.6, condition_code=ConditionCode.RAIN
                ),
            )
        }
    )
    state = reduce(ScreenState(), FetchStarted(1))
    return reduce(state, FetchSucceeded(1, report))


def test_templates_dir_is_packaged() -> None:
    assert (TEMPLATES_DIR / "weather.html.j2").exists()


def test_ready_screen(renderer: ScreenRenderer, ready_state: ScreenState) -> None:
    html = renderer.render_weather(ready_state, Theme.LIGHT, query="Madrid")

    assert "Madrid" in html
    assert "15°C" in html
    assert "nubes rotas" in html
    assert 'data-icon="cloudy"' in html
    assert 'data-icon="rainy"' in html
    assert "22°" in html
    assert "62%" in html
    assert "3.6 m/s" in html
    assert "1016 hPa" in html
    assert 'data-icon="star-outline"' in html
    assert "#4A90E2" in html


def test_ready_screen_favorite_and_dark(
    renderer: ScreenRenderer, ready_state: ScreenState
) -> None:
    state = reduce(ready_state, FavoritesChanged(("Madrid",)))

    html = renderer.render_weather(state, Theme.DARK)

    assert 'data-icon="star"' in html
    assert "★" in html
    assert "#003973" in html


def test_imperial_labels(renderer: ScreenRenderer, ready_state: ScreenState) -> None:
    state = ready_state.model_copy(update={"units": UnitSystem.IMPERIAL})
    html = renderer.render_weather(state, Theme.LIGHT)
    assert "15°F" in html
    assert "mph" in html


def test_loading_screen(renderer: ScreenRenderer) -> None:
    state = reduce(ScreenState(), FetchStarted(1))
    assert state.phase is ScreenPhase.LOADING

    html = renderer.render_weather(state, Theme.LIGHT)

    assert "Obteniendo datos del clima" in html


def test_error_screen_is_escaped(renderer: ScreenRenderer) -> None:
    state = reduce(ScreenState(), FetchStarted(1))
    state = reduce(state, FetchFailed(1, "City not found: <script>"))

    html = renderer.render_weather(state, Theme.LIGHT)

    assert "City not found: &lt;script&gt;" in html


def test_welcome_screen(renderer: ScreenRenderer) -> None:
    html = renderer.render_weather(ScreenState(), Theme.LIGHT)
    assert "Bienvenido" in html


def test_notice_is_rendered(renderer: ScreenRenderer, ready_state: ScreenState) -> None:
    state = reduce(ready_state, NoticeRaised("Could not save 'favorites': disk full"))
    html = renderer.render_weather(state, Theme.LIGHT)
    assert "Could not save" in html


def test_favorites_screen(renderer: ScreenRenderer) -> None:
    html = renderer.render_favorites(["Madrid", "São Paulo"], Theme.DARK)

    assert "Madrid" in html
    assert "?city=S%C3%A3o%20Paulo" in html
    assert "Aún no tienes" not in html


def test_empty_favorites_screen(renderer: ScreenRenderer) -> None:
    html = renderer.render_favorites([], Theme.LIGHT)
    assert "Aún no tienes ubicaciones favoritas" in html
    assert 'class="theme-button active" href="?theme=light"' in html


def test_map_without_location(renderer: ScreenRenderer) -> None:
    html = renderer.render_map(None, "https://tiles/{z}/{x}/{y}.png", Theme.LIGHT)

    assert "Visita la pestaña" in html
    assert "L.map" not in html


def test_map_with_location(renderer: ScreenRenderer) -> None:
    coordinate = Coordinate(latitude=40.0, longitude=-4.0)
    html = renderer.render_map(
        coordinate, "https://tiles/{z}/{x}/{y}.png", Theme.DARK, opacity=0.6, delta=2.0
    )

    assert "fitBounds([[39.0, -5.0], [41.0, -3.0]])" in html
    assert '"https://tiles/{z}/{x}/{y}.png"' in html
    assert "opacity: 0.6" in html
    assert "dark-base" in html


def test_custom_templates_dir(tmp_path: Path) -> None:
    (tmp_path / "favorites.html.j2").write_text("{{ favorites | join(',') }}", encoding="utf-8")
    renderer = ScreenRenderer(templates_dir=tmp_path)
    assert renderer.render_favorites(("a", "b"), Theme.LIGHT) == "a,b"
