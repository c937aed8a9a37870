"""Weather screen state and its transitions.

One immutable ScreenState per screen; ``reduce`` is the only way to get a
new one. Fetch results carry the request id they were issued under, and a
completion whose id is not the latest issued is dropped, so a slow early
request can never overwrite a newer one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from pocketweather.common.enums import ScreenPhase, UnitSystem
from pocketweather.models import FrozenModel, WeatherReport

# ─────────────────────────── actions ─────────────────────────────────────────


@dataclass(frozen=True)
class FetchStarted:
    request_id: int


@dataclass(frozen=True)
class FetchSucceeded:
    request_id: int
    report: WeatherReport


@dataclass(frozen=True)
class FetchFailed:
    request_id: int
    message: str


@dataclass(frozen=True)
class UnitsChanged:
    units: UnitSystem


@dataclass(frozen=True)
class FavoritesChanged:
    favorites: tuple[str, ...]


@dataclass(frozen=True)
class NoticeRaised:
    """A non-fatal problem (e.g. a failed write) shown next to the content."""

    message: str | None


Action = Union[
    FetchStarted, FetchSucceeded, FetchFailed, UnitsChanged, FavoritesChanged, NoticeRaised
]

# ─────────────────────────── state ───────────────────────────────────────────


class ScreenState(FrozenModel):
    """Everything the weather screen renders from."""

    phase: ScreenPhase = ScreenPhase.IDLE
    error: str | None = None
    notice: str | None = None
    report: WeatherReport | None = None
    units: UnitSystem = UnitSystem.METRIC
    favorites: tuple[str, ...] = ()
    latest_request: int = 0

    @property
    def city_name(self) -> str | None:
        return self.report.snapshot.city_name if self.report else None

    @property
    def is_favorite(self) -> bool:
        """Whether the displayed city is in the favorites list."""
        city = self.city_name
        return city is not None and city in self.favorites

    @property
    def is_loading(self) -> bool:
        return self.phase is ScreenPhase.LOADING


def reduce(state: ScreenState, action: Action) -> ScreenState:
    """Apply ``action`` to ``state`` and return the resulting state.

    Fetch completions for a request other than ``state.latest_request``
    return ``state`` unchanged. A failure keeps the previous report so it
    is available again once a later fetch succeeds.
    """
    if isinstance(action, FetchStarted):
        return state.model_copy(
            update={
                "phase": ScreenPhase.LOADING,
                "error": None,
                "latest_request": max(state.latest_request, action.request_id),
            }
        )

    if isinstance(action, FetchSucceeded):
        if action.request_id != state.latest_request:
            return state
        return state.model_copy(
            update={
                "phase": ScreenPhase.READY,
                "error": None,
                "report": action.report,
                "units": action.report.units,
            }
        )

    if isinstance(action, FetchFailed):
        if action.request_id != state.latest_request:
            return state
        return state.model_copy(update={"phase": ScreenPhase.ERROR, "error": action.message})

    if isinstance(action, UnitsChanged):
        return state.model_copy(update={"units": action.units})

    if isinstance(action, FavoritesChanged):
        return state.model_copy(update={"favorites": tuple(action.favorites)})

    if isinstance(action, NoticeRaised):
        return state.model_copy(update={"notice": action.message})

    raise TypeError(f"Unknown action: {action!r}")
