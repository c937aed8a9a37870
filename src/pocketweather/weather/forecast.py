"""Forecast normalisation: one representative sample per day."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from pocketweather.models import ForecastSample
from pocketweather.weather.models import ForecastEntry

# The 3-hour feed is stamped in UTC, so "midday" here is 12:00 UTC, not the
# viewer's local noon.
MIDDAY_MARKER: Final = "12:00:00"


def filter_daily(
    entries: Iterable[ForecastEntry], marker: str = MIDDAY_MARKER
) -> list[ForecastEntry]:
    """Keep the entries whose ``dt_txt`` contains ``marker``, in feed order.

    Day uniqueness relies on the feed's fixed sampling interval; feeds with
    a different step, or without a sample at ``marker``, yield fewer (or
    no) days.

    Args:
        entries: Raw forecast entries
        marker: Reference-hour text to look for

    Returns:
        Filtered entries
    """
    return [entry for entry in entries if marker in entry.dt_txt]


def daily_samples(
    entries: Iterable[ForecastEntry], marker: str = MIDDAY_MARKER
) -> tuple[ForecastSample, ...]:
    """Filter ``entries`` to the reference hour and convert them to samples."""
    return tuple(entry.to_sample() for entry in filter_daily(entries, marker))
