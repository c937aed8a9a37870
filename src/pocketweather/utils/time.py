"""Time and date handling utilities."""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo


class TimeUtils:
    """Time-related utility functions.

    Forecast and observation times arrive as UNIX seconds; these helpers
    turn them into aware datetimes and short display labels.
    """

    @staticmethod
    def epoch_to_datetime(timestamp: int) -> datetime:
        """Convert UNIX timestamp to UTC datetime with timezone information.

        Args:
            timestamp: UNIX timestamp (seconds since epoch)

        Returns:
            Timezone-aware datetime object in UTC
        """
        return datetime.fromtimestamp(timestamp, tz=UTC)

    @staticmethod
    def to_local_datetime(timestamp: int, tz: tzinfo | None = None) -> datetime:
        """Convert POSIX timestamp to a datetime in ``tz`` (system zone if None)."""
        return TimeUtils.epoch_to_datetime(timestamp).astimezone(tz)

    @staticmethod
    def weekday_short(timestamp: int, tz: tzinfo | None = None) -> str:
        """Short weekday label (e.g. ``Mon``) for a POSIX timestamp."""
        return TimeUtils.to_local_datetime(timestamp, tz).strftime("%a")

    @staticmethod
    def now_localized() -> datetime:
        """Get current datetime with local timezone."""
        return datetime.now(UTC).astimezone()
