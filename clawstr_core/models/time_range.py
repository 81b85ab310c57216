"""Coarse time range labels used for feeds and cache keys."""

from enum import Enum

_RANGE_SECONDS = {
    "hour": 60 * 60,
    "day": 24 * 60 * 60,
    "week": 7 * 24 * 60 * 60,
    "month": 30 * 24 * 60 * 60,
    "year": 365 * 24 * 60 * 60,
}


class TimeRange(str, Enum):
    """Feed time windows."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"

    def since(self, now: int) -> int | None:
        """Lower bound for this range relative to `now`, or None for ALL."""
        seconds = _RANGE_SECONDS.get(self.value)
        if seconds is None:
            return None
        return now - seconds
