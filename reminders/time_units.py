"""Calendar unit helpers for schedule intervals and buffers."""

import math
from datetime import datetime
from enum import Enum

from dateutil.relativedelta import relativedelta


class TimeUnit(Enum):
    """Units a schedule interval or buffer can be expressed in."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"

    @classmethod
    def parse(cls, text: str) -> "TimeUnit":
        """Parse a unit name, case-insensitive, singular or plural."""
        normalized = text.strip().lower()
        if normalized.endswith("s"):
            normalized = normalized[:-1]
        return cls(normalized)


def add_interval(moment: datetime, value: int, unit: TimeUnit) -> datetime:
    """Advance a moment by value hours, days or weeks."""
    if unit is TimeUnit.HOUR:
        return moment + relativedelta(hours=value)
    if unit is TimeUnit.DAY:
        return moment + relativedelta(days=value)
    if unit is TimeUnit.WEEK:
        return moment + relativedelta(weeks=value)
    raise ValueError(f"Unsupported time unit: {unit!r}")


def to_days(value: int, unit: TimeUnit) -> int:
    """
    Convert an interval to whole days.

    Hours round up, so a 1-hour buffer still counts as a full day.
    """
    if unit is TimeUnit.HOUR:
        return math.ceil(value / 24)
    if unit is TimeUnit.DAY:
        return value
    if unit is TimeUnit.WEEK:
        return value * 7
    raise ValueError(f"Unsupported time unit: {unit!r}")
