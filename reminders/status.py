"""Status and priority enums for projected service reminders."""

from enum import Enum


class Status(Enum):
    """Reminder status categories. Lower value = more urgent."""

    OVERDUE = 1
    DUE_SOON = 2
    UPCOMING = 3


class Priority(Enum):
    """Priority level derived from a reminder's status. Higher value = more urgent."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
