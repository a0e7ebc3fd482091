"""Helper functions for classifying projected occurrences."""

from datetime import datetime, timedelta
from typing import Optional

from .schedule import ServiceSchedule
from .status import Priority, Status
from .time_units import to_days

_PRIORITY_BY_STATUS = {
    Status.OVERDUE: Priority.HIGH,
    Status.DUE_SOON: Priority.MEDIUM,
    Status.UPCOMING: Priority.LOW,
}


def time_status(due_date: datetime, now: datetime, schedule: ServiceSchedule) -> Status:
    """
    Classify a time-based occurrence.

    - OVERDUE once now is past the due date
    - DUE_SOON from (due date - time buffer) onwards, if the schedule has a buffer
    - UPCOMING otherwise
    """
    if now > due_date:
        return Status.OVERDUE
    if schedule.has_time_buffer:
        buffer_days = to_days(schedule.time_buffer_value, schedule.time_buffer_unit)
        if now >= due_date - timedelta(days=buffer_days):
            return Status.DUE_SOON
    return Status.UPCOMING


def mileage_status(
    due_mileage: float, current_mileage: float, schedule: ServiceSchedule
) -> Status:
    """Classify a mileage-based occurrence against the vehicle's odometer."""
    if current_mileage > due_mileage:
        return Status.OVERDUE
    if schedule.has_mileage_buffer and current_mileage >= due_mileage - schedule.mileage_buffer:
        return Status.DUE_SOON
    return Status.UPCOMING


def priority_for(status: Status) -> Priority:
    """Map a status to its priority level."""
    return _PRIORITY_BY_STATUS[status]


def days_until(due_date: Optional[datetime], now: datetime) -> Optional[int]:
    """Whole days from now until due, truncated toward zero. Negative = overdue."""
    if due_date is None:
        return None
    return int((due_date - now).total_seconds() / 86400)


def mileage_variance(due_mileage: Optional[float], current_mileage: float) -> Optional[float]:
    """Current minus due mileage. Positive = driven past due."""
    if due_mileage is None:
        return None
    return current_mileage - due_mileage
