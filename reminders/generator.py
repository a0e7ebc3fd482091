"""Recurrence expansion for one schedule on one vehicle."""

import logging
from datetime import datetime, timedelta
from typing import Iterator, List, Optional, Sequence, Tuple

from .calculations import days_until, mileage_status, mileage_variance, priority_for, time_status
from .config import Settings
from .projection import ReminderProjection, TaskInfo
from .schedule import ServiceSchedule
from .status import Status
from .task import ServiceTask
from .time_units import add_interval, to_days
from .vehicle import Vehicle

logger = logging.getLogger("reminders.generator")


def time_window_end(schedule: ServiceSchedule, now: datetime, settings: Settings) -> datetime:
    """Latest due date surfaced for a time series: now + buffer, or the default window."""
    if schedule.has_time_buffer:
        days = to_days(schedule.time_buffer_value, schedule.time_buffer_unit)
    else:
        days = settings.default_time_window_days
    return now + timedelta(days=days)


def mileage_upper_bound(schedule: ServiceSchedule, current_mileage: float, settings: Settings) -> float:
    """Highest due mileage surfaced for a mileage series."""
    if schedule.has_mileage_buffer:
        return current_mileage + schedule.mileage_buffer
    return current_mileage + settings.default_mileage_buffer


def first_due_date(schedule: ServiceSchedule, assignment_date: datetime) -> datetime:
    """
    First occurrence of a time series.

    An explicit first service date is used as-is; otherwise the series is
    anchored on the date the vehicle joined the program.
    """
    if schedule.first_service_date is not None:
        return schedule.first_service_date
    return assignment_date


def expand_time_series(
    schedule: ServiceSchedule,
    assignment_date: datetime,
    now: datetime,
    settings: Settings,
) -> Iterator[Tuple[int, datetime, Status]]:
    """Yield (occurrence number, due date, status) until past the window or the cap."""
    window_end = time_window_end(schedule, now, settings)
    due_date = first_due_date(schedule, assignment_date)
    number = 1
    while due_date <= window_end:
        if number > settings.max_occurrences:
            logger.debug(
                "Schedule %s time series truncated at %d occurrences",
                schedule.id,
                settings.max_occurrences,
            )
            return
        yield number, due_date, time_status(due_date, now, schedule)
        due_date = add_interval(due_date, schedule.time_interval_value, schedule.time_interval_unit)
        number += 1


def expand_mileage_series(
    schedule: ServiceSchedule,
    current_mileage: float,
    settings: Settings,
) -> Iterator[Tuple[int, float, Status]]:
    """Yield (occurrence number, due mileage, status) until past the bound or the cap."""
    upper_bound = mileage_upper_bound(schedule, current_mileage, settings)
    if schedule.first_service_mileage is not None:
        due_mileage = schedule.first_service_mileage
    else:
        due_mileage = current_mileage
    number = 1
    while due_mileage <= upper_bound:
        if number > settings.max_occurrences:
            logger.debug(
                "Schedule %s mileage series truncated at %d occurrences",
                schedule.id,
                settings.max_occurrences,
            )
            return
        yield number, due_mileage, mileage_status(due_mileage, current_mileage, schedule)
        due_mileage += schedule.mileage_interval
        number += 1


def generate_occurrences(
    schedule: ServiceSchedule,
    vehicle: Vehicle,
    tasks: Sequence[ServiceTask],
    assignment_date: datetime,
    now: datetime,
    program_name: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> List[ReminderProjection]:
    """
    Project the occurrences of a schedule for a vehicle.

    Logic:
    - No tasks or a misconfigured schedule: nothing to project
    - Time axis: from the first due date, step by the interval while the due
      date is within now + time buffer (30 days without a buffer)
    - Mileage axis: from the first service mileage (or the current odometer),
      step by the interval while within current mileage + mileage buffer
    - Each axis is numbered independently from 1 and capped at
      settings.max_occurrences
    """
    if not tasks or not schedule.is_valid:
        return []
    settings = settings or Settings()

    task_infos = [TaskInfo.from_task(t) for t in tasks]
    total_hours = sum(t.estimated_labour_hours for t in task_infos)
    total_cost = sum(t.estimated_cost for t in task_infos)
    current_mileage = vehicle.mileage

    def build(number, status, due_date=None, due_mileage=None) -> ReminderProjection:
        return ReminderProjection(
            vehicle_id=vehicle.id,
            vehicle_name=vehicle.display_name,
            service_program_id=schedule.service_program_id,
            service_program_name=program_name,
            service_schedule_id=schedule.id,
            service_schedule_name=schedule.name,
            service_tasks=list(task_infos),
            total_estimated_labour_hours=total_hours,
            total_estimated_cost=total_cost,
            task_count=len(task_infos),
            due_date=due_date,
            due_mileage=due_mileage,
            status=status,
            priority_level=priority_for(status),
            occurrence_number=number,
            current_mileage=current_mileage,
            mileage_variance=mileage_variance(due_mileage, current_mileage),
            days_until_due=days_until(due_date, now),
            is_time_based_reminder=due_date is not None,
            is_mileage_based_reminder=due_mileage is not None,
            time_interval_value=schedule.time_interval_value,
            time_interval_unit=schedule.time_interval_unit,
            time_buffer_value=schedule.time_buffer_value,
            time_buffer_unit=schedule.time_buffer_unit,
            mileage_interval=schedule.mileage_interval,
            mileage_buffer=schedule.mileage_buffer,
        )

    occurrences = []
    if schedule.is_time_based:
        for number, due_date, status in expand_time_series(schedule, assignment_date, now, settings):
            occurrences.append(build(number, status, due_date=due_date))
    if schedule.is_mileage_based:
        for number, due_mileage, status in expand_mileage_series(schedule, current_mileage, settings):
            occurrences.append(build(number, status, due_mileage=due_mileage))
    return occurrences
