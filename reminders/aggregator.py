"""Projection of every active schedule onto every vehicle in its program."""

import logging
import threading
from datetime import datetime
from typing import Iterable, List, Optional, Protocol

from .assignment import ProgramAssignment, ScheduleTaskLink
from .config import Settings
from .errors import ProjectionCancelled
from .generator import generate_occurrences
from .projection import ReminderProjection
from .schedule import ServiceProgram, ServiceSchedule
from .task import ServiceTask
from .vehicle import Vehicle

logger = logging.getLogger("reminders.aggregator")


class FleetDataSource(Protocol):
    """Read-only queries the aggregator needs from the fleet data store."""

    def get_active_schedules(self) -> List[ServiceSchedule]: ...

    def get_program(self, program_id: int) -> Optional[ServiceProgram]: ...

    def get_program_assignments(self, program_id: int) -> List[ProgramAssignment]: ...

    def get_schedule_task_links(self, schedule_id: int) -> List[ScheduleTaskLink]: ...

    def get_tasks(self, task_ids: Iterable[int]) -> List[ServiceTask]: ...

    def get_vehicle(self, vehicle_id: int) -> Optional[Vehicle]: ...


def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise ProjectionCancelled("Service reminder projection was cancelled")


def _resolve_tasks(source: FleetDataSource, schedule: ServiceSchedule) -> List[ServiceTask]:
    """Look up a schedule's tasks, dropping links to tasks that no longer exist."""
    task_ids = [link.service_task_id for link in source.get_schedule_task_links(schedule.id)]
    if not task_ids:
        return []
    tasks = source.get_tasks(task_ids)
    missing = set(task_ids) - {t.id for t in tasks}
    if missing:
        logger.warning(
            "Schedule %s ('%s') links to unknown tasks %s; skipping them",
            schedule.id,
            schedule.name,
            sorted(missing),
        )
    return tasks


def project_reminders(
    source: FleetDataSource,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
    cancel_event: Optional[threading.Event] = None,
) -> List[ReminderProjection]:
    """
    Build the unordered list of reminder projections for the whole fleet.

    The current instant is read once and shared by every schedule and vehicle,
    so all projections in one result are classified against the same moment.

    Args:
        now: Instant to classify against (default: settings.clock())
        cancel_event: When set, the run stops with ProjectionCancelled
    """
    settings = settings or Settings()
    if now is None:
        now = settings.clock()

    reminders: List[ReminderProjection] = []
    for schedule in source.get_active_schedules():
        _check_cancelled(cancel_event)
        if not schedule.is_active:
            continue
        if not schedule.is_valid:
            logger.warning(
                "Schedule %s ('%s') has an invalid interval configuration; skipping",
                schedule.id,
                schedule.name,
            )
            continue

        program = source.get_program(schedule.service_program_id)
        program_name = program.name if program else None
        tasks = _resolve_tasks(source, schedule)
        if not tasks:
            logger.debug("Schedule %s has no tasks; nothing to project", schedule.id)
            continue

        for assignment in source.get_program_assignments(schedule.service_program_id):
            _check_cancelled(cancel_event)
            vehicle = source.get_vehicle(assignment.vehicle_id)
            if vehicle is None:
                logger.warning(
                    "Program %s references unknown vehicle %s; skipping",
                    schedule.service_program_id,
                    assignment.vehicle_id,
                )
                continue
            if (
                assignment.added_at is None
                and schedule.is_time_based
                and schedule.first_service_date is None
            ):
                logger.warning(
                    "Vehicle %s has no program assignment date and schedule %s has no "
                    "first service date; skipping",
                    assignment.vehicle_id,
                    schedule.id,
                )
                continue
            reminders.extend(
                generate_occurrences(
                    schedule,
                    vehicle,
                    tasks,
                    assignment.added_at,
                    now,
                    program_name=program_name,
                    settings=settings,
                )
            )

    logger.debug("Projected %d reminders as of %s", len(reminders), now.isoformat())
    return reminders
