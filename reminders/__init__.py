"""
Service reminder projection for fleet maintenance.

This package computes upcoming and overdue maintenance on demand from
recurring service schedules, without storing future occurrences:
- Status / Priority: Urgency levels (OVERDUE, DUE_SOON, UPCOMING)
- TimeUnit: Hour/day/week interval arithmetic
- ServiceSchedule, ServiceProgram, ServiceTask, Vehicle: Fleet records
- ReminderProjection: A computed occurrence of a schedule for a vehicle
- generate_occurrences: Recurrence expansion for one schedule and vehicle
- project_reminders: Expansion across every active schedule and vehicle
- get_service_reminders: Search, sort and paging over the projections
- FleetStore / load_fleet: YAML-backed read-only data source
"""

from .status import Status, Priority
from .time_units import TimeUnit, add_interval, to_days
from .schedule import ServiceSchedule, ServiceProgram
from .task import ServiceTask
from .vehicle import Vehicle
from .assignment import ProgramAssignment, ScheduleTaskLink
from .projection import ReminderProjection, TaskInfo
from .calculations import time_status, mileage_status, priority_for
from .config import Settings, load_settings
from .errors import ReminderError, ProjectionCancelled, FleetDataError
from .generator import generate_occurrences
from .aggregator import FleetDataSource, project_reminders
from .query import (
    QueryParameters,
    PagedResult,
    apply_search,
    apply_sorting,
    paginate,
    get_service_reminders,
)
from .loader import FleetStore, load_fleet

__all__ = [
    "Status",
    "Priority",
    "TimeUnit",
    "add_interval",
    "to_days",
    "ServiceSchedule",
    "ServiceProgram",
    "ServiceTask",
    "Vehicle",
    "ProgramAssignment",
    "ScheduleTaskLink",
    "ReminderProjection",
    "TaskInfo",
    "time_status",
    "mileage_status",
    "priority_for",
    "Settings",
    "load_settings",
    "ReminderError",
    "ProjectionCancelled",
    "FleetDataError",
    "generate_occurrences",
    "FleetDataSource",
    "project_reminders",
    "QueryParameters",
    "PagedResult",
    "apply_search",
    "apply_sorting",
    "paginate",
    "get_service_reminders",
    "FleetStore",
    "load_fleet",
]
