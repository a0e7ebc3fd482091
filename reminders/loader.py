"""YAML loading utilities and the in-memory fleet store."""

from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml
from dateutil.parser import isoparse

from .assignment import ProgramAssignment, ScheduleTaskLink
from .errors import FleetDataError
from .schedule import ServiceProgram, ServiceSchedule
from .task import ServiceTask
from .time_units import TimeUnit
from .vehicle import Vehicle


class FleetStore:
    """
    Read-only fleet data held in memory.

    Answers the queries the projection aggregator makes of its data source.
    """

    def __init__(
        self,
        programs: Optional[List[ServiceProgram]] = None,
        vehicles: Optional[List[Vehicle]] = None,
        tasks: Optional[List[ServiceTask]] = None,
        schedules: Optional[List[ServiceSchedule]] = None,
        assignments: Optional[List[ProgramAssignment]] = None,
        task_links: Optional[List[ScheduleTaskLink]] = None,
    ):
        self.programs = programs or []
        self.vehicles = vehicles or []
        self.tasks = tasks or []
        self.schedules = schedules or []
        self.assignments = assignments or []
        self.task_links = task_links or []

    def get_active_schedules(self) -> List[ServiceSchedule]:
        return [s for s in self.schedules if s.is_active]

    def get_program(self, program_id: int) -> Optional[ServiceProgram]:
        for program in self.programs:
            if program.id == program_id:
                return program
        return None

    def get_program_assignments(self, program_id: int) -> List[ProgramAssignment]:
        return [a for a in self.assignments if a.service_program_id == program_id]

    def get_schedule_task_links(self, schedule_id: int) -> List[ScheduleTaskLink]:
        return [link for link in self.task_links if link.service_schedule_id == schedule_id]

    def get_tasks(self, task_ids: Iterable[int]) -> List[ServiceTask]:
        wanted = set(task_ids)
        return [t for t in self.tasks if t.id in wanted]

    def get_vehicle(self, vehicle_id: int) -> Optional[Vehicle]:
        for vehicle in self.vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        return None


def parse_datetime(value: Union[str, date, datetime, None]) -> Optional[datetime]:
    """Accept YAML dates/timestamps or ISO strings; return a naive datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    else:
        result = isoparse(str(value))
    return result.replace(tzinfo=None)


def _parse_unit(value: Optional[str]) -> Optional[TimeUnit]:
    return TimeUnit.parse(value) if value is not None else None


def _parse_schedule(dct: Dict[str, Any]) -> ServiceSchedule:
    return ServiceSchedule(
        dct["id"],
        dct["programId"],
        dct["name"],
        dct.get("timeIntervalValue"),
        _parse_unit(dct.get("timeIntervalUnit")),
        dct.get("timeBufferValue"),
        _parse_unit(dct.get("timeBufferUnit")),
        parse_datetime(dct.get("firstServiceDate")),
        dct.get("mileageInterval"),
        dct.get("mileageBuffer"),
        dct.get("firstServiceMileage"),
        dct.get("isActive", True),
    )


def _parse_vehicle(dct: Dict[str, Any]) -> Vehicle:
    return Vehicle(
        dct["id"],
        dct.get("name"),
        dct.get("mileage", 0),
        dct.get("make"),
        dct.get("model"),
        dct.get("year"),
    )


def _parse_task(dct: Dict[str, Any]) -> ServiceTask:
    return ServiceTask(
        dct["id"],
        dct["name"],
        dct.get("category"),
        dct.get("estimatedLabourHours", 0),
        dct.get("estimatedCost", 0),
        dct.get("description"),
    )


def _parse_assignment(program_id: int, dct: Dict[str, Any]) -> ProgramAssignment:
    added_at = parse_datetime(dct["addedAt"])
    if added_at is None:
        raise ValueError(f"vehicle {dct['vehicleId']} has no addedAt date")
    return ProgramAssignment(
        program_id,
        dct["vehicleId"],
        added_at,
        dct.get("vehicleMileageAtAssignment"),
    )


def _parse_section(data: Dict[str, Any], section: str, parse) -> List[Any]:
    """Parse every record in a top-level list, naming the bad record on failure."""
    records = []
    for index, dct in enumerate(data.get(section) or []):
        try:
            records.append(parse(dct))
        except (KeyError, TypeError, ValueError) as e:
            raise FleetDataError(f"Invalid {section}[{index}]: {e!r}") from e
    return records


def parse_fleet(data: Dict[str, Any]) -> FleetStore:
    """Build a FleetStore from the raw (camelCase) fleet dictionary."""
    data = data or {}
    programs = _parse_section(data, "programs", lambda d: ServiceProgram(d["id"], d["name"]))

    assignments = []
    for dct in data.get("programs") or []:
        assignments.extend(
            _parse_section(dct, "vehicles", lambda a, pid=dct["id"]: _parse_assignment(pid, a))
        )

    schedules = _parse_section(data, "schedules", _parse_schedule)
    task_links = []
    for dct in data.get("schedules") or []:
        task_links.extend(ScheduleTaskLink(dct["id"], task_id) for task_id in dct.get("taskIds") or [])

    return FleetStore(
        programs=programs,
        vehicles=_parse_section(data, "vehicles", _parse_vehicle),
        tasks=_parse_section(data, "tasks", _parse_task),
        schedules=schedules,
        assignments=assignments,
        task_links=task_links,
    )


def load_fleet(filename: Union[str, Path]) -> FleetStore:
    """Load fleet data from a YAML file."""
    with open(filename, "rb") as fp:
        return parse_fleet(yaml.load(fp, Loader=yaml.SafeLoader))
