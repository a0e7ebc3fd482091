"""Link records joining programs to vehicles and schedules to tasks."""

from datetime import datetime
from typing import Optional


class ProgramAssignment:
    """A vehicle's membership in a service program."""

    def __init__(
            self,
            service_program_id: int,
            vehicle_id: int,
            added_at: datetime,
            vehicle_mileage_at_assignment: Optional[float] = None,
    ):
        self.service_program_id = service_program_id
        self.vehicle_id = vehicle_id
        self.added_at = added_at
        self.vehicle_mileage_at_assignment = vehicle_mileage_at_assignment


class ScheduleTaskLink:
    """A task included in a schedule."""

    def __init__(self, service_schedule_id: int, service_task_id: int):
        self.service_schedule_id = service_schedule_id
        self.service_task_id = service_task_id
