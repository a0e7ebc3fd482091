"""ReminderProjection dataclass for computed, never-persisted reminders."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .status import Priority, Status
from .task import ServiceTask
from .time_units import TimeUnit


@dataclass
class TaskInfo:
    """Snapshot of a task carried on a projected reminder."""

    id: int
    name: str
    category: Optional[str] = None
    estimated_labour_hours: float = 0
    estimated_cost: float = 0
    description: Optional[str] = None
    is_required: bool = True

    @classmethod
    def from_task(cls, task: ServiceTask) -> "TaskInfo":
        return cls(
            id=task.id,
            name=task.name,
            category=task.category,
            estimated_labour_hours=task.estimated_labour_hours,
            estimated_cost=task.estimated_cost,
            description=task.description,
        )


@dataclass
class ReminderProjection:
    """
    One occurrence of a schedule for a vehicle, computed for a single query.

    Unrelated to any stored reminder record: projections are rebuilt on every
    request and discarded after the response.
    """

    vehicle_id: int
    vehicle_name: str
    service_schedule_id: int
    service_schedule_name: str
    status: Status
    priority_level: Priority
    occurrence_number: int
    current_mileage: float
    is_time_based_reminder: bool
    is_mileage_based_reminder: bool
    service_program_id: Optional[int] = None
    service_program_name: Optional[str] = None
    service_tasks: List[TaskInfo] = field(default_factory=list)
    total_estimated_labour_hours: float = 0
    total_estimated_cost: float = 0
    task_count: int = 0
    due_date: Optional[datetime] = None
    due_mileage: Optional[float] = None
    mileage_variance: Optional[float] = None
    days_until_due: Optional[int] = None
    time_interval_value: Optional[int] = None
    time_interval_unit: Optional[TimeUnit] = None
    time_buffer_value: Optional[int] = None
    time_buffer_unit: Optional[TimeUnit] = None
    mileage_interval: Optional[float] = None
    mileage_buffer: Optional[float] = None

    @property
    def is_due(self) -> bool:
        return self.status in (Status.OVERDUE, Status.DUE_SOON)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-ready camelCase keys."""
        return {
            "vehicleId": self.vehicle_id,
            "vehicleName": self.vehicle_name,
            "serviceProgramId": self.service_program_id,
            "serviceProgramName": self.service_program_name,
            "serviceScheduleId": self.service_schedule_id,
            "serviceScheduleName": self.service_schedule_name,
            "serviceTasks": [
                {
                    "serviceTaskId": t.id,
                    "serviceTaskName": t.name,
                    "serviceTaskCategory": t.category,
                    "estimatedLabourHours": t.estimated_labour_hours,
                    "estimatedCost": t.estimated_cost,
                    "description": t.description,
                    "isRequired": t.is_required,
                }
                for t in self.service_tasks
            ],
            "totalEstimatedLabourHours": self.total_estimated_labour_hours,
            "totalEstimatedCost": self.total_estimated_cost,
            "taskCount": self.task_count,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "dueMileage": self.due_mileage,
            "status": self.status.name,
            "priorityLevel": self.priority_level.name,
            "timeIntervalValue": self.time_interval_value,
            "timeIntervalUnit": self.time_interval_unit.name if self.time_interval_unit else None,
            "timeBufferValue": self.time_buffer_value,
            "timeBufferUnit": self.time_buffer_unit.name if self.time_buffer_unit else None,
            "mileageInterval": self.mileage_interval,
            "mileageBuffer": self.mileage_buffer,
            "currentMileage": self.current_mileage,
            "mileageVariance": self.mileage_variance,
            "daysUntilDue": self.days_until_due,
            "occurrenceNumber": self.occurrence_number,
            "isTimeBasedReminder": self.is_time_based_reminder,
            "isMileageBasedReminder": self.is_mileage_based_reminder,
        }
