"""ServiceSchedule and ServiceProgram classes for recurrence definitions."""

from datetime import datetime
from typing import Optional

from .time_units import TimeUnit


class ServiceProgram:
    """A named group of schedules applied to a set of vehicles."""

    def __init__(self, id: int, name: str):
        self.id = id
        self.name = name


class ServiceSchedule:
    """
    A recurring maintenance schedule belonging to a service program.

    A schedule recurs by time, by mileage, or by both. Each axis is either
    fully configured or absent; see is_valid.
    """

    def __init__(
            self,
            id: int,
            service_program_id: int,
            name: str,
            time_interval_value: Optional[int] = None,
            time_interval_unit: Optional[TimeUnit] = None,
            time_buffer_value: Optional[int] = None,
            time_buffer_unit: Optional[TimeUnit] = None,
            first_service_date: Optional[datetime] = None,
            mileage_interval: Optional[float] = None,
            mileage_buffer: Optional[float] = None,
            first_service_mileage: Optional[float] = None,
            is_active: bool = True,
    ):
        self.id = id
        self.service_program_id = service_program_id
        self.name = name
        self.time_interval_value = time_interval_value
        self.time_interval_unit = time_interval_unit
        self.time_buffer_value = time_buffer_value
        self.time_buffer_unit = time_buffer_unit
        self.first_service_date = first_service_date
        self.mileage_interval = mileage_interval
        self.mileage_buffer = mileage_buffer
        self.first_service_mileage = first_service_mileage
        self.is_active = is_active

    @property
    def is_time_based(self) -> bool:
        return self.time_interval_value is not None and self.time_interval_unit is not None

    @property
    def is_mileage_based(self) -> bool:
        return self.mileage_interval is not None

    @property
    def has_time_buffer(self) -> bool:
        return self.time_buffer_value is not None and self.time_buffer_unit is not None

    @property
    def has_mileage_buffer(self) -> bool:
        return self.mileage_buffer is not None

    @property
    def is_valid(self) -> bool:
        """
        Check the schedule's configuration invariants.

        - At least one axis (time or mileage) is configured
        - Interval value and unit are set together, as are buffer value and unit
        - Intervals are positive, buffers are not negative
        - First-service values only appear alongside their axis
        """
        if not self.is_time_based and not self.is_mileage_based:
            return False
        if (self.time_interval_value is None) != (self.time_interval_unit is None):
            return False
        if (self.time_buffer_value is None) != (self.time_buffer_unit is None):
            return False

        if self.is_time_based:
            if self.time_interval_value <= 0:
                return False
            if self.has_time_buffer and self.time_buffer_value < 0:
                return False
        elif self.has_time_buffer or self.first_service_date is not None:
            return False

        if self.is_mileage_based:
            if self.mileage_interval <= 0:
                return False
            if self.has_mileage_buffer and self.mileage_buffer < 0:
                return False
        elif self.has_mileage_buffer or self.first_service_mileage is not None:
            return False

        return True
