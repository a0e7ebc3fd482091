"""Search, sorting and paging over projected service reminders."""

import logging
import math
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from .aggregator import FleetDataSource, project_reminders
from .config import Settings
from .projection import ReminderProjection

logger = logging.getLogger("reminders.query")

_LATEST = datetime.max
_FURTHEST = float("inf")


@dataclass
class QueryParameters:
    """Search, sort and page options for a reminder listing."""

    search: Optional[str] = None
    sort_by: Optional[str] = None
    sort_descending: bool = False
    page_number: int = 1
    page_size: int = 20

    def __post_init__(self):
        if self.page_number < 1:
            raise ValueError("page_number must be at least 1")
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")


@dataclass
class PagedResult:
    """One page of reminders plus the size of the full filtered listing."""

    items: List[ReminderProjection] = field(default_factory=list)
    total_count: int = 0
    page_number: int = 1
    page_size: int = 20

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.total_count else 0

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [r.to_dict() for r in self.items],
            "totalCount": self.total_count,
            "pageNumber": self.page_number,
            "pageSize": self.page_size,
            "totalPages": self.total_pages,
            "hasPreviousPage": self.has_previous_page,
            "hasNextPage": self.has_next_page,
        }


def _matches(reminder: ReminderProjection, text: str) -> bool:
    names = [
        reminder.vehicle_name,
        reminder.service_schedule_name,
        reminder.service_program_name,
    ] + [t.name for t in reminder.service_tasks]
    return any(text in name.lower() for name in names if name)


def apply_search(
    reminders: Sequence[ReminderProjection], search: Optional[str]
) -> List[ReminderProjection]:
    """Keep reminders whose vehicle, schedule, program or task names contain the text."""
    if search is None or not search.strip():
        return list(reminders)
    text = search.strip().lower()
    return [r for r in reminders if _matches(r, text)]


def default_sort_key(reminder: ReminderProjection):
    """Most urgent status first, then earliest due date, then lowest due mileage."""
    return (
        reminder.status.value,
        reminder.due_date if reminder.due_date is not None else _LATEST,
        reminder.due_mileage if reminder.due_mileage is not None else _FURTHEST,
    )


def _optional_key(getter: Callable[[ReminderProjection], Any], placeholder: Any, descending: bool):
    """Sort key that puts missing values last in either direction."""
    def key(reminder):
        value = getter(reminder)
        if value is None:
            return (0, placeholder) if descending else (1, placeholder)
        return (1, value) if descending else (0, value)
    return key


def _sort_keys(descending: bool) -> Dict[str, Callable[[ReminderProjection], Any]]:
    schedule_name = lambda r: r.service_schedule_name.lower()
    priority = lambda r: r.priority_level.value
    return {
        "vehiclename": lambda r: r.vehicle_name.lower(),
        "schedulename": schedule_name,
        "serviceschedulename": schedule_name,
        "servicetaskname": schedule_name,
        "duedate": _optional_key(lambda r: r.due_date, datetime.min, descending),
        "duemileage": _optional_key(lambda r: r.due_mileage, 0, descending),
        "status": lambda r: r.status.value,
        "priority": priority,
        "prioritylevel": priority,
        "occurrencenumber": lambda r: r.occurrence_number,
    }


def normalize_sort_key(sort_by: Optional[str]) -> Optional[str]:
    """Lowercase and strip separators so 'dueDate', 'due_date' and 'Due Date' match."""
    if sort_by is None:
        return None
    key = "".join(ch for ch in sort_by.lower() if ch not in "_- ")
    return key or None


def apply_sorting(
    reminders: Sequence[ReminderProjection],
    sort_by: Optional[str] = None,
    sort_descending: bool = False,
) -> List[ReminderProjection]:
    """
    Sort reminders by a named field.

    Recognized keys: vehicleName, scheduleName, dueDate, dueMileage, status,
    priority, occurrenceNumber. Anything else (or nothing) falls back to the
    default urgency order, which ignores sort_descending.
    """
    key = _sort_keys(sort_descending).get(normalize_sort_key(sort_by))
    if key is None:
        return sorted(reminders, key=default_sort_key)
    return sorted(reminders, key=key, reverse=sort_descending)


def paginate(
    reminders: Sequence[ReminderProjection], page_number: int, page_size: int
) -> List[ReminderProjection]:
    """Slice out a 1-based page. A page past the end is empty."""
    start = (page_number - 1) * page_size
    return list(reminders[start:start + page_size])


def get_service_reminders(
    source: FleetDataSource,
    parameters: QueryParameters,
    now: Optional[datetime] = None,
    settings: Optional[Settings] = None,
    cancel_event: Optional[threading.Event] = None,
) -> PagedResult:
    """Project, filter, sort and page the fleet's service reminders."""
    logger.info(
        "Listing service reminders (search=%r, sort_by=%r, descending=%s, page=%d, size=%d)",
        parameters.search,
        parameters.sort_by,
        parameters.sort_descending,
        parameters.page_number,
        parameters.page_size,
    )
    reminders = project_reminders(source, now=now, settings=settings, cancel_event=cancel_event)
    filtered = apply_search(reminders, parameters.search)
    ordered = apply_sorting(filtered, parameters.sort_by, parameters.sort_descending)

    result = PagedResult(
        items=paginate(ordered, parameters.page_number, parameters.page_size),
        total_count=len(ordered),
        page_number=parameters.page_number,
        page_size=parameters.page_size,
    )
    logger.info(
        "Returning %d of %d service reminders for page %d with page size %d",
        len(result.items),
        result.total_count,
        result.page_number,
        result.page_size,
    )
    return result
