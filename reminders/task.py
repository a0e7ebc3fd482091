"""ServiceTask class for maintenance task metadata."""
from typing import Optional


class ServiceTask:
    """A maintenance task a schedule calls for."""

    def __init__(
            self,
            id: int,
            name: str,
            category: Optional[str] = None,
            estimated_labour_hours: float = 0,
            estimated_cost: float = 0,
            description: Optional[str] = None,
    ):
        self.id = id
        self.name = name
        self.category = category
        self.estimated_labour_hours = estimated_labour_hours or 0
        self.estimated_cost = estimated_cost or 0
        self.description = description
