"""Vehicle class for the fleet records reminders are projected onto."""

from typing import Optional


class Vehicle:
    """A fleet vehicle and its current odometer reading."""

    def __init__(
        self,
        id: int,
        name: Optional[str],
        mileage: float = 0,
        make: Optional[str] = None,
        model: Optional[str] = None,
        year: Optional[int] = None,
    ):
        self.id = id
        self.name = name
        self.mileage = mileage or 0
        self.make = make
        self.model = model
        self.year = year

    @property
    def display_name(self) -> str:
        """Human-readable vehicle name, built from year/make/model when unnamed."""
        if self.name:
            return self.name
        parts = [str(p) for p in (self.year, self.make, self.model) if p]
        return " ".join(parts) if parts else f"Vehicle #{self.id}"
