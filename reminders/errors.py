"""Exceptions raised by the reminder projection engine."""


class ReminderError(Exception):
    """Base class for projection engine failures."""


class ProjectionCancelled(ReminderError):
    """The caller cancelled a projection run before it finished."""


class FleetDataError(ReminderError):
    """A fleet data file holds a record that cannot be parsed."""
