# File: src/models/errors.py
"""
Exception hierarchy for the calendar engine.
"""


class CalendarError(Exception):
    """Base class for all calendar engine errors."""


class InvalidArgumentError(CalendarError, ValueError):
    """Malformed or missing required input. Nothing was mutated."""


class InvalidTimezoneError(InvalidArgumentError):
    """A timezone identifier could not be resolved."""

    def __init__(self, zone_id):
        super().__init__(f"Invalid timezone: {zone_id}")
        self.zone_id = zone_id


class DuplicateEventError(CalendarError):
    """An identical (subject, start, end) event already exists."""


class DuplicateNameError(CalendarError):
    """A calendar with the requested name already exists."""


class NotFoundError(CalendarError, LookupError):
    """The referenced event or calendar does not exist."""


class AmbiguousMatchError(CalendarError, LookupError):
    """A lookup by subject and start matched more than one event."""


class NoActiveCalendarError(CalendarError, RuntimeError):
    """The operation needs an active calendar but none is selected."""
