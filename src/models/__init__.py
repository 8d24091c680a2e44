from .enums import Visibility, Weekday, EventProperty, LookupStatus
from .common import SeriesId, parse_datetime
from .errors import (
    CalendarError,
    InvalidArgumentError,
    InvalidTimezoneError,
    DuplicateEventError,
    DuplicateNameError,
    NotFoundError,
    AmbiguousMatchError,
    NoActiveCalendarError,
)
from .event import Event, create_modified_event
from .results import FindResult, BulkResult

__all__ = [
    "Visibility",
    "Weekday",
    "EventProperty",
    "LookupStatus",
    "SeriesId",
    "parse_datetime",
    "CalendarError",
    "InvalidArgumentError",
    "InvalidTimezoneError",
    "DuplicateEventError",
    "DuplicateNameError",
    "NotFoundError",
    "AmbiguousMatchError",
    "NoActiveCalendarError",
    "Event",
    "create_modified_event",
    "FindResult",
    "BulkResult",
]
