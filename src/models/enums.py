# File: src/models/enums.py

from enum import Enum
from typing import Optional


class Visibility(Enum):
    """Event visibility."""
    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def from_token(cls, token: Optional[str]) -> 'Visibility':
        """Only the token 'public' (any case) is public; everything else is private."""
        if isinstance(token, cls):
            return token
        if token is not None and str(token).strip().lower() == cls.PUBLIC.value:
            return cls.PUBLIC
        return cls.PRIVATE


class Weekday(Enum):
    """Days of the week, numbered like date.weekday()."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, day) -> 'Weekday':
        """Weekday of a date or datetime."""
        return cls(day.weekday())


class EventProperty(Enum):
    """Event properties that can be replaced by an edit."""
    SUBJECT = "subject"
    START = "start"
    END = "end"
    LOCATION = "location"
    DESCRIPTION = "description"
    STATUS = "status"


class LookupStatus(Enum):
    """Outcome of a lookup by subject and start."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"
