# File: src/models/event.py

from dataclasses import dataclass, field, replace
from datetime import datetime, date, timedelta
from typing import Optional, Union

from src.core.config_manager import Config
from .common import SeriesId, parse_datetime
from .enums import Visibility, EventProperty
from .errors import InvalidArgumentError


@dataclass
class Event:
    """
    A single calendar event.

    Times are naive and read in the owning calendar's creation timezone.
    Two events are equal iff subject, start and end all match; location,
    description, visibility and series_id never take part in identity.
    """
    subject: str
    start: datetime
    end: Optional[datetime] = None
    location: str = field(default="", compare=False)
    description: str = field(default="", compare=False)
    visibility: Visibility = field(default=Visibility.PRIVATE, compare=False)
    series_id: Optional[SeriesId] = field(default=None, compare=False)

    def __post_init__(self):
        """Validate event data (strict: end before start is rejected)."""
        if not self.subject:
            raise InvalidArgumentError("Subject cannot be null or empty")
        if self.start is None:
            raise InvalidArgumentError("Start date/time cannot be null")

        if self.end is None:
            self.end = self.start + Config.DEFAULT_EVENT_DURATION
        elif self.end < self.start:
            raise InvalidArgumentError(
                f"End date/time cannot be before start date/time: {self.subject}"
            )

        if self.location is None:
            self.location = ""
        if self.description is None:
            self.description = ""
        self.visibility = Visibility.from_token(self.visibility)

    def __hash__(self) -> int:
        return hash((self.subject, self.start, self.end))

    @classmethod
    def all_day(
        cls,
        subject: str,
        day: date,
        location: Optional[str] = None,
        description: Optional[str] = None,
        visibility: Union[Visibility, str, None] = None,
    ) -> 'Event':
        """Create an event spanning the configured all-day window on `day`."""
        return cls(
            subject=subject,
            start=datetime.combine(day, Config.ALL_DAY_START),
            end=datetime.combine(day, Config.ALL_DAY_END),
            location=location,
            description=description,
            visibility=visibility,
        )

    # ==================== Read-only views ====================

    @property
    def is_public(self) -> bool:
        return self.visibility == Visibility.PUBLIC

    @property
    def status(self) -> str:
        """Raw visibility token ('public' or 'private')."""
        return self.visibility.value

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def is_same(self, other: 'Event') -> bool:
        """Check identity against another event (subject, start, end)."""
        return (
            self.subject == other.subject
            and self.start == other.start
            and self.end == other.end
        )

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for presentation."""
        return {
            'subject': self.subject,
            'start': self.start.isoformat(),
            'end': self.end.isoformat(),
            'location': self.location,
            'description': self.description,
            'status': self.status,
            'series_id': str(self.series_id) if self.series_id else None,
        }

    def __str__(self) -> str:
        text = f"{self.subject}: {self.start.isoformat()} -> {self.end.isoformat()}"
        if self.location:
            text += f" @ {self.location}"
        if self.description:
            text += f" ({self.description})"
        return text + f" [{self.status}]"

    # ==================== Setters (auto-correcting) ====================

    def set_subject(self, subject: str) -> None:
        if not subject:
            raise InvalidArgumentError("Subject cannot be null or empty")
        self.subject = subject

    def set_start(self, start: datetime) -> None:
        """Move the start; an end left before it is reset to start + 1h."""
        if start is None:
            raise InvalidArgumentError("Start date/time cannot be null")
        self.start = start
        if self.end < self.start:
            self.end = self.start + Config.DEFAULT_EVENT_DURATION

    def set_end(self, end: datetime) -> None:
        """Move the end; an end before start is replaced by start + 1h."""
        if end is None:
            raise InvalidArgumentError("End date/time cannot be null")
        if end < self.start:
            self.end = self.start + Config.DEFAULT_EVENT_DURATION
        else:
            self.end = end

    def set_location(self, location: Optional[str]) -> None:
        self.location = location or ""

    def set_description(self, description: Optional[str]) -> None:
        self.description = description or ""

    def set_public(self, is_public: bool) -> None:
        self.visibility = Visibility.PUBLIC if is_public else Visibility.PRIVATE

    # ==================== Derived copies ====================

    def copy_with_new_time(self, new_start: datetime) -> 'Event':
        """Copy this event to a new start, keeping its exact duration and series."""
        if new_start is None:
            raise InvalidArgumentError("Start date/time cannot be null")
        return replace(self, start=new_start, end=new_start + self.duration)

    def copy_with_times(self, new_start: datetime, new_end: datetime) -> 'Event':
        """Copy this event to new start and end; an end before the start becomes start + 1h."""
        copy = self.copy_with_new_time(new_start)
        copy.set_end(new_end)
        return copy


def _parse_edit_datetime(value: Union[str, datetime], prop: EventProperty) -> datetime:
    parsed = parse_datetime(value)
    if parsed is None:
        raise InvalidArgumentError(f"Invalid {prop.value} date/time: {value!r}")
    return parsed


def create_modified_event(base: Event, prop: Union[str, EventProperty], new_value) -> Event:
    """
    Return a copy of `base` with exactly one property replaced.

    Args:
        base: The event to copy (left untouched)
        prop: One of subject, start, end, location, description, status
        new_value: Replacement value; start/end accept datetimes or
            'YYYY-MM-DDTHH:MM' strings

    Returns:
        A new Event sharing base's series_id

    Raises:
        InvalidArgumentError: Unknown property or unparsable date/time
    """
    if isinstance(prop, str):
        try:
            prop = EventProperty(prop.strip().lower())
        except ValueError:
            raise InvalidArgumentError(f"Invalid property: {prop}") from None

    copy = replace(base)

    if prop == EventProperty.SUBJECT:
        copy.set_subject(new_value)
    elif prop == EventProperty.START:
        copy.set_start(_parse_edit_datetime(new_value, prop))
    elif prop == EventProperty.END:
        copy.set_end(_parse_edit_datetime(new_value, prop))
    elif prop == EventProperty.LOCATION:
        copy.set_location(new_value)
    elif prop == EventProperty.DESCRIPTION:
        copy.set_description(new_value)
    elif prop == EventProperty.STATUS:
        if isinstance(new_value, bool):
            copy.set_public(new_value)
        else:
            token = str(new_value).strip().lower() if new_value is not None else ""
            copy.set_public(token in ('public', 'true'))

    return copy
