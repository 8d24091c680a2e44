# File: src/core/calendar_model.py
"""
A single named calendar: an unordered collection of events authored in one
timezone, with conflict-checked insertion, date queries and scoped edits.
"""

import datetime
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from src.core.config_manager import Config
from src.models import (
    Event,
    BulkResult,
    FindResult,
    DuplicateEventError,
    NotFoundError,
    create_modified_event,
)
from src.utils.logger import setup_logger
from src.utils.timezones import Zone, convert_naive, resolve_timezone, zone_name

logger = setup_logger(__name__)


class CalendarModel:
    """
    Stores and manages the events of one calendar.

    Event timestamps are naive and expressed in `creation_timezone`, which
    never changes. `timezone` is the current display zone; changing it does
    not rewrite stored events.
    """

    def __init__(self, timezone: Zone = Config.DEFAULT_TIMEZONE):
        """
        Initialize an empty calendar.

        Args:
            timezone: IANA zone id or tzinfo the calendar is created in
        """
        self._timezone = resolve_timezone(timezone)
        self._creation_timezone = self._timezone
        self._events: List[Event] = []

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, event: Event) -> bool:
        return self.has_conflict(event)

    def __repr__(self) -> str:
        return (
            f"CalendarModel(timezone={zone_name(self._timezone)!r}, "
            f"creation_timezone={zone_name(self._creation_timezone)!r}, "
            f"events={len(self._events)})"
        )

    # ==================== Timezone ====================

    @property
    def timezone(self) -> datetime.tzinfo:
        return self._timezone

    @property
    def creation_timezone(self) -> datetime.tzinfo:
        return self._creation_timezone

    def set_timezone(self, timezone: Zone) -> None:
        """Change the display timezone. Stored events are left as they are."""
        self._timezone = resolve_timezone(timezone)

    def to_display_time(self, stored: datetime.datetime) -> datetime.datetime:
        """Convert a stored (creation-zone) timestamp to the current timezone."""
        return convert_naive(stored, self._creation_timezone, self._timezone)

    def from_display_time(self, local: datetime.datetime) -> datetime.datetime:
        """Convert a current-timezone timestamp to the stored creation zone."""
        return convert_naive(local, self._timezone, self._creation_timezone)

    def to_display_event(self, event: Event) -> Event:
        """Copy of `event` with start and end expressed in the current timezone."""
        return event.copy_with_times(
            self.to_display_time(event.start),
            self.to_display_time(event.end),
        )

    def get_display_events_on_date(self, day: datetime.date) -> List[Event]:
        """Events whose start falls on `day` in the current timezone, as display copies."""
        shown = [self.to_display_event(e) for e in self._events]
        return sorted(
            (e for e in shown if e.start.date() == day),
            key=lambda e: e.start
        )

    # ==================== Insertion / removal ====================

    def add_event(self, event: Event) -> None:
        """
        Add an event.

        Raises:
            DuplicateEventError: If an event with the same subject, start and end exists
        """
        if self.has_conflict(event):
            raise DuplicateEventError(
                f"Cannot add two events with the same subject and times: {event.subject}"
            )
        self._events.append(replace(event))

    def add_events_detailed(self, events: Iterable[Event]) -> BulkResult:
        """Add many events, skipping (not failing on) duplicates."""
        result = BulkResult()
        for event in events:
            if self.has_conflict(event):
                logger.debug(f"Skipping duplicate event: {event}")
                result.record_skip(event, "conflict")
                continue
            self._events.append(replace(event))
            result.record_success(event)
        return result

    def add_events(self, events: Iterable[Event]) -> int:
        return self.add_events_detailed(events).count

    def remove_event(self, event: Event) -> None:
        """
        Remove the first stored event with the same identity.

        Raises:
            NotFoundError: If no such event is stored
        """
        index = self._index_of(event)
        if index is None:
            raise NotFoundError(f"Event not found in calendar: {event.subject}")
        del self._events[index]

    # ==================== Queries ====================

    def get_events(self) -> List[Event]:
        """
        All events in this calendar.

        Returns copies: editing a returned event does not change the calendar;
        use the edit_* methods for that.
        """
        return [replace(e) for e in self._events]

    def find_event(self, subject: str, start: datetime.datetime) -> FindResult:
        """Find the single event with this subject and start (the result holds a copy)."""
        matches = [e for e in self._events if e.subject == subject and e.start == start]
        if not matches:
            return FindResult.not_found()
        if len(matches) > 1:
            logger.debug(f"Ambiguous lookup for '{subject}' at {start}: {len(matches)} matches")
            return FindResult.ambiguous(len(matches))
        return FindResult.found(replace(matches[0]))

    def get_events_on_date(self, day: datetime.date) -> List[Event]:
        """Events whose start falls on `day` (the end date is not considered)."""
        return [replace(e) for e in self._events if e.start.date() == day]

    def get_events_within_dates(
        self,
        beginning: Optional[datetime.datetime],
        ending: Optional[datetime.datetime]
    ) -> List[Event]:
        """
        Events overlapping the half-open window (beginning, ending).

        An event ending exactly at `beginning` or starting exactly at
        `ending` is excluded. None leaves that side unbounded.
        """
        return [
            replace(e) for e in self._events
            if (beginning is None or e.end > beginning)
            and (ending is None or e.start < ending)
        ]

    def is_busy(self, moment: datetime.datetime) -> bool:
        """True iff some event strictly contains `moment`."""
        return any(e.start < moment < e.end for e in self._events)

    def has_conflict(self, event: Event) -> bool:
        """True iff an event with identical subject, start and end is stored."""
        return any(existing == event for existing in self._events)

    def get_events_from_date(self, day: datetime.date) -> List[Event]:
        """Upcoming events starting on or after `day`, earliest first, capped."""
        matching = sorted(
            (e for e in self._events if e.start.date() >= day),
            key=lambda e: e.start
        )
        return [replace(e) for e in matching[:Config.UPCOMING_EVENTS_LIMIT]]

    # ==================== Edits ====================

    def create_modified_event(self, base: Event, prop, new_value) -> Event:
        return create_modified_event(base, prop, new_value)

    def edit_single_event(self, event: Event, prop, new_value) -> bool:
        """
        Replace exactly one stored event with a modified copy.

        Returns:
            True if replaced, False if the modified event would duplicate another

        Raises:
            NotFoundError: If `event` is not in this calendar
            InvalidArgumentError: Unknown property or bad value
        """
        return self._edit_standalone(event, prop, new_value).count == 1

    def edit_future_events_detailed(self, event: Event, prop, new_value) -> BulkResult:
        """Edit this occurrence and every later one in its series."""
        if event.series_id is None:
            return self._edit_standalone(event, prop, new_value)
        cutoff = event.start
        return self._edit_series_where(
            event, prop, new_value,
            lambda e: e.series_id == event.series_id and e.start >= cutoff
        )

    def edit_future_events(self, event: Event, prop, new_value) -> int:
        return self.edit_future_events_detailed(event, prop, new_value).count

    def edit_whole_series_detailed(self, event: Event, prop, new_value) -> BulkResult:
        """Edit every occurrence sharing the event's series, regardless of time."""
        if event.series_id is None:
            return self._edit_standalone(event, prop, new_value)
        return self._edit_series_where(
            event, prop, new_value,
            lambda e: e.series_id == event.series_id
        )

    def edit_whole_series(self, event: Event, prop, new_value) -> int:
        return self.edit_whole_series_detailed(event, prop, new_value).count

    # ==================== Internals ====================

    def _index_of(self, event: Event) -> Optional[int]:
        for index, existing in enumerate(self._events):
            if existing == event:
                return index
        return None

    def _replace_at(self, index: int, prop, new_value) -> Optional[Event]:
        """Swap the event at `index` for its modified copy unless that would duplicate another."""
        original = self._events[index]
        modified = create_modified_event(original, prop, new_value)
        clash = any(
            existing == modified
            for i, existing in enumerate(self._events) if i != index
        )
        if clash:
            logger.debug(f"Edit of '{original.subject}' at {original.start} skipped: conflict")
            return None
        self._events[index] = modified
        return modified

    def _edit_standalone(self, event: Event, prop, new_value) -> BulkResult:
        result = BulkResult()
        index = self._index_of(event)
        if index is None:
            raise NotFoundError(f"Event not found in calendar: {event.subject}")
        modified = self._replace_at(index, prop, new_value)
        if modified is None:
            result.record_skip(event, "conflict")
        else:
            result.record_success(replace(modified))
        return result

    def _edit_series_where(
        self,
        event: Event,
        prop,
        new_value,
        selector: Callable[[Event], bool]
    ) -> BulkResult:
        # Validate the property once so a typo fails before any mutation
        create_modified_event(event, prop, new_value)

        result = BulkResult()
        targets = sorted((e for e in self._events if selector(e)), key=lambda e: e.start)
        for target in targets:
            index = self._index_of(target)
            modified = self._replace_at(index, prop, new_value)
            if modified is None:
                result.record_skip(target, "conflict")
            else:
                result.record_success(replace(modified))

        logger.info(
            f"Series edit of {getattr(prop, 'value', prop)} on '{event.subject}': {result}"
        )
        return result
