# File: src/core/calendar_library.py
"""
Registry of named calendars.

Owns the name -> calendar mapping and the active-calendar pointer, and
performs timezone-correct copies of events between calendars. Instances are
plain objects: create one per caller (REPL session, test, GUI) and pass it
around; there is no process-wide registry.
"""

import datetime
from typing import Dict, List, Optional, Tuple

from src.core.calendar_model import CalendarModel
from src.models import (
    BulkResult,
    DuplicateNameError,
    InvalidArgumentError,
    NoActiveCalendarError,
    NotFoundError,
)
from src.utils.logger import LoggerMixin
from src.utils.timezones import convert_naive, resolve_timezone, zone_name


class CalendarLibrary(LoggerMixin):
    """
    A library of calendars, each with a unique name and timezone.

    Copy operations read source times in the source calendar's creation
    timezone and store them in the target calendar's creation timezone, so
    the absolute instant is preserved across zones.
    """

    def __init__(self):
        self._calendars: Dict[str, CalendarModel] = {}
        self._current: Optional[str] = None

    def __contains__(self, name: str) -> bool:
        return name in self._calendars

    def __len__(self) -> int:
        return len(self._calendars)

    # ==================== Calendar management ====================

    def create_calendar(self, name: str, timezone_id: str) -> CalendarModel:
        """
        Create a calendar.

        Args:
            name: Unique calendar name
            timezone_id: IANA zone id, e.g. 'America/New_York'

        Returns:
            The new CalendarModel

        Raises:
            DuplicateNameError: If the name is taken
            InvalidTimezoneError: If the zone id cannot be resolved
        """
        if not name:
            raise InvalidArgumentError("Calendar name cannot be empty")
        if name in self._calendars:
            raise DuplicateNameError(f"Calendar name already exists: {name}")

        calendar = CalendarModel(resolve_timezone(timezone_id))
        self._calendars[name] = calendar
        self.logger.info(f"Created calendar '{name}' in {zone_name(calendar.timezone)}")
        return calendar

    def get_calendar(self, name: str) -> CalendarModel:
        if name not in self._calendars:
            raise NotFoundError(f"No such calendar: {name}")
        return self._calendars[name]

    def list_calendars(self) -> List[str]:
        return sorted(self._calendars)

    @property
    def current_calendar_name(self) -> Optional[str]:
        """Name of the active calendar, or None."""
        return self._current

    def use_calendar(self, name: str) -> None:
        """Make `name` the active calendar."""
        if name not in self._calendars:
            raise NotFoundError(f"No such calendar: {name}")
        self._current = name
        self.logger.debug(f"Using calendar '{name}'")

    def get_active_calendar(self) -> CalendarModel:
        if self._current is None:
            raise NoActiveCalendarError("No calendar in use.")
        return self._calendars[self._current]

    def get_active_timezone(self) -> datetime.tzinfo:
        """Current (display) timezone of the active calendar."""
        return self.get_active_calendar().timezone

    def edit_calendar(self, name: str, prop: str, new_value: str) -> None:
        """
        Rename a calendar or change its timezone.

        Args:
            name: Existing calendar name
            prop: 'name' or 'timezone'
            new_value: New name or IANA zone id

        Raises:
            NotFoundError: Unknown calendar
            DuplicateNameError: New name already taken
            InvalidTimezoneError: Unresolvable zone id
            InvalidArgumentError: Unknown property
        """
        calendar = self.get_calendar(name)
        prop = (prop or "").strip().lower()

        if prop == 'name':
            if not new_value:
                raise InvalidArgumentError("Calendar name cannot be empty")
            if new_value in self._calendars:
                raise DuplicateNameError(f"Calendar with name already exists: {new_value}")
            del self._calendars[name]
            self._calendars[new_value] = calendar
            if self._current == name:
                self._current = new_value
            self.logger.info(f"Renamed calendar '{name}' to '{new_value}'")
        elif prop == 'timezone':
            calendar.set_timezone(new_value)
            self.logger.info(
                f"Calendar '{name}' now shown in {zone_name(calendar.timezone)} "
                f"(created in {zone_name(calendar.creation_timezone)})"
            )
        else:
            raise InvalidArgumentError(f"Unknown property: {prop}")

    def delete_calendar(self, name: str) -> None:
        if name not in self._calendars:
            raise NotFoundError(f"Calendar not found: {name}")
        del self._calendars[name]
        if self._current == name:
            self._current = None
        self.logger.info(f"Deleted calendar '{name}'")

    def is_busy(self, moment: datetime.datetime) -> bool:
        """Busy status of the active calendar at `moment` (its current timezone)."""
        calendar = self.get_active_calendar()
        return calendar.is_busy(calendar.from_display_time(moment))

    # ==================== Copying ====================

    def _copy_endpoints(self, target_name: str) -> Optional[Tuple[CalendarModel, CalendarModel]]:
        """Active and target calendars for a copy, or None (logged) if either is missing."""
        if self._current is None:
            self.logger.warning(f"Copy to '{target_name}' skipped: no calendar in use")
            return None
        if target_name not in self._calendars:
            self.logger.warning(f"Copy skipped: no such calendar: {target_name}")
            return None
        return self._calendars[self._current], self._calendars[target_name]

    def copy_event_to_calendar(
        self,
        subject: str,
        source_start: datetime.datetime,
        target_name: str,
        dest_start: datetime.datetime
    ) -> bool:
        """
        Copy one event from the active calendar to another calendar.

        Args:
            subject: Subject of the source event
            source_start: Start of the source event (as stored)
            target_name: Calendar to copy into
            dest_start: New start, in the target calendar's current timezone

        Returns:
            True if copied; False if no calendar is active, the target is
            unknown, the source event is missing or ambiguous, or the copy
            would duplicate a target event
        """
        calendars = self._copy_endpoints(target_name)
        if calendars is None:
            return False
        source, target = calendars

        lookup = source.find_event(subject, source_start)
        if not lookup.is_found():
            self.logger.warning(
                f"Copy of '{subject}' at {source_start} skipped: lookup {lookup.status.value}"
            )
            return False

        copied = lookup.event.copy_with_new_time(target.from_display_time(dest_start))
        if target.has_conflict(copied):
            self.logger.warning(f"Copy of '{subject}' skipped: conflict in '{target_name}'")
            return False

        target.add_event(copied)
        self.logger.info(f"Copied '{subject}' to '{target_name}' at {copied.start}")
        return True

    def copy_events_on_date_to_calendar_detailed(
        self,
        source_date: datetime.date,
        target_name: str,
        dest_date: datetime.date
    ) -> BulkResult:
        calendars = self._copy_endpoints(target_name)
        if calendars is None:
            return BulkResult()
        source, target = calendars

        candidates = []
        for event in source.get_events_on_date(source_date):
            moved = datetime.datetime.combine(dest_date, event.start.time())
            new_start = convert_naive(moved, source.creation_timezone, target.creation_timezone)
            candidates.append(event.copy_with_new_time(new_start))

        result = target.add_events_detailed(candidates)
        self.logger.info(
            f"Copied events on {source_date} from '{self._current}' to "
            f"'{target_name}' on {dest_date}: {result}"
        )
        return result

    def copy_events_on_date_to_calendar(
        self,
        source_date: datetime.date,
        target_name: str,
        dest_date: datetime.date
    ) -> int:
        """
        Copy every event starting on `source_date` in the active calendar
        to `dest_date` in the target calendar, keeping each time-of-day and
        converting it source -> target timezone.

        Returns:
            Number of events copied (conflicts are skipped); 0 when no calendar
            is active or the target is unknown
        """
        return self.copy_events_on_date_to_calendar_detailed(
            source_date, target_name, dest_date
        ).count

    def copy_events_between_dates_to_calendar_detailed(
        self,
        source_name: str,
        target_name: str,
        start_date: datetime.date,
        end_date: datetime.date,
        target_date: datetime.date
    ) -> BulkResult:
        source = self.get_calendar(source_name)
        target = self.get_calendar(target_name)
        if end_date < start_date:
            raise InvalidArgumentError("End date cannot be before start date")

        shift = target_date - start_date
        candidates = []
        for event in source.get_events():
            if not start_date <= event.start.date() <= end_date:
                continue
            new_start = convert_naive(
                event.start + shift, source.creation_timezone, target.creation_timezone
            )
            new_end = convert_naive(
                event.end + shift, source.creation_timezone, target.creation_timezone
            )
            candidates.append(event.copy_with_times(new_start, new_end))

        result = target.add_events_detailed(candidates)
        self.logger.info(
            f"Copied events {start_date}..{end_date} from '{source_name}' to "
            f"'{target_name}' starting {target_date}: {result}"
        )
        return result

    def copy_events_between_dates_to_calendar(
        self,
        source_name: str,
        target_name: str,
        start_date: datetime.date,
        end_date: datetime.date,
        target_date: datetime.date
    ) -> int:
        """
        Copy every event of `source_name` starting within
        [start_date, end_date] into `target_name`, keeping each event's
        day offset from `start_date` relative to `target_date`.

        Returns:
            Number of events copied (conflicts are skipped)
        """
        return self.copy_events_between_dates_to_calendar_detailed(
            source_name, target_name, start_date, end_date, target_date
        ).count

