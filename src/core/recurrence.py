# File: src/core/recurrence.py
"""
Recurring event generation.

An EventSeries expands a weekday rule into concrete Events that all carry
one freshly minted SeriesId. The series itself is never stored; only the
generated events are.
"""

import datetime
from typing import Iterable, List, Optional, Set

from src.core.config_manager import Config
from src.models import Event, SeriesId, Weekday, InvalidArgumentError
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

# Single-letter weekday codes: R is Thursday, U is Sunday
WEEKDAY_CODES = {
    'M': Weekday.MONDAY,
    'T': Weekday.TUESDAY,
    'W': Weekday.WEDNESDAY,
    'R': Weekday.THURSDAY,
    'F': Weekday.FRIDAY,
    'S': Weekday.SATURDAY,
    'U': Weekday.SUNDAY,
}


def parse_weekday_codes(codes: str) -> Set[Weekday]:
    """
    Convert a code string such as 'MWF' into a set of weekdays.

    Raises:
        InvalidArgumentError: On an empty string or an unknown code
    """
    if not codes:
        raise InvalidArgumentError("Weekdays cant be empty.")
    weekdays = set()
    for code in codes.strip().upper():
        if code not in WEEKDAY_CODES:
            raise InvalidArgumentError(f"Invalid weekday code: {code}")
        weekdays.add(WEEKDAY_CODES[code])
    return weekdays


class EventSeries:
    """
    A recurring series terminated either by occurrence count or by an
    inclusive until-date.

    Use the `by_count` / `until` constructors; both validate the template
    and generate the occurrences eagerly.
    """

    def __init__(
        self,
        subject: str,
        start: datetime.datetime,
        end: datetime.datetime,
        weekdays: Iterable[Weekday],
        count: Optional[int] = None,
        until_date: Optional[datetime.date] = None,
    ):
        if (count is None) == (until_date is None):
            raise InvalidArgumentError("Series needs exactly one of count or until date.")
        if not subject or start is None or end is None or weekdays is None:
            raise InvalidArgumentError("Arguments cant be null/empty.")

        repeating_days = {self._as_weekday(day) for day in weekdays}
        if not repeating_days:
            raise InvalidArgumentError("Weekdays cant be empty.")
        if end <= start:
            raise InvalidArgumentError("End needs to be after start.")
        if end.date() != start.date():
            raise InvalidArgumentError("Series template must start and end on the same day.")
        if count is not None and count < 0:
            raise InvalidArgumentError("Count cant be negative.")
        if until_date is not None and until_date < start.date():
            raise InvalidArgumentError("Until date cant be before start date.")

        self.subject = subject
        self.start = start
        self.end = end
        self.repeating_days = repeating_days
        self.count = count
        self.until_date = until_date
        self.series_id = SeriesId.new()

        if count is not None:
            self._events = self._generate_by_count()
        else:
            self._events = self._generate_until()

        logger.debug(
            f"Generated {len(self._events)} occurrences of '{subject}' "
            f"(series {self.series_id})"
        )

    # ==================== Constructors ====================

    @classmethod
    def by_count(cls, subject, start, end, weekdays, count: int) -> 'EventSeries':
        """Series that stops after `count` occurrences."""
        if count is None:
            raise InvalidArgumentError("Count cant be null.")
        return cls(subject, start, end, weekdays, count=count)

    @classmethod
    def until(cls, subject, start, end, weekdays, until_date: datetime.date) -> 'EventSeries':
        """Series that runs through `until_date` inclusive."""
        if until_date is None:
            raise InvalidArgumentError("Until date cant be null.")
        return cls(subject, start, end, weekdays, until_date=until_date)

    @classmethod
    def all_day_by_count(cls, subject, day: datetime.date, weekdays, count: int) -> 'EventSeries':
        start, end = cls._all_day_window(day)
        return cls.by_count(subject, start, end, weekdays, count)

    @classmethod
    def all_day_until(cls, subject, day: datetime.date, weekdays,
                      until_date: datetime.date) -> 'EventSeries':
        start, end = cls._all_day_window(day)
        return cls.until(subject, start, end, weekdays, until_date)

    # ==================== Accessors ====================

    @property
    def events(self) -> List[Event]:
        """Generated occurrences in chronological order (a copy)."""
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self):
        return iter(list(self._events))

    # ==================== Generation ====================

    def _occurrence(self, day: datetime.date) -> Event:
        return Event(
            subject=self.subject,
            start=datetime.datetime.combine(day, self.start.time()),
            end=datetime.datetime.combine(day, self.end.time()),
            series_id=self.series_id,
        )

    def _generate_by_count(self) -> List[Event]:
        occurrences = []
        current = self.start.date()
        while len(occurrences) < self.count:
            if Weekday.of(current) in self.repeating_days:
                occurrences.append(self._occurrence(current))
            current += datetime.timedelta(days=1)
        return occurrences

    def _generate_until(self) -> List[Event]:
        occurrences = []
        current = self.start.date()
        while current <= self.until_date:
            if Weekday.of(current) in self.repeating_days:
                occurrences.append(self._occurrence(current))
            current += datetime.timedelta(days=1)
        return occurrences

    @staticmethod
    def _as_weekday(day) -> Weekday:
        if isinstance(day, Weekday):
            return day
        if isinstance(day, str):
            try:
                return Weekday[day.strip().upper()]
            except KeyError:
                raise InvalidArgumentError(f"Invalid weekday: {day}") from None
        try:
            return Weekday(day)
        except ValueError:
            raise InvalidArgumentError(f"Invalid weekday: {day}") from None

    @staticmethod
    def _all_day_window(day: datetime.date):
        return (
            datetime.datetime.combine(day, Config.ALL_DAY_START),
            datetime.datetime.combine(day, Config.ALL_DAY_END),
        )
