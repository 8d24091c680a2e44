# File: tests/unit/test_calendar_model.py
"""
Unit tests for CalendarModel: insertion, queries and scoped edits.
"""

import pytest
from datetime import datetime, date, timedelta

from src.core.calendar_model import CalendarModel
from src.core.recurrence import EventSeries
from src.models import (
    Event,
    Weekday,
    LookupStatus,
    DuplicateEventError,
    NotFoundError,
    InvalidArgumentError,
    InvalidTimezoneError,
)

pytestmark = pytest.mark.unit


# ==================== Insertion / Removal ====================

class TestInsertion:
    """Tests for add/remove and the no-duplicate invariant."""

    def test_add_and_get_events(self, calendar, standup, lunch):
        calendar.add_event(standup)
        calendar.add_event(lunch)

        assert calendar.get_events() == [standup, lunch]
        assert len(calendar) == 2

    def test_duplicate_raises_error(self, calendar, standup):
        calendar.add_event(standup)
        duplicate = Event("Standup", standup.start, standup.end, location="Other room")

        with pytest.raises(DuplicateEventError):
            calendar.add_event(duplicate)
        assert len(calendar) == 1

    def test_overlapping_distinct_events_allowed(self, calendar, standup):
        calendar.add_event(standup)
        calendar.add_event(Event("Other", standup.start, standup.end))

        assert len(calendar) == 2

    def test_has_conflict_is_identity_only(self, calendar, standup):
        calendar.add_event(standup)

        assert calendar.has_conflict(Event("Standup", standup.start, standup.end))
        assert not calendar.has_conflict(Event("Standup", standup.start, standup.end + timedelta(minutes=1)))
        assert standup in calendar

    def test_remove_event(self, calendar, standup, lunch):
        calendar.add_event(standup)
        calendar.add_event(lunch)

        calendar.remove_event(Event("Standup", standup.start, standup.end))

        assert calendar.get_events() == [lunch]

    def test_remove_missing_raises_error(self, calendar, standup):
        with pytest.raises(NotFoundError):
            calendar.remove_event(standup)

    def test_add_events_skips_duplicates(self, calendar, standup, lunch):
        calendar.add_event(standup)

        result = calendar.add_events_detailed([lunch, Event("Standup", standup.start, standup.end)])

        assert result.count == 1
        assert result.skipped_count == 1
        assert len(calendar) == 2

    def test_get_events_returns_copy(self, calendar, standup):
        calendar.add_event(standup)
        calendar.get_events().clear()

        assert len(calendar) == 1

    def test_returned_events_do_not_alias_storage(self, calendar, standup, lunch):
        calendar.add_event(standup)
        calendar.add_event(lunch)

        calendar.get_events()[0].set_subject("Lunch")
        calendar.find_event("Lunch", lunch.start).event.set_start(standup.start)
        standup.set_end(datetime(2025, 6, 10, 9, 45))

        stored = sorted(calendar.get_events(), key=lambda e: e.start)
        assert [(e.subject, e.start, e.end) for e in stored] == [
            ("Standup", datetime(2025, 6, 10, 9, 0), datetime(2025, 6, 10, 10, 0)),
            ("Lunch", lunch.start, lunch.end),
        ]
        assert calendar.has_conflict(Event("Standup", datetime(2025, 6, 10, 9, 0), datetime(2025, 6, 10, 10, 0)))


# ==================== Queries ====================

class TestQueries:
    """Tests for lookups, range queries and busy status."""

    def test_find_event_found(self, calendar, standup):
        calendar.add_event(standup)
        result = calendar.find_event("Standup", standup.start)

        assert result.status == LookupStatus.FOUND
        assert result.event == standup

    def test_find_event_not_found(self, calendar, standup):
        calendar.add_event(standup)
        assert calendar.find_event("Standup", standup.end).status == LookupStatus.NOT_FOUND

    def test_find_event_ambiguous(self, calendar, standup):
        calendar.add_event(standup)
        calendar.add_event(Event("Standup", standup.start, standup.end + timedelta(minutes=30)))

        result = calendar.find_event("Standup", standup.start)

        assert result.status == LookupStatus.AMBIGUOUS
        assert result.event is None
        assert result.match_count == 2

    def test_get_events_on_date_uses_start_date(self, calendar):
        overnight = Event("Overnight", datetime(2025, 6, 10, 22, 0), datetime(2025, 6, 11, 2, 0))
        calendar.add_event(overnight)

        assert calendar.get_events_on_date(date(2025, 6, 10)) == [overnight]
        assert calendar.get_events_on_date(date(2025, 6, 11)) == []

    def test_range_query_includes_overlap(self, calendar, standup):
        calendar.add_event(standup)

        found = calendar.get_events_within_dates(
            datetime(2025, 6, 9, 0, 0), datetime(2025, 6, 10, 23, 59)
        )

        assert found == [standup]

    def test_range_query_half_open_boundaries(self, calendar, standup):
        calendar.add_event(standup)

        assert calendar.get_events_within_dates(standup.end, standup.end + timedelta(hours=1)) == []
        assert calendar.get_events_within_dates(standup.start - timedelta(hours=1), standup.start) == []

    def test_is_busy_strict(self, calendar, standup):
        calendar.add_event(standup)

        assert calendar.is_busy(datetime(2025, 6, 10, 9, 0)) is False
        assert calendar.is_busy(datetime(2025, 6, 10, 10, 0)) is False
        assert calendar.is_busy(datetime(2025, 6, 10, 9, 30)) is True

    def test_get_events_from_date_sorted_and_capped(self, calendar):
        first = datetime(2025, 6, 1, 9, 0)
        for offset in reversed(range(15)):
            calendar.add_event(Event(f"Day {offset}", first + timedelta(days=offset)))

        upcoming = calendar.get_events_from_date(date(2025, 6, 3))

        assert len(upcoming) == 10
        assert upcoming[0].subject == "Day 2"
        assert [e.start for e in upcoming] == sorted(e.start for e in upcoming)


# ==================== Timezone ====================

class TestTimezone:
    """Current vs creation timezone."""

    def test_new_calendar_timezones(self, calendar):
        assert calendar.timezone.zone == "America/New_York"
        assert calendar.creation_timezone.zone == "America/New_York"

    def test_invalid_timezone_raises_error(self):
        with pytest.raises(InvalidTimezoneError):
            CalendarModel("Mars/Olympus_Mons")

    def test_set_timezone_keeps_stored_times(self, calendar, standup):
        calendar.add_event(standup)
        calendar.set_timezone("America/Los_Angeles")

        assert calendar.timezone.zone == "America/Los_Angeles"
        assert calendar.creation_timezone.zone == "America/New_York"
        assert calendar.get_events()[0].start == datetime(2025, 6, 10, 9, 0)

    def test_display_conversion(self, calendar, standup):
        calendar.add_event(standup)
        calendar.set_timezone("America/Los_Angeles")

        shown = calendar.get_display_events_on_date(date(2025, 6, 10))

        assert shown[0].start == datetime(2025, 6, 10, 6, 0)
        assert shown[0].end == datetime(2025, 6, 10, 7, 0)
        assert calendar.from_display_time(datetime(2025, 6, 10, 6, 0)) == standup.start

    def test_display_of_skipped_local_time_keeps_end_after_start(self, calendar):
        # 02:30 does not exist in New York on 2025-03-09 and is read as standard time
        calendar.add_event(Event("Night", datetime(2025, 3, 9, 2, 30), datetime(2025, 3, 9, 3, 10)))
        calendar.set_timezone("America/Los_Angeles")

        shown = calendar.get_display_events_on_date(date(2025, 3, 8))

        assert len(shown) == 1
        assert shown[0].start == datetime(2025, 3, 8, 23, 30)
        assert shown[0].end == datetime(2025, 3, 9, 0, 30)


# ==================== Scoped Edits ====================

class TestSingleEdit:
    """Tests for edit_single_event."""

    def test_edit_single_event(self, calendar, standup):
        calendar.add_event(standup)

        assert calendar.edit_single_event(standup, "subject", "Sync") is True
        assert calendar.get_events()[0].subject == "Sync"

    def test_edit_conflict_discards_change(self, calendar, standup, lunch):
        calendar.add_event(standup)
        calendar.add_event(lunch)

        moved = calendar.edit_single_event(lunch, "subject", "Standup")
        assert moved is True

        # A second event renamed onto an identical triple is refused
        clone = Event("Other", standup.start, standup.end)
        calendar.add_event(clone)
        assert calendar.edit_single_event(clone, "subject", "Standup") is False
        assert calendar.find_event("Other", standup.start).event == clone

    def test_edit_non_identity_field(self, calendar, standup):
        calendar.add_event(standup)

        assert calendar.edit_single_event(standup, "location", "Room 9") is True
        assert calendar.get_events()[0].location == "Room 9"

    def test_edit_replaces_instance(self, calendar, standup):
        calendar.add_event(standup)
        calendar.edit_single_event(standup, "description", "Changed")

        assert standup.description == "Daily sync"
        assert calendar.get_events()[0] is not standup

    def test_edit_unknown_event_raises_error(self, calendar, standup):
        with pytest.raises(NotFoundError):
            calendar.edit_single_event(standup, "subject", "Sync")

    def test_edit_bad_property_raises_error(self, calendar, standup):
        calendar.add_event(standup)
        with pytest.raises(InvalidArgumentError):
            calendar.edit_single_event(standup, "priority", "high")

    def test_edit_single_leaves_siblings(self, series_calendar):
        events = sorted(series_calendar.get_events(), key=lambda e: e.start)

        series_calendar.edit_single_event(events[1], "subject", "Moved Review")

        subjects = [e.subject for e in sorted(series_calendar.get_events(), key=lambda e: e.start)]
        assert subjects == ["Weekly Review", "Moved Review", "Weekly Review"]
        assert len({e.series_id for e in series_calendar.get_events()}) == 1


class TestSeriesEdits:
    """Tests for edit_future_events and edit_whole_series."""

    def _sorted(self, calendar):
        return sorted(calendar.get_events(), key=lambda e: e.start)

    def test_edit_future_from_second(self, series_calendar):
        second = self._sorted(series_calendar)[1]

        count = series_calendar.edit_future_events(second, "location", "Room 4")

        assert count == 2
        assert [e.location for e in self._sorted(series_calendar)] == ["", "Room 4", "Room 4"]

    def test_edit_future_skips_conflicts(self, series_calendar):
        events = self._sorted(series_calendar)
        blocker = Event("Renamed", events[2].start, events[2].end)
        series_calendar.add_event(blocker)

        result = series_calendar.edit_future_events_detailed(events[1], "subject", "Renamed")

        assert result.count == 1
        assert result.skipped_count == 1
        subjects = [e.subject for e in self._sorted(series_calendar) if e.series_id]
        assert subjects == ["Weekly Review", "Renamed", "Weekly Review"]

    def test_edit_future_start_time(self, series_calendar):
        first = self._sorted(series_calendar)[0]

        count = series_calendar.edit_future_events(first, "start", "2025-06-02T15:30")

        # The new value is absolute: every occurrence moves to the same start
        assert count == 3
        assert {e.start for e in series_calendar.get_events()} == {datetime(2025, 6, 2, 15, 30)}

    def test_edit_whole_series_ignores_cutoff(self, series_calendar):
        last = self._sorted(series_calendar)[-1]

        count = series_calendar.edit_whole_series(last, "description", "Quarterly")

        assert count == 3
        assert all(e.description == "Quarterly" for e in series_calendar.get_events())

    def test_series_edit_keeps_series_id(self, series_calendar, weekly_review_series):
        series_calendar.edit_whole_series(self._sorted(series_calendar)[0], "subject", "Review")

        assert all(e.series_id == weekly_review_series.series_id for e in series_calendar.get_events())

    def test_series_edit_leaves_other_series(self, series_calendar):
        other = EventSeries.by_count(
            "Standup", datetime(2025, 6, 2, 9, 0), datetime(2025, 6, 2, 9, 15), {Weekday.MONDAY}, 3
        )
        series_calendar.add_events(other.events)

        review = [e for e in self._sorted(series_calendar) if e.subject == "Weekly Review"][0]
        series_calendar.edit_whole_series(review, "location", "HQ")

        for event in series_calendar.get_events():
            expected = "" if event.series_id == other.series_id else "HQ"
            assert event.location == expected

    def test_standalone_event_edited_alone(self, calendar, standup):
        calendar.add_event(standup)

        assert calendar.edit_future_events(standup, "subject", "Sync") == 1
        assert calendar.edit_whole_series(calendar.get_events()[0], "subject", "Huddle") == 1
        assert calendar.get_events()[0].subject == "Huddle"

    def test_series_edit_bad_property_mutates_nothing(self, series_calendar):
        before = [e.subject for e in series_calendar.get_events()]

        with pytest.raises(InvalidArgumentError):
            series_calendar.edit_whole_series(series_calendar.get_events()[0], "colour", "red")

        assert [e.subject for e in series_calendar.get_events()] == before
