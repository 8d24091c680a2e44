# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable events, series and calendars for all tests.
"""

import os
import sys
from datetime import datetime, date
from pathlib import Path

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Keep test runs from writing log files (read when Config is imported)
os.environ.setdefault("CALENDAR_LOG_TO_FILE", "false")

from src.models import Event, Visibility, Weekday
from src.core.recurrence import EventSeries
from src.core.calendar_model import CalendarModel
from src.core.calendar_library import CalendarLibrary


# ==================== Event Fixtures ====================

@pytest.fixture
def standup():
    """A one-hour standalone event."""
    return Event(
        subject="Standup",
        start=datetime(2025, 6, 10, 9, 0),
        end=datetime(2025, 6, 10, 10, 0),
        location="Room 1",
        description="Daily sync",
        visibility=Visibility.PUBLIC,
    )


@pytest.fixture
def lunch():
    """A lunch event on the same day as standup."""
    return Event(
        subject="Lunch",
        start=datetime(2025, 6, 10, 12, 0),
        end=datetime(2025, 6, 10, 13, 0),
    )


# ==================== Series Fixtures ====================

@pytest.fixture
def mwf():
    """Monday / Wednesday / Friday."""
    return {Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY}


@pytest.fixture
def weekly_review_series():
    """Three weekly Monday occurrences starting 2025-06-02."""
    return EventSeries.by_count(
        "Weekly Review",
        datetime(2025, 6, 2, 15, 0),
        datetime(2025, 6, 2, 16, 0),
        {Weekday.MONDAY},
        3,
    )


# ==================== Calendar Fixtures ====================

@pytest.fixture
def calendar():
    """Empty calendar in New York."""
    return CalendarModel("America/New_York")


@pytest.fixture
def series_calendar(calendar, weekly_review_series):
    """Calendar holding the weekly review series."""
    for event in weekly_review_series.events:
        calendar.add_event(event)
    return calendar


@pytest.fixture
def library():
    """Library with a New York ('work') and Los Angeles ('home') calendar, work active."""
    lib = CalendarLibrary()
    lib.create_calendar("work", "America/New_York")
    lib.create_calendar("home", "America/Los_Angeles")
    lib.use_calendar("work")
    return lib


# ==================== Date Fixtures ====================

@pytest.fixture
def june_first_week():
    """Monday 2025-06-02 through Friday 2025-06-06."""
    return date(2025, 6, 2), date(2025, 6, 6)


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
