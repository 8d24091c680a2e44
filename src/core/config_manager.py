# File: src/core/config_manager.py
"""
Centralized configuration management for the calendar engine.
Loads settings from environment variables (optionally via a .env file).
"""

import os
from datetime import time, timedelta
from pathlib import Path

import pytz
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _parse_clock(value: str, fallback: time) -> time:
    """Parse an 'HH:MM' string, falling back on malformed input."""
    try:
        hours, minutes = value.strip().split(':')
        return time(int(hours), int(minutes))
    except (ValueError, AttributeError):
        return fallback


class Config:
    """Application configuration singleton."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent  # Go up 3 levels from src/core/
    LOGS_DIR = Path(os.getenv("CALENDAR_LOGS_DIR", str(BASE_DIR / "logs")))

    # Logging
    LOG_LEVEL = os.getenv("CALENDAR_LOG_LEVEL", "INFO").upper()
    LOG_TO_FILE = os.getenv("CALENDAR_LOG_TO_FILE", "true").strip().lower() in ['1', 'true', 'yes', 'on']

    # Timezones
    DEFAULT_TIMEZONE = os.getenv("CALENDAR_TIMEZONE", "UTC")

    # Date/time format accepted for edit values
    DATETIME_FORMAT = "%Y-%m-%dT%H:%M"

    # Event defaults
    DEFAULT_EVENT_DURATION = timedelta(hours=1)
    ALL_DAY_START = _parse_clock(os.getenv("CALENDAR_ALL_DAY_START", "08:00"), time(8, 0))
    ALL_DAY_END = _parse_clock(os.getenv("CALENDAR_ALL_DAY_END", "17:00"), time(17, 0))

    # Queries
    UPCOMING_EVENTS_LIMIT = int(os.getenv("CALENDAR_UPCOMING_LIMIT", "10"))

    @classmethod
    def validate(cls) -> bool:
        """Validate that the loaded configuration is usable."""
        errors = []

        if cls.DEFAULT_TIMEZONE not in pytz.all_timezones_set:
            errors.append(f"CALENDAR_TIMEZONE is not a known IANA zone: {cls.DEFAULT_TIMEZONE}")

        if cls.ALL_DAY_END <= cls.ALL_DAY_START:
            errors.append("All-day window must end after it starts")

        if cls.UPCOMING_EVENTS_LIMIT <= 0:
            errors.append("CALENDAR_UPCOMING_LIMIT must be positive")

        if errors:
            for error in errors:
                print(f"Configuration Error: {error}")
            return False

        return True
