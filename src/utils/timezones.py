# File: src/utils/timezones.py
"""
IANA timezone helpers built on pytz.
Stored event times are naive; these helpers attach a zone, move the
absolute instant to another zone and strip the zone again.
"""

import datetime
from typing import Union

import pytz

from src.models.errors import InvalidTimezoneError

Zone = Union[str, datetime.tzinfo]


def resolve_timezone(zone: Zone) -> datetime.tzinfo:
    """
    Resolve an IANA zone id (e.g. 'America/New_York') to a pytz timezone.

    Raises:
        InvalidTimezoneError: If the id cannot be resolved
    """
    if isinstance(zone, datetime.tzinfo):
        return zone
    if not zone or not isinstance(zone, str):
        raise InvalidTimezoneError(zone)
    try:
        return pytz.timezone(zone.strip())
    except pytz.UnknownTimeZoneError as e:
        raise InvalidTimezoneError(zone) from e


def zone_name(zone: datetime.tzinfo) -> str:
    return getattr(zone, 'zone', None) or str(zone)


def localize(naive: datetime.datetime, zone: Zone) -> datetime.datetime:
    """Interpret a naive datetime as wall-clock time in `zone`."""
    tz = resolve_timezone(zone)
    if hasattr(tz, 'localize'):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def convert_naive(
    naive: datetime.datetime,
    from_zone: Zone,
    to_zone: Zone
) -> datetime.datetime:
    """
    Re-express a naive wall-clock time from one zone in another.

    Args:
        naive: Timestamp read in `from_zone`
        from_zone: Source zone
        to_zone: Target zone

    Returns:
        Naive timestamp naming the same instant in `to_zone`
    """
    source = resolve_timezone(from_zone)
    target = resolve_timezone(to_zone)
    if source == target:
        return naive
    return localize(naive, source).astimezone(target).replace(tzinfo=None)
