# File: utils/dt_utils.py
"""Date and time utilities for Rise Habits.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

Uses standard library datetime/zoneinfo and dateutil.

Functions:
    - set_default_timezone / get_default_timezone: Configure the local timezone
    - dt_now_utc: Current UTC datetime
    - dt_now_iso: Current UTC datetime as ISO string
    - as_utc / as_local: Timezone conversion
    - local_calendar_date: (year, month, day) of an instant in local time
    - is_same_local_day: Compare the calendar dates of two instants
    - dt_to_utc: Parse an ISO timestamp into an aware UTC datetime
    - dt_program_date: Calendar date of a program day from its start date
"""

from __future__ import annotations

from datetime import UTC, date, datetime
import logging
from zoneinfo import ZoneInfo

from dateutil import parser as dt_parser
from dateutil.relativedelta import relativedelta

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this during integration setup to configure the user's timezone.
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_now_utc() -> datetime:
    """Return the current datetime in UTC (timezone-aware)."""
    return datetime.now(UTC)


def dt_now_iso() -> str:
    """Return the current UTC datetime as an ISO 8601 string.

    Example:
        "2025-04-07T14:30:00.123456+00:00"
    """
    return dt_now_utc().isoformat()


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC. Naive input is taken as default-timezone time."""
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=DEFAULT_TIME_ZONE)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: ZoneInfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Args:
        dt_obj: Datetime object. Naive input is assumed to be UTC.
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(tz_info)


# ==============================================================================
# Calendar-day Comparison
# ==============================================================================


def local_calendar_date(dt_obj: datetime, tz: ZoneInfo | None = None) -> date:
    """Return the calendar date (year, month, day) of an instant in local time."""
    return as_local(dt_obj, tz).date()


def is_same_local_day(
    first: datetime, second: datetime, tz: ZoneInfo | None = None
) -> bool:
    """Return True when both instants fall on the same local calendar date.

    Example:
        >>> is_same_local_day(
        ...     datetime(2024, 1, 1, 23, 0, tzinfo=UTC),
        ...     datetime(2024, 1, 2, 0, 30, tzinfo=UTC),
        ...     ZoneInfo("UTC"),
        ... )
        False
    """
    return local_calendar_date(first, tz) == local_calendar_date(second, tz)


# ==============================================================================
# Date/Time Parsing
# ==============================================================================


def dt_to_utc(dt_str: str | None) -> datetime | None:
    """Parse an ISO timestamp, apply the default timezone if naive, convert to UTC.

    Example:
        "2024-01-01T23:00:00Z" → datetime.datetime(2024, 1, 1, 23, 0, tzinfo=UTC)
    """
    if not dt_str or not isinstance(dt_str, str):
        return None

    try:
        parsed = dt_parser.isoparse(dt_str)
    except (ValueError, OverflowError):
        _LOGGER.warning("Unable to parse timestamp '%s'", dt_str)
        return None

    return as_utc(parsed)


# ==============================================================================
# Program Date Math
# ==============================================================================


def dt_program_date(start: datetime | date, day: int) -> str:
    """Return the ISO date of a 1-based program day.

    The start instant is normalized to its UTC calendar date, so day 1 is the
    UTC date of the generation instant and each later day adds one calendar day.

    Example:
        >>> dt_program_date(datetime(2024, 3, 30, 22, 0, tzinfo=UTC), 3)
        '2024-04-01'
    """
    if isinstance(start, datetime):
        start_date = as_utc(start).date()
    else:
        start_date = start
    return (start_date + relativedelta(days=day - 1)).isoformat()
