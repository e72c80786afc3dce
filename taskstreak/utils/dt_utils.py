# File: utils/dt_utils.py
"""Date utilities for TaskStreak.

Pure Python calendar-date functions. Everything here works on
`datetime.date` values (CalendarDate) and their canonical `YYYY-MM-DD`
string form (ISODate). No time-of-day and no timezone offsets survive past
the local-day selection done in `to_local_calendar_date`.

Functions:
    - set_default_timezone / get_default_timezone: Configure "local" time
    - dt_today_local: Get today's date in local timezone (caller side)
    - dt_today_iso: Get today's date as ISO string (caller side)
    - to_local_calendar_date: Select the local calendar day of an instant
    - to_local_iso_date: Same, formatted as YYYY-MM-DD
    - format_calendar_date: Format a CalendarDate as YYYY-MM-DD
    - parse_calendar_date: Strictly parse YYYY-MM-DD into a CalendarDate
    - coerce_calendar_date: Accept a CalendarDate or ISODate, return a date
    - require_calendar_date: Same, but raise ValueError on invalid input
"""

from __future__ import annotations

from datetime import UTC, date, datetime
import logging
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import tzinfo

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Module Configuration
# Timezone setting and the strict calendar-date pattern.
# ==============================================================================

# Default timezone - None means the system's local timezone
DEFAULT_TIME_ZONE: tzinfo | None = None

# Exactly three dash-separated ASCII-digit components
_CALENDAR_DATE_PATTERN = re.compile(r"(\d+)-(\d+)-(\d+)", re.ASCII)


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: tzinfo | None) -> None:
    """Set the default timezone used to select "local" calendar days.

    Call this once during application setup. Passing None restores the
    system local timezone.

    Args:
        tz: tzinfo (usually a ZoneInfo) representing the user's timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> tzinfo | None:
    """Get the current default timezone.

    Returns:
        The configured default timezone, or None for system local time
    """
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date Functions (caller side; engines never read the clock)
# ==============================================================================


def dt_today_local(tz: tzinfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Today's date in the specified timezone.

    Example:
        datetime.date(2025, 8, 10)
    """
    return to_local_calendar_date(datetime.now(UTC), tz)


def dt_today_iso(tz: tzinfo | None = None) -> str:
    """Return today's date in local timezone as ISO string (YYYY-MM-DD).

    Example:
        "2025-08-10"
    """
    return format_calendar_date(dt_today_local(tz))


# ==============================================================================
# Local Calendar Day Selection
# ==============================================================================


def to_local_calendar_date(
    instant: datetime | date | float,
    tz: tzinfo | None = None,
) -> date:
    """Return the local calendar day containing an instant.

    Args:
        instant: One of
            - timezone-aware datetime: converted to local time first
            - naive datetime: treated as local wall-clock time
            - date: returned unchanged
            - int/float: POSIX timestamp (seconds)
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided,
            and the system local timezone if neither is set.

    Returns:
        The local calendar date. Time-of-day only selects the day, so
        23:30 UTC on Aug 10 is Aug 10 in UTC but Aug 11 in UTC+2.
    """
    tz_info = tz or DEFAULT_TIME_ZONE

    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            return instant.date()
        return instant.astimezone(tz_info).date()

    if isinstance(instant, date):
        return instant

    return datetime.fromtimestamp(instant, tz_info).date()


def to_local_iso_date(
    instant: datetime | date | float,
    tz: tzinfo | None = None,
) -> str:
    """Return the local calendar day of an instant as YYYY-MM-DD."""
    return format_calendar_date(to_local_calendar_date(instant, tz))


# ==============================================================================
# Calendar Date Parsing / Formatting
# ==============================================================================


def format_calendar_date(cal_date: date) -> str:
    """Format a CalendarDate as a zero-padded YYYY-MM-DD string.

    Datetimes are truncated to their date portion.
    """
    if isinstance(cal_date, datetime):
        cal_date = cal_date.date()
    return cal_date.isoformat()


def parse_calendar_date(text: str | None) -> date | None:
    """Strictly parse a YYYY-MM-DD string into a `datetime.date`.

    Unlike lenient parsers, no other format is accepted and no value is
    rolled over: "2025-04-31" and "2025-13-01" both fail.

    Args:
        text: Date string to parse, or None

    Returns:
        datetime.date, or None if the string is not exactly three
        dash-separated numeric components forming a valid calendar date.
    """
    if not text or not isinstance(text, str):
        return None

    match = _CALENDAR_DATE_PATTERN.fullmatch(text)
    if match is None:
        return None

    try:
        year, month, day = (int(part) for part in match.groups())
        return date(year, month, day)
    except (ValueError, OverflowError):
        return None


def coerce_calendar_date(value: date | str | None) -> date | None:
    """Normalize a CalendarDate or ISODate into a `datetime.date`.

    Invalid strings are logged and treated as "no date".
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    parsed = parse_calendar_date(value)
    if parsed is None:
        _LOGGER.warning("coerce_calendar_date: Ignoring invalid date %r", value)
    return parsed


def require_calendar_date(value: date | str, field: str = "date") -> date:
    """Normalize a mandatory CalendarDate or ISODate argument.

    Args:
        value: datetime.date or YYYY-MM-DD string
        field: Argument name used in the log and error message

    Returns:
        The parsed calendar date.

    Raises:
        ValueError: If value is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    parsed = parse_calendar_date(value)
    if parsed is None:
        _LOGGER.error("require_calendar_date: Invalid %s value %r", field, value)
        raise ValueError(f"Invalid calendar date for {field}: {value!r}")
    return parsed
