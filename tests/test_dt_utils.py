"""Tests for utils/dt_utils.py calendar-date helpers.

Focuses on:
- to_local_calendar_date: local-day selection across UTC-day boundaries
- parse_calendar_date: strict YYYY-MM-DD parsing, absence on invalid input
- format_calendar_date: zero padding and round-trip
- dt_today_local / dt_today_iso: caller-side clock helpers (frozen time)
- Default timezone configuration
"""

from collections.abc import Iterator
from datetime import UTC, date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from freezegun import freeze_time
import pytest

from taskstreak.utils import dt_utils
from taskstreak.utils.dt_utils import (
    coerce_calendar_date,
    dt_today_iso,
    dt_today_local,
    format_calendar_date,
    get_default_timezone,
    parse_calendar_date,
    require_calendar_date,
    set_default_timezone,
    to_local_calendar_date,
    to_local_iso_date,
)

UTC_PLUS_2 = timezone(timedelta(hours=2))
UTC_MINUS_7 = timezone(timedelta(hours=-7))


@pytest.fixture(autouse=True)
def restore_default_timezone() -> Iterator[None]:
    """Keep timezone configuration from leaking between tests."""
    original = get_default_timezone()
    yield
    set_default_timezone(original)


# =============================================================================
# Local calendar day selection
# =============================================================================


class TestToLocalCalendarDate:
    """to_local_calendar_date picks the local day, not the UTC day."""

    def test_aware_datetime_ahead_of_utc(self) -> None:
        """23:30 UTC is already the next day in UTC+2."""
        instant = datetime(2025, 8, 10, 23, 30, tzinfo=UTC)
        assert to_local_calendar_date(instant, UTC_PLUS_2) == date(2025, 8, 11)

    def test_aware_datetime_behind_utc(self) -> None:
        """02:00 UTC is still the previous day in UTC-7."""
        instant = datetime(2025, 8, 11, 2, 0, tzinfo=UTC)
        assert to_local_calendar_date(instant, UTC_MINUS_7) == date(2025, 8, 10)

    def test_same_day_in_utc(self) -> None:
        """Without an offset difference the UTC day is the local day."""
        instant = datetime(2025, 8, 10, 23, 59, 59, tzinfo=UTC)
        assert to_local_calendar_date(instant, UTC) == date(2025, 8, 10)

    def test_zoneinfo_timezone(self) -> None:
        """IANA zones work the same as fixed offsets."""
        instant = datetime(2025, 1, 15, 6, 0, tzinfo=UTC)
        tz = ZoneInfo("America/Los_Angeles")
        assert to_local_calendar_date(instant, tz) == date(2025, 1, 14)

    def test_naive_datetime_is_local_wall_clock(self) -> None:
        """Naive datetimes are not shifted."""
        instant = datetime(2025, 8, 10, 23, 30)
        assert to_local_calendar_date(instant, UTC_PLUS_2) == date(2025, 8, 10)

    def test_posix_timestamp(self) -> None:
        """Timestamps are converted in the given timezone."""
        instant = datetime(2025, 8, 10, 23, 30, tzinfo=UTC).timestamp()
        assert to_local_calendar_date(instant, UTC) == date(2025, 8, 10)
        assert to_local_calendar_date(instant, UTC_PLUS_2) == date(2025, 8, 11)

    def test_date_passes_through(self) -> None:
        """A date is already a calendar day."""
        assert to_local_calendar_date(date(2025, 8, 10)) == date(2025, 8, 10)

    def test_default_timezone_used_when_no_override(self) -> None:
        """set_default_timezone applies when tz is not passed."""
        set_default_timezone(UTC_MINUS_7)
        instant = datetime(2025, 8, 11, 2, 0, tzinfo=UTC)
        assert to_local_calendar_date(instant) == date(2025, 8, 10)

    def test_iso_variant_is_zero_padded(self) -> None:
        """to_local_iso_date formats YYYY-MM-DD."""
        instant = datetime(2025, 1, 5, 12, 0, tzinfo=UTC)
        assert to_local_iso_date(instant, UTC) == "2025-01-05"


# =============================================================================
# Parsing
# =============================================================================


class TestParseCalendarDate:
    """parse_calendar_date is strict and never raises."""

    def test_valid_date(self) -> None:
        """Canonical form parses."""
        assert parse_calendar_date("2025-08-10") == date(2025, 8, 10)

    def test_unpadded_components(self) -> None:
        """Numeric components need not be zero padded."""
        assert parse_calendar_date("2025-8-1") == date(2025, 8, 1)

    def test_leap_day(self) -> None:
        """Feb 29 is valid in a leap year only."""
        assert parse_calendar_date("2024-02-29") == date(2024, 2, 29)
        assert parse_calendar_date("2025-02-29") is None

    @pytest.mark.parametrize(
        "text",
        [
            "2025-13-01",  # month 13
            "2025-04-31",  # April has 30 days
            "2025-00-10",  # month 0
            "2025-01-00",  # day 0
            "0000-01-01",  # year 0
            "2025-08",  # two components
            "2025-08-10-01",  # four components
            "2025/08/10",  # wrong separator
            "2025-08-1a",  # non-numeric
            "2025--10",  # empty component
            " 2025-08-10",  # surrounding whitespace
            "2025-08-10\n",  # trailing newline
            "2025-08-10T00:00:00",  # datetime
            "-2025-08-10",  # sign
            "２０２５-08-10",  # non-ASCII digits
            "99999999999999999999-01-01",  # overflow
            "9" * 5000 + "-01-01",  # beyond int() digit limit
            "2025-01-" + "1" * 5000,
            "",
            "not-a-date",
        ],
    )
    def test_invalid_strings_return_none(self, text: str) -> None:
        """Every malformed or impossible date is absent."""
        assert parse_calendar_date(text) is None

    def test_none_and_non_string(self) -> None:
        """Non-string input is absent too."""
        assert parse_calendar_date(None) is None
        assert parse_calendar_date(20250810) is None  # type: ignore[arg-type]


# =============================================================================
# Formatting
# =============================================================================


class TestFormatCalendarDate:
    """format_calendar_date produces the canonical string."""

    def test_zero_padding(self) -> None:
        """Month and day are zero padded."""
        assert format_calendar_date(date(2025, 1, 5)) == "2025-01-05"

    def test_datetime_truncated(self) -> None:
        """Time-of-day is dropped."""
        assert format_calendar_date(datetime(2025, 8, 10, 23, 59)) == "2025-08-10"

    @pytest.mark.parametrize(
        "value",
        [date(2025, 8, 10), date(2024, 2, 29), date(2000, 12, 31), date(1, 1, 1)],
    )
    def test_round_trip(self, value: date) -> None:
        """parse(format(d)) == d."""
        assert parse_calendar_date(format_calendar_date(value)) == value

    def test_round_trip_across_a_leap_year(self) -> None:
        """Every day of 2024 survives a round trip."""
        day = date(2024, 1, 1)
        while day.year == 2024:
            assert parse_calendar_date(format_calendar_date(day)) == day
            day += timedelta(days=1)


# =============================================================================
# Coercion helpers
# =============================================================================


class TestCoercion:
    """coerce_calendar_date / require_calendar_date."""

    def test_coerce_accepts_dates_and_strings(self) -> None:
        """Both representations normalize to a date."""
        assert coerce_calendar_date(date(2025, 8, 10)) == date(2025, 8, 10)
        assert coerce_calendar_date(datetime(2025, 8, 10, 9)) == date(2025, 8, 10)
        assert coerce_calendar_date("2025-08-10") == date(2025, 8, 10)
        assert coerce_calendar_date(None) is None

    def test_coerce_invalid_string_is_none(self) -> None:
        """Invalid strings are treated as no date."""
        assert coerce_calendar_date("2025-04-31") is None
        assert coerce_calendar_date("2025-01-" + "1" * 5000) is None

    def test_require_raises_on_invalid(self) -> None:
        """A mandatory date must parse."""
        with pytest.raises(ValueError, match="completion_day"):
            require_calendar_date("bad", "completion_day")

    def test_require_accepts_valid(self) -> None:
        """Valid inputs are returned as dates."""
        assert require_calendar_date("2025-08-10") == date(2025, 8, 10)
        assert require_calendar_date(datetime(2025, 8, 10, 1)) == date(2025, 8, 10)


# =============================================================================
# Caller-side clock helpers
# =============================================================================


class TestTodayHelpers:
    """dt_today_local / dt_today_iso read the clock once."""

    @freeze_time("2025-08-10 23:30:00", tz_offset=0)
    def test_today_in_utc(self) -> None:
        """Frozen UTC clock gives the UTC day."""
        assert dt_today_local(UTC) == date(2025, 8, 10)
        assert dt_today_iso(UTC) == "2025-08-10"

    @freeze_time("2025-08-10 23:30:00", tz_offset=0)
    def test_today_ahead_of_utc(self) -> None:
        """Same instant is already tomorrow in UTC+2."""
        assert dt_today_local(UTC_PLUS_2) == date(2025, 8, 11)

    @freeze_time("2025-08-11 02:00:00", tz_offset=0)
    def test_today_uses_default_timezone(self) -> None:
        """Configured default timezone applies."""
        set_default_timezone(UTC_MINUS_7)
        assert dt_today_iso() == "2025-08-10"

    def test_timezone_configuration_round_trip(self) -> None:
        """set/get default timezone."""
        set_default_timezone(UTC_PLUS_2)
        assert get_default_timezone() is UTC_PLUS_2
        assert dt_utils.DEFAULT_TIME_ZONE is UTC_PLUS_2
        set_default_timezone(None)
        assert get_default_timezone() is None
