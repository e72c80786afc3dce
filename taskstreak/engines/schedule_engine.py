"""Schedule Engine for TaskStreak.

Due-date advancement for recurring tasks using a hybrid approach:
- `datetime.timedelta` for fixed-length intervals (DAILY, WEEKLY)
- `dateutil.relativedelta` for month clamping (Jan 31 + 1 month = Feb 28)

ARCHITECTURE: This is a pure logic engine. All functions are static methods
that operate on passed-in calendar dates; "today" is always supplied by the
caller, never read from a clock here.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import ClassVar

from dateutil.relativedelta import relativedelta

from .. import const
from ..type_defs import RepeatRule
from ..utils.dt_utils import (
    coerce_calendar_date,
    format_calendar_date,
    require_calendar_date,
)


class RecurrenceEngine:
    """Pure logic engine for computing the next due date of a task.

    Handles all repeat rules:
    - NONE: due date passes through unchanged
    - DAILY, WEEKLY: fixed day-count advancement
    - MONTHLY: same day next month, clamped to that month's last day
      (Jan 31 -> Feb 28, or Feb 29 in leap years; never rolls into March)
    """

    # Rules advanced by a fixed number of days
    FIXED_INTERVALS: ClassVar[dict[str, timedelta]] = {
        RepeatRule.DAILY: timedelta(days=const.DAYS_PER_DAILY_INTERVAL),
        RepeatRule.WEEKLY: timedelta(days=const.DAYS_PER_WEEKLY_INTERVAL),
    }

    # Rules that need clamping (relativedelta instead of timedelta)
    CLAMPING_INTERVALS: ClassVar[dict[str, relativedelta]] = {
        RepeatRule.MONTHLY: relativedelta(months=const.MONTHS_PER_MONTHLY_INTERVAL),
    }

    # =========================================================================
    # Repeat rule helpers
    # =========================================================================

    @staticmethod
    def coerce_rule(value: RepeatRule | str | None) -> RepeatRule:
        """Map a stored recurrence value to a RepeatRule.

        Missing values mean "none". Unknown values are logged and also
        treated as "none" so a bad stored value never blocks completion.
        """
        if not value:
            return RepeatRule.NONE
        try:
            return RepeatRule(value)
        except ValueError:
            const.LOGGER.warning(
                "RecurrenceEngine: Unknown repeat rule %r, treating as none", value
            )
            return RepeatRule.NONE

    @staticmethod
    def is_recurring(rule: RepeatRule | str | None) -> bool:
        """Return True for any rule other than NONE."""
        return bool(rule) and rule != RepeatRule.NONE

    # =========================================================================
    # Advancement
    # =========================================================================

    @staticmethod
    def advance_monthly(cal_date: date) -> date:
        """Return the same day-of-month in the following month, clamped.

        Args:
            cal_date: Source calendar date

        Returns:
            Calendar date one month later. If the source day does not exist
            in the following month, the last day of that month is used.

        Examples:
            2025-01-31 -> 2025-02-28
            2024-01-31 -> 2024-02-29
            2025-03-31 -> 2025-04-30
            2025-12-15 -> 2026-01-15
        """
        return cal_date + RecurrenceEngine.CLAMPING_INTERVALS[RepeatRule.MONTHLY]

    @staticmethod
    def compute_next_due(
        current_due: date | None,
        rule: RepeatRule | str,
        today: date,
    ) -> date | None:
        """Calculate the next due date after a completion.

        Args:
            current_due: The task's current due date, or None
            rule: Repeat rule attached to the task
            today: Completion day supplied by the caller

        Returns:
            - rule NONE: current_due unchanged (including None)
            - otherwise: the anchor advanced by one interval, where the
              anchor is current_due if present, else today. Always a
              concrete date strictly later than the anchor.
        """
        if not RecurrenceEngine.is_recurring(rule):
            return current_due

        anchor = current_due if current_due is not None else today

        fixed = RecurrenceEngine.FIXED_INTERVALS.get(rule)
        if fixed is not None:
            return anchor + fixed

        if rule in RecurrenceEngine.CLAMPING_INTERVALS:
            return RecurrenceEngine.advance_monthly(anchor)

        const.LOGGER.warning(
            "RecurrenceEngine: Unsupported repeat rule %r, due date unchanged", rule
        )
        return current_due

    @staticmethod
    def compute_next_due_iso(
        current_due: str | None,
        rule: RepeatRule | str | None,
        today: str,
    ) -> str | None:
        """String-boundary variant of compute_next_due for stored task values.

        An unparseable current_due is treated as "no date". For rule NONE the
        stored value is returned untouched.

        Raises:
            ValueError: If today is not a valid YYYY-MM-DD string.
        """
        repeat_rule = RecurrenceEngine.coerce_rule(rule)
        if repeat_rule == RepeatRule.NONE:
            return current_due

        today_date = require_calendar_date(today, "today")

        next_due = RecurrenceEngine.compute_next_due(
            coerce_calendar_date(current_due), repeat_rule, today_date
        )
        if next_due is None:
            return None
        return format_calendar_date(next_due)
