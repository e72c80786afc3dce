"""TaskStreak: recurrence and streak-tracking engine for personal task lists.

Given a task's due date, repeat rule and completion events, the engines
compute the next due date and maintain a completion-streak counter. All
operations are pure functions of their inputs; "today" is always passed in.
"""

from .engines import RecurrenceEngine, StreakEngine, TaskEngine
from .type_defs import RepeatRule, StreakState, TaskData
from .utils.dt_utils import (
    dt_today_iso,
    dt_today_local,
    format_calendar_date,
    parse_calendar_date,
    set_default_timezone,
    to_local_calendar_date,
    to_local_iso_date,
)

__version__ = "0.1.0"

__all__ = [
    "RecurrenceEngine",
    "RepeatRule",
    "StreakEngine",
    "StreakState",
    "TaskData",
    "TaskEngine",
    "dt_today_iso",
    "dt_today_local",
    "format_calendar_date",
    "parse_calendar_date",
    "set_default_timezone",
    "to_local_calendar_date",
    "to_local_iso_date",
]
