"""Type definitions for TaskStreak data structures.

TypedDict is used for the plain-value structures the caller owns and passes
into the engines (StreakState, TaskData). The engines never keep references to
these values; they read them and return new dicts.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime defaults (.get() with a
fallback) stay in the engines, because stored tasks may predate a field.

IMPORTANT: This file must NOT import from the engines or utils to avoid
circular dependencies. Only import from const.py and typing.
"""

from datetime import date
from enum import StrEnum
from typing import NotRequired, TypedDict

from . import const

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

TaskId = str  # UUID string
ISODate = str  # Calendar date string (no time) "2025-08-10"
CalendarDate = date  # Year/month/day value, no time-of-day, no timezone


# =============================================================================
# Repeat Rule
# =============================================================================


class RepeatRule(StrEnum):
    """Recurrence cadence attached to a task."""

    NONE = const.FREQUENCY_NONE
    DAILY = const.FREQUENCY_DAILY
    WEEKLY = const.FREQUENCY_WEEKLY
    MONTHLY = const.FREQUENCY_MONTHLY


# =============================================================================
# Streak / Task Structures
# =============================================================================


class StreakState(TypedDict):
    """Streak counters for one task.

    Invariant: best_streak >= streak_count after every engine update.
    """

    streak_count: int
    best_streak: int
    last_completed: ISODate | None


class TaskData(TypedDict):
    """Caller-owned task value passed into TaskEngine.

    Timestamps are POSIX seconds; calendar fields are ISODate strings.
    """

    id: TaskId
    title: str
    done: bool
    due: ISODate | None
    recurrence: str  # RepeatRule value
    last_completed: ISODate | None
    streak_count: int
    best_streak: int
    created_at: float
    updated_at: float
    priority: NotRequired[str]  # PRIORITY_* constant
    tags: NotRequired[list[str]]
    notes: NotRequired[str]
