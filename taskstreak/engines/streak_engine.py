"""Streak Engine - Pure logic for completion streaks.

This engine provides stateless, pure Python functions for:
- On-time evaluation of a completion against a due date
- The completion state transition (increment or reset, best-streak tracking)
- Overdue decay of the live streak counter

ARCHITECTURE: All functions are static methods that operate on passed-in
values and return new StreakState dicts. Inputs are never mutated. Deciding
WHEN to call these (completion toggles, once-per-day decay checks) belongs
to the caller.

Dates may be given as `datetime.date` or as YYYY-MM-DD strings; comparisons
are always chronological on parsed dates.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import (
    coerce_calendar_date,
    format_calendar_date,
    require_calendar_date,
)

if TYPE_CHECKING:
    from ..type_defs import StreakState


class StreakEngine:
    """Pure logic engine for streak evaluation and decay.

    A streak counts consecutive on-time completions of a recurring task.
    Completing on or before the due date extends it; completing after the
    due date resets it to zero. The best streak never decreases.
    """

    @staticmethod
    def new_state() -> StreakState:
        """Return a zeroed StreakState for a freshly created task."""
        return {
            "streak_count": const.DEFAULT_STREAK_COUNT,
            "best_streak": const.DEFAULT_BEST_STREAK,
            "last_completed": None,
        }

    # =========================================================================
    # Completion
    # =========================================================================

    @staticmethod
    def evaluate_completion(
        completion_day: date | str,
        due: date | str | None,
    ) -> bool:
        """Decide whether a completion extends the streak.

        Args:
            completion_day: Day the task was marked done
            due: Due date the completion counts against, or None

        Returns:
            True if there is no due date (nothing to be late for) or the
            completion is on or before the due date. False if late.
        """
        due_date = coerce_calendar_date(due)
        if due_date is None:
            return True
        return require_calendar_date(completion_day, "completion_day") <= due_date

    @staticmethod
    def apply_completion(
        state: StreakState,
        completion_day: date | str,
        due: date | str | None,
    ) -> StreakState:
        """Apply one completion to a streak state.

        Args:
            state: Current streak counters (not modified)
            completion_day: Day the task was marked done
            due: Due date the completion counts against, or None

        Returns:
            New StreakState:
            - on time: streak_count + 1, best_streak = max(best, new streak)
            - late: streak_count = 0, best_streak unchanged
            - last_completed is always the completion day
        """
        completion_date = require_calendar_date(completion_day, "completion_day")
        streak = int(state.get("streak_count") or 0)
        best = int(state.get("best_streak") or 0)

        if StreakEngine.evaluate_completion(completion_date, due):
            streak += 1
            best = max(best, streak)
            const.LOGGER.debug(
                "StreakEngine: On-time completion %s, streak now %d (best %d)",
                completion_date,
                streak,
                best,
            )
        else:
            const.LOGGER.debug(
                "StreakEngine: Late completion %s against due %s, streak reset",
                completion_date,
                due,
            )
            streak = 0

        return {
            "streak_count": streak,
            "best_streak": best,
            "last_completed": format_calendar_date(completion_date),
        }

    # =========================================================================
    # Overdue decay
    # =========================================================================

    @staticmethod
    def is_overdue(due: date | str | None, today: date | str) -> bool:
        """Return True if a due date lies strictly before today."""
        due_date = coerce_calendar_date(due)
        if due_date is None:
            return False
        return due_date < require_calendar_date(today, "today")

    @staticmethod
    def decay_overdue(
        state: StreakState,
        due: date | str | None,
        today: date | str,
        *,
        recurring: bool = True,
        done: bool = False,
    ) -> StreakState:
        """Reset the live streak of an overdue, not-yet-completed task.

        Only the streak counter decays: best_streak and the due date are left
        alone. Applying this twice with the same today gives the same result
        as applying it once.

        Args:
            state: Current streak counters (not modified)
            due: The task's due date, or None
            today: The caller's single "today" for this evaluation pass
            recurring: Whether the task has a repeat rule other than none
            done: Whether the task is currently marked complete

        Returns:
            The same state object if nothing changes, otherwise a copy with
            streak_count set to 0.
        """
        if not recurring or done:
            return state
        if not state.get("streak_count"):
            return state
        if not StreakEngine.is_overdue(due, today):
            return state

        const.LOGGER.debug(
            "StreakEngine: Due %s passed before %s, decaying streak of %d",
            due,
            today,
            state.get("streak_count"),
        )
        return {**state, "streak_count": 0}
