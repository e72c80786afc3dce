"""Task Engine - Logic for task-level completion workflows.

Composes RecurrenceEngine and StreakEngine into the operations a task list
performs on a single task value:
- Creating a task with zeroed streak fields
- Completing / reopening / toggling a task
- Overdue display flag
- Batch overdue decay for a freshly loaded task set

ARCHITECTURE: All functions are static methods. Tasks go in as plain dicts
and come out as new dicts; the caller owns the task collection and its
storage. "today" is supplied by the caller once per operation. Only the
created_at / updated_at stamps read the clock, and only when `now=` is omitted.
"""

from __future__ import annotations

from datetime import date
import time
from typing import TYPE_CHECKING, Any
import uuid

from .. import const
from ..type_defs import RepeatRule
from ..utils.dt_utils import (
    coerce_calendar_date,
    format_calendar_date,
    require_calendar_date,
)
from .schedule_engine import RecurrenceEngine
from .streak_engine import StreakEngine

if TYPE_CHECKING:
    from ..type_defs import StreakState, TaskData


def _now_ts() -> float:
    """Return current POSIX time for updated_at stamps (engine-internal helper)."""
    return time.time()


class TaskEngine:
    """Logic engine for task completion workflows.

    Calendar decisions only use the caller's `today`. The created_at and
    updated_at timestamps read the wall clock unless `now=` is passed, so
    pass `now` when fully deterministic output is needed.
    """

    # =========================================================================
    # Construction / field access
    # =========================================================================

    @staticmethod
    def new_task(
        title: str,
        *,
        task_id: str | None = None,
        due: date | str | None = None,
        recurrence: RepeatRule | str | None = RepeatRule.NONE,
        now: float | None = None,
        **extra: Any,
    ) -> TaskData:
        """Build a new, not-done task with zeroed streak counters.

        Args:
            title: Task title (surrounding whitespace stripped)
            task_id: Optional id; a UUID4 string is generated if omitted
            due: Optional due date; invalid strings are stored as None
            recurrence: Repeat rule; unknown values become "none"
            now: Creation timestamp; defaults to the current time
            **extra: Optional fields carried through (tags, notes) or
                overriding defaults (priority defaults to medium; unknown
                priorities fall back to it)

        Returns:
            New TaskData dict.
        """
        created = _now_ts() if now is None else now
        due_date = coerce_calendar_date(due)
        task: dict[str, Any] = {
            const.DATA_TASK_ID: task_id or str(uuid.uuid4()),
            const.DATA_TASK_TITLE: title.strip(),
            const.DATA_TASK_DONE: False,
            const.DATA_TASK_DUE: (
                format_calendar_date(due_date) if due_date is not None else None
            ),
            const.DATA_TASK_RECURRENCE: str(RecurrenceEngine.coerce_rule(recurrence)),
            const.DATA_TASK_PRIORITY: const.DEFAULT_PRIORITY,
            const.DATA_TASK_CREATED_AT: created,
            const.DATA_TASK_UPDATED_AT: created,
            **StreakEngine.new_state(),
        }
        task.update(extra)
        task[const.DATA_TASK_PRIORITY] = TaskEngine.coerce_priority(
            task[const.DATA_TASK_PRIORITY]
        )
        return task  # type: ignore[return-value]

    @staticmethod
    def coerce_priority(value: str | None) -> str:
        """Map a priority value to a PRIORITY_* constant.

        Unknown values are logged and replaced by the default priority.
        """
        if value in const.PRIORITY_OPTIONS:
            return value  # type: ignore[return-value]
        const.LOGGER.warning(
            "TaskEngine: Unknown priority %r, using %s", value, const.DEFAULT_PRIORITY
        )
        return const.DEFAULT_PRIORITY

    @staticmethod
    def get_streak_state(task: TaskData | dict[str, Any]) -> StreakState:
        """Extract the streak fields of a task, defaulting missing ones."""
        return {
            "streak_count": int(
                task.get(const.DATA_TASK_STREAK_COUNT) or const.DEFAULT_STREAK_COUNT
            ),
            "best_streak": int(
                task.get(const.DATA_TASK_BEST_STREAK) or const.DEFAULT_BEST_STREAK
            ),
            "last_completed": task.get(const.DATA_TASK_LAST_COMPLETED),
        }

    @staticmethod
    def get_rule(task: TaskData | dict[str, Any]) -> RepeatRule:
        """Return the task's repeat rule, defaulting to NONE."""
        return RecurrenceEngine.coerce_rule(task.get(const.DATA_TASK_RECURRENCE))

    # =========================================================================
    # Completion workflow
    # =========================================================================

    @staticmethod
    def complete_task(
        task: TaskData,
        today: date | str,
        *,
        now: float | None = None,
    ) -> TaskData:
        """Mark a task done on `today`.

        Recurring tasks are evaluated against their stored due date (streak
        increment or reset) and then get their due date advanced, anchored on
        the stored due date, or on today when there is none. Non-recurring
        tasks keep their due date and streak counters.

        Completing a task that is already done returns it unchanged.

        Raises:
            ValueError: If today is not a valid calendar date.
        """
        today_iso = format_calendar_date(require_calendar_date(today, "today"))

        if task.get(const.DATA_TASK_DONE):
            const.LOGGER.debug(
                "TaskEngine: Task %s already done, ignoring completion",
                task.get(const.DATA_TASK_ID),
            )
            return task

        rule = TaskEngine.get_rule(task)
        due = task.get(const.DATA_TASK_DUE)
        updated: dict[str, Any] = dict(task)

        if RecurrenceEngine.is_recurring(rule):
            streak_state = StreakEngine.apply_completion(
                TaskEngine.get_streak_state(task), today_iso, due
            )
            updated.update(streak_state)
            updated[const.DATA_TASK_DUE] = RecurrenceEngine.compute_next_due_iso(
                due, rule, today_iso
            )
            const.LOGGER.debug(
                "TaskEngine: Completed recurring task %s (%s), due %s -> %s",
                task.get(const.DATA_TASK_ID),
                rule,
                due,
                updated[const.DATA_TASK_DUE],
            )
        else:
            updated[const.DATA_TASK_LAST_COMPLETED] = today_iso

        updated[const.DATA_TASK_DONE] = True
        updated[const.DATA_TASK_UPDATED_AT] = _now_ts() if now is None else now
        return updated  # type: ignore[return-value]

    @staticmethod
    def reopen_task(task: TaskData, *, now: float | None = None) -> TaskData:
        """Mark a done task as not done.

        Streak counters and the due date are left as they are; a reopen never
        rolls back a completion.
        """
        if not task.get(const.DATA_TASK_DONE):
            return task
        return {
            **task,
            const.DATA_TASK_DONE: False,
            const.DATA_TASK_UPDATED_AT: _now_ts() if now is None else now,
        }  # type: ignore[return-value, misc]

    @staticmethod
    def toggle_task(
        task: TaskData,
        today: date | str,
        *,
        now: float | None = None,
    ) -> TaskData:
        """Complete a not-done task, or reopen a done one."""
        if task.get(const.DATA_TASK_DONE):
            return TaskEngine.reopen_task(task, now=now)
        return TaskEngine.complete_task(task, today, now=now)

    # =========================================================================
    # Overdue handling
    # =========================================================================

    @staticmethod
    def is_task_overdue(task: TaskData | dict[str, Any], today: date | str) -> bool:
        """Return True if a not-done task's due date is strictly before today."""
        if task.get(const.DATA_TASK_DONE):
            return False
        return StreakEngine.is_overdue(task.get(const.DATA_TASK_DUE), today)

    @staticmethod
    def decay_overdue_tasks(
        tasks: list[TaskData],
        today: date | str,
    ) -> list[TaskData]:
        """Apply overdue streak decay across a batch of tasks.

        One `today` is used for every decision in the batch. Tasks that do not
        change are returned as the same objects; decayed tasks are copies with
        streak_count set to 0 (best_streak and due untouched).

        Raises:
            ValueError: If today is not a valid calendar date.
        """
        today_date = require_calendar_date(today, "today")
        result: list[TaskData] = []
        decayed = 0

        for task in tasks:
            state = TaskEngine.get_streak_state(task)
            new_state = StreakEngine.decay_overdue(
                state,
                task.get(const.DATA_TASK_DUE),
                today_date,
                recurring=RecurrenceEngine.is_recurring(TaskEngine.get_rule(task)),
                done=bool(task.get(const.DATA_TASK_DONE)),
            )
            if new_state is state:
                result.append(task)
                continue
            decayed += 1
            result.append(
                {**task, const.DATA_TASK_STREAK_COUNT: new_state["streak_count"]}  # type: ignore[misc]
            )

        if decayed:
            const.LOGGER.info(
                "TaskEngine: Reset streaks of %d overdue task(s) for %s",
                decayed,
                format_calendar_date(today_date),
            )
        return result
