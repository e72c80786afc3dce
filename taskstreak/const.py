# File: const.py
"""Constants for TaskStreak.

This file centralizes repeat-rule values, task field keys and defaults used
by the engines so callers and engines agree on the same names.
"""

import logging

# Logger
LOGGER = logging.getLogger(__package__)

# ------------------------------------------------------------------------------------------------
# Repeat Rules
# ------------------------------------------------------------------------------------------------
FREQUENCY_NONE = "none"
FREQUENCY_DAILY = "daily"
FREQUENCY_WEEKLY = "weekly"
FREQUENCY_MONTHLY = "monthly"

# Fixed-length advancement, in days
DAYS_PER_DAILY_INTERVAL = 1
DAYS_PER_WEEKLY_INTERVAL = 7

# Monthly advancement, in months (clamped to month end)
MONTHS_PER_MONTHLY_INTERVAL = 1

# ------------------------------------------------------------------------------------------------
# Task Data Keys
# ------------------------------------------------------------------------------------------------
DATA_TASK_ID = "id"
DATA_TASK_TITLE = "title"
DATA_TASK_DONE = "done"
DATA_TASK_DUE = "due"
DATA_TASK_RECURRENCE = "recurrence"
DATA_TASK_LAST_COMPLETED = "last_completed"
DATA_TASK_STREAK_COUNT = "streak_count"
DATA_TASK_BEST_STREAK = "best_streak"
DATA_TASK_CREATED_AT = "created_at"
DATA_TASK_UPDATED_AT = "updated_at"
DATA_TASK_PRIORITY = "priority"
DATA_TASK_TAGS = "tags"
DATA_TASK_NOTES = "notes"

# ------------------------------------------------------------------------------------------------
# Task Priorities
# ------------------------------------------------------------------------------------------------
PRIORITY_LOW = "low"
PRIORITY_MEDIUM = "medium"
PRIORITY_HIGH = "high"

PRIORITY_OPTIONS = [PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH]

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_STREAK_COUNT = 0
DEFAULT_BEST_STREAK = 0
DEFAULT_PRIORITY = PRIORITY_MEDIUM
