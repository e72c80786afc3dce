"""Engine modules for TaskStreak.

Contains pure computation engines:
- schedule_engine: Due-date advancement for repeat rules
- streak_engine: Completion streak evaluation and overdue decay
- task_engine: Task-level completion workflows built on the two above
"""

# Use relative imports within package to avoid mypy module resolution issues
from .schedule_engine import RecurrenceEngine
from .streak_engine import StreakEngine
from .task_engine import TaskEngine

__all__ = [
    "RecurrenceEngine",
    "StreakEngine",
    "TaskEngine",
]
