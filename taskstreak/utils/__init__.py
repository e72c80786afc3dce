# File: utils/__init__.py
"""Pure Python utilities for TaskStreak.

Submodules:
    - dt_utils: Calendar-date normalization, parsing and formatting

Usage:
    from . import dt_utils
    from .dt_utils import parse_calendar_date
"""

from . import dt_utils

__all__ = ["dt_utils"]
