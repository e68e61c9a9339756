"""Streak and pace calculators."""

from .streaks import (
    DateRange,
    HistoryEntry,
    StreakResult,
    compute_streak,
    longest_streak,
    session_dates,
    today_focus_seconds,
)
from .pace import PacePoint, pace_data

__all__ = [
    "DateRange",
    "HistoryEntry",
    "StreakResult",
    "compute_streak",
    "longest_streak",
    "session_dates",
    "today_focus_seconds",
    "PacePoint",
    "pace_data",
]
