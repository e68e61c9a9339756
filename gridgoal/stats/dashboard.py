"""Dashboard figures assembled from the stored session feed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..database.repository import pause_periods, session_history
from .streaks import compute_streak, longest_streak, session_dates, today_focus_seconds


@dataclass(frozen=True)
class DashboardStats:
    today_focus_seconds: int
    current_streak: int
    longest_streak: int
    today_counted: bool


def load_dashboard_stats(today: date | None = None) -> DashboardStats:
    today = today or date.today()
    history = session_history()
    pauses = pause_periods()
    days = session_dates(history)
    streak = compute_streak(days, pauses, today)
    return DashboardStats(
        today_focus_seconds=today_focus_seconds(history, today),
        current_streak=streak.current_streak,
        longest_streak=max(longest_streak(days, pauses), streak.current_streak),
        today_counted=streak.today_counted,
    )
