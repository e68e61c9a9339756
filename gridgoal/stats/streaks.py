"""Streak continuity over calendar days.

A streak is the run of consecutive calendar days, walking backward from
today, on which at least one session was logged.  Declared pause
periods (vacations) bridge gaps: a paused day never breaks the run and
counts toward it once a logged day is found on its far side.

Dates are plain local wall-clock dates.  Sessions that cross midnight
belong to the day they started.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, NamedTuple


ONE_DAY = timedelta(days=1)


class DateRange(NamedTuple):
    """Inclusive calendar-day range."""

    start_date: date
    end_date: date


class HistoryEntry(NamedTuple):
    start_time: datetime
    duration_seconds: int


class StreakResult(NamedTuple):
    current_streak: int
    today_counted: bool


def _is_paused(day: date, pause_periods: Iterable[DateRange]) -> bool:
    return any(p[0] <= day <= p[1] for p in pause_periods)


def session_dates(history: Iterable[HistoryEntry]) -> set[date]:
    """Distinct calendar days on which a session started."""
    return {entry.start_time.date() for entry in history}


def compute_streak(
    dates: set[date],
    pause_periods: Iterable[DateRange],
    today: date,
) -> StreakResult:
    """Current consecutive-day streak ending today.

    Today without a session is still pending: it neither counts nor
    breaks the streak.  Paused days are only credited when a logged day
    lies beyond them, so a pause covering today (or a pause before the
    first ever session) never inflates the count on its own.
    """
    if not dates:
        return StreakResult(0, False)

    pauses = list(pause_periods)
    today_counted = today in dates
    earliest = min(dates)

    streak = 1 if today_counted else 0
    bridged = 0
    day = today - ONE_DAY
    while day >= earliest:
        if day in dates:
            streak += bridged + 1
            bridged = 0
        elif _is_paused(day, pauses):
            bridged += 1
        else:
            break
        day -= ONE_DAY

    return StreakResult(streak, today_counted)


def longest_streak(dates: set[date], pause_periods: Iterable[DateRange]) -> int:
    """Longest run of logged days ever, with pause periods bridging gaps."""
    if not dates:
        return 0

    pauses = list(pause_periods)
    ordered = sorted(dates)
    longest = run = 1
    for prev, current in zip(ordered, ordered[1:]):
        gap = [prev + ONE_DAY * i for i in range(1, (current - prev).days)]
        if all(_is_paused(d, pauses) for d in gap):
            run += (current - prev).days
        else:
            run = 1
        longest = max(longest, run)
    return longest


def today_focus_seconds(history: Iterable[HistoryEntry], today: date) -> int:
    """Total logged focus seconds for sessions that started on *today*."""
    return sum(
        entry.duration_seconds
        for entry in history
        if entry.start_time.date() == today
    )
