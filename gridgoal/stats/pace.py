"""Goal pace vs. deadline (burn-up chart data).

The target line rises linearly from zero on the goal's creation day to
the full estimate on its deadline.  The actual line is the cumulative
logged hours, shown only up to today.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterable, NamedTuple

from .streaks import HistoryEntry


class PacePoint(NamedTuple):
    day: date
    target_hours: float
    actual_hours: float | None


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def pace_data(
    created_at: date | datetime,
    deadline: date | datetime | None,
    history: Iterable[HistoryEntry],
    total_estimated_seconds: int | None,
    today: date,
) -> list[PacePoint]:
    if deadline is None or not total_estimated_seconds or total_estimated_seconds <= 0:
        return []

    start = _as_date(created_at)
    end = _as_date(deadline)
    total_days = (end - start).days
    if total_days <= 0:
        return []

    rate_per_day = (total_estimated_seconds / 3600) / total_days

    hours_by_day: dict[date, float] = defaultdict(float)
    for entry in history:
        hours_by_day[entry.start_time.date()] += entry.duration_seconds / 3600

    cumulative = 0.0
    points: list[PacePoint] = []
    for i in range(total_days + 1):
        day = start + timedelta(days=i)
        actual = None
        if day <= today:
            cumulative += hours_by_day.get(day, 0.0)
            actual = cumulative
        points.append(PacePoint(day, i * rate_per_day, actual))
    return points
