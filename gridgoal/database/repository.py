"""Storage collaborators backed by the local database.

* :class:`DatabaseSessionSink`: target of the timer's emission queue.
* :func:`save_session_summary`: manual finish with notes.
* :func:`session_history` / :func:`pause_periods`: read feeds for the
  streak and pace calculators.
"""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy import delete, select

from ..stats.streaks import DateRange, HistoryEntry
from ..timer.emission import IntervalRecord
from ..timer.engine import SessionSummary
from .db import get_session
from .models import FocusSession, PausePeriod

logger = logging.getLogger(__name__)

VIBES = ("FLOW", "NEUTRAL", "STRUGGLE")


class DatabaseSessionSink:
    """Persists auto-logged pomodoro intervals and deletes sequences."""

    def log_interval(self, record: IntervalRecord) -> int:
        if record.duration_seconds <= 0:
            raise ValueError("duration_seconds must be positive")
        with get_session() as db:
            row = FocusSession(
                start_time=record.start_time,
                end_time=record.end_time,
                duration_seconds=record.duration_seconds,
                task_id=record.task_id,
                goal_id=record.goal_id,
                mode=record.mode.value,
                pomodoro_cycle=(
                    None if record.pomodoro_cycle is None else record.pomodoro_cycle.value
                ),
                sequence_id=record.sequence_id,
            )
            db.add(row)
            db.flush()
            return row.id

    def delete_sequence(self, sequence_id: str) -> int:
        with get_session() as db:
            result = db.execute(
                delete(FocusSession).where(FocusSession.sequence_id == sequence_id)
            )
            return result.rowcount


def save_session_summary(
    summary: SessionSummary,
    *,
    note_accomplished: str | None = None,
    note_next_step: str | None = None,
    artifact_url: str | None = None,
    vibe: str | None = None,
) -> int:
    """Store a manually finished session with the user's notes."""
    if vibe is not None and vibe not in VIBES:
        raise ValueError(f"unknown vibe {vibe!r}")
    with get_session() as db:
        row = FocusSession(
            start_time=summary.start_time,
            end_time=summary.end_time,
            duration_seconds=summary.duration_seconds,
            task_id=summary.task.id,
            goal_id=summary.task.goal_id,
            mode=summary.mode.value,
            pomodoro_cycle=(
                None if summary.pomodoro_cycle is None else summary.pomodoro_cycle.value
            ),
            sequence_id=summary.sequence_id,
            vibe=vibe,
            note_accomplished=note_accomplished,
            note_next_step=note_next_step,
            artifact_url=artifact_url,
        )
        db.add(row)
        db.flush()
        return row.id


def session_history(goal_id: str | None = None) -> list[HistoryEntry]:
    """Start time and duration of every logged session, oldest first.

    Break intervals are excluded; only work time feeds streaks and pace.
    """
    stmt = select(FocusSession.start_time, FocusSession.duration_seconds).where(
        (FocusSession.pomodoro_cycle.is_(None))
        | (FocusSession.pomodoro_cycle == "WORK")
    )
    if goal_id is not None:
        stmt = stmt.where(FocusSession.goal_id == goal_id)
    stmt = stmt.order_by(FocusSession.start_time)
    with get_session() as db:
        return [HistoryEntry(start, seconds) for start, seconds in db.execute(stmt)]


def pause_periods() -> list[DateRange]:
    with get_session() as db:
        rows = db.execute(
            select(PausePeriod.start_date, PausePeriod.end_date)
            .order_by(PausePeriod.start_date)
        )
        return [DateRange(start, end) for start, end in rows]


def add_pause_period(start_date: date, end_date: date, note: str | None = None) -> int:
    if end_date < start_date:
        raise ValueError("End date cannot be before start date")
    with get_session() as db:
        row = PausePeriod(start_date=start_date, end_date=end_date, note=note)
        db.add(row)
        db.flush()
        logger.info("Added pause period %s..%s", start_date, end_date)
        return row.id


def delete_pause_period(period_id: int) -> bool:
    with get_session() as db:
        row = db.get(PausePeriod, period_id)
        if row is None:
            return False
        db.delete(row)
        return True
