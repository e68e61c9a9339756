"""SQLAlchemy ORM models for GridGoal focus tracking."""

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Date
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class FocusSession(Base):
    """One logged interval: an auto-logged Pomodoro cycle or a manual finish."""

    __tablename__ = "focus_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    start_time = Column(DateTime, nullable=False, default=datetime.now)
    end_time = Column(DateTime, nullable=False, default=datetime.now)
    duration_seconds = Column(Integer, nullable=False, default=0)
    task_id = Column(String(64), nullable=False)
    goal_id = Column(String(64), nullable=False)
    mode = Column(String(20), nullable=False, default="STOPWATCH")  # STOPWATCH | POMODORO
    pomodoro_cycle = Column(String(20), nullable=True)              # WORK | SHORT_BREAK | LONG_BREAK
    sequence_id = Column(String(36), nullable=True, index=True)
    vibe = Column(String(20), nullable=True)
    note_accomplished = Column(Text, nullable=True)
    note_next_step = Column(Text, nullable=True)
    artifact_url = Column(String(2048), nullable=True)

    def __repr__(self) -> str:
        return (
            f"<FocusSession id={self.id} mode={self.mode} "
            f"cycle={self.pomodoro_cycle} duration={self.duration_seconds}s>"
        )


class PausePeriod(Base):
    """A declared vacation window (inclusive) that must not break a streak."""

    __tablename__ = "pause_periods"

    id = Column(Integer, primary_key=True, autoincrement=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    note = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<PausePeriod {self.start_date}..{self.end_date}>"
