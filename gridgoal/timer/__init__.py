"""Timer package."""

from .accumulator import elapsed_ms, now_ms
from .cycles import PomodoroCycle, TimerMode, CycleStep, next_cycle, interval_duration_ms
from .emission import (
    EmissionQueue,
    IntervalRecord,
    LogInterval,
    DeleteSequence,
    SessionSink,
)
from .engine import TimerEngine, TimerPhase, SessionSummary, phase_of
from .snapshot import SnapshotStore, STORAGE_KEY
from .state import ActiveTask, TimerState

__all__ = [
    "elapsed_ms",
    "now_ms",
    "PomodoroCycle",
    "TimerMode",
    "CycleStep",
    "next_cycle",
    "interval_duration_ms",
    "EmissionQueue",
    "IntervalRecord",
    "LogInterval",
    "DeleteSequence",
    "SessionSink",
    "TimerEngine",
    "TimerPhase",
    "SessionSummary",
    "phase_of",
    "SnapshotStore",
    "STORAGE_KEY",
    "ActiveTask",
    "TimerState",
]
