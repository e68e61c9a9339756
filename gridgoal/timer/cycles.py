"""Pomodoro cycle sequencing.

Work → short break → work → … → every k-th work → long break → work.
Pure functions only; the engine owns the state.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import NamedTuple

from ..settings import Settings


class TimerMode(Enum):
    STOPWATCH = "STOPWATCH"
    POMODORO = "POMODORO"


class PomodoroCycle(Enum):
    WORK = "WORK"
    SHORT_BREAK = "SHORT_BREAK"
    LONG_BREAK = "LONG_BREAK"

    @property
    def is_break(self) -> bool:
        return self is not PomodoroCycle.WORK


class CycleStep(NamedTuple):
    cycle: PomodoroCycle
    completed_work_cycles: int


def next_cycle(
    current: PomodoroCycle,
    completed_work_cycles: int,
    cycles_until_long_break: int,
) -> CycleStep:
    """Return the cycle that follows *current* and the updated work count.

    ``cycles_until_long_break`` is validated by the settings layer; a
    value of 1 puts a long break after every work interval.
    """
    if current is PomodoroCycle.WORK:
        count = completed_work_cycles + 1
        if count % cycles_until_long_break == 0:
            return CycleStep(PomodoroCycle.LONG_BREAK, count)
        return CycleStep(PomodoroCycle.SHORT_BREAK, count)
    return CycleStep(PomodoroCycle.WORK, completed_work_cycles)


def interval_duration_ms(
    mode: TimerMode, cycle: PomodoroCycle, settings: Settings
) -> float:
    """Length of one interval.  Stopwatch intervals never end on their own."""
    if mode is not TimerMode.POMODORO:
        return math.inf
    seconds = {
        PomodoroCycle.WORK: settings.work_duration,
        PomodoroCycle.SHORT_BREAK: settings.short_break_duration,
        PomodoroCycle.LONG_BREAK: settings.long_break_duration,
    }[cycle]
    return seconds * 1000
