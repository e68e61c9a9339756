"""Focus timer state machine for GridGoal.

Phases
------
IDLE                     No session.
ACTIVE_WORK              Work interval running (any stopwatch session too).
PAUSED_WORK              Work interval frozen.
TRANSITIONING_TO_BREAK   Work interval completed, waiting for the user.
ACTIVE_BREAK             Short or long break running.
PAUSED_BREAK             Break frozen.
TRANSITIONING_TO_WORK    Break completed, waiting for the user.

Transitions
-----------
IDLE → ACTIVE_WORK                               (start_session)
ACTIVE_* ⇄ PAUSED_*                              (pause / resume)
ACTIVE_* → TRANSITIONING_TO_*                    (interval complete, pomodoro only)
TRANSITIONING_TO_* → ACTIVE_*                    (start_next_interval)
TRANSITIONING_TO_BREAK | *_BREAK → ACTIVE_WORK   (skip_break)
Any → IDLE                                       (finish / discard / reset)

Timing
------
Elapsed time is never counted down.  Each check recomputes it from the
banked milliseconds and the wall-clock anchor of the running
sub-interval, so a throttled or suspended host only delays detection,
it never loses or invents time.  A ``QTimer`` drives the completion
check while a Qt event loop runs; everything also accepts an explicit
``now`` (epoch milliseconds) so hosts and tests can drive it directly.

Completed intervals are published to an :class:`EmissionQueue`; the
engine never waits on storage.  Breaks do not auto-start and neither
does the next work interval.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..settings import Settings
from .accumulator import elapsed_ms, now_ms
from .cycles import PomodoroCycle, TimerMode, interval_duration_ms, next_cycle
from .emission import (
    DeleteSequence, EmissionQueue, IntervalRecord, LogInterval, SessionSink,
)
from .snapshot import SnapshotStore
from .state import ActiveTask, TimerState

logger = logging.getLogger(__name__)


# ── enums / value objects ─────────────────────────────────────────────────


class TimerPhase(Enum):
    IDLE = "idle"
    ACTIVE_WORK = "active_work"
    PAUSED_WORK = "paused_work"
    TRANSITIONING_TO_BREAK = "transitioning_to_break"
    ACTIVE_BREAK = "active_break"
    PAUSED_BREAK = "paused_break"
    TRANSITIONING_TO_WORK = "transitioning_to_work"


@dataclass(frozen=True)
class SessionSummary:
    """Work time of a manually finished session, ready for notes."""

    start_time: datetime
    end_time: datetime
    duration_seconds: int
    mode: TimerMode
    pomodoro_cycle: PomodoroCycle | None
    task: ActiveTask
    sequence_id: str | None


def phase_of(state: TimerState) -> TimerPhase:
    """Derive the lifecycle phase of *state*."""
    if state.is_idle:
        return TimerPhase.IDLE
    if state.transition_to is not None:
        if state.transition_to.is_break:
            return TimerPhase.TRANSITIONING_TO_BREAK
        return TimerPhase.TRANSITIONING_TO_WORK
    if state.pomodoro_cycle.is_break:
        return TimerPhase.ACTIVE_BREAK if state.is_active else TimerPhase.PAUSED_BREAK
    return TimerPhase.ACTIVE_WORK if state.is_active else TimerPhase.PAUSED_WORK


Notifier = Callable[[PomodoroCycle, PomodoroCycle], None]


def _to_seconds(ms: int | float) -> int:
    """Round half up, like the session API expects."""
    return int((ms + 500) // 1000)


def _to_datetime(ms: int | float) -> datetime:
    return datetime.fromtimestamp(ms / 1000)


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt-based focus timer with pomodoro sequencing and snapshot persistence.

    Signals
    -------
    tick(elapsed_ms: int)
        Emitted on each host check while an interval runs.
    phase_changed(new_phase: TimerPhase)
        Emitted on every phase transition.
    interval_completed(record: IntervalRecord)
        Emitted after a pomodoro interval completes and is queued for
        logging.
    session_finished(summary: SessionSummary | None)
        Emitted by :meth:`finish_and_summarize`.  ``None`` when there was
        no work time to summarize.
    """

    tick = pyqtSignal(int)
    phase_changed = pyqtSignal(object)
    interval_completed = pyqtSignal(object)
    session_finished = pyqtSignal(object)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        settings: Settings | None = None,
        sink: SessionSink | None = None,
        db_enabled: bool = True,
        snapshot_store: SnapshotStore | None = None,
        clock: Callable[[], int] | None = None,
        notifier: Notifier | None = None,
        deferred_emission: bool = True,
    ) -> None:
        super().__init__(parent)

        # ── configuration ─────────────────────────────────────────────
        self._settings: Settings = (settings or Settings()).validate()
        self._clock = clock or now_ms
        self._notifier = notifier

        # ── collaborators ─────────────────────────────────────────────
        if sink is None and db_enabled:
            from ..database.repository import DatabaseSessionSink
            sink = DatabaseSessionSink()
        self._emissions: EmissionQueue | None = None
        if sink is not None:
            self._emissions = EmissionQueue(sink, self, deferred=deferred_emission)
        self._snapshot_store = snapshot_store

        # ── state (rehydrated when a store is given) ──────────────────
        self._state: TimerState = (
            snapshot_store.load() if snapshot_store is not None else TimerState()
        )

        # ── Qt timer (host cadence for completion checks) ─────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(self._settings.tick_interval_ms)
        self._qt_timer.timeout.connect(self._on_tick)
        if self._state.is_active:
            self._qt_timer.start()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        """Immutable view of the current state."""
        return self._state

    @property
    def phase(self) -> TimerPhase:
        return phase_of(self._state)

    @property
    def settings(self) -> Settings:
        return self._settings

    @settings.setter
    def settings(self, value: Settings) -> None:
        self._settings = value.validate()
        self._qt_timer.setInterval(self._settings.tick_interval_ms)

    @property
    def emissions(self) -> EmissionQueue | None:
        return self._emissions

    @property
    def is_running(self) -> bool:
        return self._state.is_active

    @property
    def total_focus_ms(self) -> int:
        """Work time of pomodoro intervals completed in this session."""
        return self._state.total_focus_ms

    def elapsed_ms(self, now: int | None = None) -> int:
        """Elapsed time of the current interval."""
        s = self._state
        return elapsed_ms(s.accumulated_ms, s.interval_start_ms, self._now(now))

    def interval_duration_ms(self) -> float:
        """Target length of the current interval (``inf`` for stopwatch)."""
        s = self._state
        return interval_duration_ms(s.mode, s.pomodoro_cycle, self._settings)

    def remaining_ms(self, now: int | None = None) -> float:
        return max(0, self.interval_duration_ms() - self.elapsed_ms(now))

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start_session(
        self,
        task: ActiveTask,
        mode: TimerMode = TimerMode.STOPWATCH,
        now: int | None = None,
    ) -> bool:
        """Begin a session on *task*.  Refused while another session exists."""
        if not self._state.is_idle:
            logger.debug("start_session ignored: a session is already in progress")
            return False
        now = self._now(now)
        self._set_state(TimerState(
            is_active=True,
            accumulated_ms=0,
            interval_start_ms=now,
            interval_opened_ms=now,
            active_task=task,
            mode=mode,
            pomodoro_cycle=PomodoroCycle.WORK,
            completed_work_cycles=0,
            sequence_id=str(uuid.uuid4()) if mode is TimerMode.POMODORO else None,
        ))
        logger.info("Started %s session on task %s", mode.value.lower(), task.id)
        return True

    def pause(self, now: int | None = None) -> None:
        """Bank the running sub-interval.  No-op unless running."""
        s = self._state
        if not s.is_active:
            return
        self._set_state(s.evolve(
            is_active=False,
            accumulated_ms=elapsed_ms(s.accumulated_ms, s.interval_start_ms, self._now(now)),
            interval_start_ms=None,
        ))

    def resume(self, now: int | None = None) -> None:
        """Re-anchor a paused interval at *now*.  No-op unless paused."""
        s = self._state
        if s.is_active or s.is_idle or s.transition_to is not None:
            return
        self._set_state(s.evolve(is_active=True, interval_start_ms=self._now(now)))

    def check_interval_completion(self, now: int | None = None) -> bool:
        """Complete the current pomodoro interval if its time is up.

        Safe to call at any cadence and any number of times; returns
        whether this call completed an interval.
        """
        s = self._state
        if not s.is_active or s.mode is not TimerMode.POMODORO:
            return False
        now = self._now(now)
        duration = self.interval_duration_ms()
        if elapsed_ms(s.accumulated_ms, s.interval_start_ms, now) < duration:
            return False

        duration_ms = int(duration)
        finished = s.pomodoro_cycle
        record = IntervalRecord(
            start_time=_to_datetime(now - duration_ms),
            end_time=_to_datetime(now),
            duration_seconds=_to_seconds(duration_ms),
            task_id=s.active_task.id,
            goal_id=s.active_task.goal_id,
            mode=s.mode,
            pomodoro_cycle=finished,
            sequence_id=s.sequence_id,
        )

        step = next_cycle(
            finished, s.completed_work_cycles, self._settings.cycles_until_long_break
        )
        completed = step.completed_work_cycles
        if finished is PomodoroCycle.LONG_BREAK:
            completed = 0  # a new set begins
        self._set_state(s.evolve(
            is_active=False,
            accumulated_ms=0,
            interval_start_ms=None,
            interval_opened_ms=None,
            pomodoro_cycle=step.cycle,
            completed_work_cycles=completed,
            transition_to=step.cycle,
            total_focus_ms=s.total_focus_ms + (
                duration_ms if finished is PomodoroCycle.WORK else 0
            ),
        ))

        if self._emissions is not None:
            self._emissions.publish(LogInterval(record))
        self.interval_completed.emit(record)
        self._notify(finished, step.cycle)
        return True

    def start_next_interval(self, now: int | None = None) -> bool:
        """Begin the interval the last completion is waiting on."""
        s = self._state
        if s.transition_to is None:
            return False
        now = self._now(now)
        self._set_state(s.evolve(
            is_active=True,
            accumulated_ms=0,
            interval_start_ms=now,
            interval_opened_ms=now,
            pomodoro_cycle=s.transition_to,
            transition_to=None,
        ))
        return True

    def skip_break(self, now: int | None = None) -> bool:
        """Go straight to a work interval from a pending or running break."""
        s = self._state
        if s.is_idle or s.mode is not TimerMode.POMODORO:
            return False
        if not s.pomodoro_cycle.is_break:
            return False
        completed = s.completed_work_cycles
        if s.pomodoro_cycle is PomodoroCycle.LONG_BREAK:
            completed = 0
        now = self._now(now)
        self._set_state(s.evolve(
            is_active=True,
            accumulated_ms=0,
            interval_start_ms=now,
            interval_opened_ms=now,
            pomodoro_cycle=PomodoroCycle.WORK,
            completed_work_cycles=completed,
            transition_to=None,
        ))
        return True

    def finish_and_summarize(self, now: int | None = None) -> SessionSummary | None:
        """Stop manually and hand back the unlogged work time.

        Pomodoro intervals completed earlier are already logged, so only
        the current interval is summarized.  A break in progress (or one
        about to start) is dropped.  The engine is idle afterwards.
        ``start_time`` is when the interval first started, so it spans
        any pauses that ``duration_seconds`` leaves out.
        """
        s = self._state
        if s.is_idle:
            return None
        now = self._now(now)

        summary = None
        if s.pomodoro_cycle.is_break:
            logger.info("Finished during a break; break time is not logged")
        else:
            elapsed = elapsed_ms(s.accumulated_ms, s.interval_start_ms, now)
            seconds = _to_seconds(elapsed)
            if seconds > 0:
                opened = s.interval_opened_ms
                summary = SessionSummary(
                    start_time=_to_datetime(now - elapsed if opened is None else opened),
                    end_time=_to_datetime(now),
                    duration_seconds=seconds,
                    mode=s.mode,
                    pomodoro_cycle=(
                        PomodoroCycle.WORK if s.mode is TimerMode.POMODORO else None
                    ),
                    task=s.active_task,
                    sequence_id=s.sequence_id,
                )

        self.reset()
        self.session_finished.emit(summary)
        return summary

    def discard(self) -> None:
        """Throw the session away, including its already-logged intervals.

        Deletion is queued; the engine resets whether or not it succeeds.
        """
        s = self._state
        if (
            s.mode is TimerMode.POMODORO
            and s.sequence_id is not None
            and self._emissions is not None
        ):
            self._emissions.publish(DeleteSequence(s.sequence_id))
        self.reset()

    def reset(self) -> None:
        """Return to IDLE from any phase."""
        self._set_state(TimerState())

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _now(self, now: int | None) -> int:
        return self._clock() if now is None else now

    def _on_tick(self) -> None:
        if not self._state.is_active:
            return
        now = self._now(None)
        if self.check_interval_completion(now):
            return
        self.tick.emit(self.elapsed_ms(now))

    def _notify(self, finished: PomodoroCycle, upcoming: PomodoroCycle) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier(finished, upcoming)
        except Exception:
            logger.exception("Interval notifier failed")

    def _set_state(self, new_state: TimerState) -> None:
        old_phase = self.phase
        self._state = new_state

        if new_state.is_active:
            if not self._qt_timer.isActive():
                self._qt_timer.start()
        else:
            self._qt_timer.stop()

        if self._snapshot_store is not None:
            try:
                self._snapshot_store.save(new_state)
            except OSError as exc:
                logger.warning("Could not persist timer snapshot: %s", exc)

        new_phase = self.phase
        if new_phase != old_phase:
            self.phase_changed.emit(new_phase)
