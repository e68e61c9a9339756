"""Timer state value objects and their flat persisted form."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from .cycles import PomodoroCycle, TimerMode


@dataclass(frozen=True)
class ActiveTask:
    id: str
    title: str
    goal_id: str
    goal_title: str = ""


@dataclass(frozen=True)
class TimerState:
    """Everything the engine needs to pick up where it left off.

    ``is_active`` implies ``interval_start_ms`` is set.  ``accumulated_ms``
    only moves at pause and completion boundaries.  ``interval_opened_ms``
    is the first anchor of the current interval and survives pauses.
    """

    is_active: bool = False
    accumulated_ms: int = 0
    interval_start_ms: int | None = None
    active_task: ActiveTask | None = None
    mode: TimerMode = TimerMode.STOPWATCH
    pomodoro_cycle: PomodoroCycle = PomodoroCycle.WORK
    completed_work_cycles: int = 0
    sequence_id: str | None = None
    transition_to: PomodoroCycle | None = None
    total_focus_ms: int = 0
    interval_opened_ms: int | None = None

    @property
    def is_idle(self) -> bool:
        return self.active_task is None

    def evolve(self, **changes: Any) -> "TimerState":
        return replace(self, **changes)

    # ── serialization ─────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        task = self.active_task
        return {
            "is_active": self.is_active,
            "accumulated_ms": self.accumulated_ms,
            "interval_start_ms": self.interval_start_ms,
            "active_task": None if task is None else {
                "id": task.id,
                "title": task.title,
                "goal_id": task.goal_id,
                "goal_title": task.goal_title,
            },
            "mode": self.mode.value,
            "pomodoro_cycle": self.pomodoro_cycle.value,
            "completed_work_cycles": self.completed_work_cycles,
            "sequence_id": self.sequence_id,
            "transition_to": (
                None if self.transition_to is None else self.transition_to.value
            ),
            "total_focus_ms": self.total_focus_ms,
            "interval_opened_ms": self.interval_opened_ms,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimerState":
        """Strict inverse of :meth:`to_dict`.

        Raises ``KeyError``, ``TypeError`` or ``ValueError`` for missing
        or malformed fields; the caller decides what to fall back to.
        """
        raw_task = data["active_task"]
        task = None
        if raw_task is not None:
            task = ActiveTask(
                id=str(raw_task["id"]),
                title=str(raw_task["title"]),
                goal_id=str(raw_task["goal_id"]),
                goal_title=str(raw_task.get("goal_title", "")),
            )
        start = data["interval_start_ms"]
        opened = data["interval_opened_ms"]
        transition = data["transition_to"]
        if not isinstance(data["is_active"], bool):
            raise TypeError("is_active must be a boolean")
        state = cls(
            is_active=data["is_active"],
            accumulated_ms=int(data["accumulated_ms"]),
            interval_start_ms=None if start is None else int(start),
            active_task=task,
            mode=TimerMode(data["mode"]),
            pomodoro_cycle=PomodoroCycle(data["pomodoro_cycle"]),
            completed_work_cycles=int(data["completed_work_cycles"]),
            sequence_id=data["sequence_id"],
            transition_to=None if transition is None else PomodoroCycle(transition),
            total_focus_ms=int(data["total_focus_ms"]),
            interval_opened_ms=None if opened is None else int(opened),
        )
        state._check_consistent()
        return state

    def _check_consistent(self) -> None:
        if self.is_active and self.interval_start_ms is None:
            raise ValueError("active timer without an interval start")
        if min(self.accumulated_ms, self.completed_work_cycles, self.total_focus_ms) < 0:
            raise ValueError("negative counter")
        if self.sequence_id is not None and not isinstance(self.sequence_id, str):
            raise ValueError("sequence_id must be a string")
        if self.active_task is None and (
            self.is_active
            or self.accumulated_ms
            or self.interval_start_ms is not None
            or self.interval_opened_ms is not None
            or self.transition_to is not None
            or self.sequence_id is not None
        ):
            raise ValueError("timing data without an active task")
        if self.transition_to is not None:
            if self.is_active:
                raise ValueError("running while waiting for the next interval")
            if self.mode is not TimerMode.POMODORO:
                raise ValueError("only pomodoro sessions transition")
