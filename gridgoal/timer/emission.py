"""Outbound command queue between the timer and session storage.

The engine publishes commands and moves on; delivery happens later on
the Qt event loop (or on an explicit :meth:`EmissionQueue.flush`).  A
failing sink is logged and reported through ``emission_failed`` but
never reaches back into timer state.

Commands
--------
LogInterval(record)        persist one completed interval
DeleteSequence(sequence_id)  remove every interval of a discarded sequence

Commands are delivered in publish order, so a delete always runs after
the interval logs of the same sequence that were queued before it.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, Union

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .cycles import PomodoroCycle, TimerMode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntervalRecord:
    start_time: datetime
    end_time: datetime
    duration_seconds: int
    task_id: str
    goal_id: str
    mode: TimerMode
    pomodoro_cycle: PomodoroCycle | None = None
    sequence_id: str | None = None


@dataclass(frozen=True)
class LogInterval:
    record: IntervalRecord


@dataclass(frozen=True)
class DeleteSequence:
    sequence_id: str


Command = Union[LogInterval, DeleteSequence]


class SessionSink(Protocol):
    """Storage side of the queue.  Either method may raise."""

    def log_interval(self, record: IntervalRecord) -> int: ...

    def delete_sequence(self, sequence_id: str) -> int: ...


class EmissionQueue(QObject):
    """FIFO of storage commands, drained outside the caller's stack.

    Signals
    -------
    delivered(command, result)
        The sink accepted the command.  ``result`` is the created id for
        ``LogInterval`` and the deleted row count for ``DeleteSequence``.
    emission_failed(command, error)
        The sink raised.  The command is dropped; retries belong to the
        sink.
    """

    delivered = pyqtSignal(object, object)
    emission_failed = pyqtSignal(object, object)

    def __init__(
        self,
        sink: SessionSink,
        parent: QObject | None = None,
        *,
        deferred: bool = True,
    ) -> None:
        super().__init__(parent)
        self._sink = sink
        self._deferred = deferred
        self._pending: deque[Command] = deque()
        self._flush_scheduled = False

    @property
    def pending(self) -> tuple[Command, ...]:
        return tuple(self._pending)

    def publish(self, command: Command) -> None:
        self._pending.append(command)
        if not self._deferred:
            self.flush()
        elif not self._flush_scheduled:
            self._flush_scheduled = True
            QTimer.singleShot(0, self.flush)

    def flush(self) -> int:
        """Deliver every pending command; return how many succeeded."""
        self._flush_scheduled = False
        ok = 0
        while self._pending:
            command = self._pending.popleft()
            try:
                result = self._deliver(command)
            except Exception as exc:
                logger.warning("Session emission failed for %r: %s", command, exc)
                self.emission_failed.emit(command, exc)
                continue
            ok += 1
            self.delivered.emit(command, result)
        return ok

    def _deliver(self, command: Command) -> int:
        if isinstance(command, LogInterval):
            return self._sink.log_interval(command.record)
        if isinstance(command, DeleteSequence):
            count = self._sink.delete_sequence(command.sequence_id)
            logger.info("Deleted %d interval(s) of sequence %s", count, command.sequence_id)
            return count
        raise TypeError(f"unknown command {command!r}")
