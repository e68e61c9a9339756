"""Shared test helpers for GridGoal."""

from gridgoal.timer.emission import IntervalRecord
from gridgoal.timer.engine import TimerEngine
from gridgoal.timer.state import ActiveTask


TASK = ActiveTask(id="task-1", title="Write tests", goal_id="goal-1", goal_title="Ship it")
START_MS = 1_760_000_000_000  # fixed wall-clock origin for every test


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Injectable epoch-millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = START_MS):
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float = 0, ms: int = 0) -> int:
        self.now += int(seconds * 1000) + ms
        return self.now


class RecordingSink:
    """SessionSink that keeps records in memory."""

    def __init__(self):
        self.records: list[IntervalRecord] = []
        self.deleted: list[str] = []

    def log_interval(self, record):
        self.records.append(record)
        return len(self.records)

    def delete_sequence(self, sequence_id):
        before = len(self.records)
        self.records = [r for r in self.records if r.sequence_id != sequence_id]
        self.deleted.append(sequence_id)
        return before - len(self.records)


class FailingSink:
    """SessionSink whose storage is always unreachable."""

    def __init__(self):
        self.calls = 0

    def log_interval(self, record):
        self.calls += 1
        raise ConnectionError("server unavailable")

    def delete_sequence(self, sequence_id):
        self.calls += 1
        raise ConnectionError("server unavailable")


def complete_interval(engine: TimerEngine, clock: FakeClock) -> bool:
    """Jump the clock to the end of the current interval and check it."""
    remaining = engine.remaining_ms()
    clock.advance(ms=int(remaining))
    return engine.check_interval_completion()
