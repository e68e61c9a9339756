"""Print today's focus status: python -m gridgoal."""

import logging
import sys

from .database.db import init_db
from .settings import ConfigurationError, load_settings
from .stats.dashboard import load_dashboard_stats
from .timer.engine import TimerPhase, phase_of
from .timer.snapshot import SnapshotStore


def _format_focus(seconds: int) -> str:
    minutes = max(0, seconds) // 60
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m" if hours else f"{minutes}m"


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        load_settings()
    except ConfigurationError as exc:
        print(f"Invalid settings: {exc}", file=sys.stderr)
        sys.exit(2)

    init_db()
    stats = load_dashboard_stats()

    print(f"Focus today:    {_format_focus(stats.today_focus_seconds)}")
    print(f"Current streak: {stats.current_streak} day(s)"
          + ("" if stats.today_counted else "  (log a session to keep it going)"))
    print(f"Longest streak: {stats.longest_streak} day(s)")

    state = SnapshotStore().load()
    phase = phase_of(state)
    if phase is TimerPhase.IDLE:
        print(f"Timer:          {phase.value}")
    else:
        label = phase.value.replace("_", " ")
        print(f"Timer:          {label} on {state.active_task.title!r} "
              f"({state.mode.value.lower()})")


if __name__ == "__main__":
    main()
