"""Persisted timer snapshot.

The snapshot is a flat JSON record tagged with :data:`STORAGE_KEY`.
Bumping the key invalidates every snapshot written under an older
schema; they are discarded, never partially migrated.

Stored at:
    ~/Library/Application Support/GridGoal/timer-state.json
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..settings import APP_SUPPORT_DIR
from .state import TimerState

logger = logging.getLogger(__name__)


STORAGE_KEY = "gridgoal-timer-storage-v6"
SNAPSHOT_PATH = APP_SUPPORT_DIR / "timer-state.json"


class SnapshotStore:
    """Reads and writes a single :class:`TimerState` snapshot file."""

    def __init__(self, path: Path | None = None, key: str = STORAGE_KEY) -> None:
        self._path = path or SNAPSHOT_PATH
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> TimerState:
        """Return the persisted state, or a fresh idle state.

        Missing file, wrong key and malformed fields all fall back to idle.
        """
        if not self._path.exists():
            return TimerState()
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Unreadable timer snapshot at %s, starting idle", self._path)
            return TimerState()

        if not isinstance(payload, dict) or payload.get("key") != self._key:
            logger.info("Discarding timer snapshot from another schema version")
            return TimerState()
        try:
            return TimerState.from_dict(payload["state"])
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Corrupt timer snapshot (%s), starting idle", exc)
            return TimerState()

    def save(self, state: TimerState) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps({"key": self._key, "state": state.to_dict()}, indent=2) + "\n",
            encoding="utf-8",
        )

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
