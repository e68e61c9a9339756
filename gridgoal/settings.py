"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/GridGoal/settings.json

Usage::

    settings = load_settings()
    settings.cycles_until_long_break = 3
    save_settings(settings)

Invalid timer configuration is rejected here, at load time, so the
engine never discovers a bad cycle count halfway through a sequence.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "GridGoal"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


class ConfigurationError(ValueError):
    """Raised when timer settings cannot produce a valid Pomodoro cycle."""


@dataclass
class Settings:
    """All user-configurable timer preferences."""

    # ── pomodoro ──────────────────────────────────────────────────────
    work_duration: int = 25 * 60           # seconds
    short_break_duration: int = 5 * 60
    long_break_duration: int = 15 * 60
    cycles_until_long_break: int = 4

    # ── host loop ─────────────────────────────────────────────────────
    tick_interval_ms: int = 250            # completion-check cadence

    def validate(self) -> "Settings":
        """Raise :class:`ConfigurationError` for unusable values."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigurationError(
                    f"{f.name} must be a whole number, got {value!r}"
                )
        if self.cycles_until_long_break < 1:
            raise ConfigurationError(
                "cycles_until_long_break must be >= 1, "
                f"got {self.cycles_until_long_break}"
            )
        for name in ("work_duration", "short_break_duration", "long_break_duration"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive")
        if not 0 < self.tick_interval_ms <= 1000:
            raise ConfigurationError("tick_interval_ms must be in (0, 1000]")
        return self


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults.

    A missing or unreadable file yields the defaults.  A readable file
    with invalid values raises :class:`ConfigurationError`.
    """
    data: dict = {}
    if SETTINGS_PATH.exists():
        try:
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Unreadable settings at %s, using defaults", SETTINGS_PATH)
            data = {}
    if not isinstance(data, dict):
        data = {}

    # Only use keys that exist in the dataclass
    valid_keys = {f.name for f in fields(Settings)}
    filtered = {k: v for k, v in data.items() if k in valid_keys}
    return Settings(**filtered).validate()


def save_settings(settings: Settings) -> None:
    """Validate, then write settings to disk as JSON."""
    settings.validate()
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
