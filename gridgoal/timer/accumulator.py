"""Anchor-based elapsed-time arithmetic.

Live elapsed time is never stored.  It is recomputed from the banked
milliseconds plus the distance between ``now`` and the fixed start
anchor of the running sub-interval, so redraw frequency, skipped frames
and a suspended process cannot make it drift.
"""

from __future__ import annotations

import time


def now_ms() -> int:
    """Wall-clock epoch milliseconds (survives restarts, unlike monotonic)."""
    return int(time.time() * 1000)


def elapsed_ms(accumulated_ms: int, interval_start_ms: int | None, now: int) -> int:
    """Banked time plus the running sub-interval, if any.

    A clock that moved backwards contributes zero rather than eating
    into banked time.
    """
    if interval_start_ms is None:
        return accumulated_ms
    return accumulated_ms + max(0, now - interval_start_ms)