"""Wall-clock sources for transaction timestamps.

The runtime stamps each transaction with one timestamp taken from a clock.
Timestamps are integer epoch seconds and never go backwards, but two
transactions may share the same second.
"""
from __future__ import annotations

import threading
import time
from typing import Callable, Optional


class MonotonicClock:
    """Wall-clock seconds clamped to be non-decreasing.

    ``time.time()`` can step backwards (NTP adjustments); the clamp keeps the
    sequence of issued timestamps monotonic.
    """

    def __init__(self, source: Optional[Callable[[], float]] = None) -> None:
        self._source = source or time.time
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            current = int(self._source())
            if current < self._last:
                current = self._last
            self._last = current
            return current


class ManualClock:
    """Deterministic clock for tests and replays."""

    def __init__(self, start: int = 1_700_000_000) -> None:
        self._now = int(start)

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int = 1) -> int:
        """Move time forward by ``seconds`` and return the new value."""
        if seconds < 0:
            raise ValueError("ManualClock cannot move backwards")
        self._now += int(seconds)
        return self._now


__all__ = ["MonotonicClock", "ManualClock"]
