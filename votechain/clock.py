"""Monotonic millisecond clock for block and vote timestamps."""

from __future__ import annotations

import threading
import time


class MonotonicClock:
    """Wall-clock milliseconds since epoch that never run backwards.

    If the system clock is stepped back, the last value is repeated
    until real time catches up.
    """

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        now = time.time_ns() // 1_000_000
        with self._lock:
            if now < self._last:
                now = self._last
            self._last = now
            return now
