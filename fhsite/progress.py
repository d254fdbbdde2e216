from __future__ import annotations

import threading
import time
from typing import Callable


class ProgressReporter:
    """Thread-safe page counter that prints a status line now and then."""

    def __init__(self, total: int, interval: float = 2.0, clock: Callable[[], float] = time.monotonic):
        self.total = total
        self.interval = interval
        self._clock = clock
        self._lock = threading.Lock()
        self._done = 0
        self._last_report = clock()

    @property
    def done(self) -> int:
        with self._lock:
            return self._done

    def advance(self) -> None:
        with self._lock:
            self._done += 1
            now = self._clock()
            finished = self._done >= self.total
            if not finished and now - self._last_report < self.interval:
                return
            self._last_report = now
            print(f"Built {self._done}/{self.total} pages.", flush=True)
