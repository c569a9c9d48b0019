from __future__ import annotations

import time
from contextlib import contextmanager


class Counter:
    """Monotonic count of preference operations since process start."""

    def __init__(self) -> None:
        self.value = 0

    def inc(self, n: int = 1) -> None:
        self.value += n


class Timer:
    """Wall-clock duration of the most recent store commit, in milliseconds."""

    def __init__(self) -> None:
        self.last_ms: float | None = None
        self._start: float | None = None

    def start(self) -> None:
        self._start = time.perf_counter()

    def stop(self) -> float | None:
        if self._start is None:
            return None
        end = time.perf_counter()
        self.last_ms = (end - self._start) * 1000
        self._start = None
        return self.last_ms

    @contextmanager
    def time(self):  # noqa: ANN201 (to keep it lightweight)
        self.start()
        try:
            yield
        finally:
            self.stop()


reads_total = Counter()
writes_total = Counter()
misses_total = Counter()
decode_errors_total = Counter()
commit_ms = Timer()
