"""Wall-clock timer for measuring a single event."""

import time


class Timer:
    """Measures the time between start() and stop(); usable as a context manager."""

    def __init__(self):
        self._start = 0
        self._end = 0

    def start(self) -> None:
        self._start = time.perf_counter_ns()

    def stop(self) -> None:
        self._end = time.perf_counter_ns()

    def duration_ns(self) -> int:
        return self._end - self._start

    def duration_s(self) -> float:
        return self.duration_ns() / 1e9

    def duration_us(self) -> int:
        return self.duration_ns() // 1_000

    def duration_ms(self) -> int:
        return self.duration_ns() // 1_000_000

    def __enter__(self) -> "Timer":
        self.start()
        return self

    def __exit__(self, *args) -> None:
        self.stop()