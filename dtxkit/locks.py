"""Spin lock and a sequence lock built on it."""

import threading
import time


class SpinLock:
    """Lock acquired by spinning on a counter: 1 while held, 0 when free."""

    def __init__(self):
        self._guard = threading.Lock()
        self._counter = 0

    def _try_acquire(self) -> bool:
        with self._guard:
            if self._counter == 0:
                self._counter = 1
                return True
            return False

    def lock(self) -> None:
        while not self._try_acquire():
            time.sleep(0)

    def unlock(self) -> None:
        with self._guard:
            self._counter = 0

    def counter(self) -> int:
        with self._guard:
            return self._counter

    def __enter__(self) -> "SpinLock":
        self.lock()
        return self

    def __exit__(self, *args) -> None:
        self.unlock()


class SeqLock:
    """Writers take a spin lock; readers wait until no writer holds it."""

    def __init__(self):
        self._spin_lock = SpinLock()

    def begin_write(self) -> None:
        self._spin_lock.lock()

    def end_write(self) -> None:
        self._spin_lock.unlock()

    def begin_read(self) -> None:
        while self.is_writing():
            time.sleep(0)

    def end_read(self) -> None:
        """Readers do not retry after a concurrent write."""

    def is_writing(self) -> bool:
        return self._spin_lock.counter() % 2 == 1