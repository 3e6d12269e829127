"""Fixed-size pool of worker threads fed from a shared task queue."""

import threading
from collections import deque
from concurrent.futures import Future


class ThreadPool:
    """Runs submitted callables on a fixed set of worker threads.

    Shutting down lets the workers finish every task already queued before
    they exit; submitting after shutdown raises RuntimeError.
    """

    def __init__(self, threads: int):
        if threads < 0:
            raise ValueError("thread count must be non-negative")
        self._tasks = deque()
        self._cond = threading.Condition()
        self._stop = False
        self._workers = [
            threading.Thread(target=self._work, daemon=True) for _ in range(threads)
        ]
        for worker in self._workers:
            worker.start()

    def _work(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._stop or self._tasks)
                if self._stop and not self._tasks:
                    return
                future, fn, args, kwargs = self._tasks.popleft()
            if not future.set_running_or_notify_cancel():
                continue
            try:
                result = fn(*args, **kwargs)
            except Exception as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)

    def submit(self, fn, *args, **kwargs) -> Future:
        """Queue fn(*args, **kwargs) and return a future for its result."""
        future = Future()
        with self._cond:
            if self._stop:
                raise RuntimeError("Enqueue on stopped ThreadPool")
            self._tasks.append((future, fn, args, kwargs))
            self._cond.notify()
        return future

    def shutdown(self) -> None:
        """Stop accepting tasks, drain the queue and join all workers."""
        with self._cond:
            self._stop = True
            self._cond.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current and worker.is_alive():
                worker.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, *args) -> None:
        self.shutdown()