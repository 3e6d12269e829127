"""Per-thread scheduler that tracks outstanding one-sided requests per coroutine.

A queue pair (qp) is any object offering::

    post_read(buf, remote_offset, size, wr_id)
    post_write(data, remote_offset, size, wr_id)
    post_cas(buf, remote_offset, compare, swap, wr_id)
    poll_send_completion() -> Completion | None

A post method raises if the request cannot be posted; the scheduler then
does not count it as pending.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

STATUS_SUCCESS = "success"
STATUS_RETRY_EXCEEDED = "retry_exceeded"


class CompletionError(Exception):
    """A work completion came back with a fatal status."""

    def __init__(self, completion: "Completion", node_id=None):
        self.completion = completion
        self.node_id = node_id
        super().__init__(
            f"bad completion status: {completion.status} @ node {node_id}"
        )


@dataclass(frozen=True)
class Completion:
    """Result of one signalled request; wr_id is the issuing coroutine's id."""

    wr_id: int
    status: str = STATUS_SUCCESS

    @property
    def success(self) -> bool:
        return self.status == STATUS_SUCCESS


@dataclass(eq=False)
class Coroutine:
    """One schedulable coroutine linked into the ring of runnable coroutines."""

    coro_id: int
    func: Optional[Callable[[], Any]] = None
    is_wait_poll: bool = False
    prev_coro: Optional["Coroutine"] = field(default=None, repr=False)
    next_coro: Optional["Coroutine"] = field(default=None, repr=False)


class CoroutineScheduler:
    """Tracks pending requests per coroutine and the ring of runnable coroutines."""

    def __init__(self, thread_id: int, coro_num: int):
        if coro_num <= 0:
            raise ValueError("coro_num must be positive")
        self.thread_id = thread_id
        self.pending_counts = [0] * coro_num
        self.pending_log_counts = [0] * coro_num
        self.coro_array = [Coroutine(coro_id=c) for c in range(coro_num)]
        self.coro_head: Optional[Coroutine] = None
        self.coro_tail: Optional[Coroutine] = None
        self._pending_qps = []
        self._pending_log_qps = []

    @property
    def pending_qps(self) -> list:
        return list(self._pending_qps)

    @property
    def pending_log_qps(self) -> list:
        return list(self._pending_log_qps)

    # Issuing requests

    def add_pending_qp(self, coro_id: int, qp) -> None:
        self._pending_qps.append(qp)
        self.pending_counts[coro_id] += 1

    def add_pending_log_qp(self, coro_id: int, qp) -> None:
        self._pending_log_qps.append(qp)
        self.pending_log_counts[coro_id] += 1

    def rdma_read(self, coro_id: int, qp, buf, remote_offset: int, size: int) -> None:
        qp.post_read(buf, remote_offset, size, coro_id)
        self.add_pending_qp(coro_id, qp)

    def rdma_write(self, coro_id: int, qp, data, remote_offset: int, size: int) -> None:
        qp.post_write(data, remote_offset, size, coro_id)
        self.add_pending_qp(coro_id, qp)

    def rdma_cas(
        self, coro_id: int, qp, buf, remote_offset: int, compare: int, swap: int
    ) -> None:
        qp.post_cas(buf, remote_offset, compare, swap, coro_id)
        self.add_pending_qp(coro_id, qp)

    def rdma_log(
        self, coro_id: int, tx_id: int, qp, data, remote_offset: int, size: int
    ) -> None:
        """Write a log record; its ack is tracked apart from regular requests."""
        qp.post_write(data, remote_offset, size, coro_id)
        self.add_pending_log_qp(coro_id, qp)

    # Polling

    def _poll(self, pending: list, counts: list, wake: bool) -> list:
        queue = deque(pending)
        remaining = []
        try:
            while queue:
                qp = queue[0]
                wc = qp.poll_send_completion()
                if wc is None:
                    remaining.append(queue.popleft())
                    continue
                if not wc.success:
                    if wc.status != STATUS_RETRY_EXCEEDED:
                        raise CompletionError(wc, getattr(qp, "node_id", None))
                    remaining.append(queue.popleft())
                    continue
                coro_id = wc.wr_id
                if coro_id == 0:
                    # Poll the same queue pair again.
                    continue
                if counts[coro_id] <= 0:
                    raise RuntimeError(f"coroutine {coro_id} has no pending request")
                counts[coro_id] -= 1
                if wake and counts[coro_id] == 0:
                    self.append_coroutine(self.coro_array[coro_id])
                queue.popleft()
        finally:
            remaining.extend(queue)
        return remaining

    def poll_regular_completion(self) -> None:
        self._pending_qps = self._poll(self._pending_qps, self.pending_counts, True)

    def poll_log_completion(self) -> None:
        self._pending_log_qps = self._poll(
            self._pending_log_qps, self.pending_log_counts, False
        )

    def poll_completion(self) -> None:
        self.poll_regular_completion()
        self.poll_log_completion()

    def check_log_ack(self, coro_id: int) -> bool:
        """Return True once every log write of the coroutine is acknowledged."""
        if self.pending_log_counts[coro_id] == 0:
            return True
        self.poll_log_completion()
        return self.pending_log_counts[coro_id] == 0

    # Coroutine ring

    def loop_link_coroutines(self, coro_num: int) -> None:
        """Link the first coro_num coroutines into a ring."""
        if not 0 < coro_num <= len(self.coro_array):
            raise ValueError("coro_num out of range")
        ring = self.coro_array[:coro_num]
        for i, coro in enumerate(ring):
            coro.prev_coro = ring[i - 1]
            coro.next_coro = ring[(i + 1) % coro_num]
        self.coro_head = ring[0]
        self.coro_tail = ring[-1]

    def leave(self, coro_id: int) -> Optional[Coroutine]:
        """Take a coroutine out of the ring while it waits for replies.

        Returns the coroutine to run next, or None if nothing is pending and
        the caller can simply continue.
        """
        if self.pending_counts[coro_id] == 0:
            return None
        coro = self.coro_array[coro_id]
        if coro.is_wait_poll:
            raise RuntimeError(f"coroutine {coro_id} is already waiting")
        nxt = coro.next_coro
        coro.prev_coro.next_coro = nxt
        nxt.prev_coro = coro.prev_coro
        if self.coro_tail is coro:
            self.coro_tail = coro.prev_coro
        coro.is_wait_poll = True
        nxt.is_wait_poll = False
        return nxt

    def append_coroutine(self, coro: Coroutine) -> None:
        """Put a waiting coroutine back at the tail of the ring."""
        if not coro.is_wait_poll:
            return
        prev = self.coro_tail
        prev.next_coro = coro
        self.coro_tail = coro
        coro.next_coro = self.coro_head
        coro.prev_coro = prev

    def runnable(self) -> list:
        """Ids of the coroutines in the ring, starting from the head."""
        order = []
        seen = set()
        coro = self.coro_head
        while coro is not None and coro.coro_id not in seen:
            seen.add(coro.coro_id)
            order.append(coro.coro_id)
            coro = coro.next_coro
        return order