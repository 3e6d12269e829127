import threading
import time

from dtxkit.locks import SeqLock, SpinLock


def test_spinlock_counter_tracks_state():
    lock = SpinLock()
    assert lock.counter() == 0
    lock.lock()
    assert lock.counter() == 1
    lock.unlock()
    assert lock.counter() == 0


def test_spinlock_context_manager():
    lock = SpinLock()
    with lock as held:
        assert held is lock
        assert lock.counter() == 1
    assert lock.counter() == 0


def test_spinlock_mutual_exclusion():
    lock = SpinLock()
    total = {"n": 0}
    observed = set()
    observed_lock = threading.Lock()

    def worker():
        for _ in range(2000):
            with lock:
                seen = lock.counter()
                current = total["n"]
                total["n"] = current + 1
            with observed_lock:
                observed.add(seen)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert total["n"] == 8000
    assert observed == {1}
    assert lock.counter() == 0


def test_spinlock_blocks_second_locker_until_unlock():
    lock = SpinLock()
    lock.lock()
    acquired = threading.Event()
    counters = []

    def worker():
        lock.lock()
        counters.append(lock.counter())
        acquired.set()
        lock.unlock()

    t = threading.Thread(target=worker)
    t.start()
    assert not acquired.wait(0.05)
    assert lock.counter() == 1
    lock.unlock()
    t.join(timeout=5)
    assert acquired.is_set()
    assert counters == [1]
    assert lock.counter() == 0


def test_seqlock_is_writing():
    seq = SeqLock()
    assert seq.is_writing() is False
    seq.begin_write()
    assert seq.is_writing() is True
    seq.end_write()
    assert seq.is_writing() is False


def test_seqlock_reader_waits_for_writer():
    seq = SeqLock()
    seq.begin_write()
    finished = []

    def reader():
        seq.begin_read()
        finished.append(seq.is_writing())
        seq.end_read()

    t = threading.Thread(target=reader)
    t.start()
    time.sleep(0.05)
    assert finished == []
    assert seq.is_writing() is True
    seq.end_write()
    t.join(timeout=5)
    assert finished == [False]
    assert seq.is_writing() is False