# dtxkit

Small, dependency-free building blocks for distributed transaction
benchmarks and the tools around them. Everything is pure Python and uses
only the standard library.

## Modules

- `dtxkit.hashing`: 64-bit MurmurHash. `murmur_hash64a(key, seed)` hashes a
  single 64-bit integer key (the seed is taken as unsigned 32-bit);
  `murmur_hash64a_bytes(data, seed)` hashes a byte string with a 64-bit seed,
  reading words little-endian.
- `dtxkit.fastrand`: deterministic generators for workloads.
  `JavaRand` is a 48-bit linear congruential generator (`next_u32`,
  `next_f64`); `FastRandom` follows `java.util.Random` (`next`, `next_u32`,
  `next_u16`, `next_uniform`, `next_char`, `next_string`, `set_seed0`,
  `rand_number(low, high)` inclusive); `fast_rand(seed)` returns
  `(value, new_seed)`.
- `dtxkit.zipf`: `ZipfGenerator(n, theta, seed)` draws keys in `[0, n)`:
  `theta == -1` sequentially, `theta == 0` uniformly, `theta` in `(0, 1)`
  with Zipf skew, `theta >= 40` always `0`. Other values raise `ValueError`;
  values above 0.992 emit a `RuntimeWarning`. It is iterable, supports
  `change_n` and `reseeded(seed)`. `pow_approx` and `zeta` are the helpers
  it uses.
- `dtxkit.latency`: `LatencyHistogram`, a bucketed microsecond histogram
  (1 µs buckets below 128, wider buckets up to 3968, then one overflow
  bucket) with `update`, `+=`, `count`, `total`, `avg`, `min`, `max`,
  `percentile(p)` and `format()`.
- `dtxkit.timer`: `Timer` with `start`/`stop` and durations in s, ns, µs
  and ms; also usable as a context manager.
- `dtxkit.jsonconfig`: `JsonConfig`, path-aware navigation and editing of a
  JSON document that may contain `//` and `/* */` comments. Missing members
  give a view whose `exists()` is false; typed getters (`get_int64`,
  `get_str`, ...) take an optional default and raise `ConfigError` on
  missing or wrongly typed values.
- `dtxkit.flags`: `ProtocolFlags`, a frozen dataclass of protocol and
  benchmark switches, `FlushMode`, and `DEFAULT_FLAGS`.
- `dtxkit.concurrent_table`: `ConcurrentTable`, a thread-safe hash table
  built on a split-ordered list (`insert`, `delete`, `find`, `get`, `in`,
  `len`, `bucket_size`), plus `reverse_bits64` and `bucket_parent`.
- `dtxkit.locks`: `SpinLock` (also a context manager) and `SeqLock`.
- `dtxkit.threadpool`: `ThreadPool(threads)` whose `submit` returns a
  `concurrent.futures.Future`; `shutdown` drains queued tasks and joins the
  workers, and later submissions raise `RuntimeError`.
- `dtxkit.scheduler`: `CoroutineScheduler` counts outstanding requests per
  coroutine, polls for `Completion`s and keeps the ring of runnable
  `Coroutine`s (`leave`, `append_coroutine`, `runnable`). A fatal completion
  status raises `CompletionError`.
- `dtxkit.debug`: `ThreadLogger` appends records to `<tid>_log.txt` and
  raises `FatalLogError` after a message at `FATAL` level;
  `format_stack_trace` and `strip_basename` are small helpers.

## Installing

    pip install .

For running the tests:

    pip install ".[test]"
    pytest

## Examples

Hash a key into a bucket:

    from dtxkit.hashing import murmur_hash64a

    bucket = murmur_hash64a(42, 0xDEADBEEF) % 1024

Draw skewed keys and record latencies:

    from dtxkit.zipf import ZipfGenerator
    from dtxkit.latency import LatencyHistogram
    from dtxkit.timer import Timer

    keys = ZipfGenerator(1000, 0.99, 7)
    hist = LatencyHistogram()
    for _ in range(100):
        with Timer() as t:
            keys.next()
        hist.update(t.duration_us())
    print(hist.avg(), hist.percentile(0.99))

Read a configuration:

    from dtxkit.jsonconfig import JsonConfig

    config = JsonConfig.load('{"local_memory_node": {"machine_id": 0}}', "<inline>")
    machine_id = config.get("local_memory_node").get("machine_id").get_int64()

Use a thread pool:

    from dtxkit.threadpool import ThreadPool

    with ThreadPool(4) as pool:
        future = pool.submit(sum, [1, 2, 3])
        print(future.result())

Track requests with the scheduler. Any object with `post_read`,
`post_write`, `post_cas` and `poll_send_completion` serves as a queue pair:

    from dtxkit.scheduler import Completion, CoroutineScheduler

    class QueuePair:
        def __init__(self):
            self.done = []
        def post_read(self, buf, remote_offset, size, wr_id):
            self.done.append(Completion(wr_id))
        def poll_send_completion(self):
            return self.done.pop(0) if self.done else None

    sched = CoroutineScheduler(thread_id=0, coro_num=3)
    sched.loop_link_coroutines(3)
    qp = QueuePair()
    sched.rdma_read(1, qp, bytearray(8), 0, 8)
    sched.leave(1)            # coroutine 1 waits for its reply
    sched.poll_completion()   # the reply arrives; coroutine 1 rejoins the ring
    print(sched.runnable())

## What this package does not do

It provides the supporting pieces only. There is no transaction engine,
no memory node server, no network transport and no command-line program:
the scheduler records requests and completions on queue-pair objects that
you supply, and `ProtocolFlags` only holds settings for code that reads them.