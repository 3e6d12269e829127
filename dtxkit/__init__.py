"""Building blocks for distributed transaction benchmarks: hashing, random and
Zipf generators, latency histograms, timers, JSON configuration, protocol
flags, a concurrent hash table, locks, a thread pool, a coroutine request
scheduler and per-thread logging."""

__version__ = "0.1.0"