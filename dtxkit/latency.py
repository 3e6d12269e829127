"""Fixed-bucket latency histogram in microseconds."""

# (first value, bucket width) of each 128-slot band; values past the last band
# fall into one overflow bucket.
_BANDS = ((0, 1), (128, 2), (384, 4), (896, 8), (1920, 16))
_SLOTS = 128
_OVERFLOW = 3968


class LatencyHistogram:
    """Records latencies with finer resolution for small values."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self._bands = [[0] * _SLOTS for _ in _BANDS]
        self._overflow = 0

    def update(self, us: int) -> None:
        if us < 0:
            raise ValueError("latency must be non-negative")
        for (start, width), counts in zip(_BANDS, self._bands):
            if us < start + width * _SLOTS:
                counts[(us - start) // width] += 1
                return
        self._overflow += 1

    def __iadd__(self, other: "LatencyHistogram") -> "LatencyHistogram":
        for mine, theirs in zip(self._bands, other._bands):
            for slot, count in enumerate(theirs):
                mine[slot] += count
        self._overflow += other._overflow
        return self

    def _banded(self):
        """Yield (bucket value, count) for every non-overflow bucket, ascending."""
        for (start, width), counts in zip(_BANDS, self._bands):
            for slot, count in enumerate(counts):
                yield start + slot * width, count

    def _entries(self):
        yield from self._banded()
        yield _OVERFLOW, self._overflow

    def count(self) -> int:
        return sum(count for _, count in self._entries())

    def total(self) -> int:
        """Sum of recorded latencies, each taken at its bucket value."""
        return sum(value * count for value, count in self._entries())

    def avg(self) -> int:
        return self.total() // max(1, self.count())

    def min(self) -> int:
        return next((value for value, count in self._banded() if count), _OVERFLOW)

    def max(self) -> int:
        if self._overflow:
            return _OVERFLOW
        return next(
            (value for value, count in reversed(list(self._banded())) if count), 0
        )

    def percentile(self, p: float) -> int:
        """Return the (p * 100)th percentile latency, p in [0, 1]."""
        if not 0.0 <= p <= 1.0:
            raise ValueError("p must be within [0, 1]")
        threshold = int(p * float(self.count()))
        for value, count in self._banded():
            threshold -= count
            if threshold < 0:
                return value
        return _OVERFLOW

    def format(self) -> str:
        """One line per non-empty bucket: value and count."""
        return "".join(
            f"{value:4d} {count:6d}\n" for value, count in self._entries() if count
        )