"""Zipfian key generator using an approximate power function."""

import copy
import math
import struct
import warnings

from dtxkit.fastrand import JavaRand

_POW_MAGIC = 1072632447


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value >= (1 << 31) else value


def pow_approx(a: float, b: float) -> float:
    """Approximate a ** b for b >= 0 by bit manipulation plus squaring."""
    if b < 0:
        raise ValueError("exponent must be non-negative")
    e = int(b)
    bits = struct.unpack("<Q", struct.pack("<d", a))[0]
    high = _to_int32(bits >> 32)
    high = _to_int32(int((b - e) * (high - _POW_MAGIC) + float(_POW_MAGIC)))
    approx = struct.unpack("<d", struct.pack("<Q", (high & 0xFFFFFFFF) << 32))[0]

    result = 1.0
    while e:
        if e & 1:
            result *= a
        a *= a
        e >>= 1
    return result * approx


def zeta(last_n: int, last_sum: float, n: int, theta: float) -> float:
    """Extend the generalised harmonic sum from last_n terms to n terms."""
    if last_n > n:
        last_n, last_sum = 0, 0.0
    while last_n < n:
        last_sum += 1.0 / pow_approx(float(last_n) + 1.0, theta)
        last_n += 1
    return last_sum


class ZipfGenerator:
    """Draws keys in [0, n) with skew theta.

    theta == -1 yields keys sequentially, theta == 0 uniformly, theta in (0, 1)
    with Zipf skew, and theta >= 40 always yields 0.
    """

    def __init__(self, n: int, theta: float, seed: int):
        if n <= 0:
            raise ValueError("n must be positive")
        if 0.992 < theta < 1.0:
            warnings.warn(
                "theta > 0.992 will be inaccurate due to approximation",
                RuntimeWarning,
                stacklevel=2,
            )
        if 1.0 <= theta < 40.0:
            raise ValueError("theta in [1, 40) is not supported")
        if not (theta == -1.0 or 0.0 <= theta < 1.0 or theta >= 40.0):
            raise ValueError("theta must be -1, in [0, 1), or at least 40")

        self._n = n
        self._theta = theta
        self._seq = 0
        self._alpha = 0.0
        self._thres = 0.0
        if theta == -1.0:
            self._seq = seed % n
        elif 0.0 < theta < 1.0:
            self._alpha = 1.0 / (1.0 - theta)
            self._thres = 1.0 + pow_approx(0.5, theta)
        self._last_n = 0
        self._dbl_n = 0.0
        self._zetan = 0.0
        self._eta = 0.0
        self._rand = JavaRand(seed)

    @property
    def n(self) -> int:
        return self._n

    @property
    def theta(self) -> float:
        return self._theta

    def change_n(self, n: int) -> None:
        self._n = n

    def reseeded(self, seed: int) -> "ZipfGenerator":
        """Return a copy with the same parameters and a fresh random stream."""
        clone = copy.copy(self)
        clone._rand = JavaRand(seed)
        return clone

    def _refresh(self) -> None:
        theta = self._theta
        if 0.0 < theta < 1.0:
            self._zetan = zeta(self._last_n, self._zetan, self._n, theta)
            numerator = 1.0 - pow_approx(2.0 / self._n, 1.0 - theta)
            denominator = 1.0 - zeta(0, 0.0, 2, theta) / self._zetan
            if denominator == 0.0:
                self._eta = math.copysign(math.inf, numerator) if numerator else math.nan
            else:
                self._eta = numerator / denominator
        self._last_n = self._n
        self._dbl_n = float(self._n)

    def next(self) -> int:
        if self._last_n != self._n:
            self._refresh()

        theta = self._theta
        if theta == -1.0:
            value = self._seq
            self._seq += 1
            if self._seq >= self._n:
                self._seq = 0
            return value
        if theta == 0.0:
            return int(self._dbl_n * self._rand.next_f64())
        if theta >= 40.0:
            return 0

        u = self._rand.next_f64()
        uz = u * self._zetan
        if uz < 1.0:
            return 0
        if uz < self._thres:
            return 1
        scaled = self._dbl_n * pow_approx(self._eta * (u - 1.0) + 1.0, self._alpha)
        if not math.isfinite(scaled) or scaled >= self._n:
            return self._n - 1
        return max(0, int(scaled))

    def __iter__(self):
        while True:
            yield self.next()