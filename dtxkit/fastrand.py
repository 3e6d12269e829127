"""Small deterministic pseudo-random generators for workload generation."""

_MASK48 = (1 << 48) - 1
_MASK64 = (1 << 64) - 1
_MULTIPLIER = 0x5DEECE66D
_INCREMENT = 0xB


class JavaRand:
    """48-bit linear congruential generator with the constants of java.util.Random."""

    def __init__(self, seed: int = 0):
        if not 0 <= seed < (1 << 48):
            raise ValueError("seed must be in [0, 2**48)")
        self._state = seed

    def _advance(self) -> int:
        self._state = (self._state * _MULTIPLIER + _INCREMENT) & _MASK48
        return self._state

    def next_u32(self) -> int:
        """Return the next unsigned 32-bit value."""
        return (self._advance() >> 16) & 0xFFFFFFFF

    def next_f64(self) -> float:
        """Return the next value in [0.0, 1.0]."""
        return self._advance() / float(_MASK48)


def fast_rand(seed: int) -> tuple[int, int]:
    """Advance a 64-bit seed; return (value, new_seed)."""
    new_seed = (seed * 1103515245 + 12345) & _MASK64
    return (new_seed >> 32) & 0xFFFFFFFF, new_seed


class FastRandom:
    """Generator compatible with java.util.Random. Not thread-safe."""

    def __init__(self, seed: int = 0):
        self.seed = 0
        self.set_seed0(seed)

    def set_seed0(self, seed: int) -> None:
        """Set the seed after scrambling it the way java.util.Random does."""
        self.seed = (seed ^ _MULTIPLIER) & _MASK48

    def _next_bits(self, bits: int) -> int:
        self.seed = (self.seed * _MULTIPLIER + _INCREMENT) & _MASK48
        return self.seed >> (48 - bits)

    def next(self) -> int:
        """Return an unsigned 64-bit value built from two 32-bit draws."""
        high = self._next_bits(32)
        low = self._next_bits(32)
        return ((high << 32) + low) & _MASK64

    def next_u32(self) -> int:
        return self._next_bits(32)

    def next_u16(self) -> int:
        return self._next_bits(16) & 0xFFFF

    def next_uniform(self) -> float:
        """Return a value in [0.0, 1.0)."""
        high = self._next_bits(26)
        low = self._next_bits(27)
        return ((high << 27) + low) / float(1 << 53)

    def next_char(self) -> int:
        """Return a byte value in [0, 255]."""
        return self._next_bits(8) % 256

    def next_string(self, length: int) -> bytes:
        return bytes(self.next_char() for _ in range(length))

    def rand_number(self, low: int, high: int) -> int:
        """Return an integer in [low, high], both inclusive."""
        if low > high:
            raise ValueError("low must not exceed high")
        value = int(self.next_uniform() * (high - low + 1) + low)
        if not low <= value <= high:
            raise ValueError(f"generated value {value} outside [{low}, {high}]")
        return value