"""64-bit MurmurHash2 (MurmurHash64A) for integer keys and byte strings."""

import struct

_M = 0xC6A4A7935BD1E995
_R = 47
_MASK64 = 0xFFFFFFFFFFFFFFFF
_MASK32 = 0xFFFFFFFF


def _mix(k: int) -> int:
    k = (k * _M) & _MASK64
    k ^= k >> _R
    return (k * _M) & _MASK64


def _finalize(h: int) -> int:
    h ^= h >> _R
    h = (h * _M) & _MASK64
    h ^= h >> _R
    return h


def murmur_hash64a(key: int, seed: int) -> int:
    """Hash one 64-bit key. The seed is taken as an unsigned 32-bit value."""
    h = ((seed & _MASK32) ^ (8 * _M)) & _MASK64
    h ^= _mix(key & _MASK64)
    h = (h * _M) & _MASK64
    return _finalize(h)


def murmur_hash64a_bytes(data, seed: int) -> int:
    """Hash a byte string with a 64-bit seed, reading words little-endian."""
    data = bytes(data)
    length = len(data) & _MASK32
    h = ((seed & _MASK64) ^ (length * _M)) & _MASK64

    body = len(data) - len(data) % 8
    for (k,) in struct.iter_unpack("<Q", data[:body]):
        h ^= _mix(k)
        h = (h * _M) & _MASK64

    tail = data[body:]
    if tail:
        h ^= int.from_bytes(tail, "little")
        h = (h * _M) & _MASK64

    return _finalize(h)