"""Hash table built on a split-ordered list, safe to share between threads."""

import threading

_MASK64 = (1 << 64) - 1
_MSB = 1 << 63

# The bucket directory can hold at most SEGMENT_SIZE ** MAX_LEVEL buckets.
MAX_LEVEL = 4
SEGMENT_SIZE = 64
MAX_BUCKET_SIZE = SEGMENT_SIZE**MAX_LEVEL

# The table grows once it holds more than bucket_size * LOAD_FACTOR items.
LOAD_FACTOR = 0.5

_REVERSE8 = bytes(int(f"{b:08b}"[::-1], 2) for b in range(256))


def reverse_bits64(value: int) -> int:
    """Reverse the bit order of a 64-bit value."""
    value &= _MASK64
    return int.from_bytes(
        bytes(_REVERSE8[b] for b in value.to_bytes(8, "little")), "big"
    )


def bucket_parent(index: int) -> int:
    """Return the bucket that bucket `index` was split from (its MSB cleared)."""
    if index <= 0:
        raise ValueError("bucket 0 has no parent")
    return index & ~(1 << (index.bit_length() - 1))


class _Node:
    __slots__ = ("order", "dummy", "key", "value", "next")

    def __init__(self, order: int, dummy: bool, key=None, value=None):
        self.order = order
        self.dummy = dummy
        self.key = key
        self.value = value
        self.next = None


def _regular_order(hash_value: int) -> int:
    return reverse_bits64(hash_value | _MSB)


def _dummy_order(bucket_index: int) -> int:
    return reverse_bits64(bucket_index)


class ConcurrentTable:
    """Mapping whose items live in one list sorted by bit-reversed hash.

    Each bucket points at a sentinel node inside that list, so doubling the
    bucket count never moves items: a new bucket is initialised lazily by
    splicing its sentinel after its parent's.
    """

    def __init__(self, hash_func=hash):
        self._hash = hash_func
        self._power_of_2 = 1
        self._size = 0
        self._lock = threading.RLock()
        head = _Node(_dummy_order(0), True)
        self._buckets = {0: head}

    def bucket_size(self) -> int:
        return 1 << self._power_of_2

    def __len__(self) -> int:
        return self._size

    def _hash_of(self, key) -> int:
        return self._hash(key) & _MASK64

    def _bucket_head(self, hash_value: int) -> _Node:
        index = hash_value & (self.bucket_size() - 1)
        head = self._buckets.get(index)
        if head is None:
            head = self._initialize_bucket(index)
        return head

    def _initialize_bucket(self, index: int) -> _Node:
        parent = bucket_parent(index)
        parent_head = self._buckets.get(parent)
        if parent_head is None:
            parent_head = self._initialize_bucket(parent)
        order = _dummy_order(index)
        prev, cur, found = self._search_dummy(parent_head, order)
        if found:
            head = cur
        else:
            head = _Node(order, True)
            head.next = cur
            prev.next = head
        self._buckets[index] = head
        return head

    @staticmethod
    def _skip_before(head: _Node, order: int):
        prev, cur = head, head.next
        while cur is not None and cur.order < order:
            prev, cur = cur, cur.next
        return prev, cur

    def _search_dummy(self, head: _Node, order: int):
        prev, cur = self._skip_before(head, order)
        found = cur is not None and cur.dummy and cur.order == order
        return prev, cur, found

    def _search(self, head: _Node, order: int, key):
        """Return (prev, cur, found); cur is the match or the insertion point."""
        prev, cur = self._skip_before(head, order)
        while cur is not None and cur.order == order:
            if not cur.dummy and cur.key == key:
                return prev, cur, True
            prev, cur = cur, cur.next
        return prev, cur, False

    def insert(self, key, value) -> bool:
        """Store value under key. Return True if the key is new, False if updated."""
        hash_value = self._hash_of(key)
        order = _regular_order(hash_value)
        with self._lock:
            head = self._bucket_head(hash_value)
            prev, cur, found = self._search(head, order, key)
            if found:
                cur.value = value
                return False
            node = _Node(order, False, key, value)
            node.next = cur
            prev.next = node
            self._size += 1
            # The directory cannot grow past its fixed capacity.
            if (
                (1 << self._power_of_2) * LOAD_FACTOR < self._size
                and (1 << (self._power_of_2 + 1)) <= MAX_BUCKET_SIZE
            ):
                self._power_of_2 += 1
            return True

    def delete(self, key) -> bool:
        """Remove key. Return True if it was present."""
        hash_value = self._hash_of(key)
        order = _regular_order(hash_value)
        with self._lock:
            head = self._bucket_head(hash_value)
            prev, cur, found = self._search(head, order, key)
            if not found:
                return False
            prev.next = cur.next
            self._size -= 1
            return True

    def find(self, key):
        """Return the value stored under key; raise KeyError if absent."""
        hash_value = self._hash_of(key)
        order = _regular_order(hash_value)
        with self._lock:
            head = self._bucket_head(hash_value)
            _, cur, found = self._search(head, order, key)
            if not found:
                raise KeyError(key)
            return cur.value

    def get(self, key, default=None):
        try:
            return self.find(key)
        except KeyError:
            return default

    def __contains__(self, key) -> bool:
        try:
            self.find(key)
        except KeyError:
            return False
        return True