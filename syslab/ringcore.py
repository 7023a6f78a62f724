"""Index arithmetic of a fixed-size ring: head/tail movement and counts.

Producer and consumer each own a head and a tail index. The indexes run
freely over the 32-bit range and are masked only when a slot is addressed,
so subtracting two of them modulo 2**32 always yields a valid distance.
"""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass

__all__ = [
    "CACHE_LINE_SIZE",
    "RING_SZ_MASK",
    "RingFlag",
    "QueueBehavior",
    "HeadTail",
    "RingState",
    "is_power_of_two",
    "align_ceil",
    "memsize",
]

CACHE_LINE_SIZE = 64
RING_SZ_MASK = 0x7FFFFFFF
_U32 = 0xFFFFFFFF
# The ring header occupies six cache lines: settings, pad, prod, pad, cons, pad.
_RING_HEADER_SIZE = 6 * CACHE_LINE_SIZE
_POINTER_SIZE = 8


class RingFlag(enum.IntFlag):
    """Flags supplied when a ring is created."""

    NONE = 0
    SP_ENQ = 0x0001
    SC_DEQ = 0x0002
    EXACT_SZ = 0x0004


class QueueBehavior(enum.Enum):
    """Whether an operation moves exactly ``n`` items or as many as possible."""

    FIXED = 0
    VARIABLE = 1


@dataclass
class HeadTail:
    """Head and tail index of the producer or consumer side."""

    head: int = 0
    tail: int = 0
    single: bool = False


def is_power_of_two(x: int) -> bool:
    """True if ``x`` is a power of two (0 counts, as with the bit test)."""
    return ((x - 1) & x) == 0


def align_ceil(val: int, align: int) -> int:
    """Round ``val`` up to a multiple of the power of two ``align``."""
    return (val + align - 1) & ~(align - 1)


def memsize(count: int) -> int:
    """Bytes a ring of ``count`` slots occupies, rounded to a cache line."""
    if count < 0 or not is_power_of_two(count) or count > RING_SZ_MASK:
        raise ValueError(f"ring size {count} is not a power of two within range")
    return align_ceil(_RING_HEADER_SIZE + count * _POINTER_SIZE, CACHE_LINE_SIZE)


class RingState:
    """Producer/consumer indexes of a ring with ``count`` slots.

    The usable capacity is ``count - 1`` so that a full ring can be told
    apart from an empty one.
    """

    def __init__(self, count, flags=RingFlag.NONE):
        memsize(count)
        if count == 0:
            raise ValueError("ring size must be at least 1")
        self.flags = RingFlag(flags)
        self.size = count
        self.mask = count - 1
        self.capacity = self.mask
        self.prod = HeadTail(single=bool(self.flags & RingFlag.SP_ENQ))
        self.cons = HeadTail(single=bool(self.flags & RingFlag.SC_DEQ))
        self._cas_lock = threading.Lock()
        self._tail_cond = threading.Condition()

    def _compare_exchange_head(self, ht: HeadTail, expected: int, new: int) -> bool:
        with self._cas_lock:
            if ht.head != expected:
                return False
            ht.head = new
            return True

    def move_prod_head(self, is_sp, n, behavior):
        """Reserve room for up to ``n`` items.

        Returns ``(n, old_head, new_head, free_entries)`` where ``n`` is the
        number reserved (0 or ``n`` for FIXED) and ``free_entries`` is the
        free space before the move.
        """
        wanted = n
        while True:
            n = wanted
            old_head = self.prod.head
            free_entries = (self.capacity + self.cons.tail - old_head) & _U32
            if n > free_entries:
                n = 0 if behavior is QueueBehavior.FIXED else free_entries
            if n == 0:
                return 0, old_head, old_head, free_entries
            new_head = (old_head + n) & _U32
            if is_sp:
                self.prod.head = new_head
                return n, old_head, new_head, free_entries
            if self._compare_exchange_head(self.prod, old_head, new_head):
                return n, old_head, new_head, free_entries

    def move_cons_head(self, is_sc, n, behavior):
        """Claim up to ``n`` items for dequeue.

        Returns ``(n, old_head, new_head, entries)`` where ``entries`` is the
        number of items present before the move.
        """
        wanted = n
        while True:
            n = wanted
            old_head = self.cons.head
            entries = (self.prod.tail - old_head) & _U32
            if n > entries:
                n = 0 if behavior is QueueBehavior.FIXED else entries
            if n == 0:
                return 0, old_head, old_head, entries
            new_head = (old_head + n) & _U32
            if is_sc:
                self.cons.head = new_head
                return n, old_head, new_head, entries
            if self._compare_exchange_head(self.cons, old_head, new_head):
                return n, old_head, new_head, entries

    def update_tail(self, ht, old_val, new_val, single):
        """Publish a finished operation by moving ``ht.tail`` to ``new_val``.

        Without ``single``, waits until earlier operations on the same side
        have published their tails.
        """
        with self._tail_cond:
            if not single:
                self._tail_cond.wait_for(lambda: ht.tail == old_val)
            ht.tail = new_val & _U32
            self._tail_cond.notify_all()

    def count(self) -> int:
        """Number of items in the ring."""
        used = (self.prod.tail - self.cons.tail) & self.mask
        return min(used, self.capacity)

    def free_count(self) -> int:
        """Number of free slots in the ring."""
        return self.capacity - self.count()