"""Fixed-size FIFO ring of object references with bulk and burst operations."""

from __future__ import annotations

import sys
from typing import Any, Iterable

from syslab.ringcore import QueueBehavior, RingFlag, RingState, memsize

__all__ = ["RingFull", "RingEmpty", "Ring", "main"]


class RingFull(Exception):
    """Raised when there is not enough room in the ring."""


class RingEmpty(Exception):
    """Raised when there are not enough items in the ring."""


class Ring:
    """A ring of ``count`` slots (a power of two) holding ``count - 1`` items.

    Producer and consumer modes follow the flags given at creation:
    ``RingFlag.SP_ENQ`` selects single-producer enqueue and
    ``RingFlag.SC_DEQ`` single-consumer dequeue; otherwise several threads
    may enqueue or dequeue at once.
    """

    def __init__(self, count, flags=RingFlag.NONE):
        self._state = RingState(count, flags)
        self._slots: list[Any] = [None] * count

    def _do_enqueue(self, objs: Iterable, behavior: QueueBehavior) -> tuple[int, int]:
        items = list(objs)
        state = self._state
        is_sp = state.prod.single
        n, old_head, new_head, free_entries = state.move_prod_head(is_sp, len(items), behavior)
        if n:
            mask = state.mask
            for offset, obj in enumerate(items[:n]):
                self._slots[(old_head + offset) & mask] = obj
            state.update_tail(state.prod, old_head, new_head, is_sp)
        return n, free_entries - n

    def _do_dequeue(self, n: int, behavior: QueueBehavior) -> tuple[list, int]:
        if n < 0:
            raise ValueError("number of items must not be negative")
        state = self._state
        is_sc = state.cons.single
        n, old_head, new_head, entries = state.move_cons_head(is_sc, n, behavior)
        items: list = []
        if n:
            mask = state.mask
            for offset in range(n):
                idx = (old_head + offset) & mask
                items.append(self._slots[idx])
                self._slots[idx] = None
            state.update_tail(state.cons, old_head, new_head, is_sc)
        return items, entries - n

    def enqueue_bulk(self, objs) -> int:
        """Enqueue all of ``objs`` or none; return the free space left.

        Raises RingFull when they do not all fit.
        """
        items = list(objs)
        n, free_space = self._do_enqueue(items, QueueBehavior.FIXED)
        if n != len(items):
            raise RingFull(f"no room for {len(items)} items")
        return free_space

    def enqueue_burst(self, objs) -> int:
        """Enqueue as many of ``objs`` as fit; return how many were enqueued."""
        n, _ = self._do_enqueue(objs, QueueBehavior.VARIABLE)
        return n

    def enqueue(self, obj) -> None:
        """Enqueue one object; raises RingFull if the ring is full."""
        self.enqueue_bulk((obj,))

    def dequeue_bulk(self, n) -> list:
        """Dequeue exactly ``n`` objects; raises RingEmpty if fewer are present."""
        items, _ = self._do_dequeue(n, QueueBehavior.FIXED)
        if len(items) != n:
            raise RingEmpty(f"fewer than {n} items in the ring")
        return items

    def dequeue_burst(self, n) -> list:
        """Dequeue up to ``n`` objects; the list is empty if the ring is."""
        items, _ = self._do_dequeue(n, QueueBehavior.VARIABLE)
        return items

    def dequeue(self):
        """Dequeue one object; raises RingEmpty if the ring is empty."""
        return self.dequeue_bulk(1)[0]

    def count(self) -> int:
        """Number of items in the ring."""
        return self._state.count()

    def free_count(self) -> int:
        """Number of free slots in the ring."""
        return self._state.free_count()

    def full(self) -> bool:
        return self.free_count() == 0

    def empty(self) -> bool:
        return self.count() == 0

    def size(self) -> int:
        """Size of the slot table (not the usable space)."""
        return self._state.size

    def capacity(self) -> int:
        """Number of items the ring can hold."""
        return self._state.capacity

    def dump(self) -> str:
        """Describe the ring's settings and indexes, one field per line."""
        state = self._state
        lines = [
            f"  flags={int(state.flags):x}",
            f"  size={state.size}",
            f"  capacity={state.capacity}",
            f"  ct={state.cons.tail}",
            f"  ch={state.cons.head}",
            f"  pt={state.prod.tail}",
            f"  ph={state.prod.head}",
            f"  used={self.count()}",
            f"  avail={self.free_count()}",
        ]
        return "\n".join(lines)


def main(argv=None) -> int:
    """Exercise a 1024-slot ring with integers and strings."""
    args = sys.argv if argv is None else list(argv)
    print(args[0] if args else "ring")
    ring = Ring(1024)
    print(f"memsize={memsize(1024)}")

    ring.enqueue_burst(range(1, 9))
    print(ring.dump())
    for value in ring.dequeue_burst(8):
        print(value)

    ring.enqueue_burst(["123", "156", "189"])
    for text in ring.dequeue_burst(3):
        print(text)
    print(ring.dump())
    return 0