"""Fixed-size block memory pool with a LIFO free list."""

from __future__ import annotations

__all__ = ["PoolExhausted", "MemPool"]


class PoolExhausted(Exception):
    """Raised when no free block is left in the pool."""


class MemPool:
    """A pool of ``block_count`` blocks of ``block_size`` bytes each.

    Blocks are handed out as writable memoryviews into one shared buffer.
    Freed blocks are reused first.
    """

    def __init__(self, block_count, block_size):
        if block_count < 0:
            raise ValueError("block_count must not be negative")
        if block_size <= 0:
            raise ValueError("block_size must be positive")
        self.block_count = block_count
        self.block_size = block_size
        self._memory = bytearray(block_count * block_size)
        self._view = memoryview(self._memory)
        self._blocks = [
            self._view[i * block_size:(i + 1) * block_size] for i in range(block_count)
        ]
        self._index = {id(block): i for i, block in enumerate(self._blocks)}
        self._free = list(range(block_count - 1, -1, -1))
        self._in_use: set[int] = set()
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("memory pool is closed")

    def alloc(self) -> memoryview:
        """Take a block from the pool."""
        self._check_open()
        if not self._free:
            raise PoolExhausted("no free blocks left")
        index = self._free.pop()
        self._in_use.add(index)
        return self._blocks[index]

    def free(self, block) -> None:
        """Return a block obtained from :meth:`alloc` to the pool."""
        self._check_open()
        index = self._index.get(id(block))
        if index is None or self._blocks[index] is not block:
            raise ValueError("block does not belong to this pool")
        if index not in self._in_use:
            raise ValueError("block is already free")
        self._in_use.remove(index)
        self._free.append(index)

    def free_count(self) -> int:
        """Number of blocks available for allocation."""
        return len(self._free)

    def close(self) -> None:
        """Release the pool's memory; blocks become unusable."""
        if self._closed:
            return
        self._closed = True
        for block in self._blocks:
            block.release()
        self._view.release()
        self._blocks = []
        self._index = {}
        self._free = []
        self._in_use = set()