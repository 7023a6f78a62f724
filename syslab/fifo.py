"""A singly linked first-in first-out list."""

from __future__ import annotations

from typing import Any, Iterator

__all__ = ["FifoList"]


class _Node:
    __slots__ = ("data", "next")

    def __init__(self, data: Any) -> None:
        self.data = data
        self.next: _Node | None = None


class FifoList:
    """FIFO list with O(1) append at the tail and removal at the head."""

    def __init__(self) -> None:
        self._head: _Node | None = None
        self._tail: _Node | None = None
        self._length = 0

    def push_back(self, data) -> None:
        """Append ``data`` at the tail."""
        node = _Node(data)
        if self._tail is None:
            self._head = self._tail = node
        else:
            self._tail.next = node
            self._tail = node
        self._length += 1

    def pop_front(self):
        """Remove and return the item at the head; IndexError if empty."""
        if self._head is None:
            raise IndexError("pop from empty FifoList")
        node = self._head
        self._head = node.next
        if self._head is None:
            self._tail = None
        self._length -= 1
        return node.data

    def clear(self) -> None:
        """Remove every item."""
        self._head = self._tail = None
        self._length = 0

    def is_empty(self) -> bool:
        return self._head is None

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator:
        node = self._head
        while node is not None:
            yield node.data
            node = node.next