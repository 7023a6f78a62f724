"""Intrusive linked lists and queues: list, singly linked list, tail queues
and a circular queue.

Every container links :class:`Node` objects directly through their ``next``
and ``prev`` attributes, so a node belongs to at most one container at a
time. Iteration yields the nodes themselves; the successor is looked up
before a node is yielded, so the current node may be removed while
iterating.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

__all__ = [
    "Node",
    "ListHead",
    "SListHead",
    "STailQHead",
    "TailQHead",
    "CircleQHead",
]


@dataclass(eq=False)
class Node:
    """An element that can be linked into one of the containers."""

    value: Any = None
    next: Node | None = field(default=None, repr=False)
    prev: Node | None = field(default=None, repr=False)


def _detach(node: Node) -> None:
    node.next = None
    node.prev = None


def _forward(start: Node | None) -> Iterator[Node]:
    node = start
    while node is not None:
        following = node.next
        yield node
        node = following


def _backward(start: Node | None) -> Iterator[Node]:
    node = start
    while node is not None:
        preceding = node.prev
        yield node
        node = preceding


class ListHead:
    """Doubly linked list reachable from its first element."""

    def __init__(self) -> None:
        self._first: Node | None = None

    def insert_head(self, node: Node) -> None:
        """Link ``node`` in as the first element."""
        node.next = self._first
        node.prev = None
        if self._first is not None:
            self._first.prev = node
        self._first = node

    def insert_after(self, listelm: Node, node: Node) -> None:
        """Link ``node`` in right after ``listelm``."""
        node.next = listelm.next
        if node.next is not None:
            node.next.prev = node
        listelm.next = node
        node.prev = listelm

    def insert_before(self, listelm: Node, node: Node) -> None:
        """Link ``node`` in right before ``listelm``."""
        node.prev = listelm.prev
        node.next = listelm
        if listelm.prev is None:
            self._first = node
        else:
            listelm.prev.next = node
        listelm.prev = node

    def remove(self, node: Node) -> None:
        """Unlink ``node`` from the list."""
        if node.next is not None:
            node.next.prev = node.prev
        if node.prev is None:
            self._first = node.next
        else:
            node.prev.next = node.next
        _detach(node)

    def first(self) -> Node | None:
        return self._first

    def next(self, node: Node) -> Node | None:
        return node.next

    def is_empty(self) -> bool:
        return self._first is None

    def __iter__(self) -> Iterator[Node]:
        return _forward(self._first)


class SListHead:
    """Singly linked list; removal of an arbitrary element is linear."""

    def __init__(self) -> None:
        self._first: Node | None = None

    def insert_head(self, node: Node) -> None:
        node.next = self._first
        self._first = node

    def insert_after(self, listelm: Node, node: Node) -> None:
        node.next = listelm.next
        listelm.next = node

    def remove_head(self) -> Node:
        """Unlink and return the first element; IndexError if empty."""
        node = self._first
        if node is None:
            raise IndexError("remove from empty list")
        self._first = node.next
        _detach(node)
        return node

    def remove(self, node: Node) -> None:
        """Unlink ``node``; ValueError if it is not in the list."""
        if self._first is node:
            self.remove_head()
            return
        current = self._first
        while current is not None and current.next is not node:
            current = current.next
        if current is None:
            raise ValueError("node is not in the list")
        current.next = node.next
        _detach(node)

    def first(self) -> Node | None:
        return self._first

    def next(self, node: Node) -> Node | None:
        return node.next

    def is_empty(self) -> bool:
        return self._first is None

    def __iter__(self) -> Iterator[Node]:
        return _forward(self._first)


class STailQHead:
    """Singly linked tail queue: O(1) insertion at both ends."""

    def __init__(self) -> None:
        self._first: Node | None = None
        self._last: Node | None = None

    def insert_head(self, node: Node) -> None:
        node.next = self._first
        if self._first is None:
            self._last = node
        self._first = node

    def insert_tail(self, node: Node) -> None:
        node.next = None
        if self._last is None:
            self._first = node
        else:
            self._last.next = node
        self._last = node

    def insert_after(self, listelm: Node, node: Node) -> None:
        node.next = listelm.next
        if node.next is None:
            self._last = node
        listelm.next = node

    def remove_head(self) -> Node:
        """Unlink and return the first element; IndexError if empty."""
        node = self._first
        if node is None:
            raise IndexError("remove from empty queue")
        self._first = node.next
        if self._first is None:
            self._last = None
        _detach(node)
        return node

    def remove(self, node: Node) -> None:
        """Unlink ``node``; ValueError if it is not in the queue."""
        if self._first is node:
            self.remove_head()
            return
        current = self._first
        while current is not None and current.next is not node:
            current = current.next
        if current is None:
            raise ValueError("node is not in the queue")
        current.next = node.next
        if current.next is None:
            self._last = current
        _detach(node)

    def concat(self, other: STailQHead) -> None:
        """Move every element of ``other`` to the end of this queue."""
        if other.is_empty():
            return
        if self._last is None:
            self._first = other._first
        else:
            self._last.next = other._first
        self._last = other._last
        other._first = other._last = None

    def first(self) -> Node | None:
        return self._first

    def next(self, node: Node) -> Node | None:
        return node.next

    def is_empty(self) -> bool:
        return self._first is None

    def __iter__(self) -> Iterator[Node]:
        return _forward(self._first)


class TailQHead:
    """Doubly linked tail queue, traversable in both directions."""

    def __init__(self) -> None:
        self._first: Node | None = None
        self._last: Node | None = None

    def insert_head(self, node: Node) -> None:
        node.next = self._first
        node.prev = None
        if self._first is not None:
            self._first.prev = node
        else:
            self._last = node
        self._first = node

    def insert_tail(self, node: Node) -> None:
        node.next = None
        node.prev = self._last
        if self._last is not None:
            self._last.next = node
        else:
            self._first = node
        self._last = node

    def insert_after(self, listelm: Node, node: Node) -> None:
        node.next = listelm.next
        if node.next is not None:
            node.next.prev = node
        else:
            self._last = node
        listelm.next = node
        node.prev = listelm

    def insert_before(self, listelm: Node, node: Node) -> None:
        node.prev = listelm.prev
        node.next = listelm
        if listelm.prev is None:
            self._first = node
        else:
            listelm.prev.next = node
        listelm.prev = node

    def remove(self, node: Node) -> None:
        if node.next is not None:
            node.next.prev = node.prev
        else:
            self._last = node.prev
        if node.prev is not None:
            node.prev.next = node.next
        else:
            self._first = node.next
        _detach(node)

    def concat(self, other: TailQHead) -> None:
        """Move every element of ``other`` to the end of this queue."""
        if other.is_empty():
            return
        if self._last is None:
            self._first = other._first
        else:
            self._last.next = other._first
            other._first.prev = self._last
        self._last = other._last
        other._first = other._last = None

    def first(self) -> Node | None:
        return self._first

    def last(self) -> Node | None:
        return self._last

    def next(self, node: Node) -> Node | None:
        return node.next

    def prev(self, node: Node) -> Node | None:
        return node.prev

    def is_empty(self) -> bool:
        return self._first is None

    def __iter__(self) -> Iterator[Node]:
        return _forward(self._first)

    def __reversed__(self) -> Iterator[Node]:
        return _backward(self._last)


class CircleQHead:
    """Circular queue: the last element wraps round to the first."""

    def __init__(self) -> None:
        self._first: Node | None = None
        self._last: Node | None = None

    def insert_after(self, listelm: Node, node: Node) -> None:
        node.next = listelm.next
        node.prev = listelm
        if listelm.next is None:
            self._last = node
        else:
            listelm.next.prev = node
        listelm.next = node

    def insert_before(self, listelm: Node, node: Node) -> None:
        node.next = listelm
        node.prev = listelm.prev
        if listelm.prev is None:
            self._first = node
        else:
            listelm.prev.next = node
        listelm.prev = node

    def insert_head(self, node: Node) -> None:
        node.next = self._first
        node.prev = None
        if self._last is None:
            self._last = node
        else:
            self._first.prev = node
        self._first = node

    def insert_tail(self, node: Node) -> None:
        node.next = None
        node.prev = self._last
        if self._first is None:
            self._first = node
        else:
            self._last.next = node
        self._last = node

    def remove(self, node: Node) -> None:
        if node.next is None:
            self._last = node.prev
        else:
            node.next.prev = node.prev
        if node.prev is None:
            self._first = node.next
        else:
            node.prev.next = node.next
        _detach(node)

    def first(self) -> Node | None:
        return self._first

    def last(self) -> Node | None:
        return self._last

    def next(self, node: Node) -> Node | None:
        """Following element, or None after the last one."""
        return node.next

    def prev(self, node: Node) -> Node | None:
        """Preceding element, or None before the first one."""
        return node.prev

    def loop_next(self, node: Node) -> Node | None:
        """Following element, wrapping from the last to the first."""
        return node.next if node.next is not None else self._first

    def loop_prev(self, node: Node) -> Node | None:
        """Preceding element, wrapping from the first to the last."""
        return node.prev if node.prev is not None else self._last

    def is_empty(self) -> bool:
        return self._first is None

    def __iter__(self) -> Iterator[Node]:
        return _forward(self._first)

    def __reversed__(self) -> Iterator[Node]:
        return _backward(self._last)