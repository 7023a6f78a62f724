"""Red-black tree with a shared black sentinel for leaves."""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, field
from typing import Any, Iterator

__all__ = ["Color", "RBNode", "RBTree", "main"]


class Color(enum.IntEnum):
    """Node colour."""

    RED = 1
    BLACK = 2


@dataclass(eq=False)
class RBNode:
    """A tree node; leaves point at the tree's ``nil`` sentinel."""

    key: Any
    value: Any = None
    color: Color = Color.BLACK
    left: RBNode | None = field(default=None, repr=False)
    right: RBNode | None = field(default=None, repr=False)
    parent: RBNode | None = field(default=None, repr=False)


class RBTree:
    """Balanced binary search tree with unique keys."""

    def __init__(self) -> None:
        self.nil = RBNode(key=None, color=Color.BLACK)
        self.nil.left = self.nil.right = self.nil.parent = self.nil
        self.root: RBNode = self.nil
        self._size = 0

    def _mini(self, x: RBNode) -> RBNode:
        while x.left is not self.nil:
            x = x.left
        return x

    def _maxi(self, x: RBNode) -> RBNode:
        while x.right is not self.nil:
            x = x.right
        return x

    def _successor(self, x: RBNode) -> RBNode:
        if x.right is not self.nil:
            return self._mini(x.right)
        y = x.parent
        while y is not self.nil and x is y.right:
            x = y
            y = y.parent
        return y

    def _left_rotate(self, x: RBNode) -> None:
        y = x.right
        x.right = y.left
        if y.left is not self.nil:
            y.left.parent = x
        y.parent = x.parent
        if x.parent is self.nil:
            self.root = y
        elif x is x.parent.left:
            x.parent.left = y
        else:
            x.parent.right = y
        y.left = x
        x.parent = y

    def _right_rotate(self, y: RBNode) -> None:
        x = y.left
        y.left = x.right
        if x.right is not self.nil:
            x.right.parent = y
        x.parent = y.parent
        if y.parent is self.nil:
            self.root = x
        elif y is y.parent.right:
            y.parent.right = x
        else:
            y.parent.left = x
        x.right = y
        y.parent = x

    def _insert_fixup(self, z: RBNode) -> None:
        while z.parent.color == Color.RED:
            grand = z.parent.parent
            if z.parent is grand.left:
                y = grand.right
                if y.color == Color.RED:
                    z.parent.color = Color.BLACK
                    y.color = Color.BLACK
                    grand.color = Color.RED
                    z = grand
                else:
                    if z is z.parent.right:
                        z = z.parent
                        self._left_rotate(z)
                    z.parent.color = Color.BLACK
                    z.parent.parent.color = Color.RED
                    self._right_rotate(z.parent.parent)
            else:
                y = grand.left
                if y.color == Color.RED:
                    z.parent.color = Color.BLACK
                    y.color = Color.BLACK
                    grand.color = Color.RED
                    z = grand
                else:
                    if z is z.parent.left:
                        z = z.parent
                        self._right_rotate(z)
                    z.parent.color = Color.BLACK
                    z.parent.parent.color = Color.RED
                    self._left_rotate(z.parent.parent)
        self.root.color = Color.BLACK

    def insert(self, key, value=None) -> RBNode:
        """Insert ``key``; an existing key is left unchanged.

        Returns the node holding ``key``.
        """
        y = self.nil
        x = self.root
        while x is not self.nil:
            y = x
            if key < x.key:
                x = x.left
            elif key > x.key:
                x = x.right
            else:
                return x
        z = RBNode(key, value, Color.RED, self.nil, self.nil, y)
        if y is self.nil:
            self.root = z
        elif key < y.key:
            y.left = z
        else:
            y.right = z
        self._size += 1
        self._insert_fixup(z)
        return z

    def _delete_fixup(self, x: RBNode) -> None:
        while x is not self.root and x.color == Color.BLACK:
            if x is x.parent.left:
                w = x.parent.right
                if w.color == Color.RED:
                    w.color = Color.BLACK
                    x.parent.color = Color.RED
                    self._left_rotate(x.parent)
                    w = x.parent.right
                if w.left.color == Color.BLACK and w.right.color == Color.BLACK:
                    w.color = Color.RED
                    x = x.parent
                else:
                    if w.right.color == Color.BLACK:
                        w.left.color = Color.BLACK
                        w.color = Color.RED
                        self._right_rotate(w)
                        w = x.parent.right
                    w.color = x.parent.color
                    x.parent.color = Color.BLACK
                    w.right.color = Color.BLACK
                    self._left_rotate(x.parent)
                    x = self.root
            else:
                w = x.parent.left
                if w.color == Color.RED:
                    w.color = Color.BLACK
                    x.parent.color = Color.RED
                    self._right_rotate(x.parent)
                    w = x.parent.left
                if w.left.color == Color.BLACK and w.right.color == Color.BLACK:
                    w.color = Color.RED
                    x = x.parent
                else:
                    if w.left.color == Color.BLACK:
                        w.right.color = Color.BLACK
                        w.color = Color.RED
                        self._left_rotate(w)
                        w = x.parent.left
                    w.color = x.parent.color
                    x.parent.color = Color.BLACK
                    w.left.color = Color.BLACK
                    self._right_rotate(x.parent)
                    x = self.root
        x.color = Color.BLACK

    def delete(self, key):
        """Remove ``key`` and return its value; KeyError if absent."""
        z = self._search(key)
        if z is self.nil:
            raise KeyError(key)
        removed_value = z.value
        if z.left is self.nil or z.right is self.nil:
            y = z
        else:
            y = self._successor(z)
        x = y.left if y.left is not self.nil else y.right
        x.parent = y.parent
        if y.parent is self.nil:
            self.root = x
        elif y is y.parent.left:
            y.parent.left = x
        else:
            y.parent.right = x
        if y is not z:
            z.key = y.key
            z.value = y.value
        if y.color == Color.BLACK:
            self._delete_fixup(x)
        self.nil.parent = self.nil
        self._size -= 1
        y.left = y.right = y.parent = None
        return removed_value

    def _search(self, key) -> RBNode:
        node = self.root
        while node is not self.nil:
            if key < node.key:
                node = node.left
            elif key > node.key:
                node = node.right
            else:
                return node
        return self.nil

    def search(self, key) -> RBNode | None:
        """Return the node holding ``key``, or None."""
        node = self._search(key)
        return None if node is self.nil else node

    def minimum(self) -> RBNode | None:
        """Node with the smallest key, or None when empty."""
        return None if self.root is self.nil else self._mini(self.root)

    def maximum(self) -> RBNode | None:
        """Node with the largest key, or None when empty."""
        return None if self.root is self.nil else self._maxi(self.root)

    def successor(self, node) -> RBNode | None:
        """Node following ``node`` in key order, or None after the last."""
        following = self._successor(node)
        return None if following is self.nil else following

    def _inorder(self) -> Iterator[RBNode]:
        stack: list[RBNode] = []
        node = self.root
        while stack or node is not self.nil:
            if node is not self.nil:
                stack.append(node)
                node = node.left
            else:
                node = stack.pop()
                yield node
                node = node.right

    def traversal(self) -> list[tuple[Any, Color]]:
        """``(key, color)`` pairs in key order."""
        return [(node.key, node.color) for node in self._inorder()]

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key) -> bool:
        return self._search(key) is not self.nil


_DEMO_KEYS = [24, 25, 13, 35, 23, 26, 67, 47, 38, 98, 20, 19, 17, 49, 12, 21, 9, 18, 14, 15]
_SEPARATOR = "----------------------------------------"


def _print_tree(tree: RBTree) -> None:
    for key, color in tree.traversal():
        print(f"key:{key}, color:{int(color)}")
    print(_SEPARATOR)


def main(argv=None) -> int:
    """Insert sample keys, then delete them one by one, printing the tree."""
    tree = RBTree()
    for key in _DEMO_KEYS:
        tree.insert(key)
    _print_tree(tree)
    for key in _DEMO_KEYS:
        tree.delete(key)
        _print_tree(tree)
    return 0


if __name__ == "__main__":
    sys.exit(main())