"""Unbalanced binary search tree with the four classic traversals."""

from __future__ import annotations

import sys
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Iterator

__all__ = ["TreeNode", "BinarySearchTree", "main"]


@dataclass(eq=False)
class TreeNode:
    """A tree node holding a key, a value and links to its neighbours."""

    key: Any
    value: Any = None
    parent: TreeNode | None = field(default=None, repr=False)
    left: TreeNode | None = field(default=None, repr=False)
    right: TreeNode | None = field(default=None, repr=False)


class BinarySearchTree:
    """Binary search tree keyed by comparable keys; keys are unique."""

    def __init__(self) -> None:
        self.root: TreeNode | None = None

    def insert(self, key, value=None) -> TreeNode:
        """Insert ``key``; an existing key has its value replaced.

        Returns the node that now holds ``key``.
        """
        if self.root is None:
            self.root = TreeNode(key, value)
            return self.root
        node = self.root
        while True:
            if key == node.key:
                node.value = value
                return node
            if key < node.key:
                if node.left is None:
                    node.left = TreeNode(key, value, parent=node)
                    return node.left
                node = node.left
            else:
                if node.right is None:
                    node.right = TreeNode(key, value, parent=node)
                    return node.right
                node = node.right

    def find(self, key) -> TreeNode | None:
        """Return the node holding ``key``, or None."""
        node = self.root
        while node is not None and node.key != key:
            node = node.left if key < node.key else node.right
        return node

    def _transplant(self, old: TreeNode, new: TreeNode | None) -> None:
        parent = old.parent
        if parent is None:
            self.root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new
        if new is not None:
            new.parent = parent

    def delete(self, key) -> None:
        """Remove ``key`` from the tree; KeyError if it is absent."""
        node = self.find(key)
        if node is None:
            raise KeyError(key)
        if node.left is None:
            self._transplant(node, node.right)
        elif node.right is None:
            self._transplant(node, node.left)
        else:
            successor = node.right
            while successor.left is not None:
                successor = successor.left
            if successor.parent is not node:
                self._transplant(successor, successor.right)
                successor.right = node.right
                successor.right.parent = successor
            self._transplant(node, successor)
            successor.left = node.left
            successor.left.parent = successor
        node.parent = node.left = node.right = None

    def _preorder_nodes(self) -> Iterator[TreeNode]:
        stack = [self.root] if self.root is not None else []
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def _inorder_nodes(self) -> Iterator[TreeNode]:
        stack: list[TreeNode] = []
        node = self.root
        while stack or node is not None:
            if node is not None:
                stack.append(node)
                node = node.left
            else:
                node = stack.pop()
                yield node
                node = node.right

    def _postorder_nodes(self) -> Iterator[TreeNode]:
        stack: list[TreeNode] = []
        last: TreeNode | None = None
        node = self.root
        while stack or node is not None:
            if node is not None:
                stack.append(node)
                node = node.left
                continue
            top = stack[-1]
            if top.right is not None and last is not top.right:
                node = top.right
            else:
                yield top
                last = stack.pop()

    def _level_nodes(self) -> Iterator[TreeNode]:
        queue = deque([self.root] if self.root is not None else [])
        while queue:
            node = queue.popleft()
            yield node
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)

    def preorder(self) -> list:
        """Values in root-left-right order."""
        return [n.value for n in self._preorder_nodes()]

    def inorder(self) -> list:
        """Values in left-root-right order, i.e. sorted by key."""
        return [n.value for n in self._inorder_nodes()]

    def postorder(self) -> list:
        """Values in left-right-root order."""
        return [n.value for n in self._postorder_nodes()]

    def level_order(self) -> list:
        """Values level by level, left to right."""
        return [n.value for n in self._level_nodes()]

    def clear(self) -> None:
        """Remove every node."""
        for node in list(self._postorder_nodes()):
            node.parent = node.left = node.right = None
        self.root = None


_DEMO = [
    (50, "A"), (30, "B"), (80, "C"), (20, "D"), (40, "E"),
    (70, "F"), (90, "G"), (19, "H"), (21, "I"), (31, "J"),
    (41, "K"), (51, "L"), (71, "M"), (81, "N"), (91, "O"),
]


def main(argv=None) -> int:
    """Build a sample tree and print its traversals."""
    args = sys.argv if argv is None else list(argv)
    print(args[0] if args else "bintree")
    tree = BinarySearchTree()
    for key, value in _DEMO:
        node = tree.insert(key, value)
        print(f"{node.key}:{node.value}")
    for values in (tree.preorder(), tree.inorder(), tree.postorder(), tree.level_order()):
        print(" ".join(values) + " ")
    print("-----------------------------")
    tree.clear()
    return 0