from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from kdtree_point import KdTreePoint


# NOTE:
# eq is disabled so that nodes are compared by identity.
# Otherwise, comparison walks through parent and children recursively.
@dataclass(eq=False)
class KdTreeNode:
    point: KdTreePoint
    axis: int = 0
    parent: KdTreeNode | None = field(default=None, repr=False)
    left: KdTreeNode | None = None
    right: KdTreeNode | None = None

    def set_left(self, child: KdTreeNode | None):
        """Set left child and wire its parent to this node."""
        self.left = child
        if child is not None:
            child.parent = self

    def set_right(self, child: KdTreeNode | None):
        """Set right child and wire its parent to this node."""
        self.right = child
        if child is not None:
            child.parent = self

    def has_parent(self) -> bool:
        return self.parent is not None

    def is_left_child(self) -> bool:
        return self.has_parent() and self.parent.left is self

    def is_right_child(self) -> bool:
        return self.has_parent() and self.parent.right is self

    def sibling(self) -> KdTreeNode | None:
        """Returns the child on the other side of the parent."""
        if self.is_left_child():
            return self.parent.right
        if self.is_right_child():
            return self.parent.left
        return None

    def iter_subtree(self) -> Iterator[KdTreeNode]:
        """Visit this node and all descendants.

        Order is this node, then left subtree, then right subtree.
        Iterative so that degenerated deep trees don't hit recursion limit.
        """
        stack: list[KdTreeNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            # Push right first to visit left first.
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
