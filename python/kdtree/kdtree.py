from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, NamedTuple

import numpy as np
from kdtree_errors import DimensionMismatchError, EmptyPointSetError, KdTreeError
from kdtree_math import coordinate_difference, squared_distance
from kdtree_node import KdTreeNode
from kdtree_point import KdTreePoint

logger = logging.getLogger(__name__)


class _Descent(NamedTuple):
    """Result of walking down the tree toward a point."""

    # Node which has exactly the same point. None if not found.
    found: KdTreeNode | None
    # Last node visited before reaching empty branch.
    last: KdTreeNode | None
    # Number of steps. Each step advances the axis by one.
    steps: int
    # Whether the empty branch is the left child of the last node.
    went_left: bool


class KdTree:
    """k-d tree which is rebuilt entirely when a point is removed.

    Besides the node structure, the tree keeps the flat list of all points
    to rebuild the structure.
    """

    def __init__(self, points: Iterable):
        """Create tree from points.

        Args:
            points: Non-empty collection of points. KdTreePoint, any sequence or
                NDArray whose rows are points are accepted.

        Raises:
            EmptyPointSetError: If no point is specified.
            DimensionMismatchError: If points don't have the same dimensions.
        """
        # Accept any list type by converting to KdTreePoint.
        if isinstance(points, np.ndarray):
            points = list(points)
        self._points: list[KdTreePoint] = [
            p if isinstance(p, KdTreePoint) else KdTreePoint.from_sequence(p)
            for p in points
        ]

        if len(self._points) == 0:
            raise EmptyPointSetError()

        # Dimensions of the first point decides the tree's dimensions.
        self._num_dims = self._points[0].num_dims
        for point in self._points:
            self._check_dims(point)

        self.root: KdTreeNode | None = KdTree.create(self._points, 0, self._num_dims)
        logger.debug(
            f"Created tree from {len(self._points)} points with {self._num_dims} dimensions"
        )

    @staticmethod
    def create(
        points: list[KdTreePoint], depth: int = 0, num_dims: int | None = None
    ) -> KdTreeNode | None:
        """Create subtree from points recursively.

        Points which have the same value as the median on the splitting axis
        are dropped from the subtree.

        Args:
            points: Points to be stored in subtree.
            depth: Depth of subtree root.
            num_dims: Number of dimensions. If None, the first point decides it.

        Returns:
            Root of created subtree. If no point is specified, returns None.
        """
        if len(points) == 0:
            return None

        if num_dims is None:
            num_dims = points[0].num_dims

        # Decide which axis for splitting.
        axis = depth % num_dims

        # Sort with the specified axis value. So, key to be sorted is the axis indexed element.
        sorted_points = sorted(points, key=lambda point: point[axis])

        median = len(sorted_points) // 2
        median_point = sorted_points[median]

        lower = [p for p in sorted_points if p[axis] < median_point[axis]]
        upper = [p for p in sorted_points if p[axis] > median_point[axis]]

        node = KdTreeNode(point=median_point, axis=axis)
        node.set_left(KdTree.create(lower, depth + 1, num_dims))
        node.set_right(KdTree.create(upper, depth + 1, num_dims))
        return node

    @property
    def num_dims(self) -> int:
        return self._num_dims

    @property
    def points(self) -> list[KdTreePoint]:
        """Copy of the flat list of all points owned by the tree."""
        return list(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[KdTreePoint]:
        """Iterate points stored in nodes.

        Points dropped at construction are not yielded though they are
        counted by len().
        """
        if self.root is None:
            return
        for node in self.root.iter_subtree():
            yield node.point

    def __contains__(self, point: KdTreePoint) -> bool:
        return self.contains(point)

    def height(self) -> int:
        """Returns number of nodes on the longest path from root."""
        if self.root is None:
            return 0
        height = 0
        stack = [(self.root, 1)]
        while stack:
            node, level = stack.pop()
            height = max(height, level)
            for child in (node.left, node.right):
                if child is not None:
                    stack.append((child, level + 1))
        return height

    def add(self, point: KdTreePoint) -> bool:
        """Add point to tree.

        No rebalancing happens, so many insertions may degenerate the tree.

        Args:
            point: Point to be added.

        Returns:
            If point is added, returns True. If the same point already exists, returns False.

        Raises:
            DimensionMismatchError: If dimensions of point differ from tree's.
        """
        point = self._as_point(point)

        if self.root is None:
            self.root = KdTreeNode(point=point, axis=0)
            self._points.append(point)
            logger.debug(f"Added {point} as root")
            return True

        descent = self._descend(point)
        if descent.found is not None:
            return False

        node = KdTreeNode(point=point, axis=descent.steps % self._num_dims)
        if descent.went_left:
            descent.last.set_left(node)
        else:
            descent.last.set_right(node)
        self._points.append(point)

        logger.debug(f"Added {point} under {descent.last.point}")
        return True

    def contains(self, point: KdTreePoint) -> bool:
        """Check if tree has the point.

        Raises:
            DimensionMismatchError: If dimensions of point differ from tree's.
        """
        return self.find(point) is not None

    def find(self, point: KdTreePoint) -> KdTreeNode | None:
        """Find node which has the point.

        Args:
            point: Point to be found.

        Returns:
            Node which has the same point. If not found, returns None.

        Raises:
            DimensionMismatchError: If dimensions of point differ from tree's.
        """
        point = self._as_point(point)
        if self.root is None:
            return None
        return self._descend(point).found

    def nearest_neighbour(self, point: KdTreePoint) -> KdTreePoint | None:
        """Search the nearest point to the specified point.

        Walk down like add, then walk back up to root. At each ancestor, if
        the current nearest distance crosses the ancestor's splitting plane,
        the whole subtree on the other side is scanned without pruning.
        The ancestor itself is taken into account only when that subtree exists.
        So the cost is not always O(log n).

        Args:
            point: Point to be queried.

        Returns:
            The nearest point. If the point exists in tree, returns the specified point itself.
            If tree is empty, returns None.

        Raises:
            DimensionMismatchError: If dimensions of point differ from tree's.
            UnsupportedCoordinateTypeError: If coordinate can't be used for distance.
            KdTreeError: If no distance can be compared, e.g. NaN coordinate.
        """
        point = self._as_point(point)
        if self.root is None:
            return None

        descent = self._descend(point)
        if descent.found is not None:
            return point

        candidates: list[tuple[KdTreePoint, float]] = []
        min_dist2 = self._scan_subtree(descent.last, point, candidates, math.inf)

        # Axis of the parent of the last node.
        axis = descent.steps - 2
        node = descent.last
        while node.parent is not None:
            ancestor = node.parent
            delta = coordinate_difference(
                point[axis % self._num_dims], ancestor.point[axis % self._num_dims]
            )

            # If the sphere of current nearest distance crosses the splitting plane,
            # the other side may have nearer point.
            if min_dist2 > delta * delta:
                dist2 = squared_distance(point, ancestor.point, self._num_dims)
                candidates.append((ancestor.point, dist2))

                # Ancestor's distance counts only together with the other side.
                sibling = node.sibling()
                if sibling is not None:
                    min_dist2 = min(min_dist2, dist2)
                    min_dist2 = self._scan_subtree(sibling, point, candidates, min_dist2)

            node = ancestor
            axis -= 1

        # Return the first one in collected order if several points have the same distance.
        nearest = next(
            (candidate for candidate, dist2 in candidates if dist2 == min_dist2), None
        )
        if nearest is None:
            # Every distance is NaN.
            raise KdTreeError(f"Can't compute distance from {point}")
        return nearest

    def remove(self, point: KdTreePoint) -> bool:
        """Remove point and rebuild the entire tree.

        Args:
            point: Point to be removed.

        Returns:
            If point is removed, returns True. If no such point, returns False.

        Raises:
            DimensionMismatchError: If dimensions of point differ from tree's.
        """
        point = self._as_point(point)

        if point not in self._points:
            return False

        self._points.remove(point)
        self.root = KdTree.create(self._points, 0, self._num_dims)

        logger.debug(f"Removed {point} and rebuilt tree from {len(self._points)} points")
        return True

    def _as_point(self, point) -> KdTreePoint:
        """Convert sequence to point and check its dimensions."""
        if not isinstance(point, KdTreePoint):
            point = KdTreePoint.from_sequence(point)
        self._check_dims(point)
        return point

    def _check_dims(self, point: KdTreePoint):
        if len(point) != self._num_dims:
            raise DimensionMismatchError(self._num_dims, len(point))

    def _descend(self, point: KdTreePoint) -> _Descent:
        """Walk down from root toward the point.

        If the point has the same value as the node on the current axis,
        stay at the node and compare with the next axis.
        """
        node = self.root
        last = None
        went_left = False
        steps = 0
        stayed = 0

        while node is not None:
            if point == node.point:
                return _Descent(node, last, steps, went_left)

            last = node
            axis = steps % self._num_dims
            if point[axis] < node.point[axis]:
                node = node.left
                went_left = True
                stayed = 0
            elif point[axis] > node.point[axis]:
                node = node.right
                went_left = False
                stayed = 0
            else:
                stayed += 1
                # Not equal, but no axis orders them. e.g. NaN.
                if stayed >= self._num_dims:
                    raise KdTreeError(f"Can't order {point} against {node.point}")
            steps += 1

        return _Descent(None, last, steps, went_left)

    def _scan_subtree(
        self,
        node: KdTreeNode,
        point: KdTreePoint,
        candidates: list[tuple[KdTreePoint, float]],
        min_dist2: float,
    ) -> float:
        """Compute distance to all points in subtree.

        Args:
            node: Root of subtree to be scanned.
            point: Query point.
            candidates: List to store scanned points and their squared distances.
            min_dist2: Current minimum squared distance.

        Returns:
            Updated minimum squared distance.
        """
        for child in node.iter_subtree():
            dist2 = squared_distance(point, child.point, self._num_dims)
            candidates.append((child.point, dist2))
            min_dist2 = min(min_dist2, dist2)
        return min_dist2
