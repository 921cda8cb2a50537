from __future__ import annotations

from typing import Any


class KdTreeError(Exception):
    """Base class for errors raised by the k-d tree."""


class DimensionMismatchError(KdTreeError, ValueError):
    """Point dimensionality differs from the tree's dimensionality."""

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Point has {actual} dimensions, but the tree has {expected}"
        )
        self.expected = expected
        self.actual = actual


class UnsupportedCoordinateTypeError(KdTreeError, TypeError):
    """Coordinate value can't be converted for distance computation."""

    def __init__(self, value: Any):
        super().__init__(
            f"Coordinate type '{type(value).__name__}' doesn't support arithmetic"
        )
        self.value = value


class EmptyPointSetError(KdTreeError, ValueError):
    """Tree is constructed from no points, so dimensionality is unknown."""

    def __init__(self):
        super().__init__("At least one point is required to create the tree")
