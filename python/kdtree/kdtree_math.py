from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from kdtree_errors import UnsupportedCoordinateTypeError

# Coordinate types which can be converted to float for distance computation.
# NOTE:
# bool is a subclass of int, so it has to be rejected explicitly.
PRIMITIVE_NUMERIC_TYPES = (int, float, np.integer, np.floating)
REJECTED_TYPES = (bool, np.bool_)


def to_float(value: Any) -> np.float64:
    """Convert coordinate value to float.

    Args:
        value: Coordinate value.

    Returns:
        Converted value.

    Raises:
        UnsupportedCoordinateTypeError: If value is not primitive numeric type.
    """
    if isinstance(value, REJECTED_TYPES) or not isinstance(
        value, PRIMITIVE_NUMERIC_TYPES
    ):
        raise UnsupportedCoordinateTypeError(value)
    return np.float64(value)


def coordinate_sum(value1: Any, value2: Any) -> float:
    """Returns sum of two coordinate values as float."""
    return float(to_float(value1) + to_float(value2))


def coordinate_difference(value1: Any, value2: Any) -> float:
    """Returns difference of two coordinate values as float."""
    return float(to_float(value1) - to_float(value2))


def coordinate_product(value1: Any, value2: Any) -> float:
    """Returns product of two coordinate values as float."""
    return float(to_float(value1) * to_float(value2))


def squared_distance(point1: Sequence, point2: Sequence, num_dims: int) -> float:
    """Compute squared distance between points.

    Square root is not taken since only ordering of distances matters.

    Args:
        point1: Point.
        point2: Point.
        num_dims: Number of dimensions to be summed.

    Returns:
        Sum of squared differences of each axis.
    """
    dist2 = 0.0
    for axis in range(num_dims):
        delta = coordinate_difference(point1[axis], point2[axis])
        dist2 = coordinate_sum(dist2, coordinate_product(delta, delta))
    return dist2
