from decimal import Decimal
from fractions import Fraction

import numpy as np
import pytest
from kdtree_errors import UnsupportedCoordinateTypeError
from kdtree_math import (
    coordinate_difference,
    coordinate_product,
    coordinate_sum,
    squared_distance,
)
from kdtree_point import KdTreePoint


@pytest.mark.parametrize(
    "value1, value2",
    [
        (7, 2),
        (7.0, 2.0),
        (np.int32(7), np.int64(2)),
        (np.float32(7.0), 2),
    ],
)
def test_helpers_accept_primitive_numbers(value1, value2):
    assert coordinate_sum(value1, value2) == 9.0
    assert coordinate_difference(value1, value2) == 5.0
    assert coordinate_product(value1, value2) == 14.0
    assert isinstance(coordinate_sum(value1, value2), float)


@pytest.mark.parametrize(
    "value",
    [True, np.bool_(False), Decimal("1.5"), Fraction(1, 2), 1 + 2j, "1", None],
)
def test_helpers_reject_other_types(value):
    for helper in (coordinate_sum, coordinate_difference, coordinate_product):
        with pytest.raises(UnsupportedCoordinateTypeError) as excinfo:
            helper(value, 1)
        assert excinfo.value.value is value

        with pytest.raises(UnsupportedCoordinateTypeError):
            helper(1, value)


def test_unsupported_type_error_is_type_error():
    with pytest.raises(TypeError):
        coordinate_difference(Decimal(1), Decimal(2))


def test_squared_distance():
    assert squared_distance(KdTreePoint(9, 2), KdTreePoint(8, 1), 2) == 2.0
    assert squared_distance(KdTreePoint(9, 2), KdTreePoint(9, 6), 2) == 16.0
    assert squared_distance((0, 0, 0), (1, 2, 3), 3) == 14.0
