import numpy as np
import pytest
from kdtree_point import KdTreePoint


def test_num_dims_is_number_of_values():
    assert KdTreePoint(1, 2, 3).num_dims == 3
    assert len(KdTreePoint(1.5)) == 1


def test_index_access_and_assignment():
    point = KdTreePoint(8, 1)
    assert point[0] == 8
    assert point[1] == 1

    point[1] = 5
    assert point[1] == 5
    assert point.num_dims == 2


def test_out_of_range_index_raises():
    with pytest.raises(IndexError):
        KdTreePoint(1, 2)[2]


def test_equality_is_per_coordinate():
    assert KdTreePoint(1, 2) == KdTreePoint(1, 2)
    assert KdTreePoint(1, 2) == KdTreePoint(1.0, 2.0)
    assert KdTreePoint(1, 2) != KdTreePoint(2, 1)
    assert KdTreePoint(1, 2) != KdTreePoint(1, 2, 0)
    assert KdTreePoint(1, 2) != (1, 2)


def test_point_is_unhashable():
    with pytest.raises(TypeError):
        hash(KdTreePoint(1, 2))


def test_text_representation():
    assert str(KdTreePoint(8, 1)) == "8 1"
    assert repr(KdTreePoint(8, 1)) == "KdTreePoint(8, 1)"


def test_from_sequence_converts_ndarray_values():
    point = KdTreePoint.from_sequence(np.array([3, 4]))
    assert point == KdTreePoint(3, 4)
    assert type(point[0]) is int


def test_to_array():
    np.testing.assert_array_equal(KdTreePoint(3, 4).to_array(), np.array([3.0, 4.0]))
