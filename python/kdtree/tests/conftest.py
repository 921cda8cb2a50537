from __future__ import annotations

import pytest
from kdtree import KdTree
from kdtree_point import KdTreePoint

SAMPLE_VALUES = [(2, 3), (5, 4), (9, 6), (4, 7), (8, 1), (7, 2)]


@pytest.fixture
def sample_points() -> list[KdTreePoint]:
    return [KdTreePoint(*values) for values in SAMPLE_VALUES]


@pytest.fixture
def sample_tree(sample_points) -> KdTree:
    # Tree shape:
    #             (7,2)
    #           /       \
    #       (5,4)       (9,6)
    #       /   \       /
    #   (2,3) (4,7)  (8,1)
    return KdTree(sample_points)
