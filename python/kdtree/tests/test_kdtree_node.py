from kdtree_node import KdTreeNode
from kdtree_point import KdTreePoint


def make_family():
    parent = KdTreeNode(point=KdTreePoint(5, 5))
    left = KdTreeNode(point=KdTreePoint(2, 2), axis=1)
    right = KdTreeNode(point=KdTreePoint(8, 8), axis=1)
    parent.set_left(left)
    parent.set_right(right)
    return parent, left, right


def test_set_child_wires_parent():
    parent, left, right = make_family()

    assert parent.left is left
    assert parent.right is right
    assert left.parent is parent
    assert right.parent is parent
    assert not parent.has_parent()
    assert left.has_parent()


def test_child_side():
    parent, left, right = make_family()

    assert left.is_left_child()
    assert not left.is_right_child()
    assert right.is_right_child()
    assert not right.is_left_child()
    assert not parent.is_left_child()
    assert not parent.is_right_child()


def test_sibling():
    parent, left, right = make_family()

    assert left.sibling() is right
    assert right.sibling() is left
    assert parent.sibling() is None

    parent.set_right(None)
    assert left.sibling() is None


def test_nodes_are_compared_by_identity():
    node1 = KdTreeNode(point=KdTreePoint(1, 1))
    node2 = KdTreeNode(point=KdTreePoint(1, 1))
    assert node1 != node2
    assert node1 == node1


def test_iter_subtree_visits_node_then_left_then_right():
    parent, left, right = make_family()
    grandchild = KdTreeNode(point=KdTreePoint(1, 3))
    left.set_left(grandchild)

    visited = [node.point for node in parent.iter_subtree()]
    assert visited == [KdTreePoint(5, 5), KdTreePoint(2, 2), KdTreePoint(1, 3), KdTreePoint(8, 8)]

    assert [node.point for node in right.iter_subtree()] == [KdTreePoint(8, 8)]
