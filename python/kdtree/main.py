from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np
import rerun as rr
from kdtree import KdTree
from kdtree_node import KdTreeNode
from kdtree_point import KdTreePoint


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search nearest neighbour with k-d tree")
    parser.add_argument(
        "-n", "--num-points", type=int, help="number of random points", default=10000
    )
    parser.add_argument(
        "--max-value",
        type=int,
        help="coordinates are generated in [0, max-value)",
        default=1000000000,
    )
    parser.add_argument("-s", "--seed", type=int, help="random seed", default=None)
    parser.add_argument(
        "-d", "--dims", type=int, help="number of dimensions", default=2
    )
    parser.add_argument(
        "-q",
        "--query",
        type=int,
        nargs="+",
        help="point to search nearest neighbour",
        default=[9, 4],
    )
    parser.add_argument(
        "-a",
        "--add",
        type=int,
        nargs="+",
        help="point to be added before searching",
        default=None,
    )
    parser.add_argument(
        "-v",
        "--viewer",
        choices=["none", "matplotlib", "rerun"],
        help="how to show the result",
        default="none",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level",
        default="WARNING",
    )
    return parser.parse_args(argv)


def generate_points(
    num_points: int, num_dims: int, max_value: int, seed: Optional[int]
) -> List[KdTreePoint]:
    """Generate random points with integer coordinates.

    Args:
        num_points: Number of points.
        num_dims: Number of dimensions.
        max_value: Coordinates are in [0, max_value).
        seed: Random seed. If None, result is not reproducible.

    Returns:
        List of generated points.
    """
    rng = np.random.default_rng(seed)
    values = rng.integers(0, max_value, size=(num_points, num_dims))
    return [KdTreePoint.from_sequence(row) for row in values]


def run(args: argparse.Namespace) -> tuple[KdTree, KdTreePoint, KdTreePoint | None]:
    """Build tree and search nearest neighbour of the query point.

    Returns:
        Tuple to built tree, query point and found nearest point.
    """
    points = generate_points(args.num_points, args.dims, args.max_value, args.seed)
    kdtree = KdTree(points)

    if args.add is not None:
        added = kdtree.add(KdTreePoint(*args.add))
        logging.info(f"Add {' '.join(map(str, args.add))}: {added}")

    query = KdTreePoint(*args.query)
    nearest = kdtree.nearest_neighbour(query)
    return kdtree, query, nearest


def plot_split_lines(
    node: KdTreeNode | None, lower: np.ndarray, upper: np.ndarray
):
    """Draw splitting line of each node within the bounding box."""
    if node is None:
        return

    axis = node.axis
    value = float(node.point[axis])

    if axis == 0:
        plt.plot([value, value], [lower[1], upper[1]], color="gray", linewidth=0.5)
    else:
        plt.plot([lower[0], upper[0]], [value, value], color="gray", linewidth=0.5)

    left_upper = upper.copy()
    left_upper[axis] = value
    right_lower = lower.copy()
    right_lower[axis] = value
    plot_split_lines(node.left, lower, left_upper)
    plot_split_lines(node.right, right_lower, upper)


def show_with_matplotlib(kdtree: KdTree, query: KdTreePoint, nearest: KdTreePoint):
    points = np.array([p.to_array() for p in kdtree])

    ax = plt.axes()
    ax.scatter(points[:, 0], points[:, 1], s=4)
    ax.scatter(query[0], query[1], color="red")
    ax.scatter(nearest[0], nearest[1], color="green")

    # Split lines are meaningful only for 2D.
    if kdtree.num_dims == 2:
        lower = np.minimum(points.min(axis=0), query.to_array())
        upper = np.maximum(points.max(axis=0), query.to_array())
        plot_split_lines(kdtree.root, lower, upper)

    plt.axis("square")
    plt.show()


def show_with_rerun(kdtree: KdTree, query: KdTreePoint, nearest: KdTreePoint):
    points = np.array([p.to_array()[:2] for p in kdtree])
    points = np.append(points, query.to_array()[:2].reshape(1, 2), axis=0)
    points = np.append(points, nearest.to_array()[:2].reshape(1, 2), axis=0)

    colors = np.full((len(points) - 2, 3), [0, 0, 255])
    colors = np.append(colors, np.array([[255, 0, 0], [0, 255, 0]]), axis=0)

    # Scale radius with the extent of points so that they are visible.
    radius = max(float(np.ptp(points)) * 0.002, 0.02)

    rr.init("kdtree_nearest_neighbour", spawn=True)
    rr.log("points", rr.Points2D(points, colors=colors, radii=radius))


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s: %(message)s")

    if args.num_points < 1:
        logging.error("At least one point is required")
        return 1

    if len(args.query) != args.dims:
        logging.error(f"Query must have {args.dims} values")
        return 1

    if args.add is not None and len(args.add) != args.dims:
        logging.error(f"Point to be added must have {args.dims} values")
        return 1

    kdtree, query, nearest = run(args)
    print(nearest)

    if args.viewer == "matplotlib":
        show_with_matplotlib(kdtree, query, nearest)
    elif args.viewer == "rerun":
        show_with_rerun(kdtree, query, nearest)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
