"""
Corner ordering of detected quadrilaterals
"""

import numpy as np

# Indices into an ordered quadrilateral
TOP_LEFT, TOP_RIGHT, BOTTOM_LEFT, BOTTOM_RIGHT = 0, 1, 2, 3


def reorder(points: np.ndarray) -> np.ndarray:
    """
    Order 4 corner points as: top-left, top-right, bottom-left, bottom-right.

    Labels are assigned by sums and differences of the coordinates:
    the smallest x+y is top-left, the largest x+y is bottom-right,
    the smallest x-y is top-right and the largest x-y is bottom-left.
    The result feeds straight into the rectifier, whose destination corners
    use the same label order.

    Works for convex quadrilaterals that are roughly axis aligned and does
    not depend on the order of the input points. When two points share the
    same sum or difference the one with the lower input index wins.

    Args:
        points: Array of 4 points with shape (4, 2) or (4, 1, 2)

    Returns:
        Ordered corners, shape (4, 2), float32

    Raises:
        ValueError: if the input does not hold exactly 4 points
    """
    pts = np.asarray(points, dtype=np.float32)
    if pts.size != 8:
        raise ValueError(f"Expected exactly 4 points, got array of shape {pts.shape}")
    pts = pts.reshape(4, 2)

    ordered = np.zeros((4, 2), dtype=np.float32)

    s = pts.sum(axis=1)
    ordered[TOP_LEFT] = pts[np.argmin(s)]
    ordered[BOTTOM_RIGHT] = pts[np.argmax(s)]

    diff = pts[:, 0] - pts[:, 1]
    ordered[TOP_RIGHT] = pts[np.argmin(diff)]
    ordered[BOTTOM_LEFT] = pts[np.argmax(diff)]

    return ordered


def has_distinct_corners(ordered: np.ndarray) -> bool:
    """
    Check that every label got a different point.

    A tie in the sums or differences can assign one input point to two labels,
    the resulting quadrilateral is degenerate and cannot be rectified.
    """
    return len(np.unique(np.asarray(ordered).reshape(-1, 2), axis=0)) == 4
