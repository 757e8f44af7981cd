"""
Perspective rectification of a detected document
"""

import cv2
import numpy as np
from typing import Optional

from .config import FrameSize


def perspective_matrix(ordered: np.ndarray, size: FrameSize) -> np.ndarray:
    """
    Compute the projective transform from the ordered corners to the target rectangle.

    Args:
        ordered: Corners in order top-left, top-right, bottom-left, bottom-right
        size: Target size

    Returns:
        3x3 perspective matrix
    """
    src = np.asarray(ordered, dtype=np.float32).reshape(4, 2)
    dst = np.array([
        [0, 0],
        [size.width, 0],
        [0, size.height],
        [size.width, size.height]
    ], dtype=np.float32)

    return cv2.getPerspectiveTransform(src, dst)


def trim(image: np.ndarray, size: FrameSize, margin: int) -> np.ndarray:
    """
    Cut `margin` pixels from every side and scale the rest back to `size`.

    Removes the strip of background that usually survives along the document edges.
    If nothing would be left after cropping, the image is returned untouched.
    """
    h, w = image.shape[:2]

    x1, y1 = min(margin, w), min(margin, h)
    x2, y2 = min(size.width - margin, w), min(size.height - margin, h)

    if x2 - x1 <= 0 or y2 - y1 <= 0:
        return image

    cropped = image[y1:y2, x1:x2]
    return cv2.resize(cropped, size.as_tuple())


def rectify(image: np.ndarray, ordered: Optional[np.ndarray], size: FrameSize, crop_margin: int = 20) -> Optional[np.ndarray]:
    """
    Warp the document to a top-down view of exactly `size`.

    With corners from reorder() the view is mirrored across its main diagonal:
    content near the source's top-right corner ends up bottom-left.

    Args:
        image: Source frame
        ordered: Corners in order top-left, top-right, bottom-left, bottom-right
        size: Target size
        crop_margin: Pixels trimmed from every side after warping (0 disables trimming)

    Returns:
        Rectified image, or None if the corners are not exactly 4 points
    """
    if ordered is None or np.asarray(ordered).size != 8:
        return None

    matrix = perspective_matrix(ordered, size)
    warped = cv2.warpPerspective(image, matrix, size.as_tuple())

    if warped is None or warped.size == 0:
        return warped

    return trim(warped, size, crop_margin)
