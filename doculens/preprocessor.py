"""
Edge preprocessing for document detection
"""

import cv2
import numpy as np
from typing import Optional

from .config import DetectionConfig


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """
    Convert a BGR image to grayscale, single channel images are returned as they are.

    Args:
        image: Input image (BGR or grayscale)

    Returns:
        Grayscale image
    """
    if image.ndim == 2:
        return image
    if image.ndim == 3 and image.shape[2] == 1:
        return image[:, :, 0]
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    raise ValueError(f"Unsupported image shape {image.shape}")


def preprocess(image: np.ndarray, config: Optional[DetectionConfig] = None) -> np.ndarray:
    """
    Turn a frame into a binary edge mask suitable for contour extraction.

    Steps:
    1. Grayscale
    2. Gaussian blur (suppresses noise before edge detection)
    3. Canny edge detection
    4. Morphological close (bridges small gaps so document borders form closed loops)

    Args:
        image: Input frame (BGR or grayscale)
        config: Detection parameters (defaults are used if not given)

    Returns:
        Edge mask with the same width and height as the input, values 0 or 255
    """
    if image is None or image.size == 0:
        raise ValueError("Cannot preprocess an empty image")

    config = config or DetectionConfig()

    gray = to_grayscale(image)

    blurred = cv2.GaussianBlur(gray, config.blur_kernel, config.blur_sigma)

    edges = cv2.Canny(blurred, config.canny_low, config.canny_high)

    kernel = cv2.getStructuringElement(cv2.MORPH_RECT, config.close_kernel)
    closed = cv2.morphologyEx(edges, cv2.MORPH_CLOSE, kernel, iterations=config.close_iterations)

    return closed
