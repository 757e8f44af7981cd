"""
Shared fixtures: synthetic frames and edge masks
"""

import cv2
import numpy as np
import pytest

WIDTH, HEIGHT = 640, 480

# Corners of the document used in most tests (x, y)
DOCUMENT = np.array([[100, 100], [500, 100], [500, 400], [100, 400]], dtype=np.int32)


def blank_mask(width: int = WIDTH, height: int = HEIGHT) -> np.ndarray:
    return np.zeros((height, width), dtype=np.uint8)


def outline_mask(corners: np.ndarray, width: int = WIDTH, height: int = HEIGHT) -> np.ndarray:
    """Edge mask with a closed 2px polygon outline."""
    mask = blank_mask(width, height)
    cv2.polylines(mask, [np.asarray(corners, dtype=np.int32)], True, 255, 2)
    return mask


def filled_frame(corners: np.ndarray, width: int = WIDTH, height: int = HEIGHT) -> np.ndarray:
    """Black BGR frame with a white filled polygon."""
    frame = np.zeros((height, width, 3), dtype=np.uint8)
    cv2.fillPoly(frame, [np.asarray(corners, dtype=np.int32)], (255, 255, 255))
    return frame


@pytest.fixture
def document_frame():
    return filled_frame(DOCUMENT)


@pytest.fixture
def black_frame():
    return np.zeros((HEIGHT, WIDTH, 3), dtype=np.uint8)


@pytest.fixture
def triangle_frame():
    return filled_frame(np.array([[100, 420], [320, 60], [540, 420]]))


@pytest.fixture
def document_mask():
    return outline_mask(DOCUMENT)
