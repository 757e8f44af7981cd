"""
Debug visualization: contour overlay and image stacking
"""

import cv2
import numpy as np
from typing import Tuple, List, Optional, Sequence


def _is_empty(image: Optional[np.ndarray]) -> bool:
    return image is None or image.size == 0


def _to_bgr(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    if image.shape[2] == 1:
        return cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2BGR)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)
    return image


def prepare_cell(image: Optional[np.ndarray], size: Tuple[int, int], scale: float) -> np.ndarray:
    """
    Bring one grid cell to the common size and to 3 channels.

    Args:
        image: Cell image, None or empty for a black cell
        size: Reference size (width, height)
        scale: Scale factor applied after resizing to the reference size

    Returns:
        BGR image of size (int(width * scale), int(height * scale))
    """
    width, height = size
    scaled = (max(1, int(width * scale)), max(1, int(height * scale)))

    if _is_empty(image):
        image = np.zeros((height, width, 3), dtype=np.uint8)

    if (image.shape[1], image.shape[0]) != (width, height):
        image = cv2.resize(image, (width, height))
    if scaled != (width, height):
        image = cv2.resize(image, scaled)

    return _to_bgr(image)


def stack_images(scale: float, grid: Sequence[Sequence[Optional[np.ndarray]]]) -> np.ndarray:
    """
    Compose a grid of images into one canvas.

    The size of the top-left cell is the reference, every other cell is
    resized to it, then everything is scaled by `scale`. Grayscale cells are
    converted to BGR. Missing or empty cells are filled with black.
    All rows are expected to have as many columns as the first one.

    Args:
        scale: Scale factor of the result
        grid: Rows of images

    Returns:
        Stacked BGR image, or an empty array if the grid or its top-left cell is empty
    """
    if len(grid) == 0 or len(grid[0]) == 0 or _is_empty(grid[0][0]):
        return np.zeros((0, 0, 3), dtype=np.uint8)

    reference = grid[0][0]
    size = (reference.shape[1], reference.shape[0])
    cols = len(grid[0])

    rows = []
    for row in grid:
        cells = [prepare_cell(row[c] if c < len(row) else None, size, scale) for c in range(cols)]
        rows.append(cv2.hconcat(cells))

    return cv2.vconcat(rows)


class DocumentVisualizer:
    """
    Class for drawing the detector's debug overlay.

    Other large contours are drawn thin, the selected document
    outline thick on top of them.
    """

    def __init__(
        self,
        contour_color: Tuple[int, int, int] = (255, 0, 0),  # Blue in BGR
        contour_thickness: int = 1,
        selected_color: Tuple[int, int, int] = (0, 255, 0),  # Green in BGR
        selected_thickness: int = 4
    ):
        """
        Initialize the visualizer.

        Args:
            contour_color: Color of the other large contours in BGR format
            contour_thickness: Their line thickness in pixels
            selected_color: Color of the selected document outline in BGR format
            selected_thickness: Its line thickness in pixels
        """
        self.contour_color = contour_color
        self.contour_thickness = contour_thickness
        self.selected_color = selected_color
        self.selected_thickness = selected_thickness

    def apply(self, image: np.ndarray, draw_commands: List) -> np.ndarray:
        """
        Draw the commands onto the image in place.

        Args:
            image: BGR image to draw on
            draw_commands: DrawCommand list as returned by the detector

        Returns:
            The same image
        """
        # Selected outline last so the thick stroke covers the thin one
        ordered = sorted(draw_commands, key=lambda cmd: cmd.selected)
        for cmd in ordered:
            contour = np.asarray(cmd.contour, dtype=np.int32).reshape(-1, 1, 2)
            if cmd.selected:
                cv2.drawContours(image, [contour], -1, self.selected_color, self.selected_thickness)
            else:
                cv2.drawContours(image, [contour], -1, self.contour_color, self.contour_thickness)
        return image

    def draw(self, image: np.ndarray, draw_commands: List) -> np.ndarray:
        """
        Return an annotated copy of the image, the input is left untouched.

        Args:
            image: Input image (BGR or grayscale)
            draw_commands: DrawCommand list as returned by the detector

        Returns:
            Annotated BGR image
        """
        if image is None:
            return image
        result = _to_bgr(image).copy()
        return self.apply(result, draw_commands)
