import cv2
import numpy as np


class Bounds:
    def __init__ (self, left, top, width, height):
        self.left = left
        self.top = top
        self.width = width
        self.height = height

    def __str__(self) -> str:
        return f"Bounds({self.left}, {self.top}, {self.width}, {self.height})"

    @classmethod
    def fromPoints(cls, points) -> "Bounds":
        """
        Axis-aligned bounding box of a point set, with OpenCV's boundingRect semantics
        (width and height count pixels, so a single point has size 1x1).
        """
        x, y, w, h = cv2.boundingRect(np.asarray(points, dtype=np.int32).reshape(-1, 1, 2))
        return cls(x, y, w, h)

    @classmethod
    def ofImage(cls, shape) -> "Bounds":
        """Bounds covering a whole image of the given numpy shape."""
        return cls(0, 0, shape[1], shape[0])

    def right(self):
        return self.left + self.width

    def bottom(self):
        return self.top + self.height

    def inset(self, margin) -> "Bounds":
        """
        Shrink the Bounds object by margin on all four sides.

        Returns:
        - Bounds: The shrunk Bounds object. Width and height never go below zero.
        """
        return Bounds(
            self.left + margin,
            self.top + margin,
            max(0, self.width - 2 * margin),
            max(0, self.height - 2 * margin),
        )

    def isInside(self, other) -> bool:
        """
        Check if the current Bounds object is completely inside another Bounds object.

        Parameters:
        - other (Bounds): The other Bounds object to compare against.

        Returns:
        - bool: True if the current Bounds object is completely inside the other Bounds object, False otherwise.
        """
        return self.left >= other.left and self.right() <= other.right() and self.top >= other.top and self.bottom() <= other.bottom()
