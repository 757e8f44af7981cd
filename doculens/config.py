"""
Configuration for the document scanner
"""

import os
from typing import Dict, Tuple, Union

from dotenv import load_dotenv


class FrameSize:
    """
    Target resolution of the rectified document (and of the processed frame).
    """

    def __init__(self, width: int = 640, height: int = 480):
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"Frame size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"

    def __repr__(self) -> str:
        return f"FrameSize({self.width}, {self.height})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, FrameSize):
            return NotImplemented
        return self.width == other.width and self.height == other.height

    def __hash__(self) -> int:
        return hash((self.width, self.height))

    def as_tuple(self) -> Tuple[int, int]:
        """(width, height), the order OpenCV expects for dsize arguments."""
        return self.width, self.height

    @classmethod
    def parse(cls, text: str) -> "FrameSize":
        """
        Parse a size written as ``WIDTHxHEIGHT``, e.g. ``640x480``.

        Raises:
            ValueError: if the text is not two positive integers joined by 'x'
        """
        parts = text.lower().replace(" ", "").split("x")
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Invalid frame size '{text}', expected WIDTHxHEIGHT")
        return cls(int(parts[0]), int(parts[1]))


class DetectionConfig:
    """
    Numeric parameters of the preprocessing, detection and rectification stages.

    The defaults are tuned for 640x480 frames. Tests and callers working at
    other scales pass their own values instead of patching module constants.
    """

    def __init__(
        self,
        blur_kernel: Tuple[int, int] = (5, 5),
        blur_sigma: float = 1.0,
        canny_low: int = 50,
        canny_high: int = 150,
        close_kernel: Tuple[int, int] = (3, 3),
        close_iterations: int = 2,
        debug_min_area: float = 2000.0,
        min_area: float = 5000.0,
        max_area_ratio: float = 0.95,
        approx_epsilon: float = 0.02,
        border_margin: int = 8,
        min_side: float = 50.0,
        aspect_range: Tuple[float, float] = (0.4, 3.0),
        crop_margin: int = 20,
        stack_scale: float = 0.6
    ):
        """
        Initialize the configuration.

        Args:
            blur_kernel: Gaussian blur kernel (width, height), odd values
            blur_sigma: Gaussian blur standard deviation
            canny_low: Lower hysteresis threshold of the edge detector
            canny_high: Upper hysteresis threshold of the edge detector
            close_kernel: Structuring element size of the morphological close
            close_iterations: Number of close iterations
            debug_min_area: Contours larger than this are drawn on the debug overlay
            min_area: Minimum document area in pixels
            max_area_ratio: Maximum document area as ratio of the frame area
            approx_epsilon: Polygon approximation tolerance as ratio of the perimeter
            border_margin: Minimum distance in pixels between the document and the frame border
            min_side: Minimum averaged side length in pixels
            aspect_range: Allowed (min, max) width/height ratio
            crop_margin: Pixels trimmed from each side of the rectified image
            stack_scale: Scale factor of the stacked debug image
        """
        if len(blur_kernel) != 2 or any(k <= 0 or k % 2 == 0 for k in blur_kernel):
            raise ValueError(f"Blur kernel must be two positive odd values, got {blur_kernel}")
        if len(close_kernel) != 2 or any(k <= 0 for k in close_kernel):
            raise ValueError(f"Close kernel must be two positive values, got {close_kernel}")
        if canny_low > canny_high:
            raise ValueError(f"canny_low ({canny_low}) must not exceed canny_high ({canny_high})")
        if close_iterations < 0:
            raise ValueError("close_iterations must not be negative")
        if not 0.0 < max_area_ratio <= 1.0:
            raise ValueError(f"max_area_ratio must be in (0, 1], got {max_area_ratio}")
        if aspect_range[0] > aspect_range[1]:
            raise ValueError(f"Invalid aspect range {aspect_range}")
        if border_margin < 0 or crop_margin < 0:
            raise ValueError("Margins must not be negative")
        if approx_epsilon <= 0:
            raise ValueError("approx_epsilon must be positive")
        if stack_scale <= 0:
            raise ValueError("stack_scale must be positive")

        self.blur_kernel = tuple(blur_kernel)
        self.blur_sigma = blur_sigma
        self.canny_low = canny_low
        self.canny_high = canny_high
        self.close_kernel = tuple(close_kernel)
        self.close_iterations = close_iterations
        self.debug_min_area = debug_min_area
        self.min_area = min_area
        self.max_area_ratio = max_area_ratio
        self.approx_epsilon = approx_epsilon
        self.border_margin = border_margin
        self.min_side = min_side
        self.aspect_range = tuple(aspect_range)
        self.crop_margin = crop_margin
        self.stack_scale = stack_scale


def _parse_source(value: str) -> Union[int, str]:
    # Camera indices come in as digits, everything else is a path or URL
    value = value.strip()
    return int(value) if value.isdigit() else value


def load_settings() -> Dict:
    """
    Load runner settings from the environment (and a .env file if present).

    Recognized variables:
        DOCULENS_SOURCE: video file, stream URL or camera index (default 0)
        DOCULENS_FRAME_SIZE: processing resolution as WIDTHxHEIGHT (default 640x480)
        DOCULENS_BRIGHTNESS: camera brightness hint (default 150)
        DOCULENS_DEBUG: print detector diagnostics when set to 1/true/yes

    Returns:
        Dictionary with keys 'source', 'frame_size', 'brightness', 'debug'
    """
    load_dotenv()

    return {
        'source': _parse_source(os.getenv("DOCULENS_SOURCE", "0")),
        'frame_size': FrameSize.parse(os.getenv("DOCULENS_FRAME_SIZE", "640x480")),
        'brightness': float(os.getenv("DOCULENS_BRIGHTNESS", 150)),
        'debug': os.getenv("DOCULENS_DEBUG", "").lower() in ("1", "true", "yes"),
    }
