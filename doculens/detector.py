"""
Document detector working on edge masks
"""

import cv2
import numpy as np
from typing import Optional, List, Tuple

from common.bounds import Bounds
from .config import DetectionConfig
from .visualizer import DocumentVisualizer


class DrawCommand:
    """
    A contour to be drawn on the debug overlay.

    selected is True for the chosen document outline, False for the
    thin outlines of the other large contours.
    """

    def __init__(self, contour: np.ndarray, selected: bool = False):
        self.contour = contour
        self.selected = selected

    def __repr__(self) -> str:
        return f"DrawCommand(points={len(self.contour)}, selected={self.selected})"


class DetectionResult:
    """
    Outcome of a detection run on one edge mask.

    quad is None when no contour passed the filters (no document visible).
    """

    def __init__(self, quad: Optional[np.ndarray], area: float, draw_commands: List[DrawCommand]):
        self.quad = quad
        self.area = area
        self.draw_commands = draw_commands

    @property
    def found(self) -> bool:
        return self.quad is not None


class DocumentDetector:
    """
    Class for document detection in edge masks.

    Finds the outer contours, approximates them with polygons and keeps the
    largest convex quadrilateral that has a plausible size, shape and position.
    """

    def __init__(self, config: Optional[DetectionConfig] = None, debug: bool = False):
        """
        Initialize the detector.

        Args:
            config: Detection parameters (defaults are used if not given)
            debug: Print why candidates were rejected
        """
        self.config = config or DetectionConfig()
        self.debug = debug

    def find_contours(self, edges: np.ndarray) -> List[np.ndarray]:
        """
        Find outer contours in the edge mask, largest area first.

        Args:
            edges: Binary edge mask

        Returns:
            List of contours sorted by area (descending)
        """
        contours, _ = cv2.findContours(edges, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
        return sorted(contours, key=cv2.contourArea, reverse=True)

    def _reject(self, reason: str) -> None:
        if self.debug:
            print(f"  [detector] reject: {reason}")
        return None

    def check_candidate(self, contour: np.ndarray, frame_shape: Tuple[int, ...]) -> Optional[np.ndarray]:
        """
        Run a contour through the filter chain.

        Filters in order (first failure rejects):
        1. area within [min_area, max_area_ratio * frame area]
        2. polygon approximation has exactly 4 vertices
        3. the quadrilateral is convex
        4. bounding box keeps more than border_margin pixels from every frame edge
           (a box exactly border_margin px away is rejected, so the default
           of 8 effectively needs a 9 px gap)
        5. averaged opposite sides are at least min_side long
        6. width/height ratio within aspect_range

        Args:
            contour: Contour as returned by cv2.findContours
            frame_shape: Shape of the edge mask

        Returns:
            Approximated quadrilateral with shape (4, 2), or None if rejected
        """
        cfg = self.config
        frame_area = float(frame_shape[0] * frame_shape[1])

        area = cv2.contourArea(contour)
        if area < cfg.min_area:
            return self._reject(f"area {area:.0f} < {cfg.min_area:.0f}")
        if area > cfg.max_area_ratio * frame_area:
            return self._reject(f"area {area:.0f} covers the whole frame")

        peri = cv2.arcLength(contour, True)
        approx = cv2.approxPolyDP(contour, cfg.approx_epsilon * peri, True)
        if len(approx) != 4:
            return self._reject(f"{len(approx)} vertices")

        if not cv2.isContourConvex(approx):
            return self._reject("not convex")

        # Touching the margin counts as outside
        allowed = Bounds.ofImage(frame_shape).inset(cfg.border_margin + 1)
        bounds = Bounds.fromPoints(approx)
        if not bounds.isInside(allowed):
            return self._reject(f"{bounds} too close to the frame border")

        quad = approx.reshape(4, 2)
        w1 = np.linalg.norm(quad[0] - quad[1])
        w2 = np.linalg.norm(quad[2] - quad[3])
        h1 = np.linalg.norm(quad[1] - quad[2])
        h2 = np.linalg.norm(quad[3] - quad[0])
        width = (w1 + w2) / 2.0
        height = (h1 + h2) / 2.0
        if width < cfg.min_side or height < cfg.min_side:
            return self._reject(f"sides {width:.1f}x{height:.1f} too short")

        ratio = width / height
        if ratio < cfg.aspect_range[0] or ratio > cfg.aspect_range[1]:
            return self._reject(f"aspect ratio {ratio:.2f}")

        return quad

    def detect(self, edges: np.ndarray) -> DetectionResult:
        """
        Detect the document in an edge mask.

        Every contour is checked, the valid candidate with the largest area wins.
        Nothing is drawn here; the returned draw commands describe the debug
        overlay (all contours above debug_min_area, then the selected quad).

        Args:
            edges: Binary edge mask (single channel)

        Returns:
            DetectionResult with the quad (or None) and the draw commands
        """
        if edges is None or edges.size == 0:
            return DetectionResult(None, 0.0, [])

        contours = self.find_contours(edges)

        draw_commands = [
            DrawCommand(contour)
            for contour in contours
            if cv2.contourArea(contour) > self.config.debug_min_area
        ]

        candidates = []
        for contour in contours:
            quad = self.check_candidate(contour, edges.shape)
            if quad is not None:
                candidates.append((cv2.contourArea(contour), quad))

        if not candidates:
            return DetectionResult(None, 0.0, draw_commands)

        # max() keeps the first of equal areas, i.e. the earlier contour in sorted order
        best_area, best_quad = max(candidates, key=lambda c: c[0])

        if self.debug:
            print(f"  [detector] selected quad with area {best_area:.0f} out of {len(candidates)} candidate(s)")

        draw_commands.append(DrawCommand(best_quad.reshape(-1, 1, 2), selected=True))
        return DetectionResult(best_quad, best_area, draw_commands)

    def extract_best_quadrilateral(self, edges: np.ndarray, annotation: Optional[np.ndarray] = None) -> Optional[np.ndarray]:
        """
        Detect the document and optionally draw the debug overlay.

        Args:
            edges: Binary edge mask
            annotation: BGR image of the same size to draw on (modified in place)

        Returns:
            Quadrilateral with shape (4, 2), or None if no document was found
        """
        result = self.detect(edges)

        if annotation is not None:
            DocumentVisualizer().apply(annotation, result.draw_commands)

        return result.quad
