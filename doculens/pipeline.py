"""
Per-frame document scanning pipeline
"""

import cv2
import numpy as np
from typing import Optional

from .config import DetectionConfig, FrameSize
from .corners import reorder, has_distinct_corners
from .detector import DocumentDetector, DetectionResult
from .preprocessor import preprocess
from .rectifier import rectify
from .visualizer import DocumentVisualizer, stack_images


class FrameResult:
    """
    Everything produced for one frame.

    result is the rectified document when one was detected, otherwise the
    (resized) input frame, so it can always be displayed.
    """

    def __init__(
        self,
        frame: np.ndarray,
        edges: np.ndarray,
        annotated: np.ndarray,
        result: np.ndarray,
        stacked: np.ndarray,
        detection: DetectionResult,
        corners: Optional[np.ndarray] = None
    ):
        self.frame = frame
        self.edges = edges
        self.annotated = annotated
        self.result = result
        self.stacked = stacked
        self.detection = detection
        self.corners = corners

    @property
    def detected(self) -> bool:
        return self.corners is not None


class DocumentScanner:
    """
    Runs preprocessing, detection, corner ordering and rectification on single frames.

    Frames are processed independently, nothing is kept between calls.
    """

    def __init__(
        self,
        frame_size: Optional[FrameSize] = None,
        config: Optional[DetectionConfig] = None,
        debug: bool = False
    ):
        """
        Initialize the scanner.

        Args:
            frame_size: Processing and output resolution (default 640x480)
            config: Detection parameters
            debug: Print detector diagnostics
        """
        self.frame_size = frame_size or FrameSize()
        self.config = config or DetectionConfig()
        self.detector = DocumentDetector(self.config, debug=debug)
        self.visualizer = DocumentVisualizer()
        self.debug = debug

    def process(self, frame: np.ndarray) -> FrameResult:
        """
        Process one frame.

        Args:
            frame: Input frame (BGR)

        Returns:
            FrameResult with annotated frame, edge mask, rectified document
            (or the frame itself as fallback) and the stacked debug view
        """
        if frame is None or frame.size == 0:
            raise ValueError("Cannot process an empty frame")

        if (frame.shape[1], frame.shape[0]) != self.frame_size.as_tuple():
            frame = cv2.resize(frame, self.frame_size.as_tuple())

        edges = preprocess(frame, self.config)
        detection = self.detector.detect(edges)
        annotated = self.visualizer.draw(frame, detection.draw_commands)

        corners = None
        rectified = None
        if detection.found:
            ordered = reorder(detection.quad)
            if has_distinct_corners(ordered):
                rectified = rectify(frame, ordered, self.frame_size, self.config.crop_margin)
                if rectified is not None and rectified.size > 0:
                    corners = ordered
                else:
                    rectified = None
            elif self.debug:
                print("  [scanner] degenerate corner ordering, skipping rectification")

        result = rectified if rectified is not None else frame

        stacked = stack_images(self.config.stack_scale, [
            [frame, edges],
            [annotated, result],
        ])

        return FrameResult(frame, edges, annotated, result, stacked, detection, corners)
