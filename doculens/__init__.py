"""
Document Detection Module

Detects a document-shaped quadrilateral in video frames and produces a
perspective-rectified, top-down image of it plus a debug visualization.
"""

from .config import DetectionConfig, FrameSize, load_settings
from .corners import reorder, has_distinct_corners
from .detector import DocumentDetector, DetectionResult, DrawCommand
from .pipeline import DocumentScanner, FrameResult
from .preprocessor import preprocess
from .rectifier import rectify, trim, perspective_matrix
from .video import VideoSource
from .visualizer import DocumentVisualizer, stack_images

__all__ = [
    'DetectionConfig', 'FrameSize', 'load_settings',
    'reorder', 'has_distinct_corners',
    'DocumentDetector', 'DetectionResult', 'DrawCommand',
    'DocumentScanner', 'FrameResult',
    'preprocess',
    'rectify', 'trim', 'perspective_matrix',
    'VideoSource',
    'DocumentVisualizer', 'stack_images',
]
