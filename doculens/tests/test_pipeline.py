"""
End-to-end tests for DocumentScanner
"""

import numpy as np
import pytest

from doculens import DocumentScanner, FrameSize
from conftest import DOCUMENT, filled_frame


class TestDocumentScanner:
    """Scenario tests on synthetic frames"""

    @pytest.fixture
    def scanner(self):
        return DocumentScanner()

    def test_detects_document(self, scanner, document_frame):
        """White quad on black: detected and rectified"""
        result = scanner.process(document_frame)

        assert result.detected
        assert result.detection.found
        assert result.corners.shape == (4, 2)
        assert result.result.shape == (480, 640, 3)
        # after warping and trimming only the document is left
        assert result.result[40:440, 40:600].mean() > 240

    def test_black_frame(self, scanner, black_frame):
        """All-black frame: nothing found, result falls back to the frame"""
        result = scanner.process(black_frame)

        assert not result.detected
        assert result.corners is None
        assert np.array_equal(result.result, black_frame)
        assert result.edges.max() == 0

    def test_triangle_rejected(self, scanner, triangle_frame):
        """Large triangle: rejected by the vertex count"""
        result = scanner.process(triangle_frame)

        assert not result.detected
        assert np.array_equal(result.result, triangle_frame)
        # still shown on the overlay as a thin blue outline
        assert np.any(np.all(result.annotated == (255, 0, 0), axis=2))

    def test_annotation_does_not_touch_input(self, scanner, document_frame):
        """The input frame is never drawn on"""
        original = document_frame.copy()
        result = scanner.process(document_frame)

        assert np.array_equal(document_frame, original)
        assert np.any(np.all(result.annotated == (0, 255, 0), axis=2))

    def test_stacked_layout(self, scanner, document_frame):
        """2x2 debug grid at scale 0.6"""
        result = scanner.process(document_frame)
        assert result.stacked.shape == (2 * 288, 2 * 384, 3)

    def test_resizes_input(self, scanner):
        """Frames of another size are brought to the processing size"""
        frame = filled_frame(DOCUMENT * 2, width=1280, height=960)
        result = scanner.process(frame)

        assert result.frame.shape == (480, 640, 3)
        assert result.edges.shape == (480, 640)
        assert result.detected

    def test_custom_frame_size(self, document_frame):
        """Output follows the configured frame size"""
        scanner = DocumentScanner(FrameSize(320, 240))
        result = scanner.process(filled_frame(DOCUMENT // 2, width=320, height=240))

        assert result.result.shape == (240, 320, 3)

    def test_frames_are_independent(self, scanner, document_frame, black_frame):
        """A detection does not carry over to the next frame"""
        assert scanner.process(document_frame).detected
        assert not scanner.process(black_frame).detected

    def test_empty_frame(self, scanner):
        with pytest.raises(ValueError):
            scanner.process(np.array([], dtype=np.uint8))
