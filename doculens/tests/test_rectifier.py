"""
Tests for perspective rectification
"""

import cv2
import numpy as np
import pytest

from doculens import FrameSize, perspective_matrix, rectify, reorder, trim


class TestRectifier:
    """Tests for rectify and trim"""

    @pytest.fixture
    def ordered(self):
        return reorder(np.array([[100, 100], [500, 100], [500, 400], [100, 400]]))

    @pytest.fixture
    def noise_frame(self):
        rng = np.random.default_rng(0)
        return rng.integers(0, 256, size=(480, 640, 3), dtype=np.uint8)

    def test_matrix_maps_corners(self, ordered):
        """Test that the transform maps the corners exactly onto the target rectangle"""
        size = FrameSize(640, 480)
        matrix = perspective_matrix(ordered, size)

        mapped = cv2.perspectiveTransform(ordered.reshape(-1, 1, 2), matrix).reshape(4, 2)
        expected = np.array([[0, 0], [640, 0], [0, 480], [640, 480]], dtype=np.float32)
        assert np.allclose(mapped, expected, atol=1e-3)

    @pytest.mark.parametrize("frame_shape", [(480, 640, 3), (1080, 1920, 3), (300, 400, 3), (480, 640)])
    @pytest.mark.parametrize("size", [FrameSize(640, 480), FrameSize(320, 240), FrameSize(200, 500)])
    def test_output_has_target_size(self, ordered, frame_shape, size):
        """Test that the output is always exactly the target size"""
        frame = np.full(frame_shape, 128, dtype=np.uint8)
        result = rectify(frame, ordered, size)

        assert result is not None
        assert result.shape[:2] == (size.height, size.width)

    def test_invalid_corner_count(self, noise_frame):
        """Test that rectify refuses anything but 4 points"""
        assert rectify(noise_frame, None, FrameSize()) is None
        assert rectify(noise_frame, np.zeros((3, 2), dtype=np.float32), FrameSize()) is None

    @pytest.mark.parametrize("size", [FrameSize(40, 30), FrameSize(30, 200), FrameSize(300, 40)])
    def test_trim_fallback_equals_untrimmed(self, noise_frame, ordered, size):
        """Test that a target too small to crop yields the plain warp"""
        untrimmed = cv2.warpPerspective(noise_frame, perspective_matrix(ordered, size), size.as_tuple())
        result = rectify(noise_frame, ordered, size, crop_margin=20)

        assert np.array_equal(result, untrimmed)

    def test_trim_crops_and_rescales(self):
        """Test that trim removes the margin and scales back"""
        image = np.zeros((100, 200, 3), dtype=np.uint8)
        image[20:80, 20:180] = 255

        result = trim(image, FrameSize(200, 100), 20)

        assert result.shape == (100, 200, 3)
        assert result.min() == 255

    def test_trim_zero_margin(self, noise_frame):
        """Test that a zero margin keeps the image content"""
        result = trim(noise_frame, FrameSize(640, 480), 0)
        assert np.array_equal(result, noise_frame)

    def test_view_is_mirrored_across_diagonal(self):
        """Test that a mark near the source's top-right corner lands bottom-left"""
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        frame[130:150, 450:470] = 255
        ordered = reorder(np.array([[100, 100], [500, 100], [500, 400], [100, 400]]))

        result = rectify(frame, ordered, FrameSize(640, 480))

        assert result[442:456, 60:80].mean() > 250
        assert result[0:60, 540:640].max() == 0

    def test_rectifies_document_region(self):
        """Test that the warped image shows the document region"""
        frame = np.zeros((480, 640, 3), dtype=np.uint8)
        frame[100:401, 100:501] = 255

        result = rectify(frame, reorder(np.array([[100, 100], [500, 100], [500, 400], [100, 400]])), FrameSize(640, 480))

        assert result.shape == (480, 640, 3)
        assert result[40:440, 40:600].mean() > 250
