"""
Video frame source
"""

import cv2
import numpy as np
from typing import Iterator, Optional, Union

from .config import FrameSize

DEFAULT_FPS = 30.0


class VideoSource:
    """
    Sequential frames from a video file, stream URL or camera.

    Raises RuntimeError on construction if the source cannot be opened.
    """

    def __init__(
        self,
        source: Union[int, str],
        frame_size: Optional[FrameSize] = None,
        brightness: Optional[float] = None,
        capture_factory=cv2.VideoCapture
    ):
        """
        Open the source.

        Args:
            source: Path, URL, or camera index (digit strings are treated as indices)
            frame_size: Requested capture resolution (a hint, cameras may ignore it)
            brightness: Requested camera brightness (a hint)
            capture_factory: Callable creating the capture object, cv2.VideoCapture by default
        """
        if isinstance(source, str) and source.isdigit():
            source = int(source)

        self.source = source
        self.capture = capture_factory(source)

        if not self.capture.isOpened():
            raise RuntimeError(f"Could not open video source '{source}'")

        if frame_size is not None:
            self.capture.set(cv2.CAP_PROP_FRAME_WIDTH, frame_size.width)
            self.capture.set(cv2.CAP_PROP_FRAME_HEIGHT, frame_size.height)
        if brightness is not None:
            self.capture.set(cv2.CAP_PROP_BRIGHTNESS, brightness)

    @property
    def fps(self) -> float:
        """Native frame rate, 30 if the source does not report a usable one."""
        fps = self.capture.get(cv2.CAP_PROP_FPS)
        if fps is None or not fps > 0:
            return DEFAULT_FPS
        return float(fps)

    @property
    def frame_delay_ms(self) -> int:
        """Delay between frames that keeps playback at the native speed."""
        return max(1, int(1000.0 / self.fps))

    def read(self) -> Optional[np.ndarray]:
        """Read the next frame, None at the end of the stream."""
        success, frame = self.capture.read()
        if not success or frame is None or frame.size == 0:
            return None
        return frame

    def frames(self) -> Iterator[np.ndarray]:
        """Yield frames until the stream ends."""
        while True:
            frame = self.read()
            if frame is None:
                return
            yield frame

    def release(self) -> None:
        self.capture.release()

    def __enter__(self) -> "VideoSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
