#!/usr/bin/env python3
"""
Live document scanner.

Usage:
    python -m doculens
    python -m doculens video.mp4 --size 640x480
    python -m doculens 1 --debug
"""

import argparse
import sys

import cv2

from .config import FrameSize, load_settings
from .pipeline import DocumentScanner
from .video import VideoSource

WORKFLOW_WINDOW = "Work Flow"
RESULT_WINDOW = "Result"
EXIT_KEYS = (ord('q'), 27)  # q or ESC


def parse_args(argv=None):
    """Parse command line arguments"""
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description='Detect a document in a video and show its top-down view',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Defaults can also be set in the environment or a .env file:
  DOCULENS_SOURCE, DOCULENS_FRAME_SIZE, DOCULENS_BRIGHTNESS, DOCULENS_DEBUG

Press q or ESC in a window to quit.
        """
    )

    parser.add_argument(
        'source',
        nargs='?',
        default=settings['source'],
        help='Video file, stream URL or camera index (default: %(default)s)'
    )

    parser.add_argument(
        '--size',
        type=FrameSize.parse,
        default=settings['frame_size'],
        help='Processing and output resolution WIDTHxHEIGHT (default: %(default)s)'
    )

    parser.add_argument(
        '--brightness',
        type=float,
        default=settings['brightness'],
        help='Camera brightness hint (default: %(default)s)'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        default=settings['debug'],
        help='Print why contours were rejected'
    )

    return parser.parse_args(argv)


def run(source, frame_size: FrameSize, brightness=None, debug: bool = False) -> int:
    """
    Run the capture loop until the stream ends or the user quits.

    Returns:
        Number of processed frames
    """
    scanner = DocumentScanner(frame_size, debug=debug)
    processed = 0

    with VideoSource(source, frame_size, brightness) as video:
        delay = video.frame_delay_ms
        print(f"📹 Source: {source} ({video.fps:.1f} fps, processing at {frame_size})")

        try:
            for frame in video.frames():
                result = scanner.process(frame)
                processed += 1

                cv2.imshow(WORKFLOW_WINDOW, result.stacked)
                cv2.imshow(RESULT_WINDOW, result.result)

                key = cv2.waitKey(delay) & 0xFF
                if key in EXIT_KEYS:
                    print("Stopped by user")
                    break
            else:
                print("End of video or cannot read frame")
        finally:
            cv2.destroyAllWindows()

    return processed


def main(argv=None):
    """Main CLI function"""
    args = parse_args(argv)

    try:
        processed = run(args.source, args.size, args.brightness, args.debug)
    except RuntimeError as e:
        print(f"❌ Error: {e}")
        sys.exit(1)

    print(f"✅ Processed {processed} frame(s)")


if __name__ == '__main__':
    main()
