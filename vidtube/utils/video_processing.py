"""
Video processing utilities
"""
import cv2
from typing import Tuple

import structlog

logger = structlog.get_logger(__name__)


def extract_video_info(video_path: str) -> Tuple[float, int, int]:
    """
    Extract video information
    Returns: (duration_sec, width, height)
    """
    try:
        cap = cv2.VideoCapture(video_path)

        if not cap.isOpened():
            return (0.0, 0, 0)

        fps = cap.get(cv2.CAP_PROP_FPS)
        frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
        width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))

        duration_sec = round(frame_count / fps, 2) if fps > 0 else 0.0

        cap.release()
        return (duration_sec, width, height)
    except cv2.error as e:
        logger.warning("video_info_failed", path=video_path, error=str(e))
        return (0.0, 0, 0)
