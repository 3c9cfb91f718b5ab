"""
Download filename suggestions for resolved media.
"""

import time
from typing import Optional

from tiksave.core.config import settings


def suggest_download_filename(now: Optional[float] = None) -> str:
    """
    Build a timestamp-based filename for a downloaded video.

    Args:
        now: Unix time in seconds, defaults to the current time

    Returns:
        Filename such as ``tiktok-video-1700000000000.mp4``
    """
    timestamp = time.time() if now is None else now
    millis = int(timestamp * 1000)
    return f"{settings.download_filename_prefix}-{millis}.{settings.download_filename_extension}"
