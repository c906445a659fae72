# photo_overlay/services/capture_pipeline/orientation_service.py
"""
Orientation Service - Portrait/landscape classification of captured photos.
"""

import asyncio
from typing import Tuple

from ...enums import LoggerName, LogSource, Orientation
from ...exceptions import DecodeError
from ..logger import get_service_logger
from ..overlay_pipeline.utils.image_utils import get_image_size

logger = get_service_logger(LoggerName.CAPTURE_PIPELINE, LogSource.PIPELINE)


def orientation_for_size(size: Tuple[int, int]) -> Orientation:
    """Taller than wide is portrait; wider or square is landscape."""
    width, height = size
    return Orientation.PORTRAIT if height > width else Orientation.LANDSCAPE


def classify_orientation(image_bytes: bytes) -> Orientation:
    """
    Classify a photo's orientation from its encoded bytes.

    Decode failure never raises: it only affects which overlay variant is
    offered, so the photo is treated as portrait and a warning is logged.
    """
    try:
        size = get_image_size(image_bytes)
    except DecodeError as e:
        logger.warning(f"Could not detect orientation, defaulting to portrait: {e}")
        return Orientation.PORTRAIT

    return orientation_for_size(size)


class OrientationService:
    """Async front for classify_orientation; decoding runs off the event loop."""

    async def classify(self, image_bytes: bytes) -> Orientation:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, classify_orientation, image_bytes)
