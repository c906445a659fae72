# photo_overlay/services/capture_pipeline/packaging_service.py
"""
Packaging Service - Builds the two-artifact hand-off for the upload collaborator.

Both the original and the manipulated photo are size-normalized independently.
When no overlay was applied, the manipulated artifact is the normalized
original itself; no second asset is fabricated.
"""

import asyncio
from pathlib import PurePosixPath
from typing import Optional

from ...config import Settings, settings as default_settings
from ...constants import COMPOSITE_FORMAT, COMPOSITE_MIME_TYPE, ORIGINAL_STORAGE_SUFFIX
from ...enums import LogEmoji, LoggerName, LogSource, Orientation
from ...models.capture_pipeline_models import CaptureArtifact
from ...models.overlay_model import OverlayItem
from ..logger import get_service_logger
from ..overlay_pipeline.utils.image_utils import decode_image, encode_image, fit_within

logger = get_service_logger(LoggerName.CAPTURE_PIPELINE, LogSource.PIPELINE)


def original_storage_path(manipulated_path: str) -> str:
    """
    Derive the storage path of the untouched original from the manipulated one.

    ``pending/abc/123.jpg`` -> ``pending/abc/123_original.jpg``
    """
    path = PurePosixPath(manipulated_path)
    return str(path.with_name(f"{path.stem}{ORIGINAL_STORAGE_SUFFIX}{path.suffix}"))


class CapturePackagingService:
    """
    Normalizes and packages capture buffers.

    Normalization: decode (EXIF orientation applied), fit within the configured
    maximum box without upscaling, re-encode as JPEG at the configured quality.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    @property
    def max_size(self):
        return (self.settings.package_max_width, self.settings.package_max_height)

    def normalize(self, data: bytes, label: str = "image") -> bytes:
        """
        Size/quality-normalize one buffer.

        Raises:
            DecodeError: If the buffer cannot be decoded
        """
        image = decode_image(data, label=label)
        fitted = fit_within(image, self.max_size)
        normalized = encode_image(
            fitted, quality=self.settings.package_quality, image_format=COMPOSITE_FORMAT
        )
        logger.debug(f"Compressed {label}: {len(data)} -> {len(normalized)} bytes")
        return normalized

    def package(
        self,
        original_bytes: bytes,
        manipulated_bytes: Optional[bytes],
        orientation: Orientation,
        chosen_item: Optional[OverlayItem] = None,
    ) -> CaptureArtifact:
        """
        Produce the CaptureArtifact for one capture.

        Args:
            original_bytes: Raw captured photo
            manipulated_bytes: Composited photo, or None when no overlay was applied
            orientation: Detected orientation
            chosen_item: Applied overlay item (ignored when manipulated_bytes is None)

        Raises:
            DecodeError: If the original (or composited) buffer cannot be decoded
        """
        original = self.normalize(original_bytes, label="original")

        if manipulated_bytes is None:
            manipulated = original
            chosen_item = None
        else:
            manipulated = self.normalize(manipulated_bytes, label="manipulated")

        artifact = CaptureArtifact(
            original_bytes=original,
            manipulated_bytes=manipulated,
            orientation=orientation,
            chosen_overlay_id=chosen_item.id if chosen_item else None,
            chosen_overlay_name=chosen_item.name if chosen_item else None,
            mime_type=COMPOSITE_MIME_TYPE,
        )

        logger.info(
            f"Packaged capture ({orientation.value}, "
            f"overlay: {artifact.chosen_overlay_name if artifact.has_overlay else 'none'})",
            emoji=LogEmoji.STORAGE,
        )
        return artifact

    async def package_async(
        self,
        original_bytes: bytes,
        manipulated_bytes: Optional[bytes],
        orientation: Orientation,
        chosen_item: Optional[OverlayItem] = None,
    ) -> CaptureArtifact:
        """Run package() in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, self.package, original_bytes, manipulated_bytes, orientation, chosen_item
        )
