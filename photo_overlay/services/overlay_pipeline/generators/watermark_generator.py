# photo_overlay/services/overlay_pipeline/generators/watermark_generator.py
"""
Watermark Compositor - Composites an overlay asset onto a captured photo.

Rendering steps:
- Decode base photo and overlay asset at native resolution
- Compute the overlay box (full bleed or cover mode) and its anchored origin
- Draw base, then overlay with global alpha, onto a fresh canvas
- Encode the result as JPEG; the input bytes are never modified
"""

import asyncio
from typing import Optional

from PIL import Image as PILImage

from ....config import Settings, settings as default_settings
from ....enums import LogEmoji, LoggerName, LogSource
from ....exceptions import DecodeError, OverlayDecodeError
from ....models.overlay_model import OrientationSettings
from ...logger import get_service_logger
from ..utils.image_utils import (
    apply_opacity,
    decode_image,
    encode_image,
    ensure_rgba_mode,
    resize_to_box,
    validate_image_format,
)
from ..utils.placement_utils import OverlayPlacement, compute_overlay_placement

logger = get_service_logger(LoggerName.OVERLAY_PIPELINE, LogSource.PIPELINE)


class WatermarkCompositor:
    """
    Composites a single overlay image onto a base photo.

    Output is always a new W×H raster at the base photo's native resolution.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    def render(
        self,
        base_image: PILImage.Image,
        overlay_image: PILImage.Image,
        settings: OrientationSettings,
    ) -> PILImage.Image:
        """
        Render overlay onto a new canvas the size of the base image.

        Args:
            base_image: Decoded base photo
            overlay_image: Decoded overlay asset
            settings: Placement settings for the photo's orientation

        Returns:
            New RGBA canvas; neither input is modified
        """
        canvas = ensure_rgba_mode(base_image).copy()

        placement = compute_overlay_placement(
            base_image.size, overlay_image.size, settings.scale, settings.position
        )
        if not placement.is_renderable:
            logger.debug(f"Overlay box {placement} below one pixel, nothing drawn")
            return canvas

        self._draw_overlay(canvas, overlay_image, placement, settings.opacity)
        return canvas

    def _draw_overlay(
        self,
        canvas: PILImage.Image,
        overlay_image: PILImage.Image,
        placement: OverlayPlacement,
        opacity: float,
    ) -> None:
        logger.debug(
            f"🔧 Drawing overlay at ({placement.x}, {placement.y}) "
            f"size {placement.width}x{placement.height}, opacity {opacity}"
        )

        overlay = resize_to_box(
            ensure_rgba_mode(overlay_image), (placement.width, placement.height)
        )
        overlay = apply_opacity(overlay, opacity)

        # paste() clips boxes that extend past the canvas, including negative origins
        layer = PILImage.new("RGBA", canvas.size, (0, 0, 0, 0))
        layer.paste(overlay, (placement.x, placement.y))
        canvas.alpha_composite(layer)

    def composite(
        self,
        base_bytes: bytes,
        overlay_bytes: bytes,
        settings: OrientationSettings,
    ) -> bytes:
        """
        Composite overlay asset onto base photo and encode the result.

        Args:
            base_bytes: Encoded base photo
            overlay_bytes: Encoded overlay asset
            settings: Placement settings for the photo's orientation

        Returns:
            Freshly encoded JPEG bytes

        Raises:
            DecodeError: If the base photo cannot be decoded
            OverlayDecodeError: If the overlay asset cannot be decoded or is unsupported
        """
        base_image = decode_image(base_bytes, label="base image")

        try:
            overlay_image = decode_image(overlay_bytes, label="overlay asset")
            validate_image_format(overlay_image, label="overlay asset")
        except DecodeError as e:
            raise OverlayDecodeError(str(e)) from e

        composited = self.render(base_image, overlay_image, settings)
        result = encode_image(composited, quality=self.settings.composite_quality)

        logger.debug(
            f"Overlay composited onto {base_image.size} photo ({len(result)} bytes)",
            emoji=LogEmoji.OVERLAY,
        )
        return result

    async def composite_async(
        self,
        base_bytes: bytes,
        overlay_bytes: bytes,
        settings: OrientationSettings,
    ) -> bytes:
        """Run composite() in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, self.composite, base_bytes, overlay_bytes, settings
        )
