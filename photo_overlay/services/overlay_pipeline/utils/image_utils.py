# photo_overlay/services/overlay_pipeline/utils/image_utils.py
"""
Image Utilities - Reusable image processing functions for overlay compositing.

Provides decoding, opacity, resizing and encoding helpers shared by the
compositor, the orientation classifier and the artifact packager.
"""

import io
from typing import Optional, Tuple

from PIL import Image as PILImage
from PIL import ImageOps, UnidentifiedImageError

from ....constants import COMPOSITE_FORMAT, SUPPORTED_OVERLAY_FORMATS
from ....enums import LoggerName, LogSource
from ....exceptions import DecodeError
from ...logger import get_service_logger

logger = get_service_logger(LoggerName.OVERLAY_PIPELINE, LogSource.PIPELINE)


def decode_image(data: bytes, label: str = "image") -> PILImage.Image:
    """
    Decode image bytes at native resolution with EXIF orientation applied.

    EXIF rotation is applied so dimensions match what a viewer displays.

    Args:
        data: Encoded image bytes
        label: Human-readable name used in errors and logs

    Returns:
        Fully loaded PIL Image

    Raises:
        DecodeError: If the bytes are empty or not a decodable image
    """
    if not data:
        raise DecodeError(f"Cannot decode {label}: no data")

    try:
        image = PILImage.open(io.BytesIO(data))
        image.load()
        source_format = image.format
        image = ImageOps.exif_transpose(image)
        image.format = source_format
    except (UnidentifiedImageError, OSError, ValueError, PILImage.DecompressionBombError) as e:
        raise DecodeError(f"Cannot decode {label}: {e}") from e

    logger.debug(
        f"Decoded {label}: {image.size} pixels, format: {source_format}, mode: {image.mode}"
    )
    return image


def get_image_size(data: bytes) -> Tuple[int, int]:
    """
    Get (width, height) of encoded image bytes, EXIF orientation applied.

    Raises:
        DecodeError: If the bytes cannot be decoded
    """
    return decode_image(data).size


def ensure_rgba_mode(image: PILImage.Image) -> PILImage.Image:
    """
    Ensure image is in RGBA mode for proper transparency handling.

    Args:
        image: Source image

    Returns:
        Image in RGBA mode
    """
    if image.mode != "RGBA":
        logger.debug(f"🔄 Converting image from {image.mode} to RGBA mode")
        image = image.convert("RGBA")
    return image


def apply_opacity(image: PILImage.Image, opacity: float) -> PILImage.Image:
    """
    Apply opacity to image by scaling its alpha channel.

    Args:
        image: PIL Image to apply opacity to
        opacity: Opacity value (0.0 = transparent, 1.0 = opaque)

    Returns:
        RGBA PIL Image with applied opacity
    """
    image = ensure_rgba_mode(image)

    if opacity >= 1.0:
        return image

    r, g, b, a = image.split()
    a = a.point(lambda p: int(round(p * max(0.0, opacity))))

    return PILImage.merge("RGBA", (r, g, b, a))


def resize_to_box(image: PILImage.Image, size: Tuple[int, int]) -> PILImage.Image:
    """
    Resize image to an exact box, ignoring its aspect ratio.

    Args:
        image: PIL Image to resize
        size: Target (width, height), each at least 1 pixel

    Returns:
        Resized PIL Image (the same object if no resize is needed)
    """
    width, height = max(1, size[0]), max(1, size[1])
    if image.size == (width, height):
        return image
    return image.resize((width, height), PILImage.Resampling.LANCZOS)


def fit_within(image: PILImage.Image, max_size: Tuple[int, int]) -> PILImage.Image:
    """
    Downscale image to fit within max_size, preserving aspect ratio.

    Never upscales. Returns a copy so the caller's image is left untouched.
    """
    fitted = image.copy()
    if fitted.width > max_size[0] or fitted.height > max_size[1]:
        fitted.thumbnail(max_size, PILImage.Resampling.LANCZOS)
        logger.debug(f"Downscaled image from {image.size} to {fitted.size}")
    return fitted


def flatten_to_rgb(image: PILImage.Image) -> PILImage.Image:
    """
    Flatten any mode onto an opaque black background for lossy encoding.

    Transparent pixels become black, matching how a canvas encodes to JPEG.
    """
    if image.mode == "RGB":
        return image

    rgba = ensure_rgba_mode(image)
    background = PILImage.new("RGB", rgba.size, (0, 0, 0))
    background.paste(rgba, (0, 0), rgba)
    return background


def encode_image(
    image: PILImage.Image, quality: int, image_format: str = COMPOSITE_FORMAT
) -> bytes:
    """
    Encode image to a fresh lossy raster buffer.

    Args:
        image: PIL Image to encode
        quality: Encoder quality (1-100)
        image_format: Pillow format name

    Returns:
        Encoded bytes
    """
    buffer = io.BytesIO()
    flatten_to_rgb(image).save(buffer, format=image_format, quality=quality)
    return buffer.getvalue()


def validate_image_format(image: PILImage.Image, label: Optional[str] = None) -> None:
    """
    Validate that an overlay asset's format is supported.

    Args:
        image: PIL Image to validate

    Raises:
        DecodeError: If format is not supported
    """
    if image.format not in SUPPORTED_OVERLAY_FORMATS:
        logger.error(f"Unsupported image format: {image.format}")
        raise DecodeError(
            f"Unsupported image format for {label or 'overlay'}: {image.format}. "
            f"Supported formats: {', '.join(sorted(SUPPORTED_OVERLAY_FORMATS))}"
        )
