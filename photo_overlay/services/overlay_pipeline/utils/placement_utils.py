"""
Placement Utilities - Overlay box geometry for the compositor.

Pure functions: they take sizes and settings and return the overlay render box
and its origin on the base image. No image decoding happens here.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from ....constants import FULL_BLEED_SCALE_THRESHOLD
from ....enums import OverlayPosition
from ....models.overlay_model import clamp_unit

Size = Tuple[float, float]


@dataclass(frozen=True)
class OverlayPlacement:
    """Integer pixel box at which the overlay is drawn on the base image."""

    x: int
    y: int
    width: int
    height: int

    @property
    def is_renderable(self) -> bool:
        """A box smaller than one pixel in either dimension draws nothing."""
        return self.width >= 1 and self.height >= 1


def compute_overlay_box(
    base_size: Tuple[int, int], overlay_size: Tuple[int, int], scale: float
) -> Size:
    """
    Compute the overlay render box in (fractional) pixels.

    At scale >= 0.95 the box is the full base image and the overlay's aspect
    ratio is ignored. Below that, the overlay keeps its aspect ratio and its
    dominant dimension is pinned to ``scale`` of the base image ("cover" mode):
    an overlay proportionally wider than the base is sized by height, otherwise
    by width.

    Args:
        base_size: (width, height) of the base image
        overlay_size: (width, height) of the overlay asset
        scale: Fraction of the base image, clamped to 0-1

    Returns:
        (box_width, box_height)
    """
    base_width, base_height = base_size
    overlay_width, overlay_height = overlay_size
    scale = clamp_unit(scale)

    if scale >= FULL_BLEED_SCALE_THRESHOLD:
        return (float(base_width), float(base_height))

    image_aspect = base_width / base_height
    overlay_aspect = overlay_width / overlay_height

    if overlay_aspect > image_aspect:
        # Overlay is wider - scale based on height
        box_height = base_height * scale
        box_width = box_height * overlay_aspect
    else:
        # Overlay is taller - scale based on width
        box_width = base_width * scale
        box_height = box_width / overlay_aspect

    return (box_width, box_height)


def compute_overlay_origin(
    base_size: Tuple[float, float], box_size: Size, position: OverlayPosition
) -> Size:
    """
    Compute the top-left corner of the overlay box (no padding on any edge).

    Args:
        base_size: (width, height) of the base image
        box_size: (width, height) of the overlay box
        position: Anchor position

    Returns:
        (x, y) origin; may be negative when a cover-mode box exceeds the base
    """
    base_width, base_height = base_size
    box_width, box_height = box_size
    position = OverlayPosition(position)

    if position == OverlayPosition.CENTER:
        return ((base_width - box_width) / 2, (base_height - box_height) / 2)
    if position == OverlayPosition.TOP_LEFT:
        return (0, 0)
    if position == OverlayPosition.TOP_RIGHT:
        return (base_width - box_width, 0)
    if position == OverlayPosition.BOTTOM_LEFT:
        return (0, base_height - box_height)
    return (base_width - box_width, base_height - box_height)


def compute_overlay_placement(
    base_size: Tuple[int, int],
    overlay_size: Tuple[int, int],
    scale: float,
    position: OverlayPosition,
) -> OverlayPlacement:
    """
    Compute the pixel placement used for rasterizing.

    The box is rounded first and the origin derived from the rounded box, so
    edge-anchored overlays stay exactly flush with the base image edges.
    """
    box_width, box_height = compute_overlay_box(base_size, overlay_size, scale)
    pixel_box = (int(round(box_width)), int(round(box_height)))

    origin_x, origin_y = compute_overlay_origin(base_size, pixel_box, position)

    return OverlayPlacement(
        x=math.floor(origin_x),
        y=math.floor(origin_y),
        width=pixel_box[0],
        height=pixel_box[1],
    )
