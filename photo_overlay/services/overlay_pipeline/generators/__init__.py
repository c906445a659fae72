# photo_overlay/services/overlay_pipeline/generators/__init__.py
"""
Overlay Generators - Raster compositing of overlay assets onto photos.
"""

from .watermark_generator import WatermarkCompositor

__all__ = [
    "WatermarkCompositor",
]
