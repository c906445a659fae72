# photo_overlay/services/overlay_pipeline/services/__init__.py
"""
Overlay Pipeline Services
"""

from .authoring_service import OverlayConfigEditor

__all__ = [
    "OverlayConfigEditor",
]
