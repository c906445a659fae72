"""
Models package - Pydantic models for overlay configuration and capture results.
"""

from .capture_pipeline_models import (
    CaptureArtifact,
    CaptureCompleted,
    CaptureProcessingResult,
    UserChoiceRequired,
)
from .overlay_model import (
    AnyOverlayConfig,
    LegacyOverlayConfig,
    OrientationSettings,
    OverlayConfig,
    OverlayItem,
    generate_overlay_id,
)

__all__ = [
    "AnyOverlayConfig",
    "LegacyOverlayConfig",
    "OrientationSettings",
    "OverlayConfig",
    "OverlayItem",
    "generate_overlay_id",
    "CaptureArtifact",
    "CaptureCompleted",
    "CaptureProcessingResult",
    "UserChoiceRequired",
]
