"""
Photo Overlay Engine

Composites per-link overlay images onto guest photos at capture time and
hands off the original and manipulated artifacts for upload.

Typical usage:
```python
from photo_overlay import create_capture_pipeline, UserChoiceRequired

orchestrator = create_capture_pipeline()
result = await orchestrator.process_capture(photo_bytes, link_overlay_config)
```
"""

from .enums import NavigationDirection, Orientation, OverlayMode, OverlayPosition
from .exceptions import (
    AssetFetchError,
    CapacityError,
    CaptureCancelledError,
    ConfigError,
    DecodeError,
    OverlayDecodeError,
    OverlayEngineError,
    SelectionStateError,
)
from .models import (
    CaptureArtifact,
    CaptureCompleted,
    LegacyOverlayConfig,
    OrientationSettings,
    OverlayConfig,
    OverlayItem,
    UserChoiceRequired,
)
from .services.capture_pipeline import (
    CaptureWorkflowOrchestrator,
    create_capture_pipeline,
)
from .services.overlay_pipeline import (
    HttpAssetFetcher,
    OverlayConfigEditor,
    WatermarkCompositor,
    resolve_overlay_config,
)

__version__ = "1.0.0"

__all__ = [
    # Enums
    "NavigationDirection",
    "Orientation",
    "OverlayMode",
    "OverlayPosition",
    # Exceptions
    "OverlayEngineError",
    "AssetFetchError",
    "CapacityError",
    "CaptureCancelledError",
    "ConfigError",
    "DecodeError",
    "OverlayDecodeError",
    "SelectionStateError",
    # Models
    "CaptureArtifact",
    "CaptureCompleted",
    "LegacyOverlayConfig",
    "OrientationSettings",
    "OverlayConfig",
    "OverlayItem",
    "UserChoiceRequired",
    # Services
    "CaptureWorkflowOrchestrator",
    "HttpAssetFetcher",
    "OverlayConfigEditor",
    "WatermarkCompositor",
    "create_capture_pipeline",
    "resolve_overlay_config",
]
