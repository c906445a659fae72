"""
Capture Pipeline Domain - Overlay Flow for a Single Captured Photo

Takes a captured photo and the link's overlay configuration and produces the
two-artifact result handed to the upload collaborator.

Domain Responsibilities:
- Orientation classification (portrait / landscape)
- Eligibility filtering per orientation
- Overlay selection (random auto-pick or interactive user choice)
- Compositing coordination with graceful "no overlay" degradation
- Size/quality normalization and artifact packaging

Factory Usage:
```python
from photo_overlay.services.capture_pipeline import create_capture_pipeline

orchestrator = create_capture_pipeline()
result = await orchestrator.process_capture(photo_bytes, link_overlay_config)

if isinstance(result, UserChoiceRequired):
    orchestrator.navigate(NavigationDirection.RIGHT)
    artifact = await orchestrator.confirm_selection()
else:
    artifact = result.result
```
"""

import random
from typing import Optional

from ...config import Settings, settings as default_settings
from ...enums import LoggerName, LogSource
from ..logger import get_service_logger
from ..overlay_pipeline.generators.watermark_generator import WatermarkCompositor
from ..overlay_pipeline.utils.image_path_utils import AssetFetcher, HttpAssetFetcher
from .eligibility_service import get_eligible_overlays, is_eligible, should_run_overlay_flow
from .orientation_service import (
    OrientationService,
    classify_orientation,
    orientation_for_size,
)
from .packaging_service import CapturePackagingService, original_storage_path
from .selection_service import (
    NO_OVERLAY_SLOT,
    OverlaySelection,
    index_to_slot,
    navigate_index,
    slot_to_index,
)
from .workflow_orchestrator_service import CaptureWorkflowOrchestrator

logger = get_service_logger(LoggerName.CAPTURE_PIPELINE, LogSource.PIPELINE)


def create_capture_pipeline(
    settings: Optional[Settings] = None,
    asset_fetcher: Optional[AssetFetcher] = None,
    rng: Optional[random.Random] = None,
) -> CaptureWorkflowOrchestrator:
    """
    Factory function to create a capture pipeline with dependency injection.

    Args:
        settings: Optional settings override (defaults to global settings)
        asset_fetcher: Optional overlay asset fetcher (defaults to HTTP/local fetcher)
        rng: Optional random source for random selection mode

    Returns:
        CaptureWorkflowOrchestrator with all services wired
    """
    settings = settings or default_settings
    logger.debug("Creating capture pipeline with dependency injection...")

    orchestrator = CaptureWorkflowOrchestrator(
        asset_fetcher=asset_fetcher or HttpAssetFetcher(settings=settings),
        compositor=WatermarkCompositor(settings=settings),
        packager=CapturePackagingService(settings=settings),
        orientation_service=OrientationService(),
        settings=settings,
        rng=rng,
    )

    logger.debug("Capture pipeline created")
    return orchestrator


__all__ = [
    # Factory
    "create_capture_pipeline",
    # Services
    "CaptureWorkflowOrchestrator",
    "CapturePackagingService",
    "OrientationService",
    "OverlaySelection",
    # Functions
    "classify_orientation",
    "orientation_for_size",
    "get_eligible_overlays",
    "is_eligible",
    "should_run_overlay_flow",
    "original_storage_path",
    "index_to_slot",
    "slot_to_index",
    "navigate_index",
    "NO_OVERLAY_SLOT",
]
