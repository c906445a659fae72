# photo_overlay/services/capture_pipeline/workflow_orchestrator_service.py
"""
Capture Pipeline Workflow Orchestrator Service

Orchestrates one capture end to end by coordinating the pipeline services:
orientation -> eligibility -> selection -> compositing -> packaging.
This is the entry point the capture UI drives.
"""

import random
from typing import Any, Optional

from ...config import Settings, settings as default_settings
from ...constants import COMPOSITE_MIME_TYPE
from ...enums import (
    LogEmoji,
    LoggerName,
    LogSource,
    NavigationDirection,
    Orientation,
    SelectionState,
)
from ...exceptions import (
    AssetFetchError,
    CaptureCancelledError,
    ConfigError,
    DecodeError,
    OverlayDecodeError,
    SelectionStateError,
)
from ...models.capture_pipeline_models import (
    CaptureArtifact,
    CaptureCompleted,
    CaptureProcessingResult,
    UserChoiceRequired,
)
from ...models.overlay_model import OverlayConfig, OverlayItem
from ..logger import get_service_logger
from ..overlay_pipeline.generators.watermark_generator import WatermarkCompositor
from ..overlay_pipeline.utils.image_path_utils import AssetFetcher, HttpAssetFetcher
from ..overlay_pipeline.utils.overlay_helpers import (
    get_default_overlay_config,
    resolve_overlay_config,
)
from .eligibility_service import get_eligible_overlays, should_run_overlay_flow
from .orientation_service import OrientationService
from .packaging_service import CapturePackagingService
from .selection_service import CURRENT_HIGHLIGHT, OverlaySelection

logger = get_service_logger(
    LoggerName.CAPTURE_PIPELINE, LogSource.PIPELINE, default_emoji=LogEmoji.CAPTURE
)


class CaptureWorkflowOrchestrator:
    """
    Drives the overlay flow for one capture at a time.

    Responsibilities:
    - Resolve the link's overlay config (legacy blobs migrated, malformed ones disabled)
    - Classify orientation and compute eligible overlays
    - Auto-select (random) or wait for the user's confirmed choice
    - Composite the chosen overlay, degrading to "no overlay" on asset failures
    - Package original + manipulated artifacts for the upload collaborator

    A retake (or a new capture) invalidates anything still in flight: a step
    that resumes afterwards raises CaptureCancelledError instead of applying.
    """

    def __init__(
        self,
        asset_fetcher: Optional[AssetFetcher] = None,
        compositor: Optional[WatermarkCompositor] = None,
        packager: Optional[CapturePackagingService] = None,
        orientation_service: Optional[OrientationService] = None,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or default_settings
        self.asset_fetcher = asset_fetcher or HttpAssetFetcher(settings=self.settings)
        self.compositor = compositor or WatermarkCompositor(settings=self.settings)
        self.packager = packager or CapturePackagingService(settings=self.settings)
        self.orientation_service = orientation_service or OrientationService()
        self.selection = OverlaySelection(rng=rng)

        self._generation = 0
        self._raw_bytes: Optional[bytes] = None
        self._orientation: Optional[Orientation] = None

    # ------------------------------------------------------------------
    # Capture lifecycle
    # ------------------------------------------------------------------

    def _discard_capture(self) -> None:
        self._generation += 1
        self.selection.reset()
        self._raw_bytes = None
        self._orientation = None

    def _ensure_current(self, generation: int) -> None:
        if generation != self._generation:
            logger.info("Discarding stale capture step after retake", emoji=LogEmoji.CANCELED)
            raise CaptureCancelledError("Capture was retaken while this step was in flight")

    def retake(self) -> None:
        """Cancel the in-progress capture and discard all selection state."""
        logger.debug("Retake requested, resetting capture state")
        self._discard_capture()

    @property
    def pending_choice(self) -> Optional[UserChoiceRequired]:
        """Current choice request while awaiting the user, else None."""
        if self.selection.state != SelectionState.AWAITING_USER_CHOICE:
            return None
        return UserChoiceRequired(
            orientation=self._orientation,
            eligible=self.selection.eligible,
            highlighted_index=self.selection.highlighted_index,
        )

    def _resolve_config(self, config: Any) -> OverlayConfig:
        try:
            return resolve_overlay_config(config)
        except ConfigError as e:
            logger.warning(f"Overlay disabled for this capture: {e}")
            return get_default_overlay_config()

    async def process_capture(
        self,
        raw_bytes: bytes,
        config: Any,
        mime_type: str = COMPOSITE_MIME_TYPE,
    ) -> CaptureProcessingResult:
        """
        Process a freshly captured photo.

        Args:
            raw_bytes: Captured image bytes (camera, file picker or webcam)
            config: OverlayConfig, raw persisted blob (legacy or current), or None
            mime_type: Declared MIME type of raw_bytes

        Returns:
            UserChoiceRequired when the user must pick, else CaptureCompleted

        Raises:
            DecodeError: If the photo is not an image or cannot be decoded
            CaptureCancelledError: If the capture was retaken mid-flight
        """
        self._discard_capture()
        generation = self._generation

        if not mime_type or not mime_type.startswith("image/"):
            raise DecodeError(f"Please select an image file (got {mime_type or 'unknown type'})")

        self._raw_bytes = raw_bytes
        overlay_config = self._resolve_config(config)

        self._orientation = await self.orientation_service.classify(raw_bytes)
        self._ensure_current(generation)
        logger.info(f"Processing {mime_type} capture ({self._orientation.value})")

        if not should_run_overlay_flow(overlay_config):
            return CaptureCompleted(result=await self._finish(generation, None))

        eligible = get_eligible_overlays(overlay_config, self._orientation)
        if not eligible:
            logger.debug(f"No overlays available for {self._orientation.value} photos")
            return CaptureCompleted(result=await self._finish(generation, None))

        state = self.selection.begin(eligible, overlay_config.mode)
        if state == SelectionState.AUTO_SELECTED:
            return CaptureCompleted(
                result=await self._finish(generation, self.selection.chosen_item)
            )

        logger.debug(f"Awaiting user choice among {len(eligible)} overlays")
        return self.pending_choice

    # ------------------------------------------------------------------
    # Interactive choice
    # ------------------------------------------------------------------

    def _handle_state_error(self, error: SelectionStateError) -> None:
        if self.settings.is_development:
            raise error
        logger.warning(f"Ignoring invalid selection request: {error}")

    def navigate(self, direction: NavigationDirection) -> Optional[int]:
        """Move the carousel highlight; returns the highlighted index (None = no overlay)."""
        try:
            return self.selection.navigate(direction)
        except SelectionStateError as e:
            self._handle_state_error(e)
            return self.selection.highlighted_index

    def highlight(self, index: Optional[int]) -> None:
        """Highlight an eligible overlay directly (None = no overlay)."""
        try:
            self.selection.highlight(index)
        except SelectionStateError as e:
            self._handle_state_error(e)

    async def confirm_selection(self, index=CURRENT_HIGHLIGHT) -> Optional[CaptureArtifact]:
        """
        Complete an in-progress user-choice flow.

        Args:
            index: Eligible-overlay index, None for no overlay; defaults to the highlight

        Returns:
            CaptureArtifact, or None when ignored outside a user-choice flow in production

        Raises:
            SelectionStateError: Outside a user-choice flow in development
            IndexError: If index is outside the eligible set
            CaptureCancelledError: If the capture was retaken mid-flight
        """
        try:
            self.selection.confirm(index)
        except SelectionStateError as e:
            self._handle_state_error(e)
            return None

        return await self._finish(self._generation, self.selection.chosen_item)

    # ------------------------------------------------------------------
    # Compositing and packaging
    # ------------------------------------------------------------------

    async def _apply_overlay(self, generation: int, item: OverlayItem) -> Optional[bytes]:
        """Composite item onto the capture; None when the asset cannot be used."""
        orientation = self._orientation
        url = item.url_for(orientation)
        settings = item.settings_for(orientation)

        logger.info(
            f"Applying overlay '{item.name}' ({orientation.value}) from {url}",
            emoji=LogEmoji.OVERLAY,
        )

        try:
            overlay_bytes = await self.asset_fetcher.fetch(url)
            self._ensure_current(generation)
            composited = await self.compositor.composite_async(
                self._raw_bytes, overlay_bytes, settings
            )
        except (AssetFetchError, OverlayDecodeError) as e:
            logger.warning(f"Failed to apply overlay, continuing with original: {e}")
            return None
        except (CaptureCancelledError, DecodeError):
            raise
        except Exception as e:
            logger.error(
                "Unexpected overlay failure, continuing with original",
                exception=e,
                error_context={"overlay_id": item.id, "url": url},
            )
            return None

        self._ensure_current(generation)
        logger.debug("Overlay applied successfully", emoji=LogEmoji.SUCCESS)
        return composited

    async def _finish(
        self, generation: int, chosen_item: Optional[OverlayItem]
    ) -> CaptureArtifact:
        manipulated = None
        if chosen_item is not None:
            manipulated = await self._apply_overlay(generation, chosen_item)
            # A failed overlay returns None; a retaken capture is never packaged
            self._ensure_current(generation)

        applied_item = chosen_item if manipulated is not None else None
        artifact = await self.packager.package_async(
            self._raw_bytes, manipulated, self._orientation, applied_item
        )
        self._ensure_current(generation)

        # Artifact is handed off; the core keeps nothing from this capture
        self._discard_capture()
        return artifact
