# photo_overlay/models/capture_pipeline_models.py
"""
Capture Pipeline Domain Models

Pydantic models for the per-capture hand-off contract: the two-artifact result
given to the upload collaborator and the interactive choice request.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from ..constants import COMPOSITE_MIME_TYPE
from ..enums import Orientation
from .overlay_model import OverlayItem


class CaptureArtifact(BaseModel):
    """Original and manipulated image bytes for one capture."""

    original_bytes: bytes = Field(..., description="Normalized untouched photo")
    manipulated_bytes: bytes = Field(
        ..., description="Normalized composited photo, or the original when no overlay"
    )
    orientation: Orientation = Field(..., description="Detected photo orientation")
    chosen_overlay_id: Optional[str] = Field(
        None, description="Id of the applied overlay item"
    )
    chosen_overlay_name: Optional[str] = Field(
        None, description="Display name of the applied overlay item"
    )
    mime_type: str = Field(COMPOSITE_MIME_TYPE, description="MIME type of both buffers")

    @property
    def has_overlay(self) -> bool:
        """Whether an overlay was actually composited."""
        return self.chosen_overlay_id is not None

    def upload_metadata(self) -> Dict[str, Any]:
        """Provenance stored with the upload for the moderation toggle."""
        return {
            "compressed": True,
            "has_overlay": self.has_overlay,
            "overlay_id": self.chosen_overlay_id,
            "overlay_name": self.chosen_overlay_name,
            "orientation": self.orientation.value,
            "original_size": len(self.original_bytes),
            "manipulated_size": len(self.manipulated_bytes),
            "mime_type": self.mime_type,
        }


class UserChoiceRequired(BaseModel):
    """Returned by process_capture when the user must pick an overlay."""

    orientation: Orientation
    eligible: List[OverlayItem] = Field(
        ..., description="Eligible overlays, in configured order"
    )
    highlighted_index: Optional[int] = Field(
        0, description="Currently highlighted item; None is the 'no overlay' slot"
    )

    @property
    def slot_count(self) -> int:
        """Carousel size including the 'no overlay' slot."""
        return len(self.eligible) + 1


class CaptureCompleted(BaseModel):
    """Returned by process_capture when no user interaction is needed."""

    result: CaptureArtifact


CaptureProcessingResult = Union[UserChoiceRequired, CaptureCompleted]
