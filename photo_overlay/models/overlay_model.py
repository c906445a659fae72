# photo_overlay/models/overlay_model.py
"""
Overlay system models - Pydantic models for per-link overlay configuration.

This module provides type-safe interfaces for the overlay engine including:
- Orientation-specific placement settings
- Overlay items with portrait and landscape variants
- The current multi-overlay configuration and its legacy single-overlay predecessor

Persisted JSON uses camelCase keys (``portraitUrl``); Python code uses snake_case.
"""

import uuid
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..constants import (
    DEFAULT_ORIENTATION_ENABLED,
    DEFAULT_OVERLAY_ENABLED,
    DEFAULT_OVERLAY_MODE,
    DEFAULT_OVERLAY_OPACITY,
    DEFAULT_OVERLAY_POSITION,
    DEFAULT_OVERLAY_SCALE,
    MAX_OVERLAYS,
)
from ..enums import Orientation, OverlayMode, OverlayPosition


def generate_overlay_id() -> str:
    """Fresh opaque identifier for an overlay item."""
    return str(uuid.uuid4())


def clamp_unit(value: float) -> float:
    """Clamp a value into [0, 1]."""
    return min(1.0, max(0.0, value))


class OrientationSettings(BaseModel):
    """Placement rules for one orientation of an overlay item"""

    enabled: bool = Field(
        DEFAULT_ORIENTATION_ENABLED,
        description="Whether this overlay is offered for this orientation",
    )
    position: OverlayPosition = Field(
        DEFAULT_OVERLAY_POSITION, description="Anchor position on the base image"
    )
    opacity: float = Field(
        DEFAULT_OVERLAY_OPACITY, description="Global alpha, clamped to 0-1"
    )
    scale: float = Field(
        DEFAULT_OVERLAY_SCALE,
        description="Dominant dimension as a fraction of the base image, clamped to 0-1",
    )

    @field_validator("opacity", "scale")
    @classmethod
    def clamp_to_unit_interval(cls, v: float) -> float:
        """Out-of-range values are clamped, never rejected"""
        return clamp_unit(v)

    model_config = ConfigDict(validate_assignment=True)


class OverlayItem(BaseModel):
    """Single overlay with independent portrait and landscape configurations"""

    id: str = Field(default_factory=generate_overlay_id, description="Stable identifier")
    name: str = Field("", description="Display name shown in the choice carousel")
    portrait_url: str = Field(
        "", alias="portraitUrl", description="Overlay asset for portrait photos"
    )
    landscape_url: str = Field(
        "",
        alias="landscapeUrl",
        description="Overlay asset for landscape photos (can equal portrait_url)",
    )
    portrait: OrientationSettings = Field(default_factory=OrientationSettings)
    landscape: OrientationSettings = Field(default_factory=OrientationSettings)

    @field_validator("name", "portrait_url", "landscape_url", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    def settings_for(self, orientation: Orientation) -> OrientationSettings:
        """Get the placement settings for the given orientation."""
        if orientation == Orientation.PORTRAIT:
            return self.portrait
        return self.landscape

    def url_for(self, orientation: Orientation) -> str:
        """Get the asset URL for the given orientation."""
        if orientation == Orientation.PORTRAIT:
            return self.portrait_url
        return self.landscape_url

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)


class OverlayConfig(BaseModel):
    """Per-link overlay configuration (current multi-overlay format)"""

    enabled: bool = Field(
        DEFAULT_OVERLAY_ENABLED, description="When false the rest of the config is inert"
    )
    mode: OverlayMode = Field(
        DEFAULT_OVERLAY_MODE, description="Random auto-pick or interactive user choice"
    )
    overlays: List[OverlayItem] = Field(
        default_factory=list,
        max_length=MAX_OVERLAYS,
        description=f"Candidate overlays (max {MAX_OVERLAYS})",
    )

    @model_validator(mode="after")
    def check_unique_ids(self) -> "OverlayConfig":
        ids = [item.id for item in self.overlays]
        if len(ids) != len(set(ids)):
            raise ValueError("Overlay item ids must be unique")
        return self

    def get_item(self, overlay_id: str) -> Optional[OverlayItem]:
        """Find an overlay item by its stable id."""
        for item in self.overlays:
            if item.id == overlay_id:
                return item
        return None

    def to_raw(self) -> dict:
        """Serialize to the persisted JSON shape."""
        return self.model_dump(mode="json", by_alias=True)

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)


class LegacyOverlayConfig(BaseModel):
    """Single-overlay predecessor of OverlayConfig, kept for migration only"""

    enabled: bool = Field(DEFAULT_OVERLAY_ENABLED)
    url: str = Field(..., description="Overlay asset used for every orientation")
    position: OverlayPosition = Field(DEFAULT_OVERLAY_POSITION)
    opacity: float = Field(DEFAULT_OVERLAY_OPACITY)
    scale: float = Field(DEFAULT_OVERLAY_SCALE)

    @field_validator("opacity", "scale")
    @classmethod
    def clamp_to_unit_interval(cls, v: float) -> float:
        return clamp_unit(v)


# Either persisted shape, as found at the configuration boundary
AnyOverlayConfig = Union[LegacyOverlayConfig, OverlayConfig]
