# photo_overlay/services/overlay_pipeline/services/authoring_service.py
"""
Overlay Authoring Service - Capacity-bounded edits to a link's overlay config.

Every mutation addresses items by their stable id, never by list position,
and rebuilds the overlay list so the configuration model revalidates it.
"""

from typing import Any, Optional

from ....config import Settings, settings as default_settings
from ....enums import LogEmoji, LoggerName, LogSource, Orientation, OverlayMode
from ....exceptions import CapacityError, ConfigError
from ....models.overlay_model import OrientationSettings, OverlayConfig, OverlayItem
from ...logger import get_service_logger
from ..utils.overlay_helpers import (
    create_empty_overlay_item,
    get_default_overlay_config,
    resolve_overlay_config,
)

logger = get_service_logger(LoggerName.OVERLAY_AUTHORING, LogSource.AUTHORING)

IMMUTABLE_ITEM_FIELDS = {"id"}


class OverlayConfigEditor:
    """
    Editing session over one OverlayConfig.

    Mirrors the admin form: items can be added (up to the capacity limit),
    removed, renamed, re-pointed at new assets, and have their per-orientation
    placement adjusted.
    """

    def __init__(
        self,
        config: Optional[OverlayConfig] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        if config is None:
            config = get_default_overlay_config()
        self.config = config.model_copy(deep=True)

    @classmethod
    def from_raw(cls, raw: Any, settings: Optional[Settings] = None) -> "OverlayConfigEditor":
        """Open an editor on a persisted blob (legacy blobs are migrated)."""
        return cls(resolve_overlay_config(raw), settings=settings)

    @property
    def max_overlays(self) -> int:
        return self.settings.max_overlays

    def can_add_item(self) -> bool:
        """Whether another overlay fits under the capacity limit."""
        return len(self.config.overlays) < self.max_overlays

    def _require_item(self, overlay_id: str) -> OverlayItem:
        item = self.config.get_item(overlay_id)
        if item is None:
            raise ConfigError(f"Unknown overlay id: {overlay_id}")
        return item

    def _replace_item(self, replacement: OverlayItem) -> None:
        self.config.overlays = [
            replacement if item.id == replacement.id else item
            for item in self.config.overlays
        ]

    def set_enabled(self, enabled: bool) -> None:
        self.config.enabled = enabled

    def set_mode(self, mode: OverlayMode) -> None:
        self.config.mode = OverlayMode(mode)

    def add_item(self) -> OverlayItem:
        """
        Append a new empty overlay item.

        Raises:
            CapacityError: If the config already holds the maximum number of overlays
        """
        if not self.can_add_item():
            logger.warning(
                f"Rejected overlay add: {len(self.config.overlays)}/{self.max_overlays} in use"
            )
            raise CapacityError(self.max_overlays)

        item = create_empty_overlay_item()
        self.config.overlays = [*self.config.overlays, item]
        logger.debug(f"Added overlay item {item.id}", emoji=LogEmoji.CREATE)
        return item

    def remove_item(self, overlay_id: str) -> None:
        """
        Remove an overlay item by id.

        Raises:
            ConfigError: If no item has this id
        """
        self._require_item(overlay_id)
        self.config.overlays = [
            item for item in self.config.overlays if item.id != overlay_id
        ]
        logger.debug(f"Removed overlay item {overlay_id}", emoji=LogEmoji.DELETE)

    def update_item(self, overlay_id: str, **updates: Any) -> OverlayItem:
        """
        Apply a partial update to an overlay item (name, asset URLs, settings).

        Raises:
            ConfigError: If the id is unknown, the update touches the id, or a value is invalid
        """
        item = self._require_item(overlay_id)

        forbidden = IMMUTABLE_ITEM_FIELDS.intersection(updates)
        if forbidden:
            raise ConfigError(f"Cannot update overlay fields: {', '.join(sorted(forbidden))}")

        unknown = set(updates) - set(OverlayItem.model_fields)
        if unknown:
            raise ConfigError(f"Unknown overlay fields: {', '.join(sorted(unknown))}")

        try:
            updated = OverlayItem.model_validate({**item.model_dump(), **updates})
        except ValueError as e:
            raise ConfigError(f"Invalid overlay update: {e}") from e

        self._replace_item(updated)
        logger.debug(f"Updated overlay item {overlay_id}", emoji=LogEmoji.UPDATE)
        return updated

    def update_orientation_settings(
        self, overlay_id: str, orientation: Orientation, **updates: Any
    ) -> OrientationSettings:
        """
        Merge a partial update into one orientation's settings.

        Opacity and scale are clamped into [0, 1].

        Raises:
            ConfigError: If the id is unknown or a setting is invalid
        """
        item = self._require_item(overlay_id)
        orientation = Orientation(orientation)

        unknown = set(updates) - set(OrientationSettings.model_fields)
        if unknown:
            raise ConfigError(f"Unknown orientation settings: {', '.join(sorted(unknown))}")

        current = item.settings_for(orientation)
        try:
            merged = OrientationSettings.model_validate({**current.model_dump(), **updates})
        except ValueError as e:
            raise ConfigError(f"Invalid orientation settings: {e}") from e

        self._replace_item(item.model_copy(update={orientation.value: merged}))
        return merged

    def copy_settings_to_landscape(self, overlay_id: str) -> OverlayItem:
        """
        Copy an item's portrait settings and portrait asset URL to landscape.

        Raises:
            ConfigError: If no item has this id
        """
        item = self._require_item(overlay_id)
        updated = item.model_copy(
            update={
                "landscape": item.portrait.model_copy(),
                "landscape_url": item.portrait_url,
            }
        )
        self._replace_item(updated)
        logger.debug(f"Copied portrait settings to landscape for {overlay_id}")
        return updated

    def validate_for_save(self) -> OverlayConfig:
        """
        Check the config is publishable and return it.

        An enabled config needs at least one overlay with a portrait or
        landscape asset.

        Raises:
            ConfigError: If the enabled config has no overlay assets
        """
        if self.config.enabled and self.config.overlays:
            has_asset = any(
                item.portrait_url or item.landscape_url for item in self.config.overlays
            )
            if not has_asset:
                raise ConfigError("Please upload at least one overlay image.")
        return self.config

    def to_raw(self) -> dict:
        """Validated config serialized for the persistence collaborator."""
        return self.validate_for_save().to_raw()
