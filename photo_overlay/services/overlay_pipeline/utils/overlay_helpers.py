"""
Overlay Helpers - Configuration defaults, legacy migration and boundary parsing.

Persisted overlay configuration comes in two shapes: the current multi-overlay
format and the legacy single-overlay format. Both are resolved here, once, into
an OverlayConfig so nothing further down the pipeline branches on shape.
"""

import json
from typing import Any, Mapping, Optional, Protocol

from pydantic import ValidationError

from ....constants import (
    DEFAULT_ORIENTATION_ENABLED,
    DEFAULT_OVERLAY_ENABLED,
    DEFAULT_OVERLAY_MODE,
    DEFAULT_OVERLAY_NAME,
    DEFAULT_OVERLAY_OPACITY,
    DEFAULT_OVERLAY_POSITION,
    DEFAULT_OVERLAY_SCALE,
    RAW_KEY_OVERLAYS,
    RAW_KEY_URL,
)
from ....enums import LoggerName, LogSource, OverlayMode
from ....exceptions import ConfigError
from ....models.overlay_model import (
    AnyOverlayConfig,
    LegacyOverlayConfig,
    OrientationSettings,
    OverlayConfig,
    OverlayItem,
    generate_overlay_id,
)
from ...logger import get_service_logger

logger = get_service_logger(LoggerName.OVERLAY_PIPELINE, LogSource.PIPELINE)


class OverlayConfigSource(Protocol):
    """Lookup of the raw overlay configuration stored for an upload link."""

    def get_link_overlay_config(self, link_id: str) -> Optional[Any]: ...


def get_default_overlay_config() -> OverlayConfig:
    """Get the default (disabled, empty) overlay configuration."""
    return OverlayConfig(
        enabled=DEFAULT_OVERLAY_ENABLED,
        mode=DEFAULT_OVERLAY_MODE,
        overlays=[],
    )


def get_default_orientation_settings() -> OrientationSettings:
    """Get the default orientation settings."""
    return OrientationSettings(
        enabled=DEFAULT_ORIENTATION_ENABLED,
        position=DEFAULT_OVERLAY_POSITION,
        opacity=DEFAULT_OVERLAY_OPACITY,
        scale=DEFAULT_OVERLAY_SCALE,
    )


def create_empty_overlay_item() -> OverlayItem:
    """Create a new overlay item with a fresh id and no assets yet."""
    return OverlayItem(
        id=generate_overlay_id(),
        name="",
        portrait_url="",
        landscape_url="",
        portrait=get_default_orientation_settings(),
        landscape=get_default_orientation_settings(),
    )


def is_legacy_overlay_config(raw: Any) -> bool:
    """
    Structural check for the legacy single-overlay format.

    True iff raw is a mapping with a string ``url`` and no ``overlays`` key.
    No semantic validation is performed.
    """
    if isinstance(raw, LegacyOverlayConfig):
        return True
    if not isinstance(raw, Mapping):
        return False
    return isinstance(raw.get(RAW_KEY_URL), str) and RAW_KEY_OVERLAYS not in raw


def migrate_legacy_config(legacy: LegacyOverlayConfig) -> OverlayConfig:
    """
    Convert a legacy overlay config into a single-item OverlayConfig.

    Both orientation slots share the legacy placement and asset URL, and the
    mode is forced to random. A fresh item id is generated on every call, so
    migrating the same legacy blob twice yields different ids.
    """
    settings = OrientationSettings(
        enabled=True,
        position=legacy.position,
        opacity=legacy.opacity,
        scale=legacy.scale,
    )

    return OverlayConfig(
        enabled=legacy.enabled,
        mode=OverlayMode.RANDOM,
        overlays=[
            OverlayItem(
                id=generate_overlay_id(),
                name=DEFAULT_OVERLAY_NAME,
                portrait_url=legacy.url,
                landscape_url=legacy.url,
                portrait=settings.model_copy(),
                landscape=settings.model_copy(),
            )
        ],
    )


def parse_overlay_config(raw: Any) -> AnyOverlayConfig:
    """
    Parse a persisted overlay blob into one of the two typed shapes.

    Args:
        raw: Mapping, JSON string/bytes, or an already-typed config

    Returns:
        LegacyOverlayConfig or OverlayConfig

    Raises:
        ConfigError: If the blob is not structurally valid in either shape
    """
    if isinstance(raw, (OverlayConfig, LegacyOverlayConfig)):
        return raw

    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise ConfigError(f"Overlay config is not valid JSON: {e}") from e

    if not isinstance(raw, Mapping):
        raise ConfigError(
            f"Overlay config must be an object, got {type(raw).__name__}"
        )

    try:
        if is_legacy_overlay_config(raw):
            return LegacyOverlayConfig.model_validate(dict(raw))
        return OverlayConfig.model_validate(dict(raw))
    except ValidationError as e:
        raise ConfigError(f"Invalid overlay config: {e}") from e


def resolve_overlay_config(raw: Any) -> OverlayConfig:
    """
    Resolve any persisted overlay blob into the current OverlayConfig.

    None resolves to the default (disabled) configuration; legacy blobs are
    migrated.

    Raises:
        ConfigError: If the blob fails structural parsing
    """
    if raw is None:
        return get_default_overlay_config()

    parsed = parse_overlay_config(raw)
    if isinstance(parsed, LegacyOverlayConfig):
        logger.debug("Migrating legacy overlay config to multi-overlay format")
        return migrate_legacy_config(parsed)
    return parsed


def load_link_overlay_config(source: OverlayConfigSource, link_id: str) -> OverlayConfig:
    """
    Fetch and resolve the overlay configuration for an upload link.

    Raises:
        ConfigError: If the stored blob is malformed
    """
    raw = source.get_link_overlay_config(link_id)
    try:
        return resolve_overlay_config(raw)
    except ConfigError:
        logger.warning(f"Malformed overlay config for link {link_id}")
        raise
