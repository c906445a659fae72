# photo_overlay/services/overlay_pipeline/__init__.py
"""
Overlay Pipeline Module

Overlay configuration handling, authoring, placement geometry and compositing.
"""

from .generators import WatermarkCompositor
from .services import OverlayConfigEditor
from .utils import (
    AssetFetcher,
    HttpAssetFetcher,
    OverlayConfigSource,
    create_empty_overlay_item,
    get_default_orientation_settings,
    get_default_overlay_config,
    is_legacy_overlay_config,
    load_link_overlay_config,
    migrate_legacy_config,
    parse_overlay_config,
    resolve_overlay_config,
)

__all__ = [
    "AssetFetcher",
    "HttpAssetFetcher",
    "OverlayConfigEditor",
    "OverlayConfigSource",
    "WatermarkCompositor",
    "create_empty_overlay_item",
    "get_default_orientation_settings",
    "get_default_overlay_config",
    "is_legacy_overlay_config",
    "load_link_overlay_config",
    "migrate_legacy_config",
    "parse_overlay_config",
    "resolve_overlay_config",
]
