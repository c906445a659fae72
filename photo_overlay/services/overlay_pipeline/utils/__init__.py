"""
Overlay Utils Module

Contains overlay utilities: configuration helpers, placement geometry, image
processing and asset retrieval.
"""

from .image_path_utils import AssetFetcher, HttpAssetFetcher, read_local_asset
from .image_utils import (
    apply_opacity,
    decode_image,
    encode_image,
    ensure_rgba_mode,
    fit_within,
    flatten_to_rgb,
    get_image_size,
    resize_to_box,
    validate_image_format,
)
from .overlay_helpers import (
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
from .placement_utils import (
    OverlayPlacement,
    compute_overlay_box,
    compute_overlay_origin,
    compute_overlay_placement,
)

__all__ = [
    # Configuration helpers
    "OverlayConfigSource",
    "create_empty_overlay_item",
    "get_default_orientation_settings",
    "get_default_overlay_config",
    "is_legacy_overlay_config",
    "load_link_overlay_config",
    "migrate_legacy_config",
    "parse_overlay_config",
    "resolve_overlay_config",
    # Placement geometry
    "OverlayPlacement",
    "compute_overlay_box",
    "compute_overlay_origin",
    "compute_overlay_placement",
    # Image processing utilities
    "apply_opacity",
    "decode_image",
    "encode_image",
    "ensure_rgba_mode",
    "fit_within",
    "flatten_to_rgb",
    "get_image_size",
    "resize_to_box",
    "validate_image_format",
    # Asset retrieval
    "AssetFetcher",
    "HttpAssetFetcher",
    "read_local_asset",
]
