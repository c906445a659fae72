# photo_overlay/constants.py
"""
Application Constants

Shared values for overlay configuration, compositing and packaging.
Tunable runtime values are exposed through config.Settings; these are the defaults.
"""

from .enums import OverlayMode, OverlayPosition

# =============================================================================
# OVERLAY CONFIGURATION
# =============================================================================

MAX_OVERLAYS = 5
DEFAULT_OVERLAY_NAME = "Default Overlay"

DEFAULT_OVERLAY_ENABLED = False
DEFAULT_OVERLAY_MODE = OverlayMode.RANDOM

DEFAULT_ORIENTATION_ENABLED = True
DEFAULT_OVERLAY_POSITION = OverlayPosition.BOTTOM_RIGHT
DEFAULT_OVERLAY_OPACITY = 0.8
DEFAULT_OVERLAY_SCALE = 0.3

# Raw (persisted) config keys used for structural legacy detection
RAW_KEY_URL = "url"
RAW_KEY_OVERLAYS = "overlays"

# =============================================================================
# COMPOSITING
# =============================================================================

# At or above this scale the overlay covers the whole photo, aspect ignored
FULL_BLEED_SCALE_THRESHOLD = 0.95

COMPOSITE_FORMAT = "JPEG"
COMPOSITE_MIME_TYPE = "image/jpeg"
DEFAULT_COMPOSITE_QUALITY = 95

SUPPORTED_OVERLAY_FORMATS = {"PNG", "JPEG", "GIF", "WEBP"}

# =============================================================================
# PACKAGING
# =============================================================================

DEFAULT_PACKAGE_MAX_WIDTH = 2048
DEFAULT_PACKAGE_MAX_HEIGHT = 2048
DEFAULT_PACKAGE_QUALITY = 85

ORIGINAL_STORAGE_SUFFIX = "_original"

# =============================================================================
# ASSET FETCHING
# =============================================================================

DEFAULT_ASSET_FETCH_TIMEOUT_SECONDS = 10
HTTP_URL_PREFIXES = ("http://", "https://")
FILE_URL_PREFIX = "file://"
