# photo_overlay/enums.py
"""
Application Enums - Centralized enum definitions.

This module contains all enum definitions so that constants, models and
services can import them without creating circular dependencies.
"""

from enum import Enum


# =============================================================================
# OVERLAY SYSTEM
# =============================================================================


class OverlayPosition(str, Enum):
    """Anchor used to place an overlay on the base image (no padding)."""

    CENTER = "center"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"


class OverlayMode(str, Enum):
    """How a single overlay is resolved from the eligible set."""

    RANDOM = "random"
    USER_CHOICE = "user_choice"


class Orientation(str, Enum):
    """Photo orientation classification."""

    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


# =============================================================================
# CAPTURE PIPELINE
# =============================================================================


class SelectionState(str, Enum):
    """States of the per-capture overlay selection machine."""

    UNSELECTED = "unselected"
    AUTO_SELECTED = "auto_selected"
    AWAITING_USER_CHOICE = "awaiting_user_choice"
    CONFIRMED = "confirmed"


class NavigationDirection(str, Enum):
    """Carousel navigation direction."""

    LEFT = "left"
    RIGHT = "right"


# =============================================================================
# LOGGING SYSTEM
# =============================================================================


class LogLevel(str, Enum):
    """Log level constants for centralized logging system."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogSource(str, Enum):
    """Log source constants for identifying log origins."""

    SYSTEM = "system"
    PIPELINE = "pipeline"
    AUTHORING = "authoring"
    NETWORK = "network"


class LogEmoji(str, Enum):
    """Type-safe emoji constants for log messages."""

    # Status emojis
    SUCCESS = "✅"
    ERROR = "❌"
    WARNING = "⚠️"
    INFO = "ℹ️"
    DEBUG = "🐞"
    CANCELED = "🚫"

    # Image emojis
    CAPTURE = "📸"
    OVERLAY = "🎨"

    # System emojis
    NETWORK = "🌐"
    STORAGE = "💾"

    # Action emojis
    CREATE = "➕"
    UPDATE = "✏️"
    DELETE = "🗑️"


class LoggerName(str, Enum):
    """Logger name constants for categorizing log entries."""

    # Pipeline loggers
    CAPTURE_PIPELINE = "capture_pipeline"
    OVERLAY_PIPELINE = "overlay_pipeline"

    # Service loggers
    OVERLAY_AUTHORING = "overlay_authoring"
    ASSET_FETCHER = "asset_fetcher"

    # System loggers
    SYSTEM = "system"
