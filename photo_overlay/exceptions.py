# photo_overlay/exceptions.py
"""
Custom exceptions for the photo overlay engine.

Centralized location for all custom exception classes to avoid
duplicating exception definitions across modules.
"""

# Exception design follows semantic clarity - each exception type represents
# a distinct error domain with specific handling requirements


class OverlayEngineError(Exception):
    """Base exception for all overlay-engine errors."""

    pass


class ConfigError(OverlayEngineError):
    """Overlay configuration blob failed structural parsing or migration."""

    pass


class DecodeError(OverlayEngineError):
    """Image bytes (base photo or overlay asset) could not be decoded."""

    pass


class OverlayDecodeError(DecodeError):
    """Overlay asset bytes could not be decoded (recoverable: no overlay applied)."""

    pass


class AssetFetchError(OverlayEngineError):
    """Overlay asset could not be retrieved from its URL."""

    pass


class CapacityError(OverlayEngineError):
    """Attempt to exceed the configured maximum number of overlays."""

    def __init__(self, max_overlays: int):
        self.max_overlays = max_overlays
        super().__init__(f"Maximum {max_overlays} overlays allowed")


class SelectionStateError(OverlayEngineError):
    """Selection operation requested in a state that does not allow it."""

    pass


class CaptureCancelledError(OverlayEngineError):
    """An in-flight capture step completed after the capture was retaken."""

    pass
