"""
Centralized Logger Service Module.

A unified, loguru-backed logging interface for the overlay engine.

Usage:
    from photo_overlay.services.logger import get_service_logger
    from photo_overlay.enums import LoggerName, LogSource

    logger = get_service_logger(LoggerName.CAPTURE_PIPELINE, LogSource.PIPELINE)
    logger.info("Capture processed")
"""

# Re-export commonly used enums for convenience
from ...enums import LogEmoji, LoggerName, LogLevel, LogSource
from .logger_service import (
    LoggerService,
    get_service_logger,
    initialize_global_logger,
    log,
)

__all__ = [
    "LoggerService",
    "log",
    "get_service_logger",
    "initialize_global_logger",
    # Enums
    "LogLevel",
    "LogSource",
    "LoggerName",
    "LogEmoji",
]
