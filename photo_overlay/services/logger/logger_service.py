"""
Centralized Logger Service for the photo overlay engine.

This service provides a unified logging interface on top of loguru that handles:
- Console output with emoji support
- Optional file logging with rotation
- Per-record binding of logger name and source for filtering

Architecture:
- Type-safe enum-based configuration
- Service loggers pre-bound to a LoggerName / LogSource pair
- Three-tier emoji priority (direct, instance default, level fallback)
"""

import sys
from typing import Any, Dict, Optional

from loguru import logger

from ...config import Settings
from ...enums import LogEmoji, LoggerName, LogLevel, LogSource

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[source]}</cyan>:<cyan>{extra[logger_name]}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[source]}:{extra[logger_name]} - {message}"
)
LOG_FILE_ROTATION = "10 MB"
LOG_FILE_RETENTION = "14 days"


class LoggerService:
    """
    Centralized logging service used by every pipeline component.

    Records are emitted through loguru with ``logger_name`` and ``source`` bound
    as extra fields, so sinks can filter or format on them.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings
        self._sink_ids: list[int] = []

    def configure_sinks(
        self, enable_console: bool = True, enable_file_logging: bool = True
    ) -> None:
        """Replace loguru's default handler with the engine's console/file sinks."""
        logger.remove()
        self._sink_ids.clear()
        logger.configure(
            extra={"logger_name": LoggerName.SYSTEM.value, "source": LogSource.SYSTEM.value}
        )

        level = self.settings.log_level.value if self.settings else LogLevel.INFO.value

        if enable_console:
            self._sink_ids.append(
                logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, colorize=None)
            )

        if enable_file_logging and self.settings and self.settings.log_file:
            self._sink_ids.append(
                logger.add(
                    self.settings.log_file,
                    level=level,
                    format=FILE_FORMAT,
                    rotation=LOG_FILE_ROTATION,
                    retention=LOG_FILE_RETENTION,
                    compression="gz",
                    enqueue=True,
                )
            )

    def shutdown(self) -> None:
        """Remove the sinks installed by this service."""
        for sink_id in self._sink_ids:
            logger.remove(sink_id)
        self._sink_ids.clear()

    def _log_entry(
        self,
        level: LogLevel,
        message: str,
        source: LogSource,
        logger_name: LoggerName,
        emoji: Optional[LogEmoji] = None,
        exception: Optional[BaseException] = None,
        extra_context: Optional[Dict[str, Any]] = None,
    ) -> None:
        formatted = f"{emoji.value} {message}" if emoji else message
        if extra_context:
            formatted = f"{formatted} | {extra_context}"

        bound = logger.bind(logger_name=logger_name.value, source=source.value)
        if exception is not None:
            bound = bound.opt(exception=exception)
        bound.log(level.value, formatted)

    def error(self, message: str, **kwargs) -> None:
        self._log_entry(LogLevel.ERROR, message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log_entry(LogLevel.WARNING, message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._log_entry(LogLevel.INFO, message, **kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self._log_entry(LogLevel.DEBUG, message, **kwargs)


# Global logger instance
_global_logger_instance: Optional[LoggerService] = None


def initialize_global_logger(
    settings: Settings,
    enable_console: bool = True,
    enable_file_logging: bool = True,
) -> LoggerService:
    """
    Initialize the global logger instance.

    This should be called once during application startup. Without it, records
    still flow through loguru's default stderr handler.

    Args:
        settings: Application settings (log level, log file)
        enable_console: Enable console output sink
        enable_file_logging: Enable rotating file sink when settings.log_file is set

    Returns:
        Initialized LoggerService instance
    """
    global _global_logger_instance

    _global_logger_instance = LoggerService(settings=settings)
    _global_logger_instance.configure_sinks(
        enable_console=enable_console, enable_file_logging=enable_file_logging
    )
    return _global_logger_instance


def log() -> LoggerService:
    """
    Get the global logger instance.

    Falls back to an unconfigured service so library code can log before startup.
    """
    global _global_logger_instance

    if _global_logger_instance is None:
        _global_logger_instance = LoggerService()
    return _global_logger_instance


def get_service_logger(
    logger_name: LoggerName,
    source: LogSource = LogSource.SYSTEM,
    default_emoji: Optional[LogEmoji] = None,
):
    """
    Factory function to create a pre-configured logger for a specific service.

    Returns a logger with simplified methods that automatically include
    the correct source and logger_name parameters.

    Emoji priority system (highest to lowest):
    1. Direct: Emoji passed directly to log method call
    2. Instance-set: Default emoji set when creating the service logger
    3. Fallback: Default emoji based on log level (ERROR, WARNING, INFO, DEBUG)

    Example:
        logger = get_service_logger(LoggerName.OVERLAY_PIPELINE, LogSource.PIPELINE)
        logger.error("Overlay asset failed to load")  # Uses LogEmoji.ERROR
        logger.info("Composited", emoji=LogEmoji.OVERLAY)  # Uses LogEmoji.OVERLAY
    """

    def _resolve_emoji(
        method_emoji: Optional[LogEmoji], fallback_emoji: LogEmoji
    ) -> LogEmoji:
        if method_emoji is not None:
            return method_emoji
        if default_emoji is not None:
            return default_emoji
        return fallback_emoji

    class ServiceLogger:
        @staticmethod
        def error(
            message: str,
            exception: Optional[BaseException] = None,
            error_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
        ):
            """Log an error with emoji priority system."""
            return log().error(
                message,
                exception=exception,
                extra_context=error_context,
                source=source,
                logger_name=logger_name,
                emoji=_resolve_emoji(emoji, LogEmoji.ERROR),
            )

        @staticmethod
        def warning(
            message: str,
            extra_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
        ):
            """Log a warning with emoji priority system."""
            return log().warning(
                message,
                extra_context=extra_context,
                source=source,
                logger_name=logger_name,
                emoji=_resolve_emoji(emoji, LogEmoji.WARNING),
            )

        @staticmethod
        def info(
            message: str,
            extra_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
        ):
            """Log an info message with emoji priority system."""
            return log().info(
                message,
                extra_context=extra_context,
                source=source,
                logger_name=logger_name,
                emoji=_resolve_emoji(emoji, LogEmoji.INFO),
            )

        @staticmethod
        def debug(
            message: str,
            extra_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
        ):
            """Log a debug message with emoji priority system."""
            return log().debug(
                message,
                extra_context=extra_context,
                source=source,
                logger_name=logger_name,
                emoji=_resolve_emoji(emoji, LogEmoji.DEBUG),
            )

    return ServiceLogger()
