"""
Centralized Logger Service Module.

Usage:
    from photo_cdn.services.logger import get_service_logger
    from photo_cdn.enums import LoggerName, LogSource

    logger = get_service_logger(LoggerName.UPLOAD_SERVICE, LogSource.STORAGE)
    logger.info("Uploaded original", extra_context={"key": key})
"""

# Re-export commonly used enums for convenience
from ...enums import LogEmoji, LoggerName, LogLevel, LogSource
from .logger_service import configure_logging, get_service_logger

__all__ = [
    "configure_logging",
    "get_service_logger",
    # Enums
    "LogLevel",
    "LogSource",
    "LoggerName",
    "LogEmoji",
]
