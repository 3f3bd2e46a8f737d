"""
Centralized Logger Service for the photo CDN pipeline.

Thin layer over loguru that keeps every log line tagged with the emitting
service (logger name + source) and supports the emoji priority system used
across the codebase.
"""

import sys
from typing import Any, Dict, Optional

from loguru import logger

from ...enums import LogEmoji, LoggerName, LogLevel, LogSource
from .constants import (
    CONSOLE_CONTEXT_INDENTATION,
    CONSOLE_LOG_FORMAT,
    CONSOLE_MAX_CONTEXT_ITEMS,
    DEFAULT_LOG_SOURCE,
    DEFAULT_LOGGER_NAME,
    FILE_LOG_FORMAT,
    LOG_FILE_COMPRESSION,
    LOG_FILE_RETENTION,
    LOG_FILE_ROTATION,
)

logger.configure(
    extra={"logger_name": DEFAULT_LOGGER_NAME, "source": DEFAULT_LOG_SOURCE}
)


def configure_logging(
    level: LogLevel = LogLevel.INFO,
    log_file: Optional[str] = None,
) -> None:
    """
    Replace loguru's default sink with the console (and optional file) sinks.

    Args:
        level: Minimum level for every sink
        log_file: Optional path of a size-rotated log file
    """
    logger.remove()
    logger.add(sys.stderr, level=level.value, format=CONSOLE_LOG_FORMAT)

    if log_file:
        logger.add(
            log_file,
            level=level.value,
            format=FILE_LOG_FORMAT,
            rotation=LOG_FILE_ROTATION,
            retention=LOG_FILE_RETENTION,
            compression=LOG_FILE_COMPRESSION,
            enqueue=True,
        )


def _format_message(
    emoji: LogEmoji, message: str, context: Optional[Dict[str, Any]]
) -> str:
    """Prefix the emoji and append up to a few context items."""
    text = f"{emoji.value} {message}"
    if not context:
        return text
    items = list(context.items())[:CONSOLE_MAX_CONTEXT_ITEMS]
    details = ", ".join(f"{key}={value}" for key, value in items)
    return f"{text}\n{CONSOLE_CONTEXT_INDENTATION}{details}"


def get_service_logger(
    logger_name: LoggerName,
    source: LogSource = LogSource.SYSTEM,
    default_emoji: Optional[LogEmoji] = None,
):
    """
    Factory function to create a pre-configured logger for a specific service.

    Emoji priority system (highest to lowest):
    1. Direct: Emoji passed directly to log method call
    2. Instance-set: Default emoji set when creating the service logger
    3. Fallback: Default emoji based on log level (ERROR, WARNING, INFO, DEBUG)

    Args:
        logger_name: The logger name enum to use for all calls
        source: The log source enum to use for all calls (defaults to SYSTEM)
        default_emoji: Instance-level default emoji that overrides level-based fallbacks

    Returns:
        ServiceLogger instance with error, warning, info, debug methods

    Example:
        logger = get_service_logger(LoggerName.VARIANT_PIPELINE, LogSource.PIPELINE)
        logger.info("Generated 6 variants", extra_context={"photo": "IMG_0036.jpeg"})
    """
    bound = logger.bind(logger_name=logger_name.value, source=source.value)

    def _resolve_emoji(
        method_emoji: Optional[LogEmoji], fallback_emoji: LogEmoji
    ) -> LogEmoji:
        if method_emoji is not None:
            return method_emoji
        if default_emoji is not None:
            return default_emoji
        return fallback_emoji

    class ServiceLogger:
        name = logger_name

        @staticmethod
        def error(
            message: str,
            exception: Optional[BaseException] = None,
            error_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
            **kwargs,
        ):
            """Log an error, attaching the traceback when an exception is given."""
            text = _format_message(
                _resolve_emoji(emoji, LogEmoji.ERROR), message, error_context
            )
            if exception is not None:
                text = f"{text} ({type(exception).__name__}: {exception})"
            bound.opt(exception=exception).error(text)

        @staticmethod
        def warning(
            message: str,
            extra_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
            **kwargs,
        ):
            bound.warning(
                _format_message(
                    _resolve_emoji(emoji, LogEmoji.WARNING), message, extra_context
                )
            )

        @staticmethod
        def info(
            message: str,
            extra_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
            **kwargs,
        ):
            bound.info(
                _format_message(
                    _resolve_emoji(emoji, LogEmoji.INFO), message, extra_context
                )
            )

        @staticmethod
        def debug(
            message: str,
            extra_context: Optional[Dict[str, Any]] = None,
            emoji: Optional[LogEmoji] = None,
            **kwargs,
        ):
            bound.debug(
                _format_message(
                    _resolve_emoji(emoji, LogEmoji.DEBUG), message, extra_context
                )
            )

    return ServiceLogger()
