"""
Logger Service Constants

Local constants for the logger service to avoid hardcoded values
and provide centralized configuration for logger-specific settings.
"""

# ====================================================================
# CONSOLE SINK
# ====================================================================

CONSOLE_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[logger_name]}</cyan> | "
    "{message}"
)
CONSOLE_CONTEXT_INDENTATION = "  ↳ "
CONSOLE_MAX_CONTEXT_ITEMS = 3

# ====================================================================
# FILE SINK
# ====================================================================

FILE_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
    "{extra[source]}:{extra[logger_name]} | {message}"
)
LOG_FILE_ROTATION = "10 MB"
LOG_FILE_RETENTION = "14 days"
LOG_FILE_COMPRESSION = "gz"

# ====================================================================
# DEFAULT RECORD EXTRAS
# ====================================================================

DEFAULT_LOGGER_NAME = "unknown"
DEFAULT_LOG_SOURCE = "system"
