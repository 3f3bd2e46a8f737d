# backend/photo_cdn/enums.py
"""
Application Enums - Centralized enum definitions.

Kept in one module so models, constants and services can share them without
circular imports.
"""

from enum import Enum


# =============================================================================
# IMAGE PIPELINE
# =============================================================================


class ImageFormat(str, Enum):
    """Encodings produced for every variant. Declaration order is the plan order."""

    WEBP = "webp"
    AVIF = "avif"
    JPEG = "jpeg"


class SizeName(str, Enum):
    """Named size slots. ORIGINAL is stored as uploaded and never generated."""

    ORIGINAL = "original"
    LARGE = "large"
    THUMBNAIL = "thumbnail"


class SourceKind(str, Enum):
    """Result of sniffing a raw upload buffer."""

    HEIC = "heic"
    OTHER = "other"


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
    STORAGE = "storage"
    SCRIPT = "script"


class LogEmoji(str, Enum):
    """Type-safe emoji constants for log messages."""

    SUCCESS = "✅"
    ERROR = "❌"
    WARNING = "⚠️"
    INFO = "ℹ️"
    DEBUG = "🐞"

    IMAGE = "🖼️"
    STORAGE = "💾"
    UPLOAD = "📤"
    DELETE = "🗑️"
    ROLLBACK = "⏪"
    STARTUP = "🚀"


class LoggerName(str, Enum):
    """Logger name constants for categorizing log entries."""

    VARIANT_PIPELINE = "variant_pipeline"
    HEIC_NORMALIZER = "heic_normalizer"
    TRANSFORM_ENGINE = "transform_engine"
    EXIF_SERVICE = "exif_service"
    UPLOAD_SERVICE = "upload_service"
    OBJECT_STORE = "object_store"
    SCRIPT = "script"
    SYSTEM = "system"
