# backend/photo_cdn/exceptions.py
"""
Custom exceptions for the photo CDN pipeline.

Centralized location for all custom exception classes to avoid
duplicating exception definitions across modules.
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .models.variant_model import VariantConfig


class PhotoCdnError(Exception):
    """Base exception for all pipeline-specific errors."""

    pass


class ConfigurationError(PhotoCdnError):
    """Custom exception for configuration and validation errors."""

    pass


class VariantError(PhotoCdnError):
    """Base for errors tied to one image or one variant instruction."""

    def __init__(self, message: str, variant: Optional["VariantConfig"] = None):
        super().__init__(message)
        self.variant = variant

    def __str__(self) -> str:
        message = super().__str__()
        if self.variant is None:
            return message
        return f"{message} (variant: {self.variant.label})"


class DecodeError(VariantError):
    """Input buffer is not a decodable image (corrupt, truncated or unsupported)."""

    pass


class TransformFailure(VariantError):
    """A specific (width, format) step failed independent of decoding."""

    pass


class MetadataParseError(PhotoCdnError):
    """EXIF block could not be parsed. Never propagated past the extractor."""

    pass


class UploadValidationError(PhotoCdnError):
    """Uploaded file was rejected before anything was written."""

    pass


class RollbackPartialFailure(PhotoCdnError):
    """A key written during a failed upload could not be deleted."""

    def __init__(self, key: str, cause: BaseException):
        super().__init__(f"Failed to delete {key} during rollback: {cause}")
        self.key = key
        self.cause = cause


class UploadFailure(PhotoCdnError):
    """Photo upload failed; every written key was rolled back (best-effort)."""

    def __init__(
        self,
        message: str,
        rolled_back_keys: Optional[List[str]] = None,
        rollback_errors: Optional[List[RollbackPartialFailure]] = None,
    ):
        super().__init__(message)
        self.rolled_back_keys = rolled_back_keys or []
        self.rollback_errors = rollback_errors or []
