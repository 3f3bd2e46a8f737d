from .validation_helpers import (
    ALLOWED_CONTENT_TYPES,
    ALLOWED_EXTENSIONS,
    get_file_extension,
    resolve_content_type,
    sanitize_filename,
    validate_upload,
)

__all__ = [
    "ALLOWED_CONTENT_TYPES",
    "ALLOWED_EXTENSIONS",
    "get_file_extension",
    "resolve_content_type",
    "sanitize_filename",
    "validate_upload",
]
