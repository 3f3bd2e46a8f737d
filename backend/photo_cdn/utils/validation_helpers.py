# backend/photo_cdn/utils/validation_helpers.py
"""
Upload validation helpers.

Checks applied to an incoming photo before anything is written to storage.
"""

import re
from typing import Optional

from ..exceptions import UploadValidationError

# HEIC can be reported as image/heic, image/heif or an empty content type
ALLOWED_CONTENT_TYPES = frozenset(
    {"image/jpeg", "image/png", "image/heic", "image/heif"}
)
ALLOWED_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "heic", "heif"})

EXTENSION_CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "heic": "image/heic",
    "heif": "image/heif",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"

_PATH_TRAVERSAL_PATTERN = re.compile(r"\.\./")
_UNSAFE_CHARACTERS_PATTERN = re.compile(r"[^a-zA-Z0-9._-]")


def sanitize_filename(filename: str) -> str:
    """
    Make an untrusted filename safe for use in an object key.

    Removes "../" sequences and replaces anything outside [a-zA-Z0-9._-]
    with an underscore: "My Photo (1).HEIC" -> "My_Photo__1_.HEIC".
    """
    sanitized = _PATH_TRAVERSAL_PATTERN.sub("", filename)
    return _UNSAFE_CHARACTERS_PATTERN.sub("_", sanitized)


def get_file_extension(filename: str) -> str:
    return filename.lower().rsplit(".", 1)[-1] if "." in filename else ""


def resolve_content_type(filename: str, content_type: Optional[str]) -> str:
    """Use the reported content type, falling back to one derived from the extension."""
    if content_type:
        return content_type
    return EXTENSION_CONTENT_TYPES.get(get_file_extension(filename), DEFAULT_CONTENT_TYPE)


def validate_upload(
    filename: str, content_type: Optional[str], size: int, max_size: int
) -> None:
    """
    Reject uploads with an unsupported type or an oversized body.

    Either the content type or the extension has to be allowed.

    Raises:
        UploadValidationError: If the upload must not be processed
    """
    if not filename:
        raise UploadValidationError("Missing filename")

    is_valid_type = (content_type or "") in ALLOWED_CONTENT_TYPES or (
        get_file_extension(filename) in ALLOWED_EXTENSIONS
    )
    if not is_valid_type:
        raise UploadValidationError("Invalid file type. Allowed: JPEG, PNG, HEIC")

    if size > max_size:
        raise UploadValidationError(
            f"File too large (max {max_size // (1024 * 1024)}MB)"
        )
