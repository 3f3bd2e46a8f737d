# backend/photo_cdn/services/variant_pipeline/utils/__init__.py
"""
Variant Utility Functions and Constants

Shared utilities for the variant pipeline:
- Matrix planning
- Naming and object key conventions
- Constants and configuration values
"""

from .constants import (
    FORMATS,
    HEIC_BRAND_MARKERS,
    QUALITY_SETTINGS,
    SIZES,
)
from .variant_utils import (
    get_object_key,
    get_photo_variant_keys,
    get_variant_configs,
    get_variant_filename,
    strip_extension,
)

__all__ = [
    "get_variant_configs",
    "get_variant_filename",
    "get_object_key",
    "get_photo_variant_keys",
    "strip_extension",
    "FORMATS",
    "SIZES",
    "QUALITY_SETTINGS",
    "HEIC_BRAND_MARKERS",
]
