# backend/photo_cdn/services/variant_pipeline/generators/__init__.py
"""
Variant Generation Components

- heic_normalizer: one-time HEIC/HEIF -> PNG conversion
- transform_engine: decode, rotate, resize and encode one variant
- VariantGenerator: concurrent fan-out over the whole variant matrix
"""

from .heic_normalizer import convert_heic_to_png, normalize, prepare_input
from .transform_engine import (
    get_image_metadata,
    process_image,
    read_image_metadata,
    transform,
    validate_image,
)
from .variant_generator import VariantGenerator

__all__ = [
    "VariantGenerator",
    "convert_heic_to_png",
    "normalize",
    "prepare_input",
    "transform",
    "process_image",
    "get_image_metadata",
    "read_image_metadata",
    "validate_image",
]
