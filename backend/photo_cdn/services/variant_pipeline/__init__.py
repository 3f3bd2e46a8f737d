# backend/photo_cdn/services/variant_pipeline/__init__.py
"""
Variant Pipeline Module

Turns one uploaded photo into 2 widths × 3 encodings of CDN variants and
persists them with rollback on failure.
"""

from .detectors import classify, is_heic
from .generators import (
    VariantGenerator,
    get_image_metadata,
    normalize,
    prepare_input,
    process_image,
    transform,
    validate_image,
)
from .services import ObjectStore, PhotoUploadCoordinator, R2ObjectStore, RollbackKeyLog
from .utils import (
    FORMATS,
    QUALITY_SETTINGS,
    SIZES,
    get_object_key,
    get_photo_variant_keys,
    get_variant_configs,
    get_variant_filename,
)
from .variant_pipeline import (
    VariantPipeline,
    create_variant_pipeline,
    extract_exif_data,
    generate_variants,
)

__all__ = [
    # Main pipeline
    "VariantPipeline",
    "create_variant_pipeline",
    "generate_variants",
    "extract_exif_data",
    # Components
    "VariantGenerator",
    "PhotoUploadCoordinator",
    "RollbackKeyLog",
    "ObjectStore",
    "R2ObjectStore",
    "classify",
    "is_heic",
    "normalize",
    "prepare_input",
    "transform",
    "process_image",
    "get_image_metadata",
    "validate_image",
    # Utils
    "get_variant_configs",
    "get_variant_filename",
    "get_object_key",
    "get_photo_variant_keys",
    # Constants
    "FORMATS",
    "SIZES",
    "QUALITY_SETTINGS",
]
