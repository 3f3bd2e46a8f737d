from .exif_model import ExifSummary
from .upload_model import PhotoUploadResult, UploadedVariant
from .variant_model import GeneratedVariant, ImageMetadata, VariantConfig

__all__ = [
    "ExifSummary",
    "GeneratedVariant",
    "ImageMetadata",
    "PhotoUploadResult",
    "UploadedVariant",
    "VariantConfig",
]
