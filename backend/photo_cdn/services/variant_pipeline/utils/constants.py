# backend/photo_cdn/services/variant_pipeline/utils/constants.py
"""
Variant Pipeline Constants
"""

from ....enums import ImageFormat, SizeName

# Output encodings, in plan order
FORMATS = (ImageFormat.WEBP, ImageFormat.AVIF, ImageFormat.JPEG)

# Target widths; None keeps the original size
SIZES = {
    SizeName.ORIGINAL: None,  # Uploaded as-is, never generated
    SizeName.LARGE: 1920,  # Full-size web version
    SizeName.THUMBNAIL: 800,  # Thumbnail/preview size
}

# Quality per format (0-100), not caller-overridable
QUALITY_SETTINGS = {
    ImageFormat.WEBP: 80,
    ImageFormat.AVIF: 75,  # AVIF compresses better at a lower setting
    ImageFormat.JPEG: 85,
}

# HEIC/HEIF sniffing: brand markers looked for in bytes 4..12 ("ftyp" + brand)
HEIC_HEADER_START = 4
HEIC_HEADER_END = 12
HEIC_BRAND_MARKERS = ("heic", "mif1", "msf1")

# Lossless intermediate produced for HEIC sources
NORMALIZED_FORMAT = "PNG"

# Object storage layout
ALBUM_KEY_PREFIX = "albums"
