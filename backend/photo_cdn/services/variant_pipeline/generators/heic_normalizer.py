# backend/photo_cdn/services/variant_pipeline/generators/heic_normalizer.py
"""
HEIC Normalizer Component

Converts HEIC/HEIF uploads into a lossless PNG that every transform can
decode. Runs once per source image; other formats pass through untouched.
"""

from io import BytesIO

import pillow_heif
from PIL import Image

from ....enums import LoggerName, LogSource
from ....exceptions import DecodeError
from ....services.logger import get_service_logger
from ..detectors.format_sniffer import is_heic
from ..utils.constants import NORMALIZED_FORMAT

logger = get_service_logger(LoggerName.HEIC_NORMALIZER, LogSource.PIPELINE)

_heif_opener_registered = False


def ensure_heif_opener() -> None:
    """Register pillow-heif with Pillow so Image.open() understands HEIC/HEIF."""
    global _heif_opener_registered
    if not _heif_opener_registered:
        pillow_heif.register_heif_opener()
        _heif_opener_registered = True


def convert_heic_to_png(buffer: bytes) -> bytes:
    """
    Decode a HEIC/HEIF buffer and re-encode it as PNG (lossless).

    libheif applies the container's rotation/mirror transforms while decoding,
    so the PNG is written without EXIF to avoid rotating twice downstream.

    Raises:
        DecodeError: If the container is corrupt or cannot be decoded
    """
    ensure_heif_opener()

    try:
        with Image.open(BytesIO(buffer)) as img:
            img.load()
            icc_profile = img.info.get("icc_profile")

            output = BytesIO()
            save_kwargs = {"format": NORMALIZED_FORMAT, "compress_level": 1}
            if icc_profile:
                save_kwargs["icc_profile"] = icc_profile
            img.save(output, **save_kwargs)
    except Exception as e:
        raise DecodeError(f"Failed to decode HEIC image: {e}") from e

    return output.getvalue()


def normalize(buffer: bytes) -> bytes:
    """
    Prepare input for the transform engine.

    Returns:
        A PNG buffer for HEIC/HEIF input, otherwise the same buffer object
    """
    if is_heic(buffer):
        logger.debug(
            "Detected HEIC format, converting to PNG",
            extra_context={"input_bytes": len(buffer)},
        )
        return convert_heic_to_png(buffer)
    return buffer


prepare_input = normalize
