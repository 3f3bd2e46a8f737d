# backend/photo_cdn/services/variant_pipeline/services/exif_service.py
"""
EXIF metadata extraction.

Reads capture settings from a raw upload and formats them for the catalog.
Extraction never fails the caller: unreadable metadata yields empty fields.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from io import BytesIO
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from PIL import ExifTags, Image

from ....enums import LoggerName, LogSource
from ....exceptions import MetadataParseError
from ....models.exif_model import ExifSummary
from ....services.logger import get_service_logger
from ..generators.heic_normalizer import ensure_heif_opener

logger = get_service_logger(LoggerName.EXIF_SERVICE, LogSource.PIPELINE)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _one_decimal(value: float) -> str:
    """Fixed one-decimal text; exact ties of the stored double round up (2.25 -> "2.3")."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, (tuple, list)):
        if not value:
            return None
        value = value[0]
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def format_f_number(f_number: Any) -> Optional[str]:
    """Format f-number as "f/2.8"."""
    value = _to_float(f_number)
    if not value:
        return None
    return f"f/{_one_decimal(value)}"


def format_exposure_time(exposure_time: Any) -> Optional[str]:
    """Format exposure time as "1/500s" (fast) or "2.0s" (slow)."""
    value = _to_float(exposure_time)
    if not value:
        return None

    if value < 1:
        return f"1/{_round_half_up(1 / value)}s"
    return f"{_one_decimal(value)}s"


def format_focal_length(focal_length: Any) -> Optional[str]:
    """Format focal length as "24mm"."""
    value = _to_float(focal_length)
    if not value:
        return None
    return f"{_round_half_up(value)}mm"


def format_iso(iso: Any) -> Optional[str]:
    value = _to_float(iso)
    if value is None:
        return None
    return str(int(value))


def format_camera(model: Any) -> Optional[str]:
    if model is None:
        return None
    if isinstance(model, bytes):
        model = model.decode("utf-8", errors="replace")
    text = str(model).replace("\x00", "").strip()
    return text or None


def _read_exif(buffer: bytes) -> Tuple[Mapping[int, Any], Mapping[int, Any]]:
    """
    Return (IFD0, Exif sub-IFD) tag mappings.

    Raises:
        MetadataParseError: If the buffer or its EXIF block cannot be read
    """
    ensure_heif_opener()
    try:
        with Image.open(BytesIO(buffer)) as img:
            exif = img.getexif()
            return dict(exif), dict(exif.get_ifd(ExifTags.IFD.Exif))
    except Exception as e:
        raise MetadataParseError(f"Failed to parse EXIF data: {e}") from e


def _format_field(
    name: str, formatter: Callable[[Any], Optional[str]], raw: Any
) -> Optional[str]:
    try:
        return formatter(raw)
    except (TypeError, ValueError, ArithmeticError) as e:
        logger.debug(
            f"Ignoring unparsable EXIF field {name}",
            extra_context={"value": repr(raw), "error": str(e)},
        )
        return None


def extract_exif_data(buffer: bytes) -> ExifSummary:
    """
    Extract formatted EXIF data from a raw image buffer.

    Args:
        buffer: Raw upload bytes (JPEG, HEIC, ...)

    Returns:
        ExifSummary with each field independently set or None
    """
    try:
        image_tags, photo_tags = _read_exif(buffer)
    except MetadataParseError as e:
        logger.warning(str(e))
        return ExifSummary.empty()

    fields: Dict[str, Optional[str]] = {
        "camera": _format_field(
            "Model", format_camera, image_tags.get(ExifTags.Base.Model)
        ),
        "lens": _format_field(
            "FocalLength", format_focal_length, photo_tags.get(ExifTags.Base.FocalLength)
        ),
        "f_stop": _format_field(
            "FNumber", format_f_number, photo_tags.get(ExifTags.Base.FNumber)
        ),
        "shutter_speed": _format_field(
            "ExposureTime",
            format_exposure_time,
            photo_tags.get(ExifTags.Base.ExposureTime),
        ),
        "iso": _format_field(
            "ISOSpeedRatings", format_iso, photo_tags.get(ExifTags.Base.ISOSpeedRatings)
        ),
    }
    return ExifSummary(**fields)
