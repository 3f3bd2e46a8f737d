# backend/photo_cdn/services/variant_pipeline/generators/transform_engine.py
"""
Transform Engine Component

Turns a prepared (already HEIC-normalized) buffer into one encoded variant.
Stages always run in this order:

    decode -> rotate (EXIF orientation) -> resize (never enlarge) -> sRGB -> encode

Rotation must precede resizing because a 90°/270° orientation swaps which
side the target width applies to.
"""

from io import BytesIO
from typing import Any, Dict, Optional, Tuple

from PIL import Image, ImageCms, ImageOps, UnidentifiedImageError

from ....enums import ImageFormat, LoggerName, LogSource
from ....exceptions import DecodeError, TransformFailure
from ....models.variant_model import ImageMetadata, VariantConfig
from ....services.logger import get_service_logger
from ..detectors.format_sniffer import is_heic
from .heic_normalizer import ensure_heif_opener, normalize

logger = get_service_logger(LoggerName.TRANSFORM_ENGINE, LogSource.PIPELINE)

_SRGB_PROFILE = ImageCms.ImageCmsProfile(ImageCms.createProfile("sRGB"))
SRGB_ICC_PROFILE = _SRGB_PROFILE.tobytes()


def decode_image(buffer: bytes) -> Image.Image:
    """
    Decode a buffer into a fully loaded Pillow image.

    Raises:
        DecodeError: If the buffer is not a readable image
    """
    ensure_heif_opener()
    try:
        img = Image.open(BytesIO(buffer))
        img.load()  # force-decode so format errors surface here
    except (Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Cannot decode image: {e}") from e
    return img


def apply_orientation(img: Image.Image) -> Image.Image:
    """Rotate/mirror according to the EXIF orientation tag."""
    return ImageOps.exif_transpose(img)


def resize_to_width(img: Image.Image, width: Optional[int]) -> Image.Image:
    """
    Constrain the image to ``width`` pixels wide, preserving aspect ratio.

    Images already at or below the target width are returned unchanged.
    """
    if not width or img.width <= width:
        return img

    height = max(1, int(round(img.height * width / img.width)))
    return img.resize((width, height), Image.Resampling.LANCZOS)


def convert_to_srgb(img: Image.Image) -> Tuple[Image.Image, Optional[bytes]]:
    """
    Convert an image carrying an embedded ICC profile into sRGB.

    Returns the converted image and the profile to embed in the output. Images
    without a usable profile come back unchanged with no profile, so every
    output format is tagged the same way.
    """
    icc = img.info.get("icc_profile")
    if not icc:
        return img, None

    if img.mode not in ("RGB", "RGBA", "L", "CMYK"):
        img = img.convert("RGBA" if img.has_transparency_data else "RGB")
    output_mode = "RGBA" if img.mode == "RGBA" else "RGB"

    try:
        source_profile = ImageCms.ImageCmsProfile(BytesIO(icc))
        converted = ImageCms.profileToProfile(
            img, source_profile, _SRGB_PROFILE, outputMode=output_mode
        )
    except (ImageCms.PyCMSError, OSError, ValueError) as e:
        logger.warning(
            "Ignoring unusable ICC profile", extra_context={"error": str(e)}
        )
        return img, None

    return converted, SRGB_ICC_PROFILE


def _encoder_options(config: VariantConfig) -> Dict[str, Any]:
    if config.format == ImageFormat.WEBP:
        return {"format": "WEBP", "quality": config.quality}
    if config.format == ImageFormat.AVIF:
        return {"format": "AVIF", "quality": config.quality}
    if config.format == ImageFormat.JPEG:
        return {"format": "JPEG", "quality": config.quality, "progressive": True}
    raise AssertionError(f"Unsupported variant format: {config.format!r}")


def _convert_mode(img: Image.Image, image_format: ImageFormat) -> Image.Image:
    if image_format == ImageFormat.JPEG:
        # JPEG has no alpha channel
        if img.mode not in ("RGB", "L"):
            return img.convert("RGB")
        return img

    if img.mode not in ("RGB", "RGBA"):
        return img.convert("RGBA" if img.has_transparency_data else "RGB")
    return img


def encode_image(
    img: Image.Image, config: VariantConfig, icc_profile: Optional[bytes] = None
) -> bytes:
    """
    Encode to the requested format and quality.

    Only ``icc_profile`` is embedded; any profile left in ``img.info`` is not.

    Raises:
        TransformFailure: If the encoder fails
    """
    options = _encoder_options(config)

    try:
        output = BytesIO()
        _convert_mode(img, config.format).save(
            output, icc_profile=icc_profile or b"", **options
        )
    except (OSError, ValueError, KeyError) as e:
        raise TransformFailure(
            f"Failed to encode {config.format.value}: {e}", variant=config
        ) from e

    return output.getvalue()


def transform(prepared: bytes, config: VariantConfig) -> bytes:
    """
    Produce one encoded variant from a prepared buffer.

    Args:
        prepared: Buffer returned by the HEIC normalizer (never mutated)
        config: Width, format and quality to produce

    Returns:
        Encoded image bytes

    Raises:
        DecodeError: If the buffer cannot be decoded
        TransformFailure: If rotation, resizing or encoding fails
    """
    with decode_image(prepared) as img:
        try:
            oriented = apply_orientation(img)
            resized = resize_to_width(oriented, config.width)
            managed, icc_profile = convert_to_srgb(resized)
        except (OSError, ValueError) as e:
            raise TransformFailure(
                f"Failed to transform image: {e}", variant=config
            ) from e
        return encode_image(managed, config, icc_profile)


def process_image(buffer: bytes, config: VariantConfig) -> bytes:
    """Normalize (HEIC -> PNG if needed) and transform a raw upload buffer."""
    return transform(normalize(buffer), config)


def read_image_metadata(prepared: bytes) -> ImageMetadata:
    """
    Read dimensions and container format of an already prepared buffer.

    Raises:
        DecodeError: If the buffer is not a readable image
    """
    ensure_heif_opener()
    try:
        with Image.open(BytesIO(prepared)) as img:
            return ImageMetadata(
                width=img.width,
                height=img.height,
                format=img.format,
                size=len(prepared),
            )
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Cannot read image metadata: {e}") from e


def get_image_metadata(buffer: bytes) -> ImageMetadata:
    """Read dimensions and container format of a raw buffer. Handles HEIC transparently."""
    return read_image_metadata(normalize(buffer))


def validate_image(buffer: bytes) -> bool:
    """Return True for HEIC, JPEG, PNG and anything else Pillow can identify."""
    if is_heic(buffer):
        return True
    ensure_heif_opener()
    try:
        with Image.open(BytesIO(buffer)) as img:
            return bool(img.format)
    except Exception:
        return False
