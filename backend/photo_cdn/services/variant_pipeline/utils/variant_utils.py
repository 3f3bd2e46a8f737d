# backend/photo_cdn/services/variant_pipeline/utils/variant_utils.py
"""
Variant Utility Functions

Matrix planning and the naming convention shared by generation, upload and
bulk deletion. Names must stay bit-exact for CDN compatibility.
"""

import re
from typing import Callable, List, Optional, Union

from ....enums import ImageFormat, SizeName
from ....models.variant_model import VariantConfig
from .constants import ALBUM_KEY_PREFIX, FORMATS, QUALITY_SETTINGS, SIZES

_EXTENSION_PATTERN = re.compile(r"\.[^.]+$")


def get_variant_configs(
    filter: Optional[Callable[[VariantConfig], bool]] = None,
) -> List[VariantConfig]:
    """
    Expand sizes × formats into the ordered list of transform instructions.

    The original size slot is skipped: the uploaded original is stored as-is.

    Args:
        filter: Optional predicate restricting the plan (e.g. only missing formats)

    Returns:
        Instructions ordered by width descending, then format declaration order
    """
    configs = []
    for size_name, width in SIZES.items():
        if size_name == SizeName.ORIGINAL:
            continue
        for image_format in FORMATS:
            configs.append(
                VariantConfig(
                    width=width,
                    format=image_format,
                    quality=QUALITY_SETTINGS[image_format],
                )
            )

    if filter is not None:
        configs = [config for config in configs if filter(config)]

    return configs


def strip_extension(filename: str) -> str:
    """Drop the last extension: 'IMG_0036.jpeg' -> 'IMG_0036'."""
    return _EXTENSION_PATTERN.sub("", filename)


def get_variant_filename(
    original_name: str,
    width: Optional[int],
    image_format: Union[ImageFormat, str],
) -> str:
    """
    Generate filename for a variant.

    Example: get_variant_filename("IMG_1234.jpeg", 1920, "webp") -> "IMG_1234_1920w.webp"
    """
    format_value = ImageFormat(image_format).value
    size_label = f"_{width}w" if width else ""
    return f"{strip_extension(original_name)}{size_label}.{format_value}"


def get_object_key(album_id: str, filename: str) -> str:
    return f"{ALBUM_KEY_PREFIX}/{album_id}/{filename}"


def get_photo_variant_keys(album_id: str, filename: str) -> List[str]:
    """
    Reconstruct every object key stored for a photo without querying storage.

    Args:
        album_id: Album the photo belongs to
        filename: Sanitized original filename

    Returns:
        Original key followed by one key per planned variant (7 by default)
    """
    keys = [get_object_key(album_id, filename)]
    for config in get_variant_configs():
        keys.append(
            get_object_key(
                album_id, get_variant_filename(filename, config.width, config.format)
            )
        )
    return keys
