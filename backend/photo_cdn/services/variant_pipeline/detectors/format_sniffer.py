# backend/photo_cdn/services/variant_pipeline/detectors/format_sniffer.py
"""
Format Sniffer

Byte-pattern classification of an upload without decoding it. ISO-BMFF
containers start with a box size (4 bytes) followed by "ftyp" and the major
brand, so HEIC/HEIF shows up in bytes 4..12.
"""

from ....enums import SourceKind
from ..utils.constants import HEIC_BRAND_MARKERS, HEIC_HEADER_END, HEIC_HEADER_START


def classify(buffer: bytes) -> SourceKind:
    """
    Classify a raw buffer as HEIC/HEIF or anything else.

    Best-effort: short or non-ASCII headers are reported as OTHER and left to
    the generic decode path, which fails loudly if the format is unsupported.
    """
    if len(buffer) < HEIC_HEADER_END:
        return SourceKind.OTHER

    try:
        header = bytes(buffer[HEIC_HEADER_START:HEIC_HEADER_END]).decode("ascii")
    except (UnicodeDecodeError, TypeError):
        return SourceKind.OTHER

    if any(marker in header for marker in HEIC_BRAND_MARKERS):
        return SourceKind.HEIC
    return SourceKind.OTHER


def is_heic(buffer: bytes) -> bool:
    return classify(buffer) is SourceKind.HEIC
