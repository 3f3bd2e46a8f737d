# backend/photo_cdn/models/upload_model.py
"""
Upload Domain Models

Result records returned by the upload/rollback coordinator.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .exif_model import ExifSummary


class UploadedVariant(BaseModel):
    """Stored variant summary (the buffer itself is not kept)."""

    key: str = Field(..., description="Object storage key")
    filename: str = Field(..., description="Variant filename, e.g. 'IMG_0036_800w.webp'")
    format: str = Field(..., description="Encoding")
    width: Optional[int] = Field(None, description="Target width")
    size: int = Field(..., description="Encoded size in bytes")


class PhotoUploadResult(BaseModel):
    """Everything written for one photo after a successful upload."""

    album_id: str = Field(..., description="Album the photo belongs to")
    filename: str = Field(..., description="Sanitized original filename")
    original_key: str = Field(..., description="Key of the untouched original")
    variants: List[UploadedVariant] = Field(default_factory=list)
    uploaded_keys: List[str] = Field(
        default_factory=list, description="Keys in the order they were written"
    )
    exif: Optional[ExifSummary] = Field(None, description="Extracted capture metadata")

    @property
    def variant_keys(self) -> List[str]:
        return [variant.key for variant in self.variants]
