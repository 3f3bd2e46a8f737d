# backend/photo_cdn/models/variant_model.py
"""
Variant Domain Models

Instruction and output records for the variant generation pipeline.
"""

from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..enums import ImageFormat


class VariantConfig(BaseModel):
    """One transform instruction: target width, encoding and quality."""

    model_config = ConfigDict(frozen=True)

    width: Optional[int] = Field(
        None, gt=0, description="Target width in pixels, None keeps original size"
    )
    format: ImageFormat = Field(..., description="Output encoding")
    quality: int = Field(..., ge=0, le=100, description="Encoder quality (0-100)")

    @property
    def label(self) -> str:
        """Short identifier used in logs and error messages, e.g. '800w/webp'"""
        size = f"{self.width}w" if self.width else "original"
        return f"{size}/{self.format.value}"


class ImageMetadata(BaseModel):
    """Basic properties of a decoded image."""

    width: int = Field(..., description="Pixel width before orientation correction")
    height: int = Field(..., description="Pixel height before orientation correction")
    format: Optional[str] = Field(None, description="Container format, e.g. 'JPEG'")
    size: int = Field(..., description="Buffer length in bytes")


@dataclass(frozen=True)
class GeneratedVariant:
    """An encoded variant held in memory until the caller uploads it."""

    filename: str
    buffer: bytes
    width: Optional[int]
    format: str
    size: int

    @classmethod
    def from_buffer(
        cls, filename: str, buffer: bytes, width: Optional[int], format: str
    ) -> "GeneratedVariant":
        return cls(
            filename=filename,
            buffer=buffer,
            width=width,
            format=format,
            size=len(buffer),
        )

    @property
    def content_type(self) -> str:
        return f"image/{self.format}"
