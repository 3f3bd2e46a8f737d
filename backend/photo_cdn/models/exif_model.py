# backend/photo_cdn/models/exif_model.py
"""
EXIF summary model stored on a photo's catalog entry.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExifSummary(BaseModel):
    """Human-readable capture settings. Every field is independently nullable."""

    model_config = ConfigDict(populate_by_name=True)

    camera: Optional[str] = Field(None, description="Camera model, e.g. 'iPhone 15 Pro'")
    lens: Optional[str] = Field(None, description="Focal length, e.g. '24mm'")
    f_stop: Optional[str] = Field(None, alias="fStop", description="e.g. 'f/2.8'")
    shutter_speed: Optional[str] = Field(
        None, alias="shutterSpeed", description="e.g. '1/500s' or '2.0s'"
    )
    iso: Optional[str] = Field(None, description="Sensitivity, e.g. '100'")

    @classmethod
    def empty(cls) -> "ExifSummary":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not any(
            (self.camera, self.lens, self.f_stop, self.shutter_speed, self.iso)
        )
