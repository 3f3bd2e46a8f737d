#!/usr/bin/env python3
# backend/tests/conftest.py
"""
Pytest configuration and shared fixtures for the photo CDN pipeline tests.
"""

from io import BytesIO
from typing import Dict, List, Optional, Tuple

import pytest
from PIL import ExifTags, Image

from photo_cdn.config import Settings
from photo_cdn.services.variant_pipeline.generators.heic_normalizer import (
    ensure_heif_opener,
)

# ISO-BMFF header with a HEIC major brand; only the sniffer looks at it
FAKE_HEIC_HEADER = b"\x00\x00\x00\x18ftypheic\x00\x00\x00\x00mif1heic"


def _make_exif(
    orientation: Optional[int] = None, model: Optional[str] = None
) -> Image.Exif:
    """Build an IFD0-only EXIF block."""
    exif = Image.Exif()
    if orientation is not None:
        exif[ExifTags.Base.Orientation] = orientation
    if model is not None:
        exif[ExifTags.Base.Model] = model
    return exif


def _make_image_bytes(
    size: Tuple[int, int] = (1200, 800),
    fmt: str = "JPEG",
    mode: str = "RGB",
    color=(200, 80, 40),
    exif: Optional[Image.Exif] = None,
) -> bytes:
    """Encode a solid-colour test image."""
    img = Image.new(mode, size, color)
    buf = BytesIO()
    save_kwargs = {}
    if exif is not None:
        save_kwargs["exif"] = exif
    img.save(buf, format=fmt, **save_kwargs)
    return buf.getvalue()


def _open_bytes(data: bytes) -> Image.Image:
    img = Image.open(BytesIO(data))
    img.load()
    return img


class FakeObjectStore:
    """In-memory ObjectStore that can fail on a chosen upload or delete."""

    def __init__(
        self,
        fail_on_upload: Optional[int] = None,
        fail_delete_keys: Optional[List[str]] = None,
    ):
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self.upload_calls: List[str] = []
        self.delete_calls: List[str] = []
        self.fail_on_upload = fail_on_upload
        self.fail_delete_keys = set(fail_delete_keys or [])

    async def upload_object(self, key: str, data: bytes, content_type: str) -> None:
        self.upload_calls.append(key)
        if self.fail_on_upload is not None and len(self.upload_calls) == self.fail_on_upload:
            raise ConnectionError(f"simulated upload failure for {key}")
        self.objects[key] = data
        self.content_types[key] = content_type

    async def delete_object(self, key: str) -> None:
        self.delete_calls.append(key)
        if key in self.fail_delete_keys:
            raise ConnectionError(f"simulated delete failure for {key}")
        self.objects.pop(key, None)


@pytest.fixture
def jpeg_bytes() -> bytes:
    """2400×1600 JPEG, wider than every target width."""
    return _make_image_bytes(size=(2400, 1600))


@pytest.fixture
def small_jpeg_bytes() -> bytes:
    """500×300 JPEG, narrower than every target width."""
    return _make_image_bytes(size=(500, 300))


@pytest.fixture
def png_bytes() -> bytes:
    return _make_image_bytes(size=(1000, 500), fmt="PNG", mode="RGBA", color=(0, 128, 255, 200))


@pytest.fixture
def fake_heic_bytes() -> bytes:
    return FAKE_HEIC_HEADER + b"\x00" * 64


@pytest.fixture
def heic_bytes() -> bytes:
    """Real 64×48 HEIC encoded through pillow-heif."""
    ensure_heif_opener()
    buf = BytesIO()
    try:
        Image.new("RGB", (64, 48), (10, 200, 30)).save(buf, format="HEIF", quality=90)
    except (KeyError, OSError, ValueError) as e:
        pytest.skip(f"HEIF encoder unavailable: {e}")
    return buf.getvalue()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        environment="test",
        max_concurrent_transforms=3,
        max_upload_size_mb=5,
        r2_account_id="account",
        r2_access_key_id="key",
        r2_secret_access_key="secret",
        r2_bucket_name="photos",
    )


@pytest.fixture
def fake_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def make_image():
    """Factory fixture: make_image(size, fmt, mode, color, exif) -> encoded bytes."""
    return _make_image_bytes


@pytest.fixture
def make_exif():
    return _make_exif


@pytest.fixture
def open_image():
    """Decode bytes back into a loaded PIL image."""
    return _open_bytes


@pytest.fixture
def make_store():
    """Factory fixture for FakeObjectStore with injected failures."""
    return FakeObjectStore
