#!/usr/bin/env python3
"""
Unit tests for variant matrix planning and naming conventions.
"""

import pytest

from photo_cdn.enums import ImageFormat
from photo_cdn.services.variant_pipeline.utils.constants import (
    FORMATS,
    QUALITY_SETTINGS,
)
from photo_cdn.services.variant_pipeline.utils.variant_utils import (
    get_object_key,
    get_photo_variant_keys,
    get_variant_configs,
    get_variant_filename,
    strip_extension,
)


@pytest.mark.unit
@pytest.mark.variants
class TestVariantPlanning:
    """Test suite for get_variant_configs."""

    def test_default_matrix_has_six_entries(self):
        configs = get_variant_configs()
        assert len(configs) == 6

    def test_matrix_order_width_descending_then_format(self):
        configs = get_variant_configs()
        assert [(c.width, c.format) for c in configs] == [
            (1920, ImageFormat.WEBP),
            (1920, ImageFormat.AVIF),
            (1920, ImageFormat.JPEG),
            (800, ImageFormat.WEBP),
            (800, ImageFormat.AVIF),
            (800, ImageFormat.JPEG),
        ]

    def test_original_size_is_excluded(self):
        assert all(config.width is not None for config in get_variant_configs())

    def test_quality_is_fixed_per_format(self):
        expected = {ImageFormat.WEBP: 80, ImageFormat.AVIF: 75, ImageFormat.JPEG: 85}
        for config in get_variant_configs():
            assert config.quality == expected[config.format]
        assert QUALITY_SETTINGS == expected

    def test_filter_restricts_plan(self):
        configs = get_variant_configs(lambda c: c.format == ImageFormat.AVIF)
        assert [(c.width, c.format) for c in configs] == [
            (1920, ImageFormat.AVIF),
            (800, ImageFormat.AVIF),
        ]

    def test_filter_rejecting_everything_gives_empty_plan(self):
        assert get_variant_configs(lambda c: False) == []

    def test_configs_are_immutable(self):
        config = get_variant_configs()[0]
        with pytest.raises(Exception):
            config.width = 10

    def test_formats_declared_order(self):
        assert [f.value for f in FORMATS] == ["webp", "avif", "jpeg"]


@pytest.mark.unit
@pytest.mark.variants
class TestVariantNaming:
    """Test suite for the bit-exact naming convention."""

    def test_sized_variant_filename(self):
        assert get_variant_filename("IMG_0036.jpeg", 800, "webp") == "IMG_0036_800w.webp"

    def test_enum_format_accepted(self):
        assert (
            get_variant_filename("IMG_0036.jpeg", 1920, ImageFormat.AVIF)
            == "IMG_0036_1920w.avif"
        )

    def test_no_width_suffix_for_original_slot(self):
        assert get_variant_filename("IMG_0036.jpeg", None, "jpeg") == "IMG_0036.jpeg"

    def test_only_last_extension_is_stripped(self):
        assert strip_extension("archive.tar.gz") == "archive.tar"
        assert get_variant_filename("a.b.HEIC", 800, "jpeg") == "a.b_800w.jpeg"

    def test_name_without_extension(self):
        assert get_variant_filename("photo", 800, "webp") == "photo_800w.webp"

    def test_filename_set_is_deterministic(self):
        def names():
            return {
                get_variant_filename("IMG_0036.jpeg", c.width, c.format)
                for c in get_variant_configs()
            }

        first = names()
        assert first == names()
        assert len(first) == 6

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError):
            get_variant_filename("IMG_0036.jpeg", 800, "gif")


@pytest.mark.unit
@pytest.mark.upload
class TestObjectKeys:
    """Test suite for object key derivation."""

    def test_object_key_layout(self):
        assert get_object_key("album-1", "IMG_0036.jpeg") == "albums/album-1/IMG_0036.jpeg"

    def test_photo_variant_keys_cover_original_and_matrix(self):
        keys = get_photo_variant_keys("album-1", "IMG_0036.jpeg")

        assert len(keys) == 7
        assert keys[0] == "albums/album-1/IMG_0036.jpeg"
        assert set(keys[1:]) == {
            f"albums/album-1/IMG_0036_{width}w.{fmt}"
            for width in (1920, 800)
            for fmt in ("webp", "avif", "jpeg")
        }
