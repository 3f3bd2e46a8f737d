# backend/photo_cdn/services/variant_pipeline/variant_pipeline.py
"""
Main Variant Pipeline Class

Unified entry point for the two operations exposed to collaborators
(variant generation and EXIF extraction) plus the upload coordinator that
persists their output.
"""

from typing import Callable, List, Optional

from ...config import Settings, settings
from ...enums import LoggerName, LogSource
from ...models.exif_model import ExifSummary
from ...models.variant_model import GeneratedVariant, VariantConfig
from ...services.logger import get_service_logger
from .generators import VariantGenerator
from .services import ObjectStore, PhotoUploadCoordinator, R2ObjectStore
from .services.exif_service import extract_exif_data as _extract_exif_data

logger = get_service_logger(LoggerName.VARIANT_PIPELINE, LogSource.PIPELINE)


class VariantPipeline:
    """
    Variant generation pipeline with injectable storage.

    Generation and EXIF extraction need no storage; the upload coordinator is
    only available when an object store was provided.
    """

    def __init__(
        self,
        object_store: Optional[ObjectStore] = None,
        config: Optional[Settings] = None,
    ):
        self.config = config or settings
        self.generator = VariantGenerator(
            max_workers=self.config.max_concurrent_transforms
        )
        self.object_store = object_store
        self.uploader: Optional[PhotoUploadCoordinator] = None

        if object_store is not None:
            self.uploader = PhotoUploadCoordinator(
                object_store, generator=self.generator, config=self.config
            )
        else:
            logger.debug("VariantPipeline created without object store")

    async def generate_variants(
        self,
        buffer: bytes,
        original_filename: str,
        filter: Optional[Callable[[VariantConfig], bool]] = None,
    ) -> List[GeneratedVariant]:
        return await self.generator.generate_variants(
            buffer, original_filename, filter=filter
        )

    def extract_exif_data(self, buffer: bytes) -> ExifSummary:
        return _extract_exif_data(buffer)

    def require_uploader(self) -> PhotoUploadCoordinator:
        if self.uploader is None:
            raise ValueError("Object store is required but not provided")
        return self.uploader


def create_variant_pipeline(
    object_store: Optional[ObjectStore] = None,
    use_r2: bool = False,
    config: Optional[Settings] = None,
) -> VariantPipeline:
    """
    Factory function to create a variant pipeline.

    Args:
        object_store: Explicit storage backend
        use_r2: Build an R2ObjectStore from settings when no store is given
        config: Settings override (defaults to global settings)
    """
    config = config or settings
    if object_store is None and use_r2:
        object_store = R2ObjectStore(config)
    return VariantPipeline(object_store=object_store, config=config)


async def generate_variants(
    buffer: bytes,
    original_filename: str,
    filter: Optional[Callable[[VariantConfig], bool]] = None,
) -> List[GeneratedVariant]:
    """Generate the full variant matrix for one upload (all-or-nothing)."""
    return await VariantGenerator().generate_variants(
        buffer, original_filename, filter=filter
    )


def extract_exif_data(buffer: bytes) -> ExifSummary:
    """Extract formatted EXIF fields; never raises."""
    return _extract_exif_data(buffer)
