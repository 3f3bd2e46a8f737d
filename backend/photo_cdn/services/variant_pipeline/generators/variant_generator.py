# backend/photo_cdn/services/variant_pipeline/generators/variant_generator.py
"""
Variant Generator Component

Orchestrates one photo's full variant matrix: normalizes the upload once,
fans the shared prepared buffer out to the transform engine on a bounded
thread pool, and returns every variant or raises. Never returns a partial set.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Union

from ....config import settings
from ....enums import ImageFormat, LogEmoji, LoggerName, LogSource
from ....exceptions import TransformFailure, VariantError
from ....models.variant_model import GeneratedVariant, VariantConfig
from ....services.logger import get_service_logger
from ..utils.variant_utils import get_variant_configs, get_variant_filename
from .heic_normalizer import normalize
from .transform_engine import process_image, read_image_metadata, transform

logger = get_service_logger(
    LoggerName.VARIANT_PIPELINE, LogSource.PIPELINE, default_emoji=LogEmoji.IMAGE
)


class VariantGenerator:
    """
    Component responsible for generating the variant matrix of one photo.

    Sibling transforms share the prepared buffer read-only and may finish in
    any order; only the resulting set is meaningful. Callers uploading many
    photos should bound how many generate_variants() calls run at once, since
    each holds several decoded rasters (~width × height × 4 bytes) in memory.
    """

    def __init__(self, max_workers: Optional[int] = None):
        """
        Initialize variant generator.

        Args:
            max_workers: Thread pool size per photo (defaults to settings)
        """
        self.max_workers = max(1, max_workers or settings.max_concurrent_transforms)

        logger.debug(f"VariantGenerator initialized (workers={self.max_workers})")

    async def generate_variants(
        self,
        buffer: bytes,
        original_filename: str,
        filter: Optional[Callable[[VariantConfig], bool]] = None,
    ) -> List[GeneratedVariant]:
        """
        Generate all image variants from an original image.

        Args:
            buffer: Raw upload bytes (JPEG, PNG, HEIC, ...)
            original_filename: Used only to derive variant filenames
            filter: Optional predicate restricting which variants are produced

        Returns:
            One GeneratedVariant per planned instruction, in plan order

        Raises:
            DecodeError: If the upload cannot be decoded
            TransformFailure: If any single variant fails to encode
        """
        configs = get_variant_configs(filter)
        loop = asyncio.get_running_loop()

        executor = ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="variant"
        )
        try:
            # Normalize once; every transform reuses the same prepared buffer
            prepared = await loop.run_in_executor(executor, normalize, buffer)

            metadata = await loop.run_in_executor(
                executor, read_image_metadata, prepared
            )
            logger.info(
                f"Processing {original_filename}: "
                f"{metadata.width}x{metadata.height} ({metadata.format})",
                extra_context={"variants": len(configs)},
            )

            results = await asyncio.gather(
                *(
                    loop.run_in_executor(executor, transform, prepared, config)
                    for config in configs
                ),
                return_exceptions=True,
            )
        finally:
            # Never block the event loop on in-flight transforms; queued ones are dropped
            executor.shutdown(wait=False, cancel_futures=True)

        variants = []
        for config, result in zip(configs, results):
            if isinstance(result, BaseException):
                logger.error(
                    f"Variant generation failed for {original_filename}",
                    exception=result,
                    error_context={"variant": config.label},
                )
                raise self._with_variant(result, config)

            filename = get_variant_filename(
                original_filename, config.width, config.format
            )
            variant = GeneratedVariant.from_buffer(
                filename=filename,
                buffer=result,
                width=config.width,
                format=config.format.value,
            )
            logger.debug(f"Generated {filename}: {variant.size / 1024:.1f} KB")
            variants.append(variant)

        logger.info(
            f"Generated {len(variants)} variants for {original_filename}",
            emoji=LogEmoji.SUCCESS,
        )
        return variants

    @staticmethod
    def _with_variant(error: BaseException, config: VariantConfig) -> BaseException:
        """Attach the failing instruction; wrap errors outside the pipeline taxonomy."""
        if isinstance(error, VariantError):
            if error.variant is None:
                error.variant = config
            return error
        if not isinstance(error, Exception):
            return error

        failure = TransformFailure(f"Unexpected transform error: {error}", variant=config)
        failure.__cause__ = error
        return failure

    async def generate_single_variant(
        self,
        buffer: bytes,
        original_filename: str,
        width: Optional[int],
        image_format: Union[ImageFormat, str],
        quality: int,
    ) -> GeneratedVariant:
        """Generate one variant outside the standard matrix."""
        config = VariantConfig(
            width=width, format=ImageFormat(image_format), quality=quality
        )
        result = await asyncio.to_thread(process_image, buffer, config)

        return GeneratedVariant.from_buffer(
            filename=get_variant_filename(original_filename, width, config.format),
            buffer=result,
            width=width,
            format=config.format.value,
        )
