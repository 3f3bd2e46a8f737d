# backend/photo_cdn/services/variant_pipeline/services/upload_service.py
"""
Upload/Rollback Coordinator

Persists an original photo and its variants to object storage. Every key is
recorded only after its write returns; if anything fails, every recorded key
is deleted so a failed upload leaves nothing behind.
"""

import asyncio
import inspect
from typing import Awaitable, Callable, Iterator, List, Optional, Union

from ....config import Settings, settings
from ....enums import LogEmoji, LoggerName, LogSource
from ....exceptions import (
    DecodeError,
    RollbackPartialFailure,
    UploadFailure,
    UploadValidationError,
)
from ....models.upload_model import PhotoUploadResult, UploadedVariant
from ....services.logger import get_service_logger
from ....utils.validation_helpers import (
    resolve_content_type,
    sanitize_filename,
    validate_upload,
)
from ..generators.variant_generator import VariantGenerator
from ..utils.variant_utils import get_object_key, get_photo_variant_keys
from .exif_service import extract_exif_data
from .object_store import ObjectStore

logger = get_service_logger(
    LoggerName.UPLOAD_SERVICE, LogSource.STORAGE, default_emoji=LogEmoji.UPLOAD
)

PersistCallback = Callable[[PhotoUploadResult], Union[None, Awaitable[None]]]


class RollbackKeyLog:
    """Ordered record of keys confirmed written for one photo."""

    def __init__(self):
        self._keys: List[str] = []

    def record(self, key: str) -> None:
        self._keys.append(key)

    @property
    def keys(self) -> List[str]:
        return list(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._keys))


class PhotoUploadCoordinator:
    """
    Uploads original + variants for one photo with all-or-nothing semantics.

    Writes run sequentially so a failure at step N rolls back exactly the
    first N keys. Rollback deletes run in parallel and are best-effort: their
    failures are logged and attached to the raised error, never retried.
    """

    def __init__(
        self,
        object_store: ObjectStore,
        generator: Optional[VariantGenerator] = None,
        config: Optional[Settings] = None,
    ):
        self.object_store = object_store
        self.generator = generator or VariantGenerator()
        self.config = config or settings

    async def upload_photo(
        self,
        album_id: str,
        original_filename: str,
        buffer: bytes,
        content_type: Optional[str] = None,
        *,
        on_persist: Optional[PersistCallback] = None,
        include_exif: bool = True,
    ) -> PhotoUploadResult:
        """
        Validate, store and derive variants for an uploaded photo.

        Args:
            album_id: Album the photo belongs to
            original_filename: Untrusted client filename (sanitized here)
            buffer: Raw upload bytes
            content_type: Reported MIME type of the upload
            on_persist: Catalog write, called last and inside the rollback scope
            include_exif: Extract EXIF into the result

        Returns:
            PhotoUploadResult describing every stored object

        Raises:
            UploadValidationError: Type/size rejected, nothing written
            DecodeError: Upload is not a decodable image, writes rolled back
            UploadFailure: Any other failure, writes rolled back
        """
        validate_upload(
            original_filename,
            content_type,
            len(buffer),
            self.config.max_upload_size_bytes,
        )
        filename = sanitize_filename(original_filename)
        key_log = RollbackKeyLog()

        try:
            original_key = get_object_key(album_id, filename)
            await self.object_store.upload_object(
                original_key, buffer, resolve_content_type(filename, content_type)
            )
            key_log.record(original_key)

            variants = await self.generator.generate_variants(buffer, filename)

            uploaded_variants = []
            for variant in variants:
                variant_key = get_object_key(album_id, variant.filename)
                await self.object_store.upload_object(
                    variant_key, variant.buffer, variant.content_type
                )
                key_log.record(variant_key)
                uploaded_variants.append(
                    UploadedVariant(
                        key=variant_key,
                        filename=variant.filename,
                        format=variant.format,
                        width=variant.width,
                        size=variant.size,
                    )
                )

            exif = None
            if include_exif:
                exif = await asyncio.to_thread(extract_exif_data, buffer)

            result = PhotoUploadResult(
                album_id=album_id,
                filename=filename,
                original_key=original_key,
                variants=uploaded_variants,
                uploaded_keys=key_log.keys,
                exif=exif,
            )

            if on_persist is not None:
                persisted = on_persist(result)
                if inspect.isawaitable(persisted):
                    await persisted

        except BaseException as error:
            logger.error(
                "Upload failed, rolling back uploaded objects",
                exception=error,
                error_context={"album_id": album_id, "filename": filename},
            )
            rollback_errors = await self._rollback(key_log)

            # Cancellation and interpreter exits propagate unchanged after rollback
            if not isinstance(error, Exception) or isinstance(
                error, (UploadValidationError, DecodeError)
            ):
                raise

            raise UploadFailure(
                f"Photo upload failed: {error}",
                rolled_back_keys=key_log.keys,
                rollback_errors=rollback_errors,
            ) from error

        logger.info(
            f"Uploaded {filename} with {len(uploaded_variants)} variants",
            extra_context={"album_id": album_id, "objects": len(key_log)},
            emoji=LogEmoji.SUCCESS,
        )
        return result

    async def _rollback(self, key_log: RollbackKeyLog) -> List[RollbackPartialFailure]:
        keys = key_log.keys
        if not keys:
            return []

        logger.warning(
            f"Rolling back {len(keys)} object(s)", emoji=LogEmoji.ROLLBACK
        )
        return await self._delete_keys(keys)

    async def _delete_keys(self, keys: List[str]) -> List[RollbackPartialFailure]:
        results = await asyncio.gather(
            *(self.object_store.delete_object(key) for key in keys),
            return_exceptions=True,
        )

        failures = []
        for key, outcome in zip(keys, results):
            if isinstance(outcome, Exception):
                failure = RollbackPartialFailure(key, outcome)
                logger.error(str(failure), exception=outcome, emoji=LogEmoji.DELETE)
                failures.append(failure)
        return failures

    async def delete_photo_objects(self, album_id: str, filename: str) -> List[str]:
        """
        Delete the original and every conventional variant of a photo.

        Keys are reconstructed from the naming convention, so nothing has to be
        looked up first. Best-effort like rollback.

        Returns:
            Keys that could not be deleted
        """
        keys = get_photo_variant_keys(album_id, filename)
        failures = await self._delete_keys(keys)

        logger.info(
            f"Deleted {len(keys) - len(failures)}/{len(keys)} objects for {filename}",
            extra_context={"album_id": album_id},
            emoji=LogEmoji.DELETE,
        )
        return [failure.key for failure in failures]
