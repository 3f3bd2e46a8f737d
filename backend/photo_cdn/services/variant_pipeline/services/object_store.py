# backend/photo_cdn/services/variant_pipeline/services/object_store.py
"""
Object storage backends.

The upload coordinator only needs put and delete. R2ObjectStore talks to
Cloudflare R2 through its S3-compatible API using boto3; the blocking client
calls run on worker threads.
"""

import asyncio
from typing import Optional, Protocol

import boto3

from ....config import Settings, settings
from ....enums import LogEmoji, LoggerName, LogSource
from ....services.logger import get_service_logger

logger = get_service_logger(
    LoggerName.OBJECT_STORE, LogSource.STORAGE, default_emoji=LogEmoji.STORAGE
)


class ObjectStore(Protocol):
    """Durable key/value blob storage. Both operations are idempotent."""

    async def upload_object(self, key: str, data: bytes, content_type: str) -> None:
        ...

    async def delete_object(self, key: str) -> None:
        ...


class R2ObjectStore:
    """Cloudflare R2 bucket accessed through boto3's S3 client."""

    def __init__(self, config: Optional[Settings] = None, client=None):
        """
        Initialize the store.

        Args:
            config: Settings carrying R2 credentials (defaults to global settings)
            client: Pre-built boto3 S3 client (skips credential validation)
        """
        self.config = config or settings
        if client is None:
            self.config.require_r2()
            client = boto3.client(
                "s3",
                region_name="auto",
                endpoint_url=self.config.r2_endpoint,
                aws_access_key_id=self.config.r2_access_key_id,
                aws_secret_access_key=self.config.r2_secret_access_key,
            )
        self.client = client
        self.bucket = self.config.r2_bucket_name

    async def upload_object(self, key: str, data: bytes, content_type: str) -> None:
        await asyncio.to_thread(
            self.client.put_object,
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
        logger.debug(f"Uploaded {key} ({len(data)} bytes)")

    async def delete_object(self, key: str) -> None:
        await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=key)
        logger.debug(f"Deleted {key}", emoji=LogEmoji.DELETE)
