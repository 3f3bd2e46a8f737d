#!/usr/bin/env python3
"""
Unit tests for the R2 object store (boto3 client mocked).
"""

from unittest.mock import MagicMock, patch

import pytest

from photo_cdn.config import Settings
from photo_cdn.exceptions import ConfigurationError
from photo_cdn.services.variant_pipeline.services.object_store import R2ObjectStore

OBJECT_STORE = "photo_cdn.services.variant_pipeline.services.object_store"


@pytest.mark.unit
@pytest.mark.upload
class TestR2ObjectStore:
    @pytest.mark.asyncio
    async def test_upload_puts_object(self, test_settings):
        client = MagicMock()
        store = R2ObjectStore(test_settings, client=client)

        await store.upload_object("albums/a/IMG.jpeg", b"data", "image/jpeg")

        client.put_object.assert_called_once_with(
            Bucket="photos",
            Key="albums/a/IMG.jpeg",
            Body=b"data",
            ContentType="image/jpeg",
        )

    @pytest.mark.asyncio
    async def test_delete_removes_object(self, test_settings):
        client = MagicMock()
        store = R2ObjectStore(test_settings, client=client)

        await store.delete_object("albums/a/IMG.jpeg")

        client.delete_object.assert_called_once_with(
            Bucket="photos", Key="albums/a/IMG.jpeg"
        )

    @pytest.mark.asyncio
    async def test_client_errors_propagate(self, test_settings):
        client = MagicMock()
        client.put_object.side_effect = ConnectionError("network down")
        store = R2ObjectStore(test_settings, client=client)

        with pytest.raises(ConnectionError):
            await store.upload_object("k", b"", "image/webp")

    def test_builds_client_from_settings(self, test_settings):
        with patch(f"{OBJECT_STORE}.boto3.client") as mock_client:
            store = R2ObjectStore(test_settings)

        mock_client.assert_called_once_with(
            "s3",
            region_name="auto",
            endpoint_url="https://account.r2.cloudflarestorage.com",
            aws_access_key_id="key",
            aws_secret_access_key="secret",
        )
        assert store.client is mock_client.return_value
        assert store.bucket == "photos"

    def test_missing_credentials_rejected(self):
        config = Settings(
            r2_account_id="account",
            r2_access_key_id="",
            r2_secret_access_key="",
            r2_bucket_name="photos",
        )

        with pytest.raises(ConfigurationError) as exc_info:
            R2ObjectStore(config)

        assert "R2_ACCESS_KEY_ID" in str(exc_info.value)
        assert "R2_SECRET_ACCESS_KEY" in str(exc_info.value)
        assert "R2_BUCKET_NAME" not in str(exc_info.value)
