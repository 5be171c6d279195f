"""
Service Access Object for the S3-compatible object store holding uploaded assets.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional
from urllib.parse import quote

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from marketplace.core.config import settings


class StorageError(Exception):
    """Raised when an object-store call fails or storage is not configured."""


class StorageSAO:
    """Upload blobs and resolve the durable URL they are served from."""

    def __init__(
        self,
        bucket: Optional[str] = None,
        region: Optional[str] = None,
        public_base_url: Optional[str] = None,
        client: Any = None,
    ) -> None:
        self._bucket = bucket if bucket is not None else settings.storage_bucket
        self._region = region or settings.aws_region
        self._public_base_url = (
            public_base_url if public_base_url is not None else settings.storage_public_base_url
        ).rstrip("/")
        self._client = client
        self._logger = structlog.get_logger().bind(component="StorageSAO")

    @property
    def bucket(self) -> str:
        return self._bucket

    def is_enabled(self) -> bool:
        return bool(self._bucket)

    def _get_client(self):
        if self._client is None:
            # Empty credentials fall through to the default boto3 credential chain
            self._client = boto3.client(
                "s3",
                region_name=self._region,
                endpoint_url=settings.storage_endpoint_url or None,
                aws_access_key_id=settings.aws_access_key_id or None,
                aws_secret_access_key=settings.aws_secret_access_key or None,
            )
            self._logger.info("S3 client initialized", region=self._region, bucket=self._bucket)
        return self._client

    def public_url(self, key: str) -> str:
        """Durable URL for an object key."""
        quoted_key = quote(key)
        if self._public_base_url:
            return f"{self._public_base_url}/{quoted_key}"
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{quoted_key}"

    async def upload(
        self,
        key: str,
        data: bytes,
        content_type: Optional[str] = None,
    ) -> str:
        """Store ``data`` under ``key`` and return its durable URL."""
        if not self.is_enabled():
            raise StorageError("Object storage bucket is not configured")

        params: Dict[str, Any] = {"Bucket": self._bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type

        try:
            await asyncio.to_thread(self._get_client().put_object, **params)
        except ClientError as exc:
            error = exc.response.get("Error", {})
            self._logger.error(
                "S3 ClientError - failed to upload object",
                key=key,
                error_code=error.get("Code"),
                error_message=error.get("Message"),
            )
            raise StorageError(f"Upload failed for {key}") from exc
        except BotoCoreError as exc:
            self._logger.error("S3 BotoCoreError - failed to upload object", key=key, error=str(exc))
            raise StorageError(f"Upload failed for {key}") from exc

        self._logger.info("Uploaded object", key=key, size=len(data))
        return self.public_url(key)

    async def delete(self, key: str) -> None:
        if not self.is_enabled():
            raise StorageError("Object storage bucket is not configured")

        try:
            await asyncio.to_thread(
                self._get_client().delete_object, Bucket=self._bucket, Key=key
            )
        except (ClientError, BotoCoreError) as exc:
            self._logger.error("Failed to delete object", key=key, error=str(exc))
            raise StorageError(f"Delete failed for {key}") from exc

        self._logger.info("Deleted object", key=key)


storage_sao = StorageSAO()
