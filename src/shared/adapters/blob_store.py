"""
Blob store adapters - story asset file storage.

Provides:
- BlobStore protocol: put / get_public_url / remove by path
- LocalBlobStore: files under a local directory (development, tests)
- S3BlobStore: AWS S3 bucket via boto3

Paths are always scoped as {owner_id}/{story_id}/{file}; the asset service
builds and checks them, adapters only move bytes.
"""

import asyncio
from pathlib import Path
from typing import Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ...config.settings import Settings, settings
from ..core.logging import get_logger

logger = get_logger("blob_store")


class BlobStoreError(Exception):
    """Raised when the storage backend rejects or fails an operation."""


class BlobStore(Protocol):
    """Storage backend for uploaded story assets."""

    async def put(self, path: str, data: bytes, content_type: str) -> str:
        """Store bytes under path and return the public URL."""
        ...

    def get_public_url(self, path: str) -> str:
        ...

    async def remove(self, path: str) -> None:
        ...


class LocalBlobStore:
    """
    Blob store on the local filesystem.

    Files live under `root`; URLs are `public_url` + path.
    """

    def __init__(self, root: Optional[str] = None, public_url: Optional[str] = None):
        self.root = Path(root or settings.BLOB_STORE_ROOT).resolve()
        self.public_url = (public_url or settings.BLOB_STORE_PUBLIC_URL).rstrip("/")

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if self.root not in target.parents:
            raise BlobStoreError(f"Path escapes blob root: {path}")
        return target

    def _write(self, target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    async def put(self, path: str, data: bytes, content_type: str) -> str:
        target = self._resolve(path)
        try:
            await asyncio.to_thread(self._write, target, data)
        except OSError as e:
            raise BlobStoreError(str(e)) from e

        logger.debug("Stored blob", path=path, size=len(data), content_type=content_type)
        return self.get_public_url(path)

    def get_public_url(self, path: str) -> str:
        return f"{self.public_url}/{path}"

    async def remove(self, path: str) -> None:
        target = self._resolve(path)
        try:
            await asyncio.to_thread(target.unlink, missing_ok=True)
        except OSError as e:
            raise BlobStoreError(str(e)) from e

        logger.debug("Removed blob", path=path)


class S3BlobStore:
    """
    Blob store backed by an S3 bucket.

    boto3 is synchronous; calls run in a worker thread so the event loop
    is never blocked.
    """

    def __init__(
        self,
        bucket: Optional[str] = None,
        region: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
    ):
        """
        Initialize S3 blob store.

        Args:
            bucket: Bucket name
            region: AWS region
            aws_access_key_id: AWS access key
            aws_secret_access_key: AWS secret key
        """
        self.bucket = bucket or settings.S3_BUCKET
        self.region = region or settings.AWS_REGION
        self.aws_access_key_id = aws_access_key_id or settings.AWS_ACCESS_KEY_ID
        self.aws_secret_access_key = aws_secret_access_key or settings.AWS_SECRET_ACCESS_KEY
        self._client = None

    @property
    def client(self):
        """Lazy-loaded S3 client."""
        if self._client is None:
            if self.aws_access_key_id and self.aws_secret_access_key:
                self._client = boto3.client(
                    "s3",
                    region_name=self.region,
                    aws_access_key_id=self.aws_access_key_id,
                    aws_secret_access_key=self.aws_secret_access_key,
                )
            else:
                # Use default credentials (IAM role, environment, etc.)
                self._client = boto3.client("s3", region_name=self.region)
        return self._client

    async def put(self, path: str, data: bytes, content_type: str) -> str:
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=path,
                Body=data,
                ContentType=content_type,
                CacheControl="max-age=3600",
            )
        except (ClientError, BotoCoreError) as e:
            raise BlobStoreError(str(e)) from e

        logger.info("Uploaded blob to S3", bucket=self.bucket, key=path, size=len(data))
        return self.get_public_url(path)

    def get_public_url(self, path: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{path}"

    async def remove(self, path: str) -> None:
        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=path)
        except (ClientError, BotoCoreError) as e:
            raise BlobStoreError(str(e)) from e

        logger.info("Deleted blob from S3", bucket=self.bucket, key=path)


def create_blob_store(config: Settings) -> BlobStore:
    """Pick the blob store named by BLOB_STORE_BACKEND."""
    backend = config.BLOB_STORE_BACKEND.lower()
    if backend == "s3":
        return S3BlobStore(
            bucket=config.S3_BUCKET,
            region=config.AWS_REGION,
            aws_access_key_id=config.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY,
        )
    if backend == "local":
        return LocalBlobStore(config.BLOB_STORE_ROOT, config.BLOB_STORE_PUBLIC_URL)
    raise ValueError(f"Unknown BLOB_STORE_BACKEND: {config.BLOB_STORE_BACKEND}")
