"""
Adapters Package

External service integrations.

Contents:
=========
- blob_store: Story asset storage (local filesystem, AWS S3)

Note: Database access is handled by shared/db/session.py using async SQLAlchemy.

Usage:
======
    from src.shared.adapters.blob_store import create_blob_store

    blob_store = create_blob_store(settings)
    url = await blob_store.put(path, data, "image/png")
"""

from src.shared.adapters.blob_store import (
    BlobStore,
    BlobStoreError,
    LocalBlobStore,
    S3BlobStore,
    create_blob_store,
)

__all__ = [
    "BlobStore",
    "BlobStoreError",
    "LocalBlobStore",
    "S3BlobStore",
    "create_blob_store",
]
