"""Object storage layer.

This module exposes the storage protocol, its value types and the
S3-compatible implementation used against R2 buckets.
"""

from .client import (
    ObjectDescriptor,
    StorageClient,
    StorageError,
    UploadResult,
    derive_public_url,
    get_content_type,
)
from .s3_client import R2StorageClient, S3Connection

__all__ = [
    "ObjectDescriptor",
    "R2StorageClient",
    "S3Connection",
    "StorageClient",
    "StorageError",
    "UploadResult",
    "derive_public_url",
    "get_content_type",
]
