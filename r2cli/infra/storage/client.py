"""Storage client protocol and data types.

This module defines the interface the command-line scripts rely on for
bucket operations, together with the value types those operations return.
Service failures are reported through these values rather than exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

CONTENT_TYPES: dict[str, str] = {
    "pdf": "application/pdf",
    "zip": "application/zip",
    "txt": "text/plain",
    "jpg": "image/jpeg",
    "png": "image/png",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"

MODIFIED_FORMAT = "%Y-%m-%d %H:%M:%S"


class StorageError(RuntimeError):
    """Raised when the storage client cannot be constructed."""


@dataclass(frozen=True, slots=True)
class ObjectDescriptor:
    """A stored object as reported by a listing."""

    key: str
    size: int
    modified: str
    url: str


@dataclass(frozen=True, slots=True)
class UploadResult:
    """Outcome of an upload; failed uploads carry ``error`` instead of an ETag."""

    key: str
    url: str | None = None
    etag: str | None = None
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, key: str, error: str) -> "UploadResult":
        return cls(key=key, error=error)


def get_content_type(file_path: str) -> str:
    """Map a file extension to its MIME type, case-insensitively."""
    extension = Path(file_path).suffix.lower().lstrip(".")
    return CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)


def derive_public_url(base_url: str, key: str) -> str:
    return base_url.rstrip("/") + "/" + key.lstrip("/")


class StorageClient(Protocol):
    """Protocol for bucket-scoped object storage clients.

    Every operation converts service and transport failures into its
    return value. Only local filesystem errors propagate.
    """

    def upload_file(self, local_path: str, key: str) -> UploadResult:
        """Upload a local file under ``key``.

        Args:
            local_path: Path of the file to read.
            key: Object key (path) in the bucket.

        Returns:
            UploadResult carrying the public URL and ETag, or the error.

        Raises:
            OSError: If the local file cannot be opened.
        """
        ...

    def download_file(self, key: str, save_path: str) -> bool:
        """Write the object body to ``save_path``, overwriting it.

        Returns:
            True on success, False when the service call failed.

        Raises:
            OSError: If ``save_path`` cannot be written.
        """
        ...

    def list_files(self, prefix: str = "") -> list[ObjectDescriptor]:
        """List every object whose key starts with ``prefix``.

        Returns:
            Descriptors in service order; empty on no match or on error.
        """
        ...

    def delete_file(self, key: str) -> bool:
        """Delete an object. Deleting a missing key counts as success."""
        ...

    def generate_signed_url(self, key: str, expiration_seconds: int = 3600) -> str:
        """Generate a presigned GET URL, or an empty string on error."""
        ...

    def get_public_url(self, key: str) -> str:
        """Join the public endpoint and ``key`` with a single slash."""
        ...
