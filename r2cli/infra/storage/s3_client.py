"""S3-compatible storage client implementation.

This module provides the bucket client used by the command-line scripts.
It works against Cloudflare R2, AWS S3, MinIO and other services that speak
the S3 API.

Dependencies:
    - boto3
    - botocore
"""

from __future__ import annotations

import logging
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from r2cli.infra.storage.client import (
    MODIFIED_FORMAT,
    ObjectDescriptor,
    StorageError,
    UploadResult,
    derive_public_url,
    get_content_type,
)

if TYPE_CHECKING:
    from r2cli.common.config import R2Settings

logger = logging.getLogger("r2cli.storage")

# Error codes some backends return for deleting an absent key; S3 itself answers 204.
MISSING_KEY_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


@dataclass(frozen=True, slots=True)
class S3Connection:
    """Endpoint and credentials for the S3 API."""

    endpoint: str
    access_key_id: str
    secret_access_key: str
    region: str = "auto"
    addressing_style: str = "auto"


class R2StorageClient:
    """Bucket-scoped S3 client.

    One boto3 client is created per instance and reused for the single
    operation a script performs.
    """

    def __init__(
        self,
        bucket_name: str,
        public_endpoint: str,
        connection: S3Connection,
    ) -> None:
        """Initialize the client for one bucket.

        Args:
            bucket_name: Bucket every operation targets.
            public_endpoint: Base URL objects are publicly served from.
            connection: Endpoint, credentials and region.

        Raises:
            StorageError: If boto3 rejects the connection parameters.
        """
        self.bucket_name = bucket_name
        self.public_endpoint = public_endpoint
        self._client = self._build_client(connection)

    @classmethod
    def from_settings(cls, settings: "R2Settings") -> "R2StorageClient":
        return cls(
            settings.bucket_name,
            settings.public_endpoint,
            S3Connection(
                endpoint=settings.endpoint,
                access_key_id=settings.access_key_id,
                secret_access_key=settings.secret_access_key,
                region=settings.region,
                addressing_style=settings.addressing_style,
            ),
        )

    @staticmethod
    def _build_client(connection: S3Connection) -> Any:
        """Create a boto3 S3 client for the connection."""
        config = Config(
            signature_version="s3v4",
            s3={"addressing_style": connection.addressing_style},
        )
        try:
            return boto3.client(
                "s3",
                endpoint_url=connection.endpoint,
                region_name=connection.region,
                aws_access_key_id=connection.access_key_id,
                aws_secret_access_key=connection.secret_access_key,
                config=config,
            )
        except (BotoCoreError, ValueError) as exc:
            raise StorageError(f"Failed to create S3 client: {exc}") from exc

    def get_public_url(self, key: str) -> str:
        return derive_public_url(self.public_endpoint, key)

    def upload_file(self, local_path: str, key: str) -> UploadResult:
        """Upload a local file, reporting service errors in the result."""
        content_type = get_content_type(local_path)
        with open(local_path, "rb") as body:
            try:
                response = self._client.put_object(
                    Bucket=self.bucket_name,
                    Key=key,
                    Body=body,
                    ContentType=content_type,
                )
            except (BotoCoreError, ClientError) as exc:
                logger.error("Error uploading %s to %s: %s", local_path, key, exc)
                return UploadResult.failed(key, str(exc))

        return UploadResult(
            key=key,
            url=self.get_public_url(key),
            etag=response.get("ETag"),
        )

    def download_file(self, key: str, save_path: str) -> bool:
        """Fetch an object and write it to ``save_path``."""
        try:
            response = self._client.get_object(Bucket=self.bucket_name, Key=key)
            with closing(response["Body"]) as stream:
                data = stream.read()
        except (BotoCoreError, ClientError) as exc:
            logger.error("Error downloading file %s: %s", key, exc)
            return False

        Path(save_path).write_bytes(data)
        return True

    def list_files(self, prefix: str = "") -> list[ObjectDescriptor]:
        """List all objects under ``prefix``, following continuation tokens."""
        files: list[ObjectDescriptor] = []
        try:
            paginator = self._client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=prefix):
                for obj in page.get("Contents", []):
                    files.append(
                        ObjectDescriptor(
                            key=obj["Key"],
                            size=int(obj.get("Size", 0)),
                            modified=obj["LastModified"].strftime(MODIFIED_FORMAT),
                            url=self.get_public_url(obj["Key"]),
                        )
                    )
        except (BotoCoreError, ClientError) as exc:
            logger.error("Error listing files under %r: %s", prefix, exc)
            return []
        return files

    def delete_file(self, key: str) -> bool:
        """Delete an object; an already-missing key counts as deleted."""
        try:
            self._client.delete_object(Bucket=self.bucket_name, Key=key)
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in MISSING_KEY_CODES:
                logger.info("Object %s already absent", key)
                return True
            logger.error("Error deleting file %s: %s", key, exc)
            return False
        except BotoCoreError as exc:
            logger.error("Error deleting file %s: %s", key, exc)
            return False
        return True

    def generate_signed_url(self, key: str, expiration_seconds: int = 3600) -> str:
        """Generate a presigned GET URL valid for ``expiration_seconds``."""
        if expiration_seconds <= 0:
            logger.error(
                "Error generating signed URL for %s: expiration must be positive, got %s",
                key,
                expiration_seconds,
            )
            return ""
        try:
            url = self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket_name, "Key": key},
                ExpiresIn=int(expiration_seconds),
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("Error generating signed URL for %s: %s", key, exc)
            return ""
        return str(url or "")
