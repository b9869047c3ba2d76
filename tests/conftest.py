from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest

from r2cli.infra.storage.client import (
    MODIFIED_FORMAT,
    ObjectDescriptor,
    UploadResult,
    derive_public_url,
)

SAMPLE_ENV = """\
# Cloudflare R2
R2_BUCKET_NAME=test-bucket
R2_PUBLIC_ENDPOINT=https://files.example.com/
R2_ENDPOINT=http://localhost:9000
R2_ACCESS_KEY_ID=test-key
R2_SECRET_ACCESS_KEY=test-secret
"""


@dataclass
class InMemoryStorageClient:
    """In-memory stand-in for R2StorageClient used by script tests."""

    public_endpoint: str = "https://files.example.com"
    objects: dict[str, dict[str, Any]] = field(default_factory=dict)
    fail_with: str | None = None
    calls: list[str] = field(default_factory=list)

    def get_public_url(self, key: str) -> str:
        return derive_public_url(self.public_endpoint, key)

    def upload_file(self, local_path: str, key: str) -> UploadResult:
        self.calls.append("upload_file")
        data = Path(local_path).read_bytes()
        if self.fail_with:
            return UploadResult.failed(key, self.fail_with)
        etag = f'"mock-etag-{len(self.objects) + 1}"'
        self.objects[key] = {
            "data": data,
            "etag": etag,
            "modified": datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc),
        }
        return UploadResult(key=key, url=self.get_public_url(key), etag=etag)

    def download_file(self, key: str, save_path: str) -> bool:
        self.calls.append("download_file")
        if self.fail_with or key not in self.objects:
            return False
        Path(save_path).write_bytes(self.objects[key]["data"])
        return True

    def list_files(self, prefix: str = "") -> list[ObjectDescriptor]:
        self.calls.append("list_files")
        if self.fail_with:
            return []
        return [
            ObjectDescriptor(
                key=key,
                size=len(obj["data"]),
                modified=obj["modified"].strftime(MODIFIED_FORMAT),
                url=self.get_public_url(key),
            )
            for key, obj in sorted(self.objects.items())
            if key.startswith(prefix)
        ]

    def delete_file(self, key: str) -> bool:
        self.calls.append("delete_file")
        if self.fail_with:
            return False
        self.objects.pop(key, None)
        return True

    def generate_signed_url(self, key: str, expiration_seconds: int = 3600) -> str:
        self.calls.append("generate_signed_url")
        if self.fail_with:
            return ""
        return f"https://signed.example.com/{key}?X-Amz-Expires={expiration_seconds}"

    def put_object(self, key: str, data: bytes) -> None:
        """Test helper to seed an object without a local file."""
        self.objects[key] = {
            "data": data,
            "etag": '"seeded"',
            "modified": datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        }


@pytest.fixture
def memory_storage() -> InMemoryStorageClient:
    return InMemoryStorageClient()


@pytest.fixture
def sample_env() -> str:
    return SAMPLE_ENV


@pytest.fixture
def write_env_file(tmp_path: Path) -> Callable[[str], Path]:
    def _write(content: str = SAMPLE_ENV, name: str = ".env") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo dictConfig changes made by setup_logging between tests."""
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    named = {name: logging.getLogger(name).level for name in ("r2cli", "botocore")}
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers:
            root.removeHandler(handler)
    root.setLevel(saved_level)
    for name, level in named.items():
        logging.getLogger(name).setLevel(level)
