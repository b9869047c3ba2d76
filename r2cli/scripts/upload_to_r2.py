#!/usr/bin/env python3
"""Upload a local file to the bucket under documents/<file-name>.

Usage:
  r2-upload ./documents/sample.pdf
  r2-upload --env-file ./staging.env ./report.zip
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

from r2cli.infra.storage.client import StorageClient, UploadResult
from r2cli.scripts._bootstrap import (
    ScriptArgumentParser,
    add_env_file_argument,
    open_storage,
    parse_script_args,
    print_usage,
)

KEY_PREFIX = "documents/"
USAGE = (
    "Usage: r2-upload <file-path>",
    "Example: r2-upload ./documents/sample.pdf",
)


def build_object_key(file_path: str) -> str:
    """Key under which a local file is stored; directories are dropped."""
    return KEY_PREFIX + Path(file_path).name


def upload_document(storage: StorageClient, file_path: str) -> UploadResult:
    return storage.upload_file(file_path, build_object_key(file_path))


def main(
    argv: Sequence[str] | None = None, *, storage_client: StorageClient | None = None
) -> int:
    parser = ScriptArgumentParser(description="Upload a file to the R2 bucket")
    parser.add_argument("file_path", nargs="?", help="Local file to upload")
    add_env_file_argument(parser)
    args = parse_script_args(parser, argv, USAGE)
    if args is None:
        return 1

    if not args.file_path or not Path(args.file_path).is_file():
        print_usage(*USAGE)
        return 1

    storage = storage_client or open_storage(args.env_file)
    if storage is None:
        return 1

    file_name = Path(args.file_path).name
    print(f"Uploading {file_name} to R2...")
    result = upload_document(storage, args.file_path)

    if not result.success:
        print(f"✗ Upload failed: {result.error}")
        return 1

    print("✓ Upload successful!")
    print(f"Key: {result.key}")
    print(f"Public URL: {result.url}")
    print(f"ETag: {result.etag}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
