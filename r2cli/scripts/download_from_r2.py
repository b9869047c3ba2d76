#!/usr/bin/env python3
"""Download an object from the bucket to a local path.

Usage:
  r2-download documents/sample.pdf ./downloaded.pdf
"""

from __future__ import annotations

import sys
from typing import Sequence

from r2cli.infra.storage.client import StorageClient
from r2cli.scripts._bootstrap import (
    ScriptArgumentParser,
    add_env_file_argument,
    open_storage,
    parse_script_args,
    print_usage,
)

USAGE = (
    "Usage: r2-download <key> <save-path>",
    "Example: r2-download documents/sample.pdf ./downloaded.pdf",
)


def main(
    argv: Sequence[str] | None = None, *, storage_client: StorageClient | None = None
) -> int:
    parser = ScriptArgumentParser(description="Download an object from the R2 bucket")
    parser.add_argument("key", nargs="?", help="Object key, e.g. documents/sample.pdf")
    parser.add_argument("save_path", nargs="?", help="Local destination path")
    add_env_file_argument(parser)
    args = parse_script_args(parser, argv, USAGE)
    if args is None:
        return 1

    if not args.key or not args.save_path:
        print_usage(*USAGE)
        return 1

    storage = storage_client or open_storage(args.env_file)
    if storage is None:
        return 1

    print(f"Downloading {args.key} from R2...")
    if storage.download_file(args.key, args.save_path):
        print(f"✓ Download successful to {args.save_path}")
        return 0

    print("✗ Download failed")
    return 1


if __name__ == "__main__":
    sys.exit(main())
