#!/usr/bin/env python3
"""Print a time-limited download URL for an object.

Usage:
  r2-presign documents/sample.pdf
  r2-presign documents/sample.pdf --expires 600
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

DEFAULT_EXPIRATION_SECONDS = 3600
USAGE = (
    "Usage: r2-presign <key> [--expires SECONDS]",
    "Example: r2-presign documents/sample.pdf --expires 600",
)


def main(
    argv: Sequence[str] | None = None, *, storage_client: StorageClient | None = None
) -> int:
    parser = ScriptArgumentParser(
        description="Generate a presigned download URL for an R2 object"
    )
    parser.add_argument("key", nargs="?", help="Object key to sign")
    parser.add_argument(
        "--expires",
        type=int,
        default=DEFAULT_EXPIRATION_SECONDS,
        help=f"URL lifetime in seconds (default: {DEFAULT_EXPIRATION_SECONDS})",
    )
    add_env_file_argument(parser)
    args = parse_script_args(parser, argv, USAGE)
    if args is None:
        return 1

    if not args.key or args.expires <= 0:
        print_usage(*USAGE)
        return 1

    storage = storage_client or open_storage(args.env_file)
    if storage is None:
        return 1

    url = storage.generate_signed_url(args.key, args.expires)
    if not url:
        print("✗ Could not generate signed URL")
        return 1

    print(url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
