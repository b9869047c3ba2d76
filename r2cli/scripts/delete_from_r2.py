#!/usr/bin/env python3
"""Delete an object from the bucket.

Usage:
  r2-delete documents/sample.pdf

Deleting a key that does not exist succeeds.
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
    "Usage: r2-delete <key>",
    "Example: r2-delete documents/sample.pdf",
)


def main(
    argv: Sequence[str] | None = None, *, storage_client: StorageClient | None = None
) -> int:
    parser = ScriptArgumentParser(description="Delete an object from the R2 bucket")
    parser.add_argument("key", nargs="?", help="Object key to delete")
    add_env_file_argument(parser)
    args = parse_script_args(parser, argv, USAGE)
    if args is None:
        return 1

    if not args.key:
        print_usage(*USAGE)
        return 1

    storage = storage_client or open_storage(args.env_file)
    if storage is None:
        return 1

    print(f"Deleting {args.key} from R2...")
    if storage.delete_file(args.key):
        print("✓ Delete successful")
        return 0

    print("✗ Delete failed")
    return 1


if __name__ == "__main__":
    sys.exit(main())
