#!/usr/bin/env python3
"""List objects in the bucket as a table.

Usage:
  r2-list                # objects under documents/
  r2-list invoices/2024  # objects under another prefix
  r2-list ""             # every object
"""

from __future__ import annotations

import sys
from typing import Sequence

from r2cli.infra.storage.client import ObjectDescriptor, StorageClient
from r2cli.scripts._bootstrap import (
    ScriptArgumentParser,
    add_env_file_argument,
    open_storage,
    parse_script_args,
)

DEFAULT_PREFIX = "documents/"
NAME_WIDTH = 40
USAGE = (
    "Usage: r2-list [prefix]",
    "Example: r2-list invoices/2024",
)


def format_table(files: Sequence[ObjectDescriptor]) -> list[str]:
    lines = [
        f"{'File':<{NAME_WIDTH}} {'Size':>12}  Modified",
        "-" * 80,
    ]
    for item in files:
        size = f"{item.size} B"
        lines.append(f"{item.key[:NAME_WIDTH]:<{NAME_WIDTH}} {size:>12}  {item.modified}")
    return lines


def main(
    argv: Sequence[str] | None = None, *, storage_client: StorageClient | None = None
) -> int:
    parser = ScriptArgumentParser(description="List objects in the R2 bucket")
    parser.add_argument(
        "prefix",
        nargs="?",
        default=DEFAULT_PREFIX,
        help=f"Key prefix to filter by (default: {DEFAULT_PREFIX})",
    )
    add_env_file_argument(parser)
    args = parse_script_args(parser, argv, USAGE)
    if args is None:
        return 1

    storage = storage_client or open_storage(args.env_file)
    if storage is None:
        return 1

    print(f"Listing files in R2 (prefix: {args.prefix})...")
    files = storage.list_files(args.prefix)

    if not files:
        print("No files found.")
        return 0

    print()
    for line in format_table(files):
        print(line)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
