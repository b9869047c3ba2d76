"""Shared setup for the bucket command-line scripts."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from r2cli.common.config import ConfigError, load_settings, resolve_env_file
from r2cli.common.logging import setup_logging
from r2cli.infra.storage.client import StorageClient, StorageError
from r2cli.infra.storage.s3_client import R2StorageClient

logger = logging.getLogger("r2cli.cli")


class UsageError(Exception):
    """Raised instead of argparse's exit with status 2."""


class ScriptArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports bad arguments to the calling script."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def parse_script_args(
    parser: argparse.ArgumentParser,
    argv: Sequence[str] | None,
    usage: Sequence[str],
) -> argparse.Namespace | None:
    """Parse ``argv``; on invalid arguments print the usage lines and return None."""
    try:
        return parser.parse_args(argv)
    except UsageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print_usage(*usage)
        return None


def add_env_file_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--env-file",
        default=None,
        help="Configuration file with R2_* keys (default: $R2_ENV_FILE or ./.env)",
    )


def print_usage(*lines: str) -> None:
    for line in lines:
        print(line)


def open_storage(env_file: str | None) -> StorageClient | None:
    """Build a storage client from the configuration file.

    Configuration and client construction failures are fatal for a script:
    the reason is printed to stderr and None is returned so the caller can
    exit with status 1.
    """
    path = resolve_env_file(env_file)
    try:
        settings = load_settings(path)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return None

    setup_logging(settings.log_format, settings.log_level)
    logger.debug("Loaded configuration from %s (bucket=%s)", path, settings.bucket_name)

    try:
        return R2StorageClient.from_settings(settings)
    except StorageError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return None
