"""Stress harness CLI entry points.

This module exposes the ``io`` and ``backup`` run modes.
It maps argparse commands onto the orchestration layer.
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from core.config import StressConfig
from core.errors import StressError
from core.logging_config import get_logger
from orchestrate.backup_mode import run_backup_mode
from orchestrate.io_mode import run_io_mode
from storage.zfs_ops import ZfsStorageOps

_LOGGER = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="stress",
        description="Snapshot filesystem stress harness",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_io_command(subparsers)
    _add_backup_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the stress CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _LOGGER.info("stress", command=args.command)
    try:
        config = StressConfig.from_env()
        ops = ZfsStorageOps.from_config(config)
        if args.command == "io":
            run_io_mode(ops, config)
            return 0
        if args.command == "backup":
            run_backup_mode(ops, config)
            return 0
    except StressError as error:
        _LOGGER.error("fatal_error", command=args.command, error=str(error))
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _add_io_command(subparsers: Any) -> None:
    """Register io subcommand."""
    subparsers.add_parser(
        "io",
        help="Build seeds and plants, then churn plant files until killed",
    )


def _add_backup_command(subparsers: Any) -> None:
    """Register backup subcommand."""
    subparsers.add_parser(
        "backup",
        help="Snapshot, age out and transfer-validate plants in periodic cycles",
    )
