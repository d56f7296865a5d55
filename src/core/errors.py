"""Stress harness exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations

from enum import Enum


class StorageErrorKind(Enum):
    """Classification of a failed storage-engine command."""

    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    OTHER = "other"


class StressError(Exception):
    """Base exception for all stress harness failures."""


class StressConfigError(StressError):
    """Raised for invalid runtime configuration."""


class StressNameError(StressError):
    """Raised when a dataset or snapshot name is rejected before use."""


class StressStorageError(StressError):
    """Raised when a storage-engine command fails.

    Attributes:
        kind: Structured failure classification.
        command: Argument vector of the failed command.
        detail: Exit status and engine error text.
    """

    def __init__(self, kind: StorageErrorKind, command: tuple[str, ...], detail: str) -> None:
        super().__init__(f"{list(command)} failed: {detail}")
        self.kind = kind
        self.command = command
        self.detail = detail


class StressCorpusError(StressError):
    """Raised when seed corpus generation fails."""


class StressChurnError(StressError):
    """Raised when one file cannot be churned."""


class StressLifecycleError(StressError):
    """Raised when a backup cycle fails."""
