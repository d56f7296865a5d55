"""Privileged command execution.

This module runs storage-engine commands under the privilege wrapper with
an empty environment, and classifies failures by the engine's message.
"""

from __future__ import annotations

from dataclasses import dataclass
import subprocess
from typing import Sequence

from core.constants import ALREADY_EXISTS_MARKER, NOT_FOUND_MARKER
from core.errors import StorageErrorKind, StressStorageError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of one command.

    Attributes:
        args: Full argument vector, privilege wrapper included.
        returncode: Process exit status.
        stdout: Decoded standard output, empty when discarded.
        stderr: Decoded standard error.
    """

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        """Return whether the command exited successfully."""
        return self.returncode == 0

    def info(self) -> str:
        """Render exit status and error output for log and error messages."""
        return f"exit status {self.returncode}, stderr: {self.stderr.strip()}"


def classify_failure(stderr: str) -> StorageErrorKind:
    """Map engine error text onto a structured error kind."""
    if NOT_FOUND_MARKER in stderr:
        return StorageErrorKind.NOT_FOUND
    if ALREADY_EXISTS_MARKER in stderr:
        return StorageErrorKind.ALREADY_EXISTS
    return StorageErrorKind.OTHER


class CommandRunner:
    """Run commands through a privilege wrapper with a cleared environment."""

    def __init__(self, elevate_path: str) -> None:
        self._elevate_path = elevate_path

    def run(self, args: Sequence[str], discard_stdout: bool = False) -> CommandResult:
        """Run one command and wait for it.

        Args:
            args: Command and arguments, without the privilege wrapper.
            discard_stdout: Stream standard output to the null device.

        Returns:
            Captured command result, successful or not.

        Raises:
            StressStorageError: If the command could not be started.
        """
        command = (self._elevate_path, *args)
        _LOGGER.info("exec", args=list(command))
        try:
            completed = subprocess.run(
                list(command),
                env={},
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL if discard_stdout else subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
            )
        except OSError as error:
            _LOGGER.error("exec_failed", args=list(command), error=str(error))
            raise StressStorageError(StorageErrorKind.OTHER, command, str(error)) from error
        return CommandResult(
            args=command,
            returncode=completed.returncode,
            stdout=_decode(completed.stdout),
            stderr=_decode(completed.stderr),
        )


def _decode(payload: bytes | None) -> str:
    if payload is None:
        return ""
    return payload.decode("utf-8", errors="replace")
