"""ZFS implementation of the storage operations interface.

Every command runs as ``<elevate> zfs ...`` with an empty environment.
Failures are classified once here into ``StorageErrorKind`` so callers
never inspect engine message text.
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Sequence

from core.config import StressConfig
from core.errors import StorageErrorKind, StressStorageError
from core.logging_config import get_logger
from core.naming import snapshot_full_name, validate_dataset_name
from storage.command_runner import CommandResult, CommandRunner, classify_failure

_LOGGER = get_logger(__name__)


class ZfsStorageOps:
    """Storage operations backed by the ``zfs`` command."""

    def __init__(self, runner: CommandRunner, zfs_path: str, chown_path: str) -> None:
        self._runner = runner
        self._zfs_path = zfs_path
        self._chown_path = chown_path

    @classmethod
    def from_config(cls, config: StressConfig) -> "ZfsStorageOps":
        """Build engine operations from runtime config."""
        return cls(CommandRunner(config.elevate_path), config.zfs_path, config.chown_path)

    def create(self, name: str, exists_ok: bool = False) -> None:
        """Create a dataset, optionally tolerating an existing one."""
        validate_dataset_name(name)
        tolerated = (StorageErrorKind.ALREADY_EXISTS,) if exists_ok else ()
        self._zfs(["create", name], tolerated=tolerated)

    def destroy(self, name: str, recursive: bool = False) -> None:
        """Destroy a dataset; a missing dataset is not an error."""
        validate_dataset_name(name)
        args = ["destroy"]
        if recursive:
            args.append("-r")
        args.append(name)
        self._zfs(args, tolerated=(StorageErrorKind.NOT_FOUND,))

    def snapshot(self, dataset: str, name: str, recursive: bool = False) -> None:
        """Snapshot a dataset, recursively over descendants when asked."""
        full_name = snapshot_full_name(dataset, name)
        args = ["snapshot"]
        if recursive:
            args.append("-r")
        args.append(full_name)
        self._zfs(args)

    def destroy_snapshot(self, dataset: str, name: str) -> None:
        """Destroy one snapshot; a missing snapshot is not an error."""
        full_name = snapshot_full_name(dataset, name)
        self._zfs(["destroy", full_name], tolerated=(StorageErrorKind.NOT_FOUND,))

    def clone(self, dataset: str, snapshot_name: str, target: str) -> None:
        """Clone ``dataset@snapshot_name`` into ``target``."""
        full_name = snapshot_full_name(dataset, snapshot_name)
        validate_dataset_name(target)
        self._zfs(["clone", full_name, target])

    def get_property(self, name: str, key: str) -> str:
        """Read one property value of a dataset."""
        validate_dataset_name(name)
        result = self._zfs(["get", "-H", "-o", "value", key, name])
        return result.stdout.rstrip("\n") if result is not None else ""

    def snapshot_exists(self, dataset: str, name: str) -> bool:
        """Return whether ``dataset@name`` exists."""
        full_name = snapshot_full_name(dataset, name)
        result = self._zfs(
            ["list", "-Ho", "name", full_name],
            tolerated=(StorageErrorKind.NOT_FOUND,),
        )
        return result is not None

    def list_child_datasets(self, root: str) -> list[str]:
        """List the immediate child filesystems of ``root``, excluding it."""
        validate_dataset_name(root)
        result = self._zfs(["list", "-t", "filesystem", "-d", "1", "-Ho", "name", root])
        lines = result.stdout.splitlines() if result is not None else []
        return [line for line in lines if line and line != root]

    def list_snapshots(self, dataset: str) -> list[str]:
        """List snapshot names of a dataset, oldest first."""
        validate_dataset_name(dataset)
        args = ["list", "-t", "snapshot", "-d", "1", "-Ho", "name", "-s", "creation", dataset]
        result = self._zfs(args)
        lines = result.stdout.splitlines() if result is not None else []
        return [_snapshot_part(line, result) for line in lines if line]

    def validate_incremental_transfer(self, dataset: str, old_snapshot: str, new_snapshot: str) -> None:
        """Generate the incremental stream between two snapshots and discard it.

        Args:
            dataset: Dataset owning both snapshots.
            old_snapshot: Base snapshot name.
            new_snapshot: Target snapshot name.

        Raises:
            StressStorageError: If the stream cannot be produced.
        """
        full_old = snapshot_full_name(dataset, old_snapshot)
        full_new = snapshot_full_name(dataset, new_snapshot)
        self._zfs(["send", "-i", full_old, full_new], discard_stdout=True)

    def take_ownership(self, path: Path, owner: str) -> None:
        """Give ``owner`` ownership of a mounted path."""
        result = self._runner.run([self._chown_path, owner, str(path)])
        if not result.ok:
            _raise_failure(result)

    def _zfs(
        self,
        args: Sequence[str],
        tolerated: Sequence[StorageErrorKind] = (),
        discard_stdout: bool = False,
    ) -> CommandResult | None:
        """Run one zfs command.

        Args:
            args: Arguments after the zfs binary.
            tolerated: Failure kinds treated as success.
            discard_stdout: Stream output to the null device.

        Returns:
            The successful result, or None for a tolerated failure.

        Raises:
            StressStorageError: For any failure that is not tolerated.
        """
        result = self._runner.run([self._zfs_path, *args], discard_stdout=discard_stdout)
        if result.ok:
            return result
        if classify_failure(result.stderr) in tolerated:
            return None
        _raise_failure(result)


def _raise_failure(result: CommandResult) -> NoReturn:
    kind = classify_failure(result.stderr)
    _LOGGER.error("command_failed", args=list(result.args), kind=kind.value, info=result.info())
    raise StressStorageError(kind, result.args, result.info())


def _snapshot_part(line: str, result: CommandResult) -> str:
    """Split ``dataset@name`` and return the snapshot name."""
    parts = line.split("@")
    if len(parts) != 2:
        raise StressStorageError(
            StorageErrorKind.OTHER,
            result.args,
            f"unexpected snapshot list entry '{line}'",
        )
    return parts[1]
