"""Storage operations interface consumed by the harness core."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class StorageOps(Protocol):
    """Synchronous dataset, snapshot and transfer operations.

    Implementations validate names before running anything, treat a
    missing target on destroy as success, and raise ``StressStorageError``
    for every other failure.
    """

    def create(self, name: str, exists_ok: bool = False) -> None:
        """Create a dataset, optionally tolerating an existing one."""
        ...

    def destroy(self, name: str, recursive: bool = False) -> None:
        """Destroy a dataset; a missing dataset is success."""
        ...

    def snapshot(self, dataset: str, name: str, recursive: bool = False) -> None:
        """Create ``dataset@name``."""
        ...

    def destroy_snapshot(self, dataset: str, name: str) -> None:
        """Destroy ``dataset@name``; a missing snapshot is success."""
        ...

    def clone(self, dataset: str, snapshot_name: str, target: str) -> None:
        """Clone ``dataset@snapshot_name`` into ``target``."""
        ...

    def get_property(self, name: str, key: str) -> str:
        """Read one dataset property value."""
        ...

    def snapshot_exists(self, dataset: str, name: str) -> bool:
        """Return whether ``dataset@name`` exists."""
        ...

    def list_child_datasets(self, root: str) -> list[str]:
        """List immediate child filesystems of ``root``."""
        ...

    def list_snapshots(self, dataset: str) -> list[str]:
        """List snapshot names of ``dataset``, oldest first by creation."""
        ...

    def validate_incremental_transfer(self, dataset: str, old_snapshot: str, new_snapshot: str) -> None:
        """Stream the delta between two snapshots and discard it."""
        ...

    def take_ownership(self, path: Path, owner: str) -> None:
        """Give ``owner`` ownership of a mounted dataset directory."""
        ...
