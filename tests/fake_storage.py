"""In-memory storage operations for tests.

Datasets map onto directories under a temporary mount root, and snapshot
lists keep creation order the way the engine reports it.
"""

from __future__ import annotations

from pathlib import Path
import shutil
import threading

from core.errors import StorageErrorKind, StressStorageError
from core.naming import snapshot_full_name, validate_dataset_name


class FakeStorageOps:
    """Thread-safe fake of the storage operations interface."""

    def __init__(self, mount_root: Path) -> None:
        self.mount_root = mount_root
        self.datasets: set[str] = set()
        self.snapshots: dict[str, list[str]] = {}
        self.calls: list[tuple[str, tuple[object, ...]]] = []
        self.failures: dict[tuple[str, str], StorageErrorKind] = {}
        self._lock = threading.Lock()

    def add_dataset(self, name: str, snapshots: tuple[str, ...] = ()) -> None:
        """Seed state directly, without recording a call."""
        with self._lock:
            self.datasets.add(name)
            self.snapshots[name] = list(snapshots)
            self.mountpoint(name).mkdir(parents=True, exist_ok=True)

    def mountpoint(self, name: str) -> Path:
        return self.mount_root.joinpath(*name.split("/"))

    def call_names(self) -> list[str]:
        with self._lock:
            return [name for name, _ in self.calls]

    def create(self, name: str, exists_ok: bool = False) -> None:
        validate_dataset_name(name)
        with self._lock:
            self._record("create", name, exists_ok)
            if name in self.datasets:
                if exists_ok:
                    return
                raise _error(StorageErrorKind.ALREADY_EXISTS, "create", name)
            self.datasets.add(name)
            self.snapshots[name] = []
        self.mountpoint(name).mkdir(parents=True, exist_ok=True)

    def destroy(self, name: str, recursive: bool = False) -> None:
        validate_dataset_name(name)
        with self._lock:
            self._record("destroy", name, recursive)
            doomed = [item for item in self.datasets if item == name or item.startswith(name + "/")]
            for item in doomed:
                self.datasets.discard(item)
                self.snapshots.pop(item, None)
        if doomed:
            shutil.rmtree(self.mountpoint(name), ignore_errors=True)

    def snapshot(self, dataset: str, name: str, recursive: bool = False) -> None:
        snapshot_full_name(dataset, name)
        with self._lock:
            self._record("snapshot", dataset, name)
            if dataset not in self.datasets:
                raise _error(StorageErrorKind.NOT_FOUND, "snapshot", dataset)
            if name in self.snapshots[dataset]:
                raise _error(StorageErrorKind.ALREADY_EXISTS, "snapshot", dataset)
            self.snapshots[dataset].append(name)

    def destroy_snapshot(self, dataset: str, name: str) -> None:
        snapshot_full_name(dataset, name)
        with self._lock:
            self._record("destroy_snapshot", dataset, name)
            existing = self.snapshots.get(dataset, [])
            if name in existing:
                existing.remove(name)

    def clone(self, dataset: str, snapshot_name: str, target: str) -> None:
        snapshot_full_name(dataset, snapshot_name)
        validate_dataset_name(target)
        with self._lock:
            self._record("clone", dataset, snapshot_name, target)
            if snapshot_name not in self.snapshots.get(dataset, []):
                raise _error(StorageErrorKind.NOT_FOUND, "clone", dataset)
            self.datasets.add(target)
            self.snapshots[target] = []
        shutil.copytree(self.mountpoint(dataset), self.mountpoint(target))

    def get_property(self, name: str, key: str) -> str:
        validate_dataset_name(name)
        with self._lock:
            self._record("get_property", name, key)
            if name not in self.datasets:
                raise _error(StorageErrorKind.NOT_FOUND, "get", name)
        return str(self.mountpoint(name))

    def snapshot_exists(self, dataset: str, name: str) -> bool:
        snapshot_full_name(dataset, name)
        with self._lock:
            self._record("snapshot_exists", dataset, name)
            return name in self.snapshots.get(dataset, [])

    def list_child_datasets(self, root: str) -> list[str]:
        validate_dataset_name(root)
        with self._lock:
            self._record("list_child_datasets", root)
            prefix = root + "/"
            return sorted(
                item for item in self.datasets if item.startswith(prefix) and "/" not in item[len(prefix):]
            )

    def list_snapshots(self, dataset: str) -> list[str]:
        validate_dataset_name(dataset)
        with self._lock:
            self._record("list_snapshots", dataset)
            return list(self.snapshots.get(dataset, []))

    def validate_incremental_transfer(self, dataset: str, old_snapshot: str, new_snapshot: str) -> None:
        snapshot_full_name(dataset, old_snapshot)
        snapshot_full_name(dataset, new_snapshot)
        with self._lock:
            self._record("validate_incremental_transfer", dataset, old_snapshot, new_snapshot)

    def take_ownership(self, path: Path, owner: str) -> None:
        with self._lock:
            self._record("take_ownership", str(path), owner)

    def _record(self, method: str, *args: object) -> None:
        self.calls.append((method, args))
        if args:
            kind = self.failures.get((method, str(args[0])))
            if kind is not None:
                raise _error(kind, method, str(args[0]))


def _error(kind: StorageErrorKind, method: str, name: str) -> StressStorageError:
    return StressStorageError(kind, ("zfs", method, name), f"injected {kind.value} for {name}")
