"""Unit tests for backup cycles."""

from __future__ import annotations

from pathlib import Path
import threading

import pytest

from core.errors import StorageErrorKind, StressLifecycleError
from core.types import TransferPair
from lifecycle.backup_cycle import run_backup_cycle
from tests.fake_storage import FakeStorageOps

_ROOT = "tank/plant"


def _ops_with_plants(tmp_path: Path, count: int) -> FakeStorageOps:
    ops = FakeStorageOps(tmp_path)
    ops.add_dataset(_ROOT)
    for index in range(count):
        ops.add_dataset(f"{_ROOT}/{index:04d}")
    return ops


def test_cycle_snapshots_every_child_but_not_root(tmp_path) -> None:
    """Every immediate child should get the cycle snapshot; the root should not."""
    ops = _ops_with_plants(tmp_path, 6)
    ops.add_dataset(f"{_ROOT}/0000/nested")

    report = run_backup_cycle(ops, _ROOT, "backup-100", worker_count=3, max_snapshots=5)

    assert report.dataset_count == 6
    assert all(ops.snapshots[f"{_ROOT}/{index:04d}"] == ["backup-100"] for index in range(6))
    assert ops.snapshots[_ROOT] == [] and ops.snapshots[f"{_ROOT}/0000/nested"] == []


def test_first_cycle_skips_transfer_validation(tmp_path) -> None:
    """A dataset with a single snapshot should never be transfer-validated."""
    ops = _ops_with_plants(tmp_path, 3)

    report = run_backup_cycle(ops, _ROOT, "backup-100", worker_count=2, max_snapshots=5)

    assert report.transfer_count == 0
    assert "validate_incremental_transfer" not in ops.call_names()


def test_second_cycle_validates_two_most_recent(tmp_path) -> None:
    """With two snapshots, the transfer should run from older to newer."""
    ops = _ops_with_plants(tmp_path, 2)
    run_backup_cycle(ops, _ROOT, "backup-100", worker_count=2, max_snapshots=5)

    report = run_backup_cycle(ops, _ROOT, "backup-105", worker_count=2, max_snapshots=5)

    assert report.transfer_count == 2
    assert {result.transfer for result in report.results} == {
        TransferPair(base="backup-100", target="backup-105")
    }


def test_retention_holds_across_many_cycles(tmp_path) -> None:
    """After every cycle each dataset should hold fewer than max snapshots."""
    ops = _ops_with_plants(tmp_path, 4)

    for cycle in range(12):
        report = run_backup_cycle(ops, _ROOT, f"backup-{1000 + cycle * 5}", 8, 5)
        assert all(len(result.remaining_snapshots) < 5 for result in report.results)
        assert all(len(result.destroyed_snapshots) <= 1 for result in report.results)

    assert ops.snapshots[f"{_ROOT}/0000"] == [f"backup-{1000 + cycle * 5}" for cycle in range(8, 12)]


def test_cycle_with_no_children_completes(tmp_path) -> None:
    """An empty root should yield an empty report."""
    ops = _ops_with_plants(tmp_path, 0)

    report = run_backup_cycle(ops, _ROOT, "backup-1", worker_count=4, max_snapshots=5)

    assert report.results == ()


def test_one_failing_dataset_fails_the_cycle(tmp_path) -> None:
    """A storage failure on one dataset should fail the cycle after the barrier."""
    ops = _ops_with_plants(tmp_path, 5)
    ops.failures[("snapshot", f"{_ROOT}/0003")] = StorageErrorKind.OTHER

    with pytest.raises(StressLifecycleError):
        run_backup_cycle(ops, _ROOT, "backup-1", worker_count=2, max_snapshots=5)

    snapshotted = [name for name, snaps in ops.snapshots.items() if snaps == ["backup-1"]]
    assert f"{_ROOT}/0003" not in snapshotted and len(snapshotted) == 4


class _BlockingStorageOps(FakeStorageOps):
    """Blocks one dataset's snapshot until every other dataset is done."""

    def __init__(self, mount_root: Path, blocked: str, others: int) -> None:
        super().__init__(mount_root)
        self.blocked = blocked
        self.others = others
        self.others_done = threading.Event()
        self.done_count = 0
        self.released = False
        self._count_lock = threading.Lock()

    def snapshot(self, dataset: str, name: str, recursive: bool = False) -> None:
        if dataset == self.blocked:
            self.released = self.others_done.wait(timeout=10.0)
        super().snapshot(dataset, name, recursive)
        if dataset != self.blocked:
            with self._count_lock:
                self.done_count += 1
            if self.done_count >= self.others:
                self.others_done.set()


def test_slow_dataset_does_not_block_other_workers(tmp_path) -> None:
    """The queue lock must not be held while a storage command runs."""
    ops = _BlockingStorageOps(tmp_path, blocked=f"{_ROOT}/0004", others=4)
    ops.add_dataset(_ROOT)
    for index in range(5):
        ops.add_dataset(f"{_ROOT}/{index:04d}")

    report = run_backup_cycle(ops, _ROOT, "backup-1", worker_count=2, max_snapshots=5)

    assert ops.released is True and report.dataset_count == 5
