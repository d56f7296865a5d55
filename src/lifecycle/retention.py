"""Snapshot retention and transfer-pair selection."""

from __future__ import annotations

from core.types import TransferPair
from storage.storage_ops import StorageOps


def trim_snapshots(
    ops: StorageOps,
    dataset: str,
    max_snapshots: int,
) -> tuple[list[str], list[str]]:
    """Destroy the oldest snapshot while the count is at least ``max_snapshots``.

    The list is re-read from the engine after every destroy, and trimming
    stops as soon as fewer than ``max_snapshots`` remain.

    Args:
        ops: Storage engine operations.
        dataset: Dataset to trim.
        max_snapshots: Retention threshold.

    Returns:
        Pair of remaining snapshots and destroyed snapshots, both oldest first.
    """
    destroyed: list[str] = []
    while True:
        snapshots = ops.list_snapshots(dataset)
        if len(snapshots) < max_snapshots:
            return snapshots, destroyed
        ops.destroy_snapshot(dataset, snapshots[0])
        destroyed.append(snapshots[0])


def select_transfer_pair(snapshots: list[str]) -> TransferPair | None:
    """Pick the two most recent snapshots, or None when fewer than two exist."""
    if len(snapshots) < 2:
        return None
    return TransferPair(base=snapshots[-2], target=snapshots[-1])
