"""One backup cycle over the children of a root dataset.

Every child gets the cycle snapshot, retention trimming and, when two
snapshots remain, an incremental transfer validation. Work is spread over
a fixed pool of threads draining one shared queue.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor

from core.errors import StressError, StressLifecycleError
from core.logging_config import get_logger
from core.types import CycleReport, DatasetCycleResult
from lifecycle.retention import select_transfer_pair, trim_snapshots
from lifecycle.work_queue import WorkQueue
from storage.storage_ops import StorageOps

_LOGGER = get_logger(__name__)


def process_dataset(
    ops: StorageOps,
    dataset: str,
    snapshot_name: str,
    max_snapshots: int,
) -> DatasetCycleResult:
    """Snapshot, trim and transfer-validate one dataset.

    Args:
        ops: Storage engine operations.
        dataset: Dataset to process.
        snapshot_name: Cycle snapshot name.
        max_snapshots: Retention threshold.

    Returns:
        Outcome of this dataset's step.

    Raises:
        StressStorageError: If any engine command fails.
    """
    ops.snapshot(dataset, snapshot_name)
    remaining, destroyed = trim_snapshots(ops, dataset, max_snapshots)
    transfer = select_transfer_pair(remaining)
    if transfer is not None:
        ops.validate_incremental_transfer(dataset, transfer.base, transfer.target)
    return DatasetCycleResult(
        dataset=dataset,
        destroyed_snapshots=tuple(destroyed),
        remaining_snapshots=tuple(remaining),
        transfer=transfer,
    )


def run_backup_cycle(
    ops: StorageOps,
    root: str,
    snapshot_name: str,
    worker_count: int,
    max_snapshots: int,
) -> CycleReport:
    """Run one cycle over the immediate children of ``root``.

    All workers are joined before this returns. When any worker fails,
    the others still drain the queue, then the first failure is raised.

    Args:
        ops: Storage engine operations.
        root: Dataset whose children are processed.
        snapshot_name: Name shared by every snapshot of this cycle.
        worker_count: Size of the worker pool.
        max_snapshots: Retention threshold.

    Returns:
        Cycle report with one result per dataset.

    Raises:
        StressLifecycleError: If any dataset step failed.
    """
    datasets = ops.list_child_datasets(root)
    queue = WorkQueue(datasets)
    _LOGGER.info(
        "cycle_started",
        root=root,
        snapshot_name=snapshot_name,
        dataset_count=len(datasets),
    )
    with ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="backup") as executor:
        futures = [
            executor.submit(_drain_queue, ops, queue, snapshot_name, max_snapshots)
            for _ in range(worker_count)
        ]
    report = CycleReport(snapshot_name=snapshot_name, results=_collect_results(futures))
    _LOGGER.info(
        "cycle_completed",
        root=root,
        snapshot_name=snapshot_name,
        dataset_count=report.dataset_count,
        transfer_count=report.transfer_count,
    )
    return report


def _drain_queue(
    ops: StorageOps,
    queue: WorkQueue,
    snapshot_name: str,
    max_snapshots: int,
) -> list[DatasetCycleResult]:
    """Process datasets until the queue is empty or a step fails."""
    results: list[DatasetCycleResult] = []
    while True:
        dataset = queue.pop()
        if dataset is None:
            return results
        results.append(process_dataset(ops, dataset, snapshot_name, max_snapshots))


def _collect_results(futures: list[Future[list[DatasetCycleResult]]]) -> tuple[DatasetCycleResult, ...]:
    """Gather worker results, raising the first worker failure."""
    results: list[DatasetCycleResult] = []
    for future in futures:
        error = future.exception()
        if error is not None:
            _LOGGER.error("cycle_worker_failed", error=str(error))
            message = f"Backup cycle failed: {error}"
            if isinstance(error, StressError):
                raise StressLifecycleError(message) from error
            raise error
        results.extend(future.result())
    return tuple(results)
