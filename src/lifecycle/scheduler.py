"""Unbounded sequence of backup cycles."""

from __future__ import annotations

import threading
import time
from typing import Callable

from core.config import StressConfig
from core.logging_config import get_logger
from core.naming import backup_snapshot_name
from core.types import CycleReport
from lifecycle.backup_cycle import run_backup_cycle
from storage.storage_ops import StorageOps

_LOGGER = get_logger(__name__)


class LifecycleScheduler:
    """Run backup cycles against the children of one root dataset.

    Each cycle's snapshot name comes from the wall clock after the previous
    cycle's workers have all been joined, so names increase across cycles.
    """

    def __init__(
        self,
        ops: StorageOps,
        root: str,
        worker_count: int,
        max_snapshots: int,
        interval_seconds: float,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._ops = ops
        self._root = root
        self._worker_count = worker_count
        self._max_snapshots = max_snapshots
        self._interval_seconds = interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._last_second: int | None = None

    @classmethod
    def from_config(cls, ops: StorageOps, root: str, config: StressConfig) -> "LifecycleScheduler":
        """Build a scheduler from runtime config."""
        return cls(
            ops,
            root,
            worker_count=config.backup_workers,
            max_snapshots=config.max_snapshots,
            interval_seconds=config.cycle_interval_seconds,
        )

    def run_cycle(self) -> CycleReport:
        """Run one cycle named after the current epoch second.

        A cycle never starts within the epoch second of the previous one,
        so short intervals cannot reuse a snapshot name.

        Returns:
            Report of the completed cycle.
        """
        now = self._clock()
        while self._last_second is not None and int(now) <= self._last_second:
            self._sleep(self._last_second + 1 - now)
            now = self._clock()
        self._last_second = int(now)
        snapshot_name = backup_snapshot_name(self._last_second)
        return run_backup_cycle(
            self._ops,
            self._root,
            snapshot_name,
            self._worker_count,
            self._max_snapshots,
        )

    def run(self, stop_event: threading.Event | None = None) -> None:
        """Run cycles forever, pausing between them.

        Args:
            stop_event: Optional event checked after each cycle's pause.

        Raises:
            StressLifecycleError: If a cycle fails.
        """
        stop_event = stop_event or threading.Event()
        _LOGGER.info("scheduler_started", root=self._root, workers=self._worker_count)
        while True:
            self.run_cycle()
            if stop_event.wait(self._interval_seconds):
                _LOGGER.info("scheduler_stopped", root=self._root)
                return
