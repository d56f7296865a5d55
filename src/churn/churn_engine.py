"""Churn sweeps and the threads that run them.

Threads working on the same plant share no lock and may race on the same
file; the storage engine's own file-level guarantees are what is being
exercised.
"""

from __future__ import annotations

from pathlib import Path
import random
import threading
from typing import Callable

from churn.file_churn import churn_file
from churn.file_walk import list_regular_files
from churn.shuffle import shuffled_order
from core.errors import StressChurnError
from core.logging_config import get_logger
from core.types import SweepResult

_LOGGER = get_logger(__name__)


def run_sweep(
    root: Path,
    rng: random.Random,
    stop_event: threading.Event | None = None,
) -> SweepResult:
    """Churn every file under ``root`` once, in a fresh random order.

    Per-file failures are logged and the sweep moves on.

    Args:
        root: Plant mountpoint.
        rng: Generator owned by the calling thread.
        stop_event: Optional event ending the sweep early.

    Returns:
        Sweep counts.
    """
    files = list_regular_files(root)
    visited = 0
    failed = 0
    for index in shuffled_order(len(files), rng):
        if stop_event is not None and stop_event.is_set():
            break
        visited += 1
        try:
            churn_file(files[index], rng)
        except (OSError, StressChurnError) as error:
            failed += 1
            _LOGGER.error("file_churn_error", path=str(files[index]), error=str(error))
    return SweepResult(file_count=visited, failed_count=failed)


class ChurnEngine:
    """A group of churn threads bound to one directory tree.

    Threads are daemons that sweep until the process exits. ``stop`` and
    ``join`` exist so callers other than io mode can end them.
    """

    def __init__(
        self,
        root: Path,
        thread_count: int,
        rng_factory: Callable[[], random.Random],
    ) -> None:
        self._root = root
        self._thread_count = thread_count
        self._rng_factory = rng_factory
        self._stop_event = threading.Event()
        self._threads: list[threading.Thread] = []

    @property
    def threads(self) -> tuple[threading.Thread, ...]:
        """Threads started so far."""
        return tuple(self._threads)

    def start(self) -> None:
        """Spawn the churn threads, each with its own generator."""
        for thread_index in range(self._thread_count):
            thread = threading.Thread(
                target=self._run,
                args=(self._rng_factory(),),
                name=f"churn-{self._root.name}-{thread_index}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()
        _LOGGER.info("churn_started", root=str(self._root), threads=self._thread_count)

    def stop(self) -> None:
        """Ask every thread to finish after its current file."""
        self._stop_event.set()

    def join(self, timeout: float | None = None) -> None:
        """Wait for every started thread.

        Args:
            timeout: Optional per-thread wait in seconds.
        """
        for thread in self._threads:
            thread.join(timeout)

    def _run(self, rng: random.Random) -> None:
        while not self._stop_event.is_set():
            result = run_sweep(self._root, rng, self._stop_event)
            if result.failed_count:
                _LOGGER.warning(
                    "sweep_failures",
                    root=str(self._root),
                    file_count=result.file_count,
                    failed_count=result.failed_count,
                )
