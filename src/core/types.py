"""Shared typed models.

This module defines immutable data models used by the corpus, churn,
lifecycle and orchestration layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.constants import (
    CORPUS_CHUNK_SIZE,
    FILE_MAX_MB,
    FILE_MIN_MB,
    MEGABYTE,
    SEED_FILE_COUNT,
)


@dataclass(frozen=True)
class CorpusShape:
    """Shape of a generated seed corpus.

    Attributes:
        file_count: Number of files written.
        min_size_units: Smallest file size, in ``size_unit`` bytes.
        max_size_units: Largest file size, in ``size_unit`` bytes (inclusive).
        size_unit: Byte size of one size unit.
        chunk_size: Bytes written per content chunk.
    """

    file_count: int = SEED_FILE_COUNT
    min_size_units: int = FILE_MIN_MB
    max_size_units: int = FILE_MAX_MB
    size_unit: int = MEGABYTE
    chunk_size: int = CORPUS_CHUNK_SIZE


@dataclass(frozen=True)
class Seed:
    """A populated template dataset terminated by its final snapshot.

    Attributes:
        seed_id: Numeric seed identifier.
        dataset: Full dataset name.
    """

    seed_id: int
    dataset: str


@dataclass(frozen=True)
class Plant:
    """A writable clone of a seed under active churn.

    Attributes:
        plant_id: Numeric plant identifier.
        parent: Seed dataset the plant was cloned from.
        dataset: Full dataset name.
        mountpoint: Directory the churn threads operate on.
    """

    plant_id: int
    parent: str
    dataset: str
    mountpoint: Path


@dataclass(frozen=True)
class SweepResult:
    """Outcome of one churn sweep over a plant."""

    file_count: int
    failed_count: int


@dataclass(frozen=True)
class TransferPair:
    """Snapshot names used for one incremental transfer validation."""

    base: str
    target: str


@dataclass(frozen=True)
class DatasetCycleResult:
    """Outcome of one dataset's snapshot, retention and transfer step.

    Attributes:
        dataset: Dataset processed.
        destroyed_snapshots: Snapshots aged out, oldest first.
        remaining_snapshots: Snapshots left after retention, oldest first.
        transfer: Validated transfer pair, or None when skipped.
    """

    dataset: str
    destroyed_snapshots: tuple[str, ...]
    remaining_snapshots: tuple[str, ...]
    transfer: TransferPair | None


@dataclass(frozen=True)
class CycleReport:
    """Outcome of one full backup cycle."""

    snapshot_name: str
    results: tuple[DatasetCycleResult, ...]

    @property
    def dataset_count(self) -> int:
        """Count datasets processed in this cycle."""
        return len(self.results)

    @property
    def transfer_count(self) -> int:
        """Count incremental transfers validated in this cycle."""
        return sum(1 for result in self.results if result.transfer is not None)
