"""Public SDK surface for the stress harness.

This module provides a stable import path for harness users.
It re-exports the run modes, building blocks and typed models.
"""

from __future__ import annotations

from churn.churn_engine import ChurnEngine, run_sweep
from churn.plant_setup import setup_plant
from core.config import StressConfig
from core.errors import (
    StorageErrorKind,
    StressChurnError,
    StressConfigError,
    StressCorpusError,
    StressError,
    StressLifecycleError,
    StressNameError,
    StressStorageError,
)
from core.types import CorpusShape, CycleReport, DatasetCycleResult, Plant, Seed, SweepResult
from corpus.corpus_generator import generate_corpus
from corpus.seed_setup import setup_seed
from lifecycle.backup_cycle import run_backup_cycle
from lifecycle.scheduler import LifecycleScheduler
from orchestrate.backup_mode import run_backup_mode
from orchestrate.io_mode import run_io_mode
from storage.storage_ops import StorageOps
from storage.zfs_ops import ZfsStorageOps

__all__ = [
    "ChurnEngine",
    "CorpusShape",
    "CycleReport",
    "DatasetCycleResult",
    "LifecycleScheduler",
    "Plant",
    "Seed",
    "StorageErrorKind",
    "StorageOps",
    "StressChurnError",
    "StressConfig",
    "StressConfigError",
    "StressCorpusError",
    "StressError",
    "StressLifecycleError",
    "StressNameError",
    "StressStorageError",
    "SweepResult",
    "ZfsStorageOps",
    "generate_corpus",
    "run_backup_cycle",
    "run_backup_mode",
    "run_io_mode",
    "run_sweep",
    "setup_plant",
    "setup_seed",
]
