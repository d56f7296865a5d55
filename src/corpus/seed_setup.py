"""Seed dataset setup.

A seed counts as set up iff its ``final`` snapshot exists. A seed without
it is the leftover of an interrupted run and is destroyed and regenerated
in full, never repaired.
"""

from __future__ import annotations

from pathlib import Path
import random

from core.config import StressConfig
from core.constants import FINAL_SNAPSHOT_NAME, MOUNTPOINT_PROPERTY, SEED_CONTAINER_NAME
from core.logging_config import get_logger
from core.naming import container_dataset_name, numbered_dataset_name
from core.types import CorpusShape, Seed
from corpus.corpus_generator import generate_corpus
from storage.storage_ops import StorageOps

_LOGGER = get_logger(__name__)


def setup_seed(
    ops: StorageOps,
    config: StressConfig,
    seed_id: int,
    rng: random.Random,
    shape: CorpusShape = CorpusShape(),
) -> Seed:
    """Ensure one seed dataset exists with its final snapshot.

    Args:
        ops: Storage engine operations.
        config: Runtime configuration.
        seed_id: Numeric seed identifier.
        rng: Generator for corpus content.
        shape: Corpus shape to generate.

    Returns:
        The ready seed.

    Raises:
        StressStorageError: If an engine command fails.
        StressCorpusError: If corpus generation fails.
    """
    ops.create(container_dataset_name(config.pool, SEED_CONTAINER_NAME), exists_ok=True)
    dataset = numbered_dataset_name(config.pool, SEED_CONTAINER_NAME, seed_id)
    if ops.snapshot_exists(dataset, FINAL_SNAPSHOT_NAME):
        _LOGGER.info("seed_already_setup", seed=seed_id, dataset=dataset)
        return Seed(seed_id=seed_id, dataset=dataset)

    _LOGGER.info("seed_rebuilding", seed=seed_id, dataset=dataset)
    ops.destroy(dataset, recursive=True)
    ops.create(dataset)
    mountpoint = Path(ops.get_property(dataset, MOUNTPOINT_PROPERTY))
    ops.take_ownership(mountpoint, config.owner)
    written = generate_corpus(mountpoint, rng, shape)
    ops.snapshot(dataset, FINAL_SNAPSHOT_NAME)
    _LOGGER.info("seed_created", seed=seed_id, dataset=dataset, file_count=len(written))
    return Seed(seed_id=seed_id, dataset=dataset)
