"""The ``io`` mode: seeds, plants, and churn threads on every plant."""

from __future__ import annotations

import random
import threading
from functools import partial

from churn.churn_engine import ChurnEngine
from churn.plant_setup import setup_plant
from core.config import StressConfig
from core.constants import IO_IDLE_INTERVAL_SECONDS, PLANT_CONTAINER_NAME
from core.logging_config import get_logger
from core.naming import container_dataset_name
from core.randomness import build_rng, derive_rng
from core.types import CorpusShape, Plant, Seed
from corpus.seed_setup import setup_seed
from storage.storage_ops import StorageOps

_LOGGER = get_logger(__name__)


def prepare_seeds(
    ops: StorageOps,
    config: StressConfig,
    rng: random.Random,
    shape: CorpusShape = CorpusShape(),
) -> list[Seed]:
    """Set up every configured seed, reusing ones already finished."""
    seeds: list[Seed] = []
    for seed_id in range(config.seed_count):
        _LOGGER.info("creating_seed", seed=seed_id)
        seeds.append(setup_seed(ops, config, seed_id, derive_rng(rng), shape))
    return seeds


def prepare_plants(
    ops: StorageOps,
    config: StressConfig,
    seeds: list[Seed],
    rng: random.Random,
) -> list[Plant]:
    """Replace the plant container and clone every plant from a random seed.

    The container is destroyed and recreated first so plants from a
    previous run never survive into this one.
    """
    plant_root = container_dataset_name(config.pool, PLANT_CONTAINER_NAME)
    ops.destroy(plant_root, recursive=True)
    ops.create(plant_root)
    plants: list[Plant] = []
    for plant_id in range(config.plant_count):
        seed = rng.choice(seeds)
        _LOGGER.info("creating_plant", plant=plant_id, seed=seed.dataset)
        plants.append(setup_plant(ops, config, plant_id, seed.dataset))
    return plants


def start_churn(
    plants: list[Plant],
    config: StressConfig,
    rng: random.Random,
) -> list[ChurnEngine]:
    """Start the configured number of churn threads on every plant."""
    engines: list[ChurnEngine] = []
    for plant in plants:
        engine = ChurnEngine(
            plant.mountpoint,
            config.churn_threads_per_plant,
            rng_factory=partial(derive_rng, rng),
        )
        engine.start()
        engines.append(engine)
    return engines


def run_io_mode(
    ops: StorageOps,
    config: StressConfig,
    stop_event: threading.Event | None = None,
    shape: CorpusShape = CorpusShape(),
) -> list[ChurnEngine]:
    """Build seeds and plants, start churn, then idle.

    Without a ``stop_event`` this never returns and the churn threads are
    never joined; the run ends when the process is killed.

    Args:
        ops: Storage engine operations.
        config: Runtime configuration.
        stop_event: Optional event ending the idle loop.
        shape: Corpus shape for newly built seeds.

    Returns:
        The running churn engines, once ``stop_event`` is set.

    Raises:
        StressError: If seed or plant setup fails.
    """
    rng = build_rng(config.random_seed)
    seeds = prepare_seeds(ops, config, rng, shape)
    plants = prepare_plants(ops, config, seeds, rng)
    engines = start_churn(plants, config, rng)
    _LOGGER.info("io_mode_running", plant_count=len(plants), engine_count=len(engines))
    stop_event = stop_event or threading.Event()
    while not stop_event.wait(IO_IDLE_INTERVAL_SECONDS):
        pass
    return engines
