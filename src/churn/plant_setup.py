"""Plant dataset setup: a fresh clone of a seed's final snapshot."""

from __future__ import annotations

from pathlib import Path

from core.config import StressConfig
from core.constants import FINAL_SNAPSHOT_NAME, MOUNTPOINT_PROPERTY, PLANT_CONTAINER_NAME
from core.logging_config import get_logger
from core.naming import numbered_dataset_name
from core.types import Plant
from storage.storage_ops import StorageOps

_LOGGER = get_logger(__name__)


def setup_plant(ops: StorageOps, config: StressConfig, plant_id: int, parent: str) -> Plant:
    """Recreate one plant from ``parent@final``.

    Args:
        ops: Storage engine operations.
        config: Runtime configuration.
        plant_id: Numeric plant identifier.
        parent: Seed dataset to clone.

    Returns:
        The mounted plant.

    Raises:
        StressStorageError: If an engine command fails.
    """
    dataset = numbered_dataset_name(config.pool, PLANT_CONTAINER_NAME, plant_id)
    ops.destroy(dataset, recursive=True)
    ops.clone(parent, FINAL_SNAPSHOT_NAME, dataset)
    mountpoint = Path(ops.get_property(dataset, MOUNTPOINT_PROPERTY))
    ops.take_ownership(mountpoint, config.owner)
    _LOGGER.info("plant_created", plant=plant_id, dataset=dataset, parent=parent)
    return Plant(plant_id=plant_id, parent=parent, dataset=dataset, mountpoint=mountpoint)
