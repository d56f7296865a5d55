"""The ``backup`` mode: lifecycle cycles over the plants of a previous io run."""

from __future__ import annotations

import threading

from core.config import StressConfig
from core.constants import PLANT_CONTAINER_NAME
from core.naming import container_dataset_name
from lifecycle.scheduler import LifecycleScheduler
from storage.storage_ops import StorageOps


def run_backup_mode(
    ops: StorageOps,
    config: StressConfig,
    stop_event: threading.Event | None = None,
) -> None:
    """Run the lifecycle scheduler against ``<pool>/plant`` until killed.

    Raises:
        StressLifecycleError: If a cycle fails.
    """
    plant_root = container_dataset_name(config.pool, PLANT_CONTAINER_NAME)
    scheduler = LifecycleScheduler.from_config(ops, plant_root, config)
    scheduler.run(stop_event)
