"""Integration test: io setup, churn, then backup cycles over the plants."""

from __future__ import annotations

import threading

from core.config import StressConfig
from core.constants import KILOBYTE
from core.types import CorpusShape
from lifecycle.scheduler import LifecycleScheduler
from orchestrate.io_mode import run_io_mode
from tests.fake_storage import FakeStorageOps


def test_backup_cycles_over_churned_plants(tmp_path) -> None:
    """Plants built by io mode should cycle through retention and transfers."""
    ops = FakeStorageOps(tmp_path)
    config = StressConfig(
        pool="tank",
        owner="stress",
        seed_count=2,
        plant_count=3,
        churn_threads_per_plant=1,
        backup_workers=2,
        random_seed=5,
    )
    shape = CorpusShape(file_count=3, size_unit=4 * KILOBYTE, chunk_size=KILOBYTE)
    stop_event = threading.Event()
    stop_event.set()
    engines = run_io_mode(ops, config, stop_event, shape)
    ticks = iter(float(1000 + cycle * 5) for cycle in range(7))
    scheduler = LifecycleScheduler(ops, "tank/plant", 2, 5, 0.0, clock=lambda: next(ticks))

    reports = [scheduler.run_cycle() for _ in range(7)]
    for engine in engines:
        engine.stop()
    for engine in engines:
        engine.join(timeout=60.0)

    assert [report.dataset_count for report in reports] == [3] * 7
    assert [report.transfer_count for report in reports] == [0] + [3] * 6
    assert all(len(ops.snapshots[plant]) == 4 for plant in ops.list_child_datasets("tank/plant"))
    assert all(ops.snapshots[f"tank/seed/{index:04d}"] == ["final"] for index in range(2))
