"""Unit tests for the backup cycle work queue."""

from __future__ import annotations

import threading

from lifecycle.work_queue import WorkQueue


def test_pop_drains_then_returns_none() -> None:
    """Each item should be returned once, then None."""
    queue = WorkQueue(["a", "b"])

    popped = [queue.pop(), queue.pop(), queue.pop()]

    assert sorted(item for item in popped if item) == ["a", "b"] and popped[-1] is None


def test_concurrent_pops_hand_out_each_item_once() -> None:
    """Many threads popping concurrently should never duplicate or lose items."""
    items = [f"tank/plant/{index:04d}" for index in range(500)]
    queue = WorkQueue(items)
    taken: list[str] = []
    taken_lock = threading.Lock()

    def _drain() -> None:
        while True:
            item = queue.pop()
            if item is None:
                return
            with taken_lock:
                taken.append(item)

    threads = [threading.Thread(target=_drain) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(taken) == items and len(queue) == 0
