"""Per-sweep visiting order."""

from __future__ import annotations

import random


def shuffled_order(count: int, rng: random.Random) -> list[int]:
    """Return a uniformly random permutation of ``range(count)``.

    Fisher-Yates: each position swaps with a draw from ``[0, index]``.
    """
    order = list(range(count))
    for index in range(count - 1, 0, -1):
        swap_index = rng.randint(0, index)
        order[index], order[swap_index] = order[swap_index], order[index]
    return order
