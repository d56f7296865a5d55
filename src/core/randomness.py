"""Random generator construction.

Each worker thread owns its own generator. Generators are seeded from
OS entropy unless a seed is configured for a reproducible run.
"""

from __future__ import annotations

import random


def build_rng(seed: int | None = None) -> random.Random:
    """Build the root generator for a run.

    Args:
        seed: Optional fixed seed; OS entropy when omitted.

    Returns:
        A new generator.
    """
    if seed is None:
        return random.Random()
    return random.Random(seed)


def derive_rng(parent: random.Random) -> random.Random:
    """Derive an independent generator for one worker thread."""
    return random.Random(parent.getrandbits(64))
