"""Bimodal chunk content shared by corpus generation and churn writes."""

from __future__ import annotations

import random

from core.constants import COMPRESSIBLE_FILL_BYTE, RANDOM_CHUNK_PROBABILITY


def fill_chunk(rng: random.Random, size: int) -> bytes:
    """Return one chunk of mostly random, sometimes compressible, content.

    With probability 0.75 the chunk is uniformly random bytes; otherwise
    it repeats a single byte.

    Args:
        rng: Generator owned by the calling thread.
        size: Chunk length in bytes.

    Returns:
        Chunk payload of exactly ``size`` bytes.
    """
    if rng.random() < RANDOM_CHUNK_PROBABILITY:
        return rng.randbytes(size)
    return COMPRESSIBLE_FILL_BYTE * size
