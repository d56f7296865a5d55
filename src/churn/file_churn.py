"""Randomized kilobyte read/write operations on one file.

Offsets are whole blocks drawn from ``[0, size // 1024 - 1)``, so an
operation never touches the file's final block and the file never grows.
"""

from __future__ import annotations

import os
from pathlib import Path
import random
from typing import BinaryIO

from core.constants import CHURN_BLOCK_SIZE, CHURN_MAX_IOPS, CHURN_WRITE_PROBABILITY
from core.errors import StressChurnError
from corpus.chunk_fill import fill_chunk


def churnable_block_count(size_bytes: int) -> int:
    """Return how many leading blocks a churn operation may target."""
    return size_bytes // CHURN_BLOCK_SIZE - 1


def choose_block_offset(size_bytes: int, rng: random.Random) -> int:
    """Draw a block-aligned byte offset for one operation.

    Args:
        size_bytes: Current file size.
        rng: Generator owned by the calling thread.

    Returns:
        Byte offset, a multiple of the block size.

    Raises:
        StressChurnError: If the file has no block that may be targeted.
    """
    block_count = churnable_block_count(size_bytes)
    if block_count < 1:
        raise StressChurnError(
            f"File of {size_bytes} bytes is too small to churn: "
            f"at least {2 * CHURN_BLOCK_SIZE} bytes are required."
        )
    return rng.randrange(block_count) * CHURN_BLOCK_SIZE


def churn_file(file_path: Path, rng: random.Random) -> int:
    """Run a random number of kilobyte operations against one file.

    Each operation writes with probability 0.40 and reads otherwise.
    Writes are flushed immediately.

    Args:
        file_path: Existing file to mutate.
        rng: Generator owned by the calling thread.

    Returns:
        Number of operations performed.

    Raises:
        OSError: If the file cannot be opened, read or written.
        StressChurnError: If the file is too small or a read comes up short.
    """
    with file_path.open("r+b") as handle:
        size_bytes = os.fstat(handle.fileno()).st_size
        iops = rng.randrange(1, CHURN_MAX_IOPS)
        for _ in range(iops):
            is_write = rng.random() < CHURN_WRITE_PROBABILITY
            handle.seek(choose_block_offset(size_bytes, rng))
            if is_write:
                handle.write(fill_chunk(rng, CHURN_BLOCK_SIZE))
                handle.flush()
            else:
                _read_block(handle, file_path)
    return iops


def _read_block(handle: BinaryIO, file_path: Path) -> None:
    payload = handle.read(CHURN_BLOCK_SIZE)
    if len(payload) != CHURN_BLOCK_SIZE:
        raise StressChurnError(
            f"Short read from {file_path}: expected {CHURN_BLOCK_SIZE} bytes, got {len(payload)}."
        )
