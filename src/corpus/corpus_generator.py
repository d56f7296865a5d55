"""Randomized fan-out corpus writer.

Files land under ``<HHHH>/<HHHH>/<16 hex>.dat`` with sizes drawn uniformly
from the corpus shape. Any I/O error aborts the whole corpus; cleanup is
left to the caller's destroy-and-recreate policy.
"""

from __future__ import annotations

from pathlib import Path
import random

from core.constants import CORPUS_FANOUT, CORPUS_FILE_EXTENSION
from core.errors import StressCorpusError
from core.types import CorpusShape
from corpus.chunk_fill import fill_chunk


def corpus_file_path(mountpoint: Path, rng: random.Random) -> Path:
    """Draw one fan-out file location under ``mountpoint``.

    Args:
        mountpoint: Corpus root directory.
        rng: Generator owned by the calling thread.

    Returns:
        File path; parent directories may not exist yet.
    """
    first_level = rng.randrange(CORPUS_FANOUT)
    second_level = rng.randrange(CORPUS_FANOUT)
    file_key = rng.getrandbits(64)
    return (
        mountpoint
        / f"{first_level:04X}"
        / f"{second_level:04X}"
        / f"{file_key:016X}{CORPUS_FILE_EXTENSION}"
    )


def generate_corpus(
    mountpoint: Path,
    rng: random.Random,
    shape: CorpusShape = CorpusShape(),
) -> list[Path]:
    """Populate ``mountpoint`` with a randomized file corpus.

    Args:
        mountpoint: Corpus root directory.
        rng: Generator owned by the calling thread.
        shape: File count, size range and chunking.

    Returns:
        Paths written, in generation order.

    Raises:
        StressCorpusError: If any directory or file write fails.
    """
    written: list[Path] = []
    for _ in range(shape.file_count):
        file_path = corpus_file_path(mountpoint, rng)
        size_units = rng.randint(shape.min_size_units, shape.max_size_units)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            _write_corpus_file(file_path, size_units * shape.size_unit, shape.chunk_size, rng)
        except OSError as error:
            raise StressCorpusError(
                f"Failed to write corpus file {file_path}: {error}. "
                "The seed will be destroyed and regenerated on the next run."
            ) from error
        written.append(file_path)
    return written


def _write_corpus_file(file_path: Path, size_bytes: int, chunk_size: int, rng: random.Random) -> None:
    """Write one file chunk by chunk through a buffered handle."""
    remaining = size_bytes
    with file_path.open("wb") as handle:
        while remaining > 0:
            chunk_length = min(chunk_size, remaining)
            handle.write(fill_chunk(rng, chunk_length))
            remaining -= chunk_length
        handle.flush()
