"""Unit tests for random generator construction."""

from __future__ import annotations

from core.randomness import build_rng, derive_rng


def test_seeded_generators_are_reproducible() -> None:
    """Two runs with the same seed should derive identical thread generators."""
    first = derive_rng(build_rng(11))
    second = derive_rng(build_rng(11))

    assert first.getrandbits(64) == second.getrandbits(64)


def test_derived_generators_differ_from_each_other() -> None:
    """Each derived generator should produce its own stream."""
    parent = build_rng(11)
    first = derive_rng(parent)
    second = derive_rng(parent)

    assert first.getrandbits(64) != second.getrandbits(64)
