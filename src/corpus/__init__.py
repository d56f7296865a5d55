"""Seed corpus generation.

This module populates seed datasets with a fixed-shape fan-out tree of
randomized files and checkpoints them with a final snapshot.
"""
