"""Snapshot lifecycle scheduling.

This module snapshots datasets in periodic cycles, ages out old
snapshots and validates incremental transfers over a worker pool.
"""
