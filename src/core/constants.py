"""Core constants used across stress harness modules.

This module centralizes sizes, probabilities, names and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

KILOBYTE = 1024
MEGABYTE = KILOBYTE * 1024

SEED_FILE_COUNT = 1_000
FILE_MIN_MB = 2
FILE_MAX_MB = 32
CORPUS_CHUNK_SIZE = 16 * KILOBYTE
CORPUS_FANOUT = 16
CORPUS_FILE_EXTENSION = ".dat"
RANDOM_CHUNK_PROBABILITY = 0.75
COMPRESSIBLE_FILL_BYTE = b"A"

CHURN_BLOCK_SIZE = KILOBYTE
CHURN_MAX_IOPS = 10_000
CHURN_WRITE_PROBABILITY = 0.40

FINAL_SNAPSHOT_NAME = "final"
SEED_CONTAINER_NAME = "seed"
PLANT_CONTAINER_NAME = "plant"
BACKUP_SNAPSHOT_PREFIX = "backup"
MOUNTPOINT_PROPERTY = "mountpoint"

DEFAULT_POOL_NAME = "dynamite"
DEFAULT_SEED_COUNT = 10
DEFAULT_PLANT_COUNT = 60
DEFAULT_CHURN_THREADS_PER_PLANT = 4
DEFAULT_BACKUP_WORKERS = 8
DEFAULT_MAX_SNAPSHOTS = 5
DEFAULT_CYCLE_INTERVAL_SECONDS = 5.0
IO_IDLE_INTERVAL_SECONDS = 1_000.0

DEFAULT_ZFS_PATH = "/sbin/zfs"
DEFAULT_ELEVATE_PATH = "/bin/pfexec"
DEFAULT_CHOWN_PATH = "/bin/chown"

NOT_FOUND_MARKER = "dataset does not exist"
ALREADY_EXISTS_MARKER = "dataset already exists"
