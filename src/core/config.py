"""Runtime configuration model for the stress harness.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import getpass
import os

from core.constants import (
    DEFAULT_BACKUP_WORKERS,
    DEFAULT_CHOWN_PATH,
    DEFAULT_CHURN_THREADS_PER_PLANT,
    DEFAULT_CYCLE_INTERVAL_SECONDS,
    DEFAULT_ELEVATE_PATH,
    DEFAULT_MAX_SNAPSHOTS,
    DEFAULT_PLANT_COUNT,
    DEFAULT_POOL_NAME,
    DEFAULT_SEED_COUNT,
    DEFAULT_ZFS_PATH,
)
from core.errors import StressConfigError
from core.naming import validate_dataset_name


@dataclass(frozen=True)
class StressConfig:
    """Validated runtime configuration.

    Attributes:
        pool: Pool holding the seed and plant containers.
        owner: User given ownership of seed and plant mountpoints.
        zfs_path: Storage engine command.
        elevate_path: Privilege wrapper every engine command runs under.
        chown_path: Ownership command.
        seed_count: Seeds built in io mode.
        plant_count: Plants cloned in io mode.
        churn_threads_per_plant: Churn threads started per plant.
        backup_workers: Worker pool size of one backup cycle.
        max_snapshots: Retention threshold per dataset.
        cycle_interval_seconds: Pause between backup cycles.
        random_seed: Optional seed for a reproducible run.
    """

    pool: str = DEFAULT_POOL_NAME
    owner: str = ""
    zfs_path: str = DEFAULT_ZFS_PATH
    elevate_path: str = DEFAULT_ELEVATE_PATH
    chown_path: str = DEFAULT_CHOWN_PATH
    seed_count: int = DEFAULT_SEED_COUNT
    plant_count: int = DEFAULT_PLANT_COUNT
    churn_threads_per_plant: int = DEFAULT_CHURN_THREADS_PER_PLANT
    backup_workers: int = DEFAULT_BACKUP_WORKERS
    max_snapshots: int = DEFAULT_MAX_SNAPSHOTS
    cycle_interval_seconds: float = DEFAULT_CYCLE_INTERVAL_SECONDS
    random_seed: int | None = None

    @classmethod
    def from_env(cls) -> "StressConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            StressConfigError: If environment values are invalid.
        """
        pool = os.getenv("STRESS_POOL", DEFAULT_POOL_NAME)
        if not pool or "/" in pool or "@" in pool:
            raise StressConfigError(
                f"Invalid STRESS_POOL value: '{pool}'. Set STRESS_POOL to a bare pool name."
            )
        random_seed_value = os.getenv("STRESS_RANDOM_SEED")
        return cls(
            pool=validate_dataset_name(pool),
            owner=os.getenv("STRESS_OWNER") or _default_owner(),
            zfs_path=os.getenv("STRESS_ZFS_PATH", DEFAULT_ZFS_PATH),
            elevate_path=os.getenv("STRESS_ELEVATE_PATH", DEFAULT_ELEVATE_PATH),
            chown_path=os.getenv("STRESS_CHOWN_PATH", DEFAULT_CHOWN_PATH),
            seed_count=_parse_positive_int("STRESS_SEED_COUNT", DEFAULT_SEED_COUNT),
            plant_count=_parse_positive_int("STRESS_PLANT_COUNT", DEFAULT_PLANT_COUNT),
            churn_threads_per_plant=_parse_positive_int(
                "STRESS_CHURN_THREADS", DEFAULT_CHURN_THREADS_PER_PLANT
            ),
            backup_workers=_parse_positive_int("STRESS_BACKUP_WORKERS", DEFAULT_BACKUP_WORKERS),
            max_snapshots=_parse_positive_int("STRESS_MAX_SNAPSHOTS", DEFAULT_MAX_SNAPSHOTS),
            cycle_interval_seconds=_parse_interval(
                "STRESS_CYCLE_INTERVAL", DEFAULT_CYCLE_INTERVAL_SECONDS
            ),
            random_seed=_parse_random_seed(random_seed_value),
        )


def _default_owner() -> str:
    """Return the invoking user name.

    Raises:
        StressConfigError: If the user cannot be determined.
    """
    try:
        return getpass.getuser()
    except (KeyError, OSError) as error:
        raise StressConfigError(
            "Could not determine the invoking user. "
            "Set STRESS_OWNER to the user that should own seed and plant mountpoints."
        ) from error


def _parse_positive_int(variable: str, default: int) -> int:
    """Parse a positive integer environment value.

    Args:
        variable: Environment variable name.
        default: Value used when the variable is unset.

    Returns:
        Parsed integer.

    Raises:
        StressConfigError: If the value is not a positive integer.
    """
    raw_value = os.getenv(variable)
    if raw_value is None:
        return default
    try:
        value = int(raw_value)
    except ValueError as error:
        raise StressConfigError(
            f"Invalid {variable} value: expected integer, got '{raw_value}'. "
            f"Set {variable} to a positive number."
        ) from error
    if value < 1:
        raise StressConfigError(
            f"Invalid {variable} value: expected a positive integer, got {value}."
        )
    return value


def _parse_interval(variable: str, default: float) -> float:
    """Parse a non-negative seconds value."""
    raw_value = os.getenv(variable)
    if raw_value is None:
        return default
    try:
        value = float(raw_value)
    except ValueError as error:
        raise StressConfigError(
            f"Invalid {variable} value: expected seconds, got '{raw_value}'."
        ) from error
    if value < 0:
        raise StressConfigError(f"Invalid {variable} value: expected >= 0, got {value}.")
    return value


def _parse_random_seed(raw_value: str | None) -> int | None:
    """Parse the optional random seed environment value.

    Args:
        raw_value: Raw string from environment, or None when unset.

    Returns:
        Parsed integer seed, or None for entropy seeding.

    Raises:
        StressConfigError: If value cannot be parsed into int.
    """
    if raw_value is None or not raw_value.strip():
        return None
    try:
        return int(raw_value)
    except ValueError as error:
        raise StressConfigError(
            "Invalid STRESS_RANDOM_SEED value: "
            f"expected integer, got '{raw_value}'. "
            "Set STRESS_RANDOM_SEED to a numeric value or leave it unset."
        ) from error
