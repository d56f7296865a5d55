"""Dataset and snapshot naming rules.

Names are validated before they reach any storage command so that an
``@`` or ``/`` can never make a command argument ambiguous.
"""

from __future__ import annotations

from core.constants import BACKUP_SNAPSHOT_PREFIX
from core.errors import StressNameError


def validate_dataset_name(name: str) -> str:
    """Reject dataset names containing the snapshot delimiter.

    Args:
        name: Candidate dataset name.

    Returns:
        The unchanged name.

    Raises:
        StressNameError: If the name contains ``@``.
    """
    if "@" in name:
        raise StressNameError(f"invalid dataset name {name}")
    return name


def validate_snapshot_name(name: str) -> str:
    """Reject snapshot names containing ``@`` or ``/``.

    Args:
        name: Candidate snapshot name.

    Returns:
        The unchanged name.

    Raises:
        StressNameError: If the name contains ``@`` or ``/``.
    """
    if "@" in name or "/" in name:
        raise StressNameError(f"invalid snapshot name {name}")
    return name


def snapshot_full_name(dataset: str, snapshot: str) -> str:
    """Return the validated ``dataset@snapshot`` form."""
    return f"{validate_dataset_name(dataset)}@{validate_snapshot_name(snapshot)}"


def container_dataset_name(pool: str, container: str) -> str:
    """Return the dataset grouping seeds or plants, e.g. ``pool/seed``."""
    return validate_dataset_name(f"{pool}/{container}")


def numbered_dataset_name(pool: str, container: str, number: int) -> str:
    """Return a numbered child dataset name, e.g. ``pool/plant/0007``."""
    return validate_dataset_name(f"{pool}/{container}/{number:04d}")


def backup_snapshot_name(epoch_seconds: int) -> str:
    """Return the snapshot name shared by every dataset in one cycle."""
    return validate_snapshot_name(f"{BACKUP_SNAPSHOT_PREFIX}-{epoch_seconds}")
