"""Error-tolerant enumeration of regular files under a plant."""

from __future__ import annotations

import os
from pathlib import Path
import stat

from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def list_regular_files(root: Path) -> list[Path]:
    """Collect every regular file below ``root``.

    Entry errors are logged and skipped; the walk itself never aborts.
    Symlinks are not followed.

    Args:
        root: Directory to walk.

    Returns:
        Regular file paths in walk order.
    """
    files: list[Path] = []
    for directory, _, file_names in os.walk(root, onerror=_log_walk_error):
        for file_name in file_names:
            file_path = Path(directory) / file_name
            try:
                mode = os.lstat(file_path).st_mode
            except OSError as error:
                _log_walk_error(error)
                continue
            if stat.S_ISREG(mode):
                files.append(file_path)
    return files


def _log_walk_error(error: OSError) -> None:
    _LOGGER.error("walk_failure", path=error.filename, error=str(error))
