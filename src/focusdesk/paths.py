from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import platformdirs

from .errors import DirectoryResolutionError, IoError

logger = logging.getLogger(__name__)

DATA_DIRNAME = "data"
BACKUP_DIRNAME = "backups"


@dataclass(frozen=True)
class DataPaths:
    """Resolved storage locations: `<root>/data` and `<root>/data/backups`."""

    data_dir: Path
    backup_dir: Path


def app_data_root(app_name: str) -> Path:
    """
    Ask the platform for the per-user application data root.

    Raises:
        DirectoryResolutionError: when the platform lookup fails or yields nothing.
    """
    try:
        root = platformdirs.user_data_dir(app_name, appauthor=False)
    except (OSError, RuntimeError, KeyError) as exc:
        raise DirectoryResolutionError(f"unable to resolve the application data directory: {exc}") from exc
    if not root:
        raise DirectoryResolutionError()
    return Path(root)


# PUBLIC_INTERFACE
def resolve_data_paths(root: Optional[Union[str, Path]] = None, app_name: str = "focusdesk") -> DataPaths:
    """
    Derive and create the data and backup directories.

    Args:
        root: explicit application-data root; the platform default is used when omitted.
        app_name: application name used for the platform lookup.

    Returns:
        DataPaths with both directories created (including parents).

    Raises:
        DirectoryResolutionError: no root could be determined.
        IoError: the directories could not be created.
    """
    base = Path(root).expanduser() if root else app_data_root(app_name)
    data_dir = base / DATA_DIRNAME
    backup_dir = data_dir / BACKUP_DIRNAME
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
        backup_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IoError(f"cannot create data directory {data_dir}: {exc}") from exc

    logger.debug("Resolved data directory %s", data_dir)
    return DataPaths(data_dir=data_dir, backup_dir=backup_dir)
