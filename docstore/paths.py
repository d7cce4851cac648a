from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .settings import Settings

logger = logging.getLogger(__name__)


def default_root(settings: Settings) -> Path:
    return Path(settings.root or ".")


def default_path(settings: Settings) -> Path:
    if settings.path:
        return Path(settings.path)
    return default_root(settings) / settings.filename


def ensure_parent(path: Path) -> bool:
    """
    Create the parent directory of ``path``. Never raises: a store whose directory
    cannot be created fails later, on its first transaction.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("could not create directory %s: %r", path.parent, e)
        return False
    return True


def remove_path(path: Path, *, recursive: bool = False) -> bool:
    """
    Best-effort removal of a file (or a directory tree when ``recursive``).

    Returns True when nothing is left at ``path``; failures are logged, never raised.
    """
    try:
        if path.is_dir() and not path.is_symlink():
            if not recursive:
                logger.warning("refusing to remove directory %s without recursive=True", path)
                return False
            shutil.rmtree(path)
        else:
            path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("could not remove %s: %r", path, e)
        return False
    return True
