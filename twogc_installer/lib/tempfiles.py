from __future__ import annotations

import logging
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


def artifact_path(prefix: str, suffix: str, temp_dir: Optional[str] = None) -> Path:
    base = Path(temp_dir or tempfile.gettempdir())
    return base / f"{prefix}_{uuid.uuid4()}{suffix}"


def remove_artifact(path: Path) -> bool:
    """Best-effort removal; returns True if a file was deleted."""

    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning("Could not remove temporary artifact %s: %s", path, e)
        return False
    logger.info("Removed temporary artifact %s", path)
    return True


@contextmanager
def scoped_artifact(
    *,
    prefix: str,
    suffix: str,
    temp_dir: Optional[str] = None,
) -> Iterator[Path]:
    """Reserve a unique temp path and remove whatever lands there on exit.

    Nothing is created on entry; the caller writes the file.
    """

    path = artifact_path(prefix, suffix, temp_dir)
    if temp_dir:
        path.parent.mkdir(parents=True, exist_ok=True)
    try:
        yield path
    finally:
        remove_artifact(path)
