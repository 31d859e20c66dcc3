"""File utility functions."""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Final

logger: Final = logging.getLogger(__name__)


def ensure_directory_exists(directory: Path) -> None:
    """Create directory if it doesn't exist.

    Args:
        directory: Path to create
    """
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory: %s", directory)


def write_atomic(path: Path, text: str) -> None:
    """Replace ``path`` with ``text`` without leaving a partial file behind.

    The text goes to a uniquely named temp file beside ``path`` first; on
    any failure that temp file is removed.

    Args:
        path: Destination file
        text: Full new contents
    """
    ensure_directory_exists(path.parent)
    tmp = tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        dir=path.parent,
        prefix=path.name + ".",
        suffix=".tmp",
        delete=False,
    )
    tmp_path = Path(tmp.name)
    try:
        # Closing flushes, so a full disk surfaces here too
        with tmp:
            tmp.write(text)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def backup_file(path: Path) -> Path:
    """Move ``path`` aside to ``<name>.bak.<timestamp>``.

    A numeric suffix is appended if that name is already taken, so an
    earlier backup is never overwritten.

    Args:
        path: File to move

    Returns:
        Location of the backup
    """
    ts = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    bak = path.with_name(f"{path.name}.bak.{ts}")
    counter = 1
    while bak.exists():
        bak = path.with_name(f"{path.name}.bak.{ts}.{counter}")
        counter += 1
    os.replace(path, bak)
    logger.warning("Moved unreadable file %s to %s", path, bak)
    return bak
