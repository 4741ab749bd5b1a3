from __future__ import annotations

import logging
import shutil
import stat
from pathlib import Path

from ..errors import CopyError

logger = logging.getLogger(__name__)


def copy_file(src: str | Path, dst: str | Path, *, dry_run: bool = False) -> None:
    """Copy one regular file, creating the destination's parent directories."""

    s = Path(src)
    d = Path(dst)

    if dry_run:
        logger.info("Would copy file %s -> %s", s, d)
        return

    try:
        st = s.stat()
    except OSError as e:
        raise CopyError(f"failed to stat file {s}: {e}") from e
    if not stat.S_ISREG(st.st_mode):
        raise CopyError(f"{s} is not a regular file")

    try:
        d.parent.mkdir(parents=True, exist_ok=True)
        with s.open("rb") as fsrc, d.open("wb") as fdst:
            shutil.copyfileobj(fsrc, fdst)
    except OSError as e:
        raise CopyError(f"failed to copy file from {s} to {d}: {e}") from e

    logger.info("Copied file: %s", d)


def copy_tree(src: str | Path, dst: str | Path, *, dry_run: bool = False) -> None:
    """Recursively copy src into dst, one file at a time.

    There is no rollback: a failure part way through leaves whatever was
    already copied in place.
    """

    s = Path(src)
    d = Path(dst)

    if dry_run:
        logger.info("Would copy tree %s -> %s", s, d)
        return

    try:
        entries = sorted(s.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise CopyError(f"failed to read directory {s}: {e}") from e

    try:
        d.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CopyError(f"failed to create destination directory {d}: {e}") from e

    for item in entries:
        out = d / item.name
        if item.is_dir():
            copy_tree(item, out)
        else:
            copy_file(item, out)
