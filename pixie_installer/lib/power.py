from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Callable, List, Mapping

from ..errors import StartupCleanupError
from .env import lookup
from .pkg import Runner

logger = logging.getLogger(__name__)

STARTUP_SUBPATH = Path("Microsoft", "Windows", "Start Menu", "Programs", "Startup")
RESTART_PROMPT = "Do you want to restart now? (y/n): "


def startup_folders(env: Mapping[str, str]) -> List[Path]:
    """Per-user and all-users auto-start folders."""

    folders: List[Path] = []
    for var in ("APPDATA", "ProgramData"):
        base = lookup(env, var)
        if not base:
            raise StartupCleanupError(f"%{var}% is not set; cannot locate startup folder")
        folders.append(Path(base) / STARTUP_SUBPATH)
    return folders


def clear_startup_folders(folders: List[Path]) -> int:
    """Remove every entry of every folder. Returns the number of entries removed.

    A folder that cannot be listed aborts the call. An entry that cannot be
    removed is logged and skipped.
    """

    logger.info("Clearing startup folder...")
    removed = 0
    for folder in folders:
        try:
            entries = sorted(folder.iterdir())
        except OSError as e:
            raise StartupCleanupError(f"failed to read startup folder {folder}: {e}") from e

        for entry in entries:
            try:
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
            except OSError as e:
                logger.error("Failed to remove %s: %s", entry, e)
                continue
            removed += 1
            logger.info("Removed %s from startup", entry)

    logger.info("Startup folder cleared")
    return removed


def is_affirmative(answer: str) -> bool:
    return answer.strip().lower() in {"y", "yes"}


def confirm_restart(read: Callable[[str], str]) -> bool:
    """Ask on the terminal. A read error counts as no."""

    try:
        answer = read(RESTART_PROMPT)
    except (EOFError, OSError, KeyboardInterrupt) as e:
        logger.error("Error reading input: %s", e or type(e).__name__)
        return False
    return is_affirmative(answer)


def reboot(runner: Runner, env: Mapping[str, str]) -> None:
    logger.info("Restarting the system...")
    runner.run(["shutdown", "/r", "/t", "0"], env=env)
