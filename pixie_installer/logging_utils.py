from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .lib.env import default_log_path

FALLBACK_LOG_NAME = "pixie.log"

_CONFIGURED_FLAG = "_pixie_configured"
_HANDLERS_ATTR = "_pixie_handlers"
_PATH_ATTR = "_pixie_log_path"


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
    console: Optional[Console] = None,
    also_console: bool = True,
) -> str:
    """Configure logging.

    Every step transition and error goes to an append-only log file under
    Documents/Pixie/log.txt and to the terminal.

    Notes:
    - If the requested log file cannot be opened, fall back to a file in the
      current working directory rather than running without a log.
    - Calling this again without shutdown_logging() is a no-op.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()

    if getattr(logger, _CONFIGURED_FLAG, False):
        return getattr(logger, _PATH_ATTR)

    requested = log_path or str(default_log_path())
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        Path(requested).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(requested, mode="a", encoding="utf-8")
        chosen_path = requested
    except OSError:
        chosen_path = str(Path.cwd() / FALLBACK_LOG_NAME)
        file_handler = logging.FileHandler(chosen_path, mode="a", encoding="utf-8")
    file_handler.setFormatter(fmt)
    file_handler.setLevel(logging.DEBUG)
    handlers.append(file_handler)

    if also_console:
        terminal = RichHandler(console=console, show_path=False, markup=False)
        terminal.setLevel(level)
        handlers.append(terminal)

    # The file keeps command output, which is logged at DEBUG.
    logger.setLevel(logging.DEBUG)
    for h in handlers:
        logger.addHandler(h)

    setattr(logger, _CONFIGURED_FLAG, True)
    setattr(logger, _HANDLERS_ATTR, handlers)
    setattr(logger, _PATH_ATTR, chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", requested, chosen_path
    )
    return chosen_path


def shutdown_logging() -> None:
    """Detach and close the handlers added by configure_logging."""

    logger = logging.getLogger()
    for h in getattr(logger, _HANDLERS_ATTR, []):
        logger.removeHandler(h)
        h.close()
    setattr(logger, _HANDLERS_ATTR, [])
    setattr(logger, _CONFIGURED_FLAG, False)
