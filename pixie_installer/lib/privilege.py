"""Platform and admin privilege checks for Windows."""
from __future__ import annotations

import ctypes
import logging
import sys

logger = logging.getLogger(__name__)


def is_windows() -> bool:
    return sys.platform == "win32"


def is_admin() -> bool:
    try:
        return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
    except AttributeError:
        return False
    except OSError as e:
        logger.error("Failed to check admin status: %s", e)
        return False
