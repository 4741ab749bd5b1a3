from __future__ import annotations

import os
import shutil
from typing import Iterable, Mapping, Optional

from .env import lookup


def which(name: str, env: Mapping[str, str]) -> Optional[str]:
    """Resolve an executable against env's PATH rather than the process PATH."""
    return shutil.which(name, path=lookup(env, "PATH") or "")


def find_tool(name: str, env: Mapping[str, str], candidates: Iterable[str] = ()) -> Optional[str]:
    """Resolve name on PATH, then fall back to well-known install locations."""

    found = which(name, env)
    if found:
        return found
    for candidate in candidates:
        if os.path.isfile(candidate):
            return candidate
    return None
