from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol

try:  # pragma: no cover - platform specific
    import winreg  # type: ignore[import-not-found]
except ImportError:  # pragma: no cover - non-Windows hosts
    winreg = None  # type: ignore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Paths:
    choco_bin: str = r"C:\ProgramData\chocolatey\bin"
    choco_exe: str = r"C:\ProgramData\chocolatey\bin\choco.exe"
    git_candidates: tuple[str, ...] = (
        r"C:\Program Files\Git\cmd\git.exe",
        r"C:\Program Files (x86)\Git\cmd\git.exe",
    )
    code_candidates: tuple[str, ...] = (
        r"C:\Program Files\Microsoft VS Code\bin\code.cmd",
        r"C:\Program Files (x86)\Microsoft VS Code\bin\code.cmd",
    )
    log_subdir: str = "Pixie"
    log_name: str = "log.txt"


PATHS = Paths()

MACHINE_ENV_KEY = r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment"
USER_ENV_KEY = "Environment"

_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)|%([^%]+)%")


def documents_dir(home: Optional[Path] = None) -> Path:
    return (home or Path.home()) / "Documents"


def default_log_path(home: Optional[Path] = None) -> Path:
    return documents_dir(home) / PATHS.log_subdir / PATHS.log_name


def lookup(env: Mapping[str, str], name: str) -> Optional[str]:
    """Case-insensitive variable lookup, as Windows resolves them."""
    if name in env:
        return env[name]
    lowered = name.lower()
    for key, value in env.items():
        if key.lower() == lowered:
            return value
    return None


def expand_env(value: str, env: Mapping[str, str]) -> str:
    """Expand $VAR, ${VAR} and %VAR% using env. Unknown names are left as written."""

    def _sub(m: re.Match[str]) -> str:
        name = m.group(1) or m.group(2) or m.group(3)
        found = lookup(env, name)
        return m.group(0) if found is None else found

    return _VAR_PATTERN.sub(_sub, value)


class EnvironmentStore(Protocol):
    def get(self, scope: str, name: str) -> Optional[str]:
        """Return a persisted variable for scope "machine" or "user"."""
        ...


class RegistryEnvironmentStore:
    """Reads persisted environment variables from the Windows registry."""

    def get(self, scope: str, name: str) -> Optional[str]:
        if winreg is None:
            raise RuntimeError("winreg not available on this platform")
        if scope == "machine":
            hive, subkey = winreg.HKEY_LOCAL_MACHINE, MACHINE_ENV_KEY
        elif scope == "user":
            hive, subkey = winreg.HKEY_CURRENT_USER, USER_ENV_KEY
        else:
            raise ValueError(f"Unknown environment scope: {scope}")
        try:
            with winreg.OpenKey(hive, subkey) as key:
                value, value_type = winreg.QueryValueEx(key, name)
        except FileNotFoundError:
            return None
        if value_type == winreg.REG_EXPAND_SZ:
            value = winreg.ExpandEnvironmentStrings(value)
        return str(value)


def refresh_environment(env: Mapping[str, str], store: EnvironmentStore) -> Dict[str, str]:
    """Return a copy of env with PATH rebuilt from the machine and user scopes.

    Installers write to the persisted scopes only, so a running process never
    sees their PATH changes unless it re-reads them.
    """

    machine_path = store.get("machine", "Path") or ""
    user_path = store.get("user", "Path") or ""
    if not machine_path and not user_path:
        raise RuntimeError("no PATH found in machine or user environment")

    refreshed = {k: v for k, v in env.items() if k.lower() != "path"}
    refreshed["PATH"] = os.pathsep.join(p for p in (machine_path, user_path) if p)

    choco_install = store.get("machine", "ChocolateyInstall")
    if choco_install:
        refreshed["ChocolateyInstall"] = choco_install

    logger.info("Environment refreshed")
    logger.debug("Updated PATH: %s", refreshed["PATH"])
    return refreshed


def append_path(env: Mapping[str, str], directory: str) -> Dict[str, str]:
    updated = dict(env)
    current = lookup(updated, "PATH") or ""
    parts = [p for p in current.split(os.pathsep) if p]
    if directory not in parts:
        parts.append(directory)
    for key in [k for k in updated if k.lower() == "path"]:
        del updated[key]
    updated["PATH"] = os.pathsep.join(parts)
    return updated
