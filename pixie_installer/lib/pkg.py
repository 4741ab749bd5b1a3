from __future__ import annotations

import logging
from typing import Mapping, Protocol, Sequence

from .command import CmdResult
from .env import PATHS
from .tools import which

logger = logging.getLogger(__name__)


CHOCO_BOOTSTRAP_SCRIPT = (
    "Set-ExecutionPolicy Bypass -Scope Process -Force; "
    "[System.Net.ServicePointManager]::SecurityProtocol = "
    "[System.Net.ServicePointManager]::SecurityProtocol -bor 3072; "
    "iex ((New-Object System.Net.WebClient).DownloadString('https://community.chocolatey.org/install.ps1'))"
)

INSTALL_SUCCESS_PHRASES = ("has been installed", "has been upgraded")


class Runner(Protocol):
    def run(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
    ) -> CmdResult:
        ...


def choco_bootstrap(runner: Runner, env: Mapping[str, str]) -> CmdResult:
    """Install Chocolatey with its official PowerShell bootstrap."""

    r = runner.run(
        ["powershell", "-NoProfile", "-Command", CHOCO_BOOTSTRAP_SCRIPT],
        env=env,
    )
    logger.info("Chocolatey installation output: %s", r.output.strip())
    return r


def choco_version(runner: Runner, env: Mapping[str, str], executable: str = "choco") -> str:
    r = runner.run([executable, "--version"], env=env)
    return r.output.strip()


def resolve_choco(env: Mapping[str, str]) -> str:
    """Full path to choco.exe.

    Windows looks executables up on the parent process PATH, not on the env
    passed to the child, so callers must not rely on a bare "choco".
    """
    return which("choco", env) or PATHS.choco_exe


def choco_install(
    runner: Runner,
    env: Mapping[str, str],
    package: str,
    *,
    executable: str = "choco",
    ignore_checksums: bool = True,
) -> bool:
    """Install one package. Returns whether the output confirmed the install.

    The exit status is authoritative: a failing install raises. The output
    phrase is informational only.
    """

    argv = [executable, "install", package, "-y", "--no-progress"]
    if ignore_checksums:
        argv.append("--ignore-checksums")
    r = runner.run(argv, env={**env, "ChocolateyIgnoreRebootDetected": "true"})
    logger.debug("%s installation output: %s", package, r.output.strip())

    confirmed = any(phrase in r.output for phrase in INSTALL_SUCCESS_PHRASES)
    if confirmed:
        logger.info("%s installed successfully", package)
    else:
        logger.warning(
            "%s installation completed, but the expected output was not found. Please check manually.",
            package,
        )
    return confirmed
