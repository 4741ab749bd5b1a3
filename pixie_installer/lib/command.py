from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    output: str


def _fmt_argv(argv: Sequence[str]) -> str:
    return subprocess.list2cmdline(list(argv))


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - Captures stdout and stderr as one combined stream.
    - env replaces the process environment entirely when given.
    - dry_run logs but does not execute.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, output="")

    try:
        p = subprocess.run(
            argv_list,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            cwd=cwd,
            env=dict(env) if env is not None else dict(os.environ),
        )
    except OSError as e:
        # Executable missing or not launchable counts as a failed command.
        if check:
            raise CommandError(argv_list, -1, "", f"Command could not start: {_fmt_argv(argv_list)}: {e}") from e
        return CmdResult(argv=argv_list, returncode=-1, output=str(e))

    output = p.stdout or ""
    if output:
        logger.debug("OUTPUT %s", output.strip())

    if check and p.returncode != 0:
        raise CommandError(
            argv_list,
            p.returncode,
            output,
            f"Command failed ({p.returncode}): {_fmt_argv(argv_list)}\n{output.strip()}",
        )

    return CmdResult(argv=argv_list, returncode=p.returncode, output=output)


class CommandRunner:
    """Object seam over run_cmd so steps can be exercised with a fake runner."""

    def __init__(self, *, dry_run: bool = False) -> None:
        self.dry_run = dry_run

    def run(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
    ) -> CmdResult:
        return run_cmd(argv, check=check, env=env, cwd=cwd, dry_run=self.dry_run)
