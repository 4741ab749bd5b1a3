from __future__ import annotations

import io
import re
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence

import pytest
from rich.console import Console

from pixie_installer.config import PixieConfig
from pixie_installer.context import RunContext
from pixie_installer.errors import CommandError
from pixie_installer.lib.command import CmdResult


def _tool_name(path: str) -> str:
    name = re.split(r"[\\/]", path)[-1]
    return re.sub(r"\.(exe|cmd)$", "", name, flags=re.IGNORECASE)


class FakeRunner:
    """Records commands instead of running them.

    Commands are recorded with argv[0] reduced to its file name, so tools
    resolved to absolute paths compare equal to their bare names. The
    untouched argv lists are kept in argvs.
    """

    def __init__(
        self,
        outputs: Optional[Dict[tuple[str, ...], str]] = None,
        fail: Iterable[Sequence[str]] = (),
    ) -> None:
        self.outputs = outputs or {}
        self.fail = [tuple(f) for f in fail]
        self.commands: list[tuple[str, ...]] = []
        self.argvs: list[list[str]] = []
        self.envs: list[Dict[str, str]] = []

    def run(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env: Mapping[str, str] | None = None,
        cwd: str | None = None,
    ) -> CmdResult:
        cmd = (_tool_name(argv[0]), *argv[1:])
        self.commands.append(cmd)
        self.argvs.append(list(argv))
        self.envs.append(dict(env or {}))
        output = self.outputs.get(cmd, "")
        returncode = 1 if any(cmd[: len(f)] == f for f in self.fail) else 0
        if check and returncode != 0:
            raise CommandError(list(argv), returncode, output, f"Command failed ({returncode}): {' '.join(cmd)}")
        return CmdResult(argv=list(argv), returncode=returncode, output=output)

    def installs(self) -> list[str]:
        return [c[2] for c in self.commands if c[:2] == ("choco", "install")]


class FakeEnvStore:
    def __init__(self, values: Optional[Dict[tuple[str, str], str]] = None, error: Optional[Exception] = None) -> None:
        self.values = values or {}
        self.error = error
        self.reads = 0

    def get(self, scope: str, name: str) -> Optional[str]:
        self.reads += 1
        if self.error is not None:
            raise self.error
        return self.values.get((scope, name))


def make_tool(bin_dir: Path, name: str) -> Path:
    tool = bin_dir / name
    tool.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    tool.chmod(0o755)
    return tool


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    d = tmp_path / "bin"
    d.mkdir()
    return d


@pytest.fixture
def make_ctx(tmp_path: Path, bin_dir: Path) -> Callable[..., RunContext]:
    def _make(raw: Optional[Dict[str, Any]] = None, **overrides: Any) -> RunContext:
        env = {
            "PATH": str(bin_dir),
            "APPDATA": str(tmp_path / "AppData" / "Roaming"),
            "ProgramData": str(tmp_path / "ProgramData"),
        }
        env.update(overrides.pop("env", {}))
        kwargs: Dict[str, Any] = dict(
            documents=tmp_path / "Documents",
            env=env,
            runner=FakeRunner(),
            env_store=FakeEnvStore({("machine", "Path"): str(bin_dir)}),
            console=Console(file=io.StringIO(), width=200),
            read_input=lambda prompt: "n",
        )
        kwargs.update(overrides)
        return RunContext(PixieConfig(raw=raw or {}), **kwargs)

    return _make
