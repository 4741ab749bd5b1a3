from __future__ import annotations

import logging
import os
from contextlib import ExitStack
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from rich.console import Console

from .config import PixieConfig
from .lib.command import CommandRunner
from .lib.env import (
    EnvironmentStore,
    RegistryEnvironmentStore,
    documents_dir,
    expand_env,
    refresh_environment,
)
from .lib.pkg import Runner
from .lib.tools import which

logger = logging.getLogger(__name__)


class RunContext:
    """Everything one provisioning run needs, passed explicitly to each step.

    Use as a context manager: callbacks registered with add_cleanup run on
    every exit path.
    """

    def __init__(
        self,
        config: PixieConfig,
        *,
        documents: Optional[Path] = None,
        env: Optional[Dict[str, str]] = None,
        runner: Optional[Runner] = None,
        env_store: Optional[EnvironmentStore] = None,
        console: Optional[Console] = None,
        read_input: Optional[Callable[[str], str]] = None,
        dry_run: bool = False,
        unattended: Optional[bool] = None,
    ) -> None:
        self.config = config
        self.documents_dir = documents or documents_dir()
        self.env: Dict[str, str] = dict(os.environ) if env is None else dict(env)
        self.runner: Runner = runner or CommandRunner(dry_run=dry_run)
        self.env_store: EnvironmentStore = env_store or RegistryEnvironmentStore()
        self.console = console or Console()
        self.read_input = read_input or self.console.input
        self.dry_run = dry_run
        self.unattended = config.unattended_mode if unattended is None else unattended
        self.clone_dir: Optional[Path] = None
        self.soft_failures: List[Any] = []
        self._stack = ExitStack()

    def __enter__(self) -> "RunContext":
        self._stack.__enter__()
        return self

    def __exit__(self, *exc_info) -> bool:
        return bool(self._stack.__exit__(*exc_info))

    def add_cleanup(self, callback: Callable[..., object], *args, **kwargs) -> None:
        self._stack.callback(callback, *args, **kwargs)

    def refresh_env(self) -> None:
        """Pick up PATH changes persisted by installers since the run started."""
        self.env = refresh_environment(self.env, self.env_store)

    def which(self, name: str) -> Optional[str]:
        return which(name, self.env)

    def expand(self, value: str) -> str:
        return expand_env(value, self.env)

    def require_clone(self) -> Path:
        if self.clone_dir is None:
            raise RuntimeError("configuration repository has not been cloned")
        return self.clone_dir
