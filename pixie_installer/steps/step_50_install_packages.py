from __future__ import annotations

import logging
from typing import Callable, List

from ..context import RunContext
from ..errors import Severity
from ..lib.apps import configure_editor, configure_git
from ..lib.pkg import choco_install, resolve_choco
from ..pipeline import attempt

logger = logging.getLogger(__name__)

GIT_PACKAGE = "git"
EDITOR_PACKAGE = "vscode"


class InstallPackagesStep:
    """Install git and the editor first, each configured right away, then the rest.

    Later packages and configuration depend on a working git and editor, so
    those two never wait behind the generic list.
    """

    step_id = "50_install_packages"
    severity = Severity.FATAL

    def plan(self, ctx: RunContext) -> List[str]:
        """Install order: git, vscode, then every other package as listed."""
        order = [GIT_PACKAGE, EDITOR_PACKAGE]
        for name in ctx.config.pkgs:
            if name not in order:
                order.append(name)
        return order

    def run(self, ctx: RunContext) -> None:
        clone_dir = ctx.require_clone()
        post_install: dict[str, Callable[[], None]] = {
            GIT_PACKAGE: lambda: configure_git(ctx, ctx.config.git),
            EDITOR_PACKAGE: lambda: configure_editor(ctx, ctx.config.vscode, clone_dir),
        }

        choco = resolve_choco(ctx.env)
        for name in self.plan(ctx):
            logger.info("Installing %s...", name)
            attempt(
                f"install {name}",
                lambda: choco_install(
                    ctx.runner,
                    ctx.env,
                    name,
                    executable=choco,
                    ignore_checksums=ctx.config.ignore_checksums,
                ),
                Severity.FATAL,
            )
            attempt(
                f"refresh environment after {name} installation",
                ctx.refresh_env,
                Severity.SOFT,
                soft_failures=ctx.soft_failures,
            )
            if name in post_install:
                attempt(f"configure {name}", post_install[name], Severity.FATAL)
