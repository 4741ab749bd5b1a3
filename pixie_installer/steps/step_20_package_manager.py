from __future__ import annotations

import logging

from ..context import RunContext
from ..errors import Severity
from ..lib.env import PATHS, append_path
from ..lib.pkg import choco_bootstrap, choco_version, resolve_choco
from ..pipeline import attempt

logger = logging.getLogger(__name__)


class PackageManagerStep:
    """Make sure Chocolatey is installed and callable."""

    step_id = "20_package_manager"
    severity = Severity.FATAL

    def run(self, ctx: RunContext) -> None:
        logger.info("Checking Chocolatey installation...")
        if ctx.which("choco"):
            logger.info("Chocolatey is already installed. Skipping installation.")
            return

        logger.info("Installing Chocolatey...")
        choco_bootstrap(ctx.runner, ctx.env)

        attempt(
            "refresh environment after Chocolatey installation",
            ctx.refresh_env,
            Severity.SOFT,
            soft_failures=ctx.soft_failures,
        )

        executable = resolve_choco(ctx.env)
        version = choco_version(ctx.runner, ctx.env, executable)
        ctx.env = append_path(ctx.env, PATHS.choco_bin)
        logger.info("Chocolatey installed successfully. Version: %s", version)
