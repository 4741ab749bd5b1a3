from __future__ import annotations

import logging

from ..context import RunContext
from ..errors import Severity
from ..lib.power import clear_startup_folders, confirm_restart, reboot, startup_folders
from ..pipeline import attempt

logger = logging.getLogger(__name__)


class FinalizeRebootStep:
    """Offer (or force, when unattended) a restart once everything succeeded."""

    step_id = "90_finalize_reboot"
    severity = Severity.SOFT

    def run(self, ctx: RunContext) -> None:
        if ctx.unattended:
            logger.info("Unattended mode enabled. Restarting system...")
        elif not confirm_restart(ctx.read_input):
            logger.info("Restart declined")
            return

        # Startup entries would otherwise relaunch the installer after reboot.
        attempt(
            "clear startup folders",
            lambda: clear_startup_folders(startup_folders(ctx.env)),
            Severity.SOFT,
            soft_failures=ctx.soft_failures,
        )
        attempt(
            "restart",
            lambda: reboot(ctx.runner, ctx.env),
            Severity.SOFT,
            soft_failures=ctx.soft_failures,
        )
