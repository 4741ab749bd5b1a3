from __future__ import annotations

import logging

from ..context import RunContext
from ..errors import Severity
from ..lib.apps import configure_app
from ..pipeline import attempt

logger = logging.getLogger(__name__)


class ConfigureAppsStep:
    step_id = "60_configure_apps"
    severity = Severity.FATAL

    def run(self, ctx: RunContext) -> None:
        logger.info("Configuring applications...")
        clone_dir = ctx.require_clone()

        # One broken app must not stop the others.
        failed = 0
        for name, app in ctx.config.apps.items():
            result = attempt(
                f"configure {name}",
                lambda: configure_app(ctx, name, app, clone_dir),
                Severity.SOFT,
                soft_failures=ctx.soft_failures,
            )
            if not result.ok:
                failed += 1

        if failed:
            logger.warning("Application configuration completed with %d failure(s)", failed)
        else:
            logger.info("Application configuration completed")
