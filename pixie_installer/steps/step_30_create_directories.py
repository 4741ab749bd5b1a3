from __future__ import annotations

import logging

from ..context import RunContext
from ..errors import Severity

logger = logging.getLogger(__name__)


class CreateDirectoriesStep:
    step_id = "30_create_directories"
    severity = Severity.FATAL

    def run(self, ctx: RunContext) -> None:
        for name in ctx.config.dirs:
            path = ctx.documents_dir / name
            if ctx.dry_run:
                logger.info("Would create directory: %s", path)
                continue
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise RuntimeError(f"failed to create directory {path}: {e}") from e
            logger.info("Created directory: %s", path)
