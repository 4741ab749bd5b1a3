from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Callable

from ..context import RunContext
from ..errors import Severity
from ..lib.assets import copy_tree
from ..lib.repo import clone_repository

logger = logging.getLogger(__name__)


class FetchRepositoryStep:
    """Clone the configuration repository and copy its wallpapers.

    The clone stays on disk for the later configuration steps; the run
    context removes it when the run ends.
    """

    step_id = "40_fetch_repository"
    severity = Severity.FATAL

    def __init__(self, *, cloner: Callable[[str, Path], None] = clone_repository) -> None:
        self._cloner = cloner

    def run(self, ctx: RunContext) -> None:
        logger.info("Cloning repository...")
        clone_dir = Path(tempfile.mkdtemp(prefix="configs"))
        ctx.add_cleanup(shutil.rmtree, clone_dir, ignore_errors=True)

        if ctx.dry_run:
            logger.info("Would clone %s into %s", ctx.config.repo_url, clone_dir)
        else:
            try:
                self._cloner(ctx.config.repo_url, clone_dir)
            except Exception as e:
                shutil.rmtree(clone_dir, ignore_errors=True)
                raise RuntimeError(f"failed to clone repository {ctx.config.repo_url}: {e}") from e
        ctx.clone_dir = clone_dir

        wallpapers = ctx.config.wallpapers_dir
        try:
            copy_tree(clone_dir / wallpapers, ctx.documents_dir / wallpapers, dry_run=ctx.dry_run)
        except Exception as e:
            raise RuntimeError(f"failed to copy wallpapers: {e}") from e
