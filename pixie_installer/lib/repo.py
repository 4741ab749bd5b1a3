from __future__ import annotations

import io
import logging
import shutil
from pathlib import Path

from dulwich import porcelain

logger = logging.getLogger(__name__)


def clone_repository(url: str, target: Path) -> None:
    """Clone url into target without needing a git executable.

    Progress output is discarded. On failure the target directory is removed
    before the error propagates, so no partial clone is left behind.
    """

    if not url:
        raise ValueError("repoUrl is not configured")

    try:
        repo = porcelain.clone(url, str(target), errstream=io.BytesIO())
        repo.close()
    except Exception:
        shutil.rmtree(target, ignore_errors=True)
        raise

    logger.info("Repository cloned successfully")
