from __future__ import annotations

import logging
from typing import Callable

from ..context import RunContext
from ..errors import Severity
from ..lib.privilege import is_admin, is_windows

logger = logging.getLogger(__name__)


class PreflightStep:
    step_id = "10_preflight"
    severity = Severity.FATAL

    def __init__(
        self,
        *,
        platform_check: Callable[[], bool] = is_windows,
        admin_check: Callable[[], bool] = is_admin,
    ) -> None:
        self._platform_check = platform_check
        self._admin_check = admin_check

    def run(self, ctx: RunContext) -> None:
        # Nothing may touch the machine before both checks pass.
        if not self._platform_check():
            raise RuntimeError("this script is designed to run on Windows only")
        if not self._admin_check():
            raise RuntimeError("this script requires administrator privileges")
        logger.info("Initialising Pixie")
