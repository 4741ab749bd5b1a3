from __future__ import annotations

from enum import Enum
from typing import Sequence


class Severity(str, Enum):
    """How the orchestrator treats a failure."""

    FATAL = "fatal"
    SOFT = "soft"


class PixieError(RuntimeError):
    pass


class ConfigError(PixieError):
    pass


class CommandError(PixieError):
    def __init__(self, argv: Sequence[str], returncode: int, output: str, message: str) -> None:
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode
        self.output = output


class CopyError(PixieError):
    pass


class StartupCleanupError(PixieError):
    pass


class StepFailed(PixieError):
    """A fatal failure, labelled with the step (or sub-step) that raised it."""

    def __init__(self, label: str, cause: BaseException) -> None:
        super().__init__(f"{label} failed: {cause}")
        self.label = label
        self.cause = cause
