from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence, TypeVar

from .context import RunContext
from .errors import Severity, StepFailed

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Step(Protocol):
    """A single pipeline step."""

    step_id: str
    severity: Severity

    def run(self, ctx: RunContext) -> None:
        ...


@dataclass(frozen=True)
class StepResult:
    label: str
    ok: bool
    severity: Severity
    error: Optional[str] = None


@dataclass
class PipelineResult:
    ran_steps: List[str] = field(default_factory=list)
    soft_failures: List[StepResult] = field(default_factory=list)


def attempt(
    label: str,
    fn: Callable[[], T],
    severity: Severity,
    *,
    soft_failures: Optional[List[StepResult]] = None,
) -> StepResult:
    """Run fn and apply the failure policy for severity.

    FATAL: raise StepFailed naming label.
    SOFT: log the error and return a failed result; the caller carries on.
    """

    try:
        fn()
    except Exception as e:
        if severity is Severity.FATAL:
            raise StepFailed(label, e) from e
        logger.error("%s failed (continuing): %s", label, e)
        result = StepResult(label=label, ok=False, severity=severity, error=str(e))
        if soft_failures is not None:
            soft_failures.append(result)
        return result
    return StepResult(label=label, ok=True, severity=severity)


def run_pipeline(ctx: RunContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order. Stops at the first fatal failure."""

    result = PipelineResult(soft_failures=ctx.soft_failures)
    for step in steps:
        logger.info("Running step %s", step.step_id)
        attempt(
            step.step_id,
            lambda: step.run(ctx),
            step.severity,
            soft_failures=ctx.soft_failures,
        )
        result.ran_steps.append(step.step_id)
    return result
