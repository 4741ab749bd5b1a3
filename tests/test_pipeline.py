from __future__ import annotations

import logging

import pytest

from pixie_installer.errors import Severity, StepFailed
from pixie_installer.pipeline import attempt, run_pipeline


class RecordingStep:
    def __init__(self, step_id: str, log: list, severity: Severity = Severity.FATAL, error: Exception | None = None):
        self.step_id = step_id
        self.severity = severity
        self._log = log
        self._error = error

    def run(self, ctx) -> None:
        self._log.append(self.step_id)
        if self._error is not None:
            raise self._error


def test_attempt_fatal_wraps_error_with_label() -> None:
    def boom() -> None:
        raise OSError("disk full")

    with pytest.raises(StepFailed, match="create directories failed: disk full") as excinfo:
        attempt("create directories", boom, Severity.FATAL)
    assert isinstance(excinfo.value.cause, OSError)


def test_attempt_soft_logs_and_continues(caplog: pytest.LogCaptureFixture) -> None:
    failures: list = []

    def boom() -> None:
        raise ValueError("missing file")

    with caplog.at_level(logging.ERROR):
        result = attempt("configure Zed", boom, Severity.SOFT, soft_failures=failures)

    assert not result.ok
    assert result.error == "missing file"
    assert failures == [result]
    assert "configure Zed failed (continuing): missing file" in caplog.text


def test_attempt_success() -> None:
    assert attempt("noop", lambda: None, Severity.FATAL).ok


def test_nested_fatal_failures_name_every_level() -> None:
    def install() -> None:
        raise RuntimeError("exit 1")

    def inner() -> None:
        attempt("install git", install, Severity.FATAL)

    with pytest.raises(StepFailed) as excinfo:
        attempt("50_install_packages", inner, Severity.FATAL)
    assert str(excinfo.value) == "50_install_packages failed: install git failed: exit 1"


def test_run_pipeline_stops_at_first_fatal_step(make_ctx) -> None:
    ran: list = []
    steps = [
        RecordingStep("10_a", ran),
        RecordingStep("20_b", ran, error=RuntimeError("nope")),
        RecordingStep("30_c", ran),
    ]

    with pytest.raises(StepFailed, match="20_b failed: nope"):
        run_pipeline(make_ctx(), steps)
    assert ran == ["10_a", "20_b"]


def test_run_pipeline_continues_past_soft_step(make_ctx) -> None:
    ran: list = []
    ctx = make_ctx()
    steps = [
        RecordingStep("10_a", ran, severity=Severity.SOFT, error=RuntimeError("meh")),
        RecordingStep("20_b", ran),
    ]

    result = run_pipeline(ctx, steps)

    assert ran == ["10_a", "20_b"]
    assert result.ran_steps == ["10_a", "20_b"]
    assert [f.label for f in result.soft_failures] == ["10_a"]


def test_context_cleanup_runs_on_fatal_failure(make_ctx) -> None:
    cleaned: list = []
    ctx = make_ctx()

    with pytest.raises(StepFailed):
        with ctx:
            ctx.add_cleanup(cleaned.append, "clone")
            run_pipeline(ctx, [RecordingStep("10_a", [], error=RuntimeError("x"))])

    assert cleaned == ["clone"]
