from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from rich.console import Console

from .config import DEFAULT_CONFIG_PATH, load_config
from .context import RunContext
from .errors import ConfigError, PixieError, StepFailed
from .lib.env import PATHS
from .logging_utils import configure_logging, shutdown_logging
from .pipeline import PipelineResult, Step, attempt, run_pipeline
from .steps import (
    ConfigureAppsStep,
    CreateDirectoriesStep,
    FetchRepositoryStep,
    FinalizeRebootStep,
    InstallPackagesStep,
    PackageManagerStep,
    PreflightStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        PreflightStep(),
        PackageManagerStep(),
        CreateDirectoriesStep(),
        FetchRepositoryStep(),
        InstallPackagesStep(),
        ConfigureAppsStep(),
    ]


def run(
    ctx: RunContext,
    *,
    log_path: Optional[str] = None,
    steps: Optional[Sequence[Step]] = None,
    finalize: Optional[Step] = None,
) -> PipelineResult:
    """Provision the machine, then offer a restart.

    The temporary clone is removed before the restart step runs, whatever
    happened in the pipeline.
    """

    requested_log = log_path or str(ctx.documents_dir / PATHS.log_subdir / PATHS.log_name)
    try:
        configure_logging(log_path=requested_log, console=ctx.console)
    except OSError as e:
        ctx.console.print(f"Could not open a log file: {e}", style="bold red", markup=False)
        raise PixieError(f"could not open a log file: {e}") from e

    try:
        logger.info("Pixie setup script started")
        with ctx:
            result = run_pipeline(ctx, build_steps() if steps is None else steps)

        logger.info("All tasks completed successfully!")

        final = finalize or FinalizeRebootStep()
        attempt(final.step_id, lambda: final.run(ctx), final.severity, soft_failures=ctx.soft_failures)
        return result
    except StepFailed as e:
        logger.error("Error: %s", e)
        raise
    except Exception:
        logger.exception("Pixie setup failed")
        raise
    finally:
        shutdown_logging()


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="pixie", description="Provision a fresh Windows machine.")
    p.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to configuration file")
    p.add_argument("--log", default=None, help="Path to log file (default: Documents/Pixie/log.txt)")
    p.add_argument("--unattended", action="store_true", help="Restart without prompting when done")
    p.add_argument("--dry-run", action="store_true", help="Log commands and copies without executing them")

    args = p.parse_args(argv)
    console = Console()

    try:
        config = load_config(args.config)
    except ConfigError as e:
        console.print(f"Error loading configuration from '{args.config}': {e}", style="bold red", markup=False)
        console.print("Please ensure the config file exists and is properly formatted.")
        console.print("You can specify a different config file using the --config flag.")
        return 1

    ctx = RunContext(
        config,
        console=console,
        dry_run=args.dry_run,
        unattended=True if args.unattended else None,
    )

    try:
        run(ctx, log_path=args.log)
    except PixieError:
        return 1
    except Exception:
        # already logged with its traceback by run()
        return 1
    return 0
