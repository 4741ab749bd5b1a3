from __future__ import annotations

import logging
from pathlib import Path

from ..config import AppConfig, EditorSettings, GitIdentity
from ..context import RunContext
from .assets import copy_file
from .env import PATHS
from .tools import find_tool

logger = logging.getLogger(__name__)


def _require_tool(ctx: RunContext, name: str, candidates: tuple[str, ...], label: str) -> str:
    found = find_tool(name, ctx.env, candidates)
    if found:
        return found
    if ctx.dry_run:
        return name
    raise RuntimeError(f"{label} executable not found in expected locations")


def configure_git(ctx: RunContext, identity: GitIdentity) -> None:
    """Set the global git identity. Empty fields are left untouched."""

    logger.info("Configuring global git settings...")
    if not identity.user_name and not identity.user_email:
        logger.info("No git identity configured; skipping")
        return

    git = _require_tool(ctx, "git", PATHS.git_candidates, "git")

    for key, value in (("user.name", identity.user_name), ("user.email", identity.user_email)):
        if value:
            ctx.runner.run([git, "config", "--global", key, value], env=ctx.env)

    logger.info("Git global configuration applied")


def configure_editor(ctx: RunContext, settings: EditorSettings, clone_dir: Path) -> None:
    """Install editor extensions, then copy the settings file from the clone."""

    logger.info("Configuring Visual Studio Code...")
    if settings.extensions:
        code = _require_tool(ctx, "code", PATHS.code_candidates, "VS Code")
        for extension in settings.extensions:
            ctx.runner.run([code, "--install-extension", extension], env=ctx.env)
            logger.info("Installed VSCode extension: %s", extension)

    if settings.settings_path:
        copy_file(
            clone_dir / settings.settings_source,
            ctx.expand(settings.settings_path),
            dry_run=ctx.dry_run,
        )

    logger.info("Visual Studio Code configuration applied")


def configure_app(ctx: RunContext, name: str, app: AppConfig, clone_dir: Path) -> None:
    if not app.source_path or not app.dest_path:
        raise ValueError(f"{name}: sourcePath and destPath are both required")
    copy_file(clone_dir / app.source_path, ctx.expand(app.dest_path), dry_run=ctx.dry_run)
    logger.info("Configured %s", name)
