from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_PATH = "config.yml"
DEFAULT_SETTINGS_SOURCE = "Pixie/Apps/Visual Studio Code/settings.json"


@dataclass(frozen=True)
class AppConfig:
    source_path: str
    dest_path: str


@dataclass(frozen=True)
class GitIdentity:
    user_name: str = ""
    user_email: str = ""


@dataclass(frozen=True)
class EditorSettings:
    extensions: tuple[str, ...] = ()
    settings_path: str = ""
    settings_source: str = DEFAULT_SETTINGS_SOURCE


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping")
    return value


def _flag(raw: Dict[str, Any], key: str, default: bool) -> bool:
    value = raw.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def _str_list(raw: Dict[str, Any], key: str) -> List[str]:
    value = raw.get(key) or []
    if not isinstance(value, list):
        raise ConfigError(f"'{key}' must be a list")
    return [str(v).strip() for v in value if str(v).strip()]


@dataclass(frozen=True)
class PixieConfig:
    raw: Dict[str, Any]

    def validate(self) -> "PixieConfig":
        """Read every section once so type errors surface at load time."""
        for name in (
            "repo_url",
            "dirs",
            "pkgs",
            "apps",
            "git",
            "vscode",
            "unattended_mode",
            "wallpapers_dir",
            "ignore_checksums",
        ):
            getattr(self, name)
        return self

    @property
    def repo_url(self) -> str:
        return str(self.raw.get("repoUrl") or "")

    @property
    def dirs(self) -> List[str]:
        return _str_list(self.raw, "dirs")

    @property
    def pkgs(self) -> List[str]:
        return _str_list(self.raw, "pkgs")

    @property
    def apps(self) -> Dict[str, AppConfig]:
        apps: Dict[str, AppConfig] = {}
        for name, entry in _section(self.raw, "apps").items():
            if not isinstance(entry, dict):
                raise ConfigError(f"apps.{name} must be a mapping")
            apps[str(name)] = AppConfig(
                source_path=str(entry.get("sourcePath") or ""),
                dest_path=str(entry.get("destPath") or ""),
            )
        return apps

    @property
    def git(self) -> GitIdentity:
        git = _section(self.raw, "git")
        return GitIdentity(
            user_name=str(git.get("userName") or ""),
            user_email=str(git.get("userEmail") or ""),
        )

    @property
    def vscode(self) -> EditorSettings:
        vscode = _section(self.raw, "vscode")
        return EditorSettings(
            extensions=tuple(_str_list(vscode, "extensions")),
            settings_path=str(vscode.get("settingsPath") or ""),
            settings_source=str(vscode.get("settingsSource") or DEFAULT_SETTINGS_SOURCE),
        )

    @property
    def unattended_mode(self) -> bool:
        return _flag(self.raw, "unattendedMode", False)

    @property
    def wallpapers_dir(self) -> str:
        return str(self.raw.get("wallpapersDir") or "Wallpapers")

    @property
    def ignore_checksums(self) -> bool:
        return _flag(self.raw, "ignoreChecksums", True)


def parse_config(text: str, *, source: str = "<string>") -> PixieConfig:
    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"could not parse config file '{source}': {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"config file '{source}' must contain a mapping/object")
    return PixieConfig(raw=raw).validate()


def load_config(path: str) -> PixieConfig:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"could not read config file '{path}': {e}") from e
    return parse_config(text, source=path)
