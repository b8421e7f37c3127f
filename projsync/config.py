"""
Synchronizer Configuration
==========================

Settings are read from the environment (and a ``.env`` file, via
python-dotenv) into a pydantic model.

Environment variables:
    PROJSYNC_ENABLED: Enable the explorer integration (default true)
    PROJSYNC_PROJECT_ROOT: Project root (default: current working directory)
    PROJSYNC_INCLUDE: Comma separated glob allow-list (default ``*``)
    PROJSYNC_EXCLUDE: Comma separated glob deny-list
    PROJSYNC_STEP_TIMEOUT: Seconds a recursive walk waits for one file, or ``none``
"""

import fnmatch
import os
from collections.abc import Callable
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from projsync.utils.paths import is_within, normalize_path

DEFAULT_EXCLUDE = [
    ".git",
    ".git/*",
    "*/.git/*",
    ".build/*",
    "build/*",
    "DerivedData/*",
    "*.xcodeproj",
    "*.xcodeproj/*",
    "*.xcworkspace",
    "*.xcworkspace/*",
    ".DS_Store",
]


def _split_list(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


class SyncSettings(BaseModel):
    """Configuration for keeping the project manifest in sync."""

    enabled: bool = Field(True, description="Enable the explorer integration")
    project_root: Path = Field(
        default_factory=lambda: Path.cwd(), description="Root of the tracked project"
    )
    include: list[str] = Field(default_factory=lambda: ["*"], description="Glob allow-list")
    exclude: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE), description="Glob deny-list"
    )
    step_timeout: float | None = Field(
        30.0, description="Seconds a recursive walk waits for each add_file completion"
    )

    @field_validator("project_root")
    @classmethod
    def _normalize_root(cls, value: Path) -> Path:
        return Path(normalize_path(os.path.abspath(value)))

    @field_validator("step_timeout")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("step_timeout must be positive")
        return value

    @classmethod
    def from_env(cls, **overrides) -> "SyncSettings":
        """
        Build settings from ``PROJSYNC_*`` environment variables.

        Args:
            **overrides: Explicit values taking precedence over the environment

        Returns:
            SyncSettings: The loaded settings
        """
        load_dotenv()
        data: dict = {}
        if (enabled := os.getenv("PROJSYNC_ENABLED")) is not None:
            data["enabled"] = enabled.strip().lower() in ["true", "1", "yes", "on"]
        if root := os.getenv("PROJSYNC_PROJECT_ROOT"):
            data["project_root"] = Path(root)
        if (include := _split_list(os.getenv("PROJSYNC_INCLUDE"))) is not None:
            data["include"] = include
        if (exclude := _split_list(os.getenv("PROJSYNC_EXCLUDE"))) is not None:
            data["exclude"] = exclude
        timeout = os.getenv("PROJSYNC_STEP_TIMEOUT")
        if timeout is not None:
            timeout = timeout.strip().lower()
            data["step_timeout"] = None if timeout in ["", "none", "off"] else float(timeout)
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)

    def should_update_project(self, path: str, is_directory: bool = False) -> bool:
        """
        Glob allow-list check for a single path.

        Patterns are matched against the path relative to the project root
        and against its base name. Exclusions win over inclusions and apply
        to groups too; inclusions only filter files, so ``*.swift`` still
        lets directories holding Swift sources through.

        Args:
            path: Normalized absolute path
            is_directory: Whether ``path`` names a group

        Returns:
            bool: True if automatic manifest updates are allowed for ``path``
        """
        path = normalize_path(path)
        if not path:
            return False
        root = str(self.project_root)
        relative = os.path.relpath(path, root) if is_within(path, root) else path
        relative = relative.replace(os.sep, "/")
        name = os.path.basename(path)

        def matches(patterns: list[str]) -> bool:
            return any(
                fnmatch.fnmatch(relative, pattern) or fnmatch.fnmatch(name, pattern)
                for pattern in patterns
            )

        if matches(self.exclude):
            return False
        return is_directory or matches(self.include)

    def update_policy(self) -> Callable[[str, bool], bool]:
        """Get the per-path update predicate built from the glob lists."""
        return self.should_update_project


# Singleton instance
_settings = None


def get_settings() -> SyncSettings:
    """Get the singleton settings instance."""
    global _settings
    if _settings is None:
        _settings = SyncSettings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next call reloads them."""
    global _settings
    _settings = None
