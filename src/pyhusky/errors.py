"""Exceptions raised while installing hooks."""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "ConfigError",
    "EmptyUserHookError",
    "GitDirNotFoundError",
    "HuskyError",
    "InvalidUserHooksDirError",
]


class HuskyError(Exception):
    """Base class for every pyhusky failure."""


class GitDirNotFoundError(HuskyError):
    """No usable .git directory exists at or above the start directory.

    This is the only non-fatal failure: the top-level installer turns it into
    a warning so the surrounding build keeps going.
    """

    def __init__(self, start_dir: Path | str) -> None:
        self.start_dir = Path(start_dir)
        super().__init__(
            f".git directory was not found in '{start_dir}' or its parent directories"
        )


class InvalidUserHooksDirError(HuskyError):
    """The user hooks directory is missing or holds no executable files."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"User hooks directory is not found or empty: {path}")


class EmptyUserHookError(HuskyError):
    """A user hook script has no lines to adopt."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"User hook script is empty: {path}")


class ConfigError(HuskyError):
    """Feature configuration could not be understood."""
