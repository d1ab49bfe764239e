"""Locate the .git directory that encloses a build directory."""

from __future__ import annotations

from pathlib import Path

from pyhusky.errors import GitDirNotFoundError
from pyhusky.logging import get_logger

__all__ = ["hooks_dir", "resolve_git_dir", "user_hooks_source_dir"]

_logger = get_logger("gitdir")

_GITDIR_PREFIX = "gitdir:"


def _read_redirect(dotgit: Path) -> Path | None:
    """Read the target of a ``.git`` file (linked worktree or submodule)."""
    content = dotgit.read_text(encoding="utf-8", errors="surrogateescape")
    content = content.rstrip("\r\n")
    if content.lower().startswith(_GITDIR_PREFIX):
        content = content[len(_GITDIR_PREFIX) :].strip()
    if not content:
        return None
    # Absolute targets replace the base on join
    return dotgit.parent / content


def resolve_git_dir(start_dir: Path | str) -> Path:
    """
    Find the git control directory for ``start_dir``.

    Walks from ``start_dir`` towards the filesystem root looking for ``.git``.
    A ``.git`` directory is returned as-is. A ``.git`` file is read once and
    its content treated as the path to the control directory; the redirect is
    never followed a second time.

    Args:
        start_dir: Directory to start from. Relative paths are canonicalized
            first, which fails if they do not exist.

    Returns:
        Path to the control directory.

    Raises:
        GitDirNotFoundError: No ``.git`` was found, or a ``.git`` file points
            at something that is not a directory.
        OSError: ``start_dir`` is relative and cannot be canonicalized, or a
            ``.git`` file cannot be read.
    """
    current = Path(start_dir)
    if not current.is_absolute():
        current = current.resolve(strict=True)

    while True:
        dotgit = current / ".git"
        if dotgit.is_dir():
            _logger.debug("Found git directory %s", dotgit)
            return dotgit

        if dotgit.is_file():
            target = _read_redirect(dotgit)
            if target is None or not target.is_dir():
                _logger.debug("%s does not point at a directory", dotgit)
                raise GitDirNotFoundError(start_dir)
            _logger.debug("Followed %s to git directory %s", dotgit, target)
            return target

        parent = current.parent
        if parent == current:
            raise GitDirNotFoundError(start_dir)
        current = parent


def hooks_dir(git_dir: Path) -> Path:
    """Directory inside ``git_dir`` that git runs hooks from."""
    return git_dir / "hooks"


def user_hooks_source_dir(git_dir: Path) -> Path:
    """Directory holding operator-authored hooks for ``git_dir``'s work tree."""
    return git_dir.parent / ".pyhusky" / "hooks"
