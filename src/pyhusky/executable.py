"""Create hook files that git is allowed to execute.

Two implementations share one interface: the POSIX one sets ``0o755`` on the
created file, the default one relies on the platform treating scripts as
runnable without permission bits (Windows). Pick one with
:func:`default_file_factory` once and pass it down.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Protocol, TextIO

__all__ = [
    "DefaultExecutableFileFactory",
    "EXECUTABLE_MODE",
    "ExecutableFileFactory",
    "PosixExecutableFileFactory",
    "default_file_factory",
]

EXECUTABLE_MODE = 0o755

# r-x for owner, group and other
_READ_EXECUTE_ALL = 0o555


class ExecutableFileFactory(Protocol):
    """Platform-specific creation and detection of executable files."""

    def create(self, path: Path) -> TextIO:
        """Create or truncate ``path`` and return it open for writing text."""
        ...

    def is_executable(self, path: Path) -> bool:
        """Whether ``path`` is a regular file this platform would execute."""
        ...


def _regular_file_mode(path: Path) -> int | None:
    try:
        st = path.lstat()
    except OSError:
        return None
    if not stat.S_ISREG(st.st_mode):
        return None
    return st.st_mode


class PosixExecutableFileFactory:
    """Files created with rwxr-xr-x regardless of umask or previous mode."""

    def create(self, path: Path) -> TextIO:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, EXECUTABLE_MODE)
        try:
            # open() only applies the mode to new files, and umask trims it
            os.fchmod(fd, EXECUTABLE_MODE)
            return os.fdopen(
                fd, "w", encoding="utf-8", errors="surrogateescape", newline="\n"
            )
        except BaseException:
            os.close(fd)
            raise

    def is_executable(self, path: Path) -> bool:
        mode = _regular_file_mode(path)
        if mode is None:
            return False
        return mode & _READ_EXECUTE_ALL == _READ_EXECUTE_ALL


class DefaultExecutableFileFactory:
    """Plain file creation for platforms without POSIX permission bits."""

    def create(self, path: Path) -> TextIO:
        return open(
            path, "w", encoding="utf-8", errors="surrogateescape", newline="\n"
        )

    def is_executable(self, path: Path) -> bool:
        return _regular_file_mode(path) is not None


def default_file_factory() -> ExecutableFileFactory:
    """Return the factory matching the running platform."""
    if os.name == "posix":
        return PosixExecutableFileFactory()
    return DefaultExecutableFileFactory()
