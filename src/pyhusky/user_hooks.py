"""Adopt hook scripts that the project keeps in ``.pyhusky/hooks``."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from pyhusky.errors import EmptyUserHookError
from pyhusky.executable import ExecutableFileFactory
from pyhusky.logging import get_logger
from pyhusky.metadata import provenance_marker
from pyhusky.ownership import already_owned_or_foreign
from pyhusky.types import HookOutcome, HookResult

__all__ = [
    "adopt_user_hook",
    "find_user_hooks",
    "insert_provenance_header",
    "read_hook_lines",
]

_logger = get_logger("user_hooks")


def read_hook_lines(path: Path) -> list[str]:
    """
    Read ``path`` as a list of lines without their ``\n`` or ``\r\n`` endings.

    Only ``\n`` ends a line, so a lone ``\r`` stays part of the line. Bytes
    that are not UTF-8 are kept as surrogate escapes and written back
    unchanged by the executable file factories.
    """
    lines = []
    with open(path, encoding="utf-8", errors="surrogateescape", newline="\n") as f:
        for line in f:
            if line.endswith("\r\n"):
                line = line[:-2]
            elif line.endswith("\n"):
                line = line[:-1]
            lines.append(line)
    return lines


def insert_provenance_header(lines: Sequence[str], marker: str) -> list[str]:
    """
    Splice the provenance header into a user hook.

    The marker must end up on the third line. A script without a shebang gets
    a bare ``#`` in the shebang slot, so three lines are added; a script with
    one gets two.
    """
    result = list(lines)
    if not result or not result[0].startswith("#!"):
        result.insert(0, "#")
    result.insert(1, "#")
    result.insert(2, f"# {marker}")
    return result


def find_user_hooks(directory: Path, factory: ExecutableFileFactory) -> list[Path]:
    """List the executable regular files in ``directory``, sorted by name."""
    return sorted(path for path in directory.iterdir() if factory.is_executable(path))


def adopt_user_hook(
    src: Path,
    hooks_dir: Path,
    *,
    version: str,
    homepage: str,
    factory: ExecutableFileFactory,
) -> HookResult:
    """
    Copy the user hook ``src`` into ``hooks_dir`` with a provenance header.

    Args:
        src: User hook script; its file name is the hook name.
        hooks_dir: Directory git runs hooks from.
        version: pyhusky version recorded in the header.
        homepage: Homepage recorded in the header.
        factory: Creates the destination file with execute permission.

    Returns:
        Where the hook went and whether it was written.

    Raises:
        EmptyUserHookError: ``src`` has no lines.
        OSError: ``src`` cannot be read or the destination cannot be written.
    """
    dst = hooks_dir / src.name
    if already_owned_or_foreign(dst, version=version):
        _logger.info("Leaving existing hook %s untouched", dst)
        return HookResult(path=dst, outcome=HookOutcome.SKIPPED)

    lines = read_hook_lines(src)
    if not lines:
        raise EmptyUserHookError(src)

    lines = insert_provenance_header(lines, provenance_marker(version, homepage))

    with factory.create(dst) as f:
        for line in lines:
            f.write(line + "\n")

    _logger.info("Installed user hook %s from %s", dst, src)
    return HookResult(path=dst, outcome=HookOutcome.WRITTEN)
