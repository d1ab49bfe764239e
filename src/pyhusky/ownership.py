"""Decide whether an existing hook file may be replaced."""

from __future__ import annotations

from pathlib import Path

from pyhusky.logging import get_logger
from pyhusky.metadata import MARKER_LINE_INDEX, ownership_fingerprint, version_fingerprint

__all__ = ["already_owned_or_foreign"]

_logger = get_logger("ownership")


def already_owned_or_foreign(path: Path, *, version: str) -> bool:
    """
    Check whether the hook at ``path`` must be left alone.

    Only the marker line (the third line) is inspected:

    - a file that cannot be opened is absent for our purposes, so it may be
      written;
    - a file shorter than three lines, or whose marker line lacks the
      pyhusky fingerprint, belongs to someone else;
    - a file stamped by another pyhusky version is kept as it is;
    - a file stamped by ``version`` may be rewritten, producing the same
      content again.

    Args:
        path: Hook file to inspect.
        version: Version of pyhusky about to write the hook.

    Returns:
        True if the file must not be touched, False if it is safe to write.
    """
    try:
        f = open(path, "rb")
    except OSError:
        return False

    # Bytes past the marker line are never decoded
    with f:
        try:
            raw_lines = [f.readline() for _ in range(MARKER_LINE_INDEX + 1)]
        except OSError:
            _logger.debug("Could not read %s, treating it as replaceable", path)
            return False

    raw_marker_line = raw_lines[MARKER_LINE_INDEX]
    if not raw_marker_line:
        _logger.debug("%s is too short to carry a marker", path)
        return True

    try:
        marker_line = raw_marker_line.decode("utf-8")
    except UnicodeDecodeError:
        # Unreadable marker line: regenerate and let the write surface errors
        _logger.debug("Could not decode the marker line of %s", path)
        return False

    if ownership_fingerprint() not in marker_line:
        _logger.debug("%s was not written by pyhusky", path)
        return True

    if version_fingerprint(version) not in marker_line:
        _logger.debug("%s was written by another pyhusky version", path)
        return True

    return False
