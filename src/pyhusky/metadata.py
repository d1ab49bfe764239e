"""Provenance metadata stamped into every hook pyhusky writes."""

from __future__ import annotations

from pyhusky import __version__

__all__ = [
    "HOMEPAGE",
    "MARKER_LINE_INDEX",
    "TOOL_NAME",
    "ownership_fingerprint",
    "provenance_marker",
    "tool_homepage",
    "tool_version",
    "version_fingerprint",
]

TOOL_NAME = "pyhusky"
HOMEPAGE = "https://pypi.org/project/pyhusky/"

# 0-indexed line of a hook script that carries the provenance marker.
# Hooks already on disk depend on this offset; do not move it.
MARKER_LINE_INDEX = 2


def tool_version() -> str:
    return __version__


def tool_homepage() -> str:
    return HOMEPAGE


def ownership_fingerprint() -> str:
    """Text present on the marker line of any hook written by pyhusky."""
    return f"This hook was set by {TOOL_NAME}"


def version_fingerprint(version: str) -> str:
    """Text present on the marker line of a hook written by ``version``."""
    return f"{ownership_fingerprint()} v{version}:"


def provenance_marker(version: str, homepage: str) -> str:
    """
    Build the provenance marker (without the leading comment character).

    Args:
        version: Version of pyhusky writing the hook.
        homepage: Homepage URL recorded alongside the version.

    Returns:
        Marker text, e.g. ``This hook was set by pyhusky v0.1.0: <homepage>``.
    """
    return f"{ownership_fingerprint()} v{version}: {homepage}"
