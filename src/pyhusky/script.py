"""Render the shell script pyhusky installs for its built-in hooks."""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from pathlib import Path

from pyhusky.metadata import provenance_marker

__all__ = [
    "STEP_CATALOG",
    "Step",
    "render_command",
    "render_script",
]


@dataclasses.dataclass(frozen=True)
class Step:
    """One command a generated hook can run."""

    name: str
    feature: str
    command: str
    subflags: str | None = None


# Hooks run steps in this order no matter how features were listed.
STEP_CATALOG: tuple[Step, ...] = (
    Step(name="test", feature="run-cargo-test", command="cargo test"),
    Step(name="check", feature="run-cargo-check", command="cargo check"),
    Step(
        name="lint",
        feature="run-cargo-clippy",
        command="cargo clippy",
        subflags="-D warnings",
    ),
    Step(
        name="format-check",
        feature="run-cargo-fmt",
        command="cargo fmt",
        subflags="--check",
    ),
)


def render_command(step: Step, *, run_for_all: bool) -> str:
    """Build the command line for ``step``."""
    command = step.command
    if run_for_all:
        command += " --all"
    if step.subflags is not None:
        command += f" -- {step.subflags}"
    return command


def render_script(
    commands: Sequence[str],
    *,
    version: str,
    homepage: str,
    source_dir: Path | str,
    output_dir: Path | str,
) -> str:
    """
    Render a hook script that runs ``commands`` in order.

    The third line carries the provenance marker that
    :func:`pyhusky.ownership.already_owned_or_foreign` looks for.

    Args:
        commands: Command lines to run, already rendered and ordered.
        version: pyhusky version recorded in the marker.
        homepage: Homepage recorded in the marker.
        source_dir: Project directory the hook was generated for.
        output_dir: Build output directory the install ran from.

    Returns:
        Script text ending with a newline.
    """
    lines = [
        "#!/bin/sh",
        "#",
        f"# {provenance_marker(version, homepage)}",
        f"# Generated by pyhusky from {source_dir}",
        f"# Output at {output_dir}",
        "#",
        "",
        "set -e",
    ]
    if commands:
        lines.append("")
    for command in commands:
        lines.append(f"echo '+{command}'")
        lines.append(command)
    return "\n".join(lines) + "\n"
