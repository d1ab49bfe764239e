"""Install pyhusky's hooks into the enclosing git repository."""

from __future__ import annotations

from pathlib import Path

from pyhusky.config import HuskyConfig, InstallContext
from pyhusky.errors import GitDirNotFoundError, InvalidUserHooksDirError
from pyhusky.executable import ExecutableFileFactory, default_file_factory
from pyhusky.gitdir import hooks_dir, resolve_git_dir, user_hooks_source_dir
from pyhusky.logging import get_logger
from pyhusky.ownership import already_owned_or_foreign
from pyhusky.script import render_script
from pyhusky.types import HookOutcome, HookResult
from pyhusky.user_hooks import adopt_user_hook, find_user_hooks

__all__ = [
    "install",
    "install_hook",
    "install_user_hooks",
    "run_install",
]

_logger = get_logger("installer")


def install_hook(
    name: str,
    *,
    git_dir: Path,
    config: HuskyConfig,
    context: InstallContext,
    factory: ExecutableFileFactory,
) -> HookResult:
    """Write the generated ``name`` hook unless something else owns the slot."""
    target_dir = hooks_dir(git_dir)
    hook_path = target_dir / name

    if already_owned_or_foreign(hook_path, version=context.version):
        _logger.info("Leaving existing hook %s untouched", hook_path)
        return HookResult(path=hook_path, outcome=HookOutcome.SKIPPED)

    script = render_script(
        config.commands,
        version=context.version,
        homepage=context.homepage,
        source_dir=context.source_dir,
        output_dir=context.out_dir,
    )

    target_dir.mkdir(parents=True, exist_ok=True)
    with factory.create(hook_path) as f:
        f.write(script)

    _logger.info("Installed %s hook at %s", name, hook_path)
    return HookResult(path=hook_path, outcome=HookOutcome.WRITTEN)


def install_user_hooks(
    *,
    git_dir: Path,
    context: InstallContext,
    factory: ExecutableFileFactory,
) -> list[HookResult]:
    """
    Adopt every executable script under ``.pyhusky/hooks``.

    Raises:
        InvalidUserHooksDirError: The directory is missing or has no
            executable files.
        EmptyUserHookError: One of the scripts is empty.
    """
    source_dir = user_hooks_source_dir(git_dir)
    if not source_dir.is_dir():
        raise InvalidUserHooksDirError(source_dir)

    sources = find_user_hooks(source_dir, factory)
    if not sources:
        raise InvalidUserHooksDirError(source_dir)

    target_dir = hooks_dir(git_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    return [
        adopt_user_hook(
            src,
            target_dir,
            version=context.version,
            homepage=context.homepage,
            factory=factory,
        )
        for src in sources
    ]


def install(
    config: HuskyConfig,
    context: InstallContext,
    *,
    factory: ExecutableFileFactory | None = None,
) -> list[HookResult]:
    """
    Run one install pass.

    User-hooks mode takes priority; otherwise each enabled fixed hook
    (pre-push, pre-commit, post-merge) is generated in that order. The first
    failure aborts the pass; hooks written before it stay in place.

    Args:
        config: Enabled features.
        context: Build inputs (output directory, version, homepage).
        factory: Executable file factory; defaults to the platform's.

    Returns:
        One result per hook slot that was considered.

    Raises:
        GitDirNotFoundError: No git control directory encloses
            ``context.out_dir``.
        HuskyError: Invalid or empty user hooks.
        OSError: Any file system failure.
    """
    if factory is None:
        factory = default_file_factory()

    git_dir = resolve_git_dir(context.out_dir)

    if config.user_hooks:
        return install_user_hooks(git_dir=git_dir, context=context, factory=factory)

    return [
        install_hook(
            name, git_dir=git_dir, config=config, context=context, factory=factory
        )
        for name in config.hook_names
    ]


def run_install(
    config: HuskyConfig,
    context: InstallContext,
    *,
    factory: ExecutableFileFactory | None = None,
) -> list[HookResult]:
    """Like :func:`install`, but a missing git directory only logs a warning."""
    try:
        return install(config, context, factory=factory)
    except GitDirNotFoundError as e:
        _logger.warning("%s; skipping hook installation", e)
        return []
