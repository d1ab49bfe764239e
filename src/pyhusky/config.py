"""Feature selection and build inputs for an install pass."""

from __future__ import annotations

import dataclasses
import os
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from pyhusky.errors import ConfigError
from pyhusky.metadata import tool_homepage, tool_version
from pyhusky.script import STEP_CATALOG, Step, render_command

__all__ = [
    "DEFAULT_FEATURES",
    "FEATURES",
    "FEATURES_ENV",
    "HOOK_FEATURES",
    "HuskyConfig",
    "InstallContext",
    "NO_DEFAULT_FEATURES_ENV",
    "load_config",
    "parse_feature_list",
]

FEATURES_ENV = "PYHUSKY_FEATURES"
NO_DEFAULT_FEATURES_ENV = "PYHUSKY_NO_DEFAULT_FEATURES"

USER_HOOKS = "user-hooks"
RUN_FOR_ALL = "run-for-all"

# Fixed hook slots, in install order.
HOOK_FEATURES: tuple[tuple[str, str], ...] = (
    ("prepush-hook", "pre-push"),
    ("precommit-hook", "pre-commit"),
    ("postmerge-hook", "post-merge"),
)

FEATURES: frozenset[str] = frozenset(
    {USER_HOOKS, RUN_FOR_ALL}
    | {feature for feature, _ in HOOK_FEATURES}
    | {step.feature for step in STEP_CATALOG}
)

DEFAULT_FEATURES: frozenset[str] = frozenset(
    {"prepush-hook", "run-cargo-test", RUN_FOR_ALL}
)

_TRUTHY = {"1", "true", "yes", "on"}
_SEPARATORS = re.compile(r"[\s,]+")


@dataclasses.dataclass(frozen=True)
class HuskyConfig:
    """Enabled features for one install pass."""

    features: frozenset[str] = DEFAULT_FEATURES

    @property
    def user_hooks(self) -> bool:
        return USER_HOOKS in self.features

    @property
    def run_for_all(self) -> bool:
        return RUN_FOR_ALL in self.features

    @property
    def hook_names(self) -> tuple[str, ...]:
        """Enabled fixed hook slots, in install order."""
        return tuple(hook for feature, hook in HOOK_FEATURES if feature in self.features)

    @property
    def steps(self) -> tuple[Step, ...]:
        """Enabled steps, in catalog order."""
        return tuple(step for step in STEP_CATALOG if step.feature in self.features)

    @property
    def commands(self) -> tuple[str, ...]:
        return tuple(
            render_command(step, run_for_all=self.run_for_all) for step in self.steps
        )


@dataclasses.dataclass(frozen=True)
class InstallContext:
    """Values the build hands to pyhusky."""

    out_dir: Path
    source_dir: Path
    version: str
    homepage: str

    @classmethod
    def from_environment(
        cls,
        *,
        out_dir: Path | None = None,
        source_dir: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> InstallContext:
        """
        Build a context, filling gaps from the environment.

        ``out_dir`` falls back to ``$OUT_DIR`` and then the current directory;
        ``source_dir`` falls back to the current directory. Version and
        homepage come from the installed pyhusky.
        """
        env = os.environ if environ is None else environ
        if out_dir is None:
            out_dir = Path(env["OUT_DIR"]) if env.get("OUT_DIR") else Path.cwd()
        if source_dir is None:
            source_dir = Path.cwd()
        return cls(
            out_dir=out_dir,
            source_dir=source_dir,
            version=tool_version(),
            homepage=tool_homepage(),
        )


def parse_feature_list(value: str) -> list[str]:
    """Split a comma or whitespace separated feature list."""
    return [item for item in _SEPARATORS.split(value) if item]


def _validate(features: Iterable[str], source: str) -> set[str]:
    names = set(features)
    unknown = sorted(names - FEATURES)
    if unknown:
        raise ConfigError(f"Unknown feature(s) in {source}: {', '.join(unknown)}")
    return names


def _load_config_file(path: Path) -> dict[str, Any]:
    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ConfigError(f"Config file is not valid UTF-8: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")

    features = content.get("features", [])
    if isinstance(features, str):
        features = parse_feature_list(features)
    if not isinstance(features, list) or not all(isinstance(f, str) for f in features):
        raise ConfigError(f"'features' must be a list of strings: {path}")

    default_features = content.get("default-features", True)
    if not isinstance(default_features, bool):
        raise ConfigError(f"'default-features' must be a boolean: {path}")

    return {"features": features, "default-features": default_features}


def load_config(
    *,
    config_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
    features: Iterable[str] = (),
    default_features: bool = True,
) -> HuskyConfig:
    """
    Merge feature selections into a HuskyConfig.

    Sources, in order: the default feature set, ``config_file``, the
    ``PYHUSKY_FEATURES`` variable, then ``features``. Defaults are dropped if
    any source turns them off.

    Args:
        config_file: Optional YAML file with ``features`` and
            ``default-features`` keys.
        environ: Environment to read; defaults to ``os.environ``.
        features: Extra features, typically from the command line.
        default_features: Whether to start from DEFAULT_FEATURES.

    Returns:
        The merged configuration.

    Raises:
        ConfigError: An unknown feature, or a config file that is malformed
            or not UTF-8.
        OSError: ``config_file`` cannot be read.
    """
    env = os.environ if environ is None else environ
    selected: set[str] = set()

    if config_file is not None:
        file_config = _load_config_file(config_file)
        selected |= _validate(file_config["features"], str(config_file))
        default_features = default_features and file_config["default-features"]

    if env.get(NO_DEFAULT_FEATURES_ENV, "").strip().lower() in _TRUTHY:
        default_features = False

    selected |= _validate(parse_feature_list(env.get(FEATURES_ENV, "")), FEATURES_ENV)
    selected |= _validate(features, "arguments")

    if default_features:
        selected |= DEFAULT_FEATURES

    return HuskyConfig(features=frozenset(selected))
