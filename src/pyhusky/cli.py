"""Command-line interface for pyhusky."""

from __future__ import annotations

import argparse
import dataclasses
from collections.abc import Sequence
from pathlib import Path

from pyhusky.config import InstallContext, load_config, parse_feature_list
from pyhusky.errors import HuskyError
from pyhusky.installer import run_install
from pyhusky.logging import configure_logging, get_logger
from pyhusky.types import HookOutcome


@dataclasses.dataclass(frozen=True)
class CliArgs:
    """Parsed command-line arguments."""

    out_dir: Path | None
    source_dir: Path | None
    config_file: Path | None
    features: tuple[str, ...]
    default_features: bool
    log_level: str
    log_file: Path | None
    debug: bool


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    """
    Parse command-line arguments.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Parsed arguments as CliArgs dataclass.
    """
    parser = argparse.ArgumentParser(
        prog="pyhusky",
        description="Install git hooks into the repository enclosing a build",
    )

    parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Directory to search upward from for .git (default: $OUT_DIR or cwd)",
    )

    parser.add_argument(
        "--source-dir",
        type=Path,
        default=None,
        help="Project directory recorded in generated hooks (default: cwd)",
    )

    parser.add_argument(
        "--config",
        dest="config_file",
        type=Path,
        default=None,
        help="YAML file selecting features",
    )

    parser.add_argument(
        "--features",
        action="append",
        default=[],
        help="Comma separated features to enable (repeatable)",
    )

    parser.add_argument(
        "--no-default-features",
        action="store_true",
        help="Do not enable the default features",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level (default: INFO, or DEBUG if --debug is set)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path (default: stderr)",
    )

    parser.add_argument(
        "-v",
        "--debug",
        action="store_true",
        help="Enable debug mode (sets log level to DEBUG unless --log-level is specified)",
    )

    args = parser.parse_args(argv)

    # Determine log level: explicit --log-level wins, otherwise --debug sets DEBUG
    if args.log_level is not None:
        log_level = args.log_level
    elif args.debug:
        log_level = "DEBUG"
    else:
        log_level = "INFO"

    features = tuple(
        feature for value in args.features for feature in parse_feature_list(value)
    )

    return CliArgs(
        out_dir=args.out_dir,
        source_dir=args.source_dir,
        config_file=args.config_file,
        features=features,
        default_features=not args.no_default_features,
        log_level=log_level,
        log_file=args.log_file,
        debug=args.debug,
    )


def run(argv: Sequence[str] | None = None) -> int:
    """
    Install the configured hooks.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success or a skipped install, 1 for error).
    """
    args = parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger("main")
    logger.debug("Configuration: %s", args)

    try:
        config = load_config(
            config_file=args.config_file,
            features=args.features,
            default_features=args.default_features,
        )
        context = InstallContext.from_environment(
            out_dir=args.out_dir, source_dir=args.source_dir
        )
        logger.debug("Enabled features: %s", ", ".join(sorted(config.features)))

        results = run_install(config, context)

    except (HuskyError, OSError) as e:
        logger.error("Hook installation failed: %s", e)
        return 1

    written = sum(1 for r in results if r.outcome is HookOutcome.WRITTEN)
    logger.info("Installed %d of %d hook(s)", written, len(results))
    return 0
