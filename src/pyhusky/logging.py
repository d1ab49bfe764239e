"""Logging configuration for pyhusky.

pyhusky usually runs inside a build, so stderr output reads like compiler
diagnostics (``pyhusky: warning: ...``) and carries no timestamps. Log files
keep the timestamped, logger-qualified layout.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

__all__ = ["BuildFormatter", "FILE_FORMAT", "configure_logging", "get_logger"]

PACKAGE_LOGGER = "pyhusky"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


class BuildFormatter(logging.Formatter):
    """
    One-line ``pyhusky: <severity>: <message>`` diagnostics.

    Records below WARNING are plain progress lines with no severity tag.
    Exception text, if any, follows on the next lines as usual.
    """

    def __init__(self, prefix: str = PACKAGE_LOGGER) -> None:
        super().__init__(fmt="%(message)s")
        self.prefix = prefix

    def formatMessage(self, record: logging.LogRecord) -> str:
        message = super().formatMessage(record)
        if record.levelno >= logging.WARNING:
            return f"{self.prefix}: {record.levelname.lower()}: {message}"
        return f"{self.prefix}: {message}"


def configure_logging(*, level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Configure logging for pyhusky.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown
            names fall back to INFO.
        log_file: Optional path to log file. If None, logs go to stderr in
            the build diagnostic format.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(log_level)

    # Reconfiguring replaces, never stacks, handlers
    logger.handlers.clear()

    handler: logging.Handler
    if log_file is not None:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=FILE_DATEFMT))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(BuildFormatter())

    handler.setLevel(log_level)
    logger.addHandler(handler)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return the ``pyhusky.<name>`` logger."""
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")
