"""Shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from pyhusky.config import FEATURES_ENV, NO_DEFAULT_FEATURES_ENV


@pytest.fixture(autouse=True)
def reset_pyhusky_logger() -> Iterator[None]:
    """Undo configure_logging so caplog sees pyhusky records in every test."""
    yield
    logger = logging.getLogger("pyhusky")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's feature variables out of the tests."""
    for name in (FEATURES_ENV, NO_DEFAULT_FEATURES_ENV, "OUT_DIR"):
        monkeypatch.delenv(name, raising=False)
