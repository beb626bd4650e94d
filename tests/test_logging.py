"""Tests for logging setup."""

from __future__ import annotations

import logging
import sys
from typing import Iterator

import pytest

from fieldstore.logging import configure_logging


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """Restore the package logger after each test."""
    logger = logging.getLogger("fieldstore")
    saved_handlers, saved_level = logger.handlers[:], logger.level
    yield logger
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)


def test_configure_logging_installs_single_handler(package_logger: logging.Logger) -> None:
    """Test repeated setup keeps one stdout handler."""
    configure_logging("debug")
    logger = configure_logging("debug")

    assert logger is package_logger
    assert logger.level == logging.DEBUG
    ours = [h for h in logger.handlers if h.get_name() == "fieldstore.stdout"]
    assert len(ours) == 1
    assert ours[0].stream is sys.stdout


def test_configure_logging_keeps_application_handlers(
    package_logger: logging.Logger,
) -> None:
    """Test handlers installed elsewhere survive setup."""
    root = logging.getLogger()
    app_handler = logging.NullHandler()
    package_logger.addHandler(app_handler)
    root_handlers = root.handlers[:]

    configure_logging("info")

    assert app_handler in package_logger.handlers
    assert root.handlers == root_handlers


def test_configure_logging_unknown_level_defaults_to_info(
    package_logger: logging.Logger,
) -> None:
    """Test an unknown level name falls back to INFO."""
    configure_logging("chatty")

    assert package_logger.level == logging.INFO
