"""Logging setup for scripts and examples using fieldstore."""

from __future__ import annotations

import logging
import sys

_HANDLER_NAME = "fieldstore.stdout"


def configure_logging(level: str, *, logger_name: str = "fieldstore") -> logging.Logger:
    """Send ``logger_name`` records at ``level`` and above to stdout.

    Only the handler installed by an earlier call is replaced; handlers the
    application attached, including those on the root logger, are left alone.

    Args:
        level: Level name such as ``"debug"``; unknown names mean INFO
        logger_name: Logger to configure (default: the package logger)

    Returns:
        The configured logger
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(logger_name)
    logger.setLevel(numeric_level)

    for existing in [h for h in logger.handlers if h.get_name() == _HANDLER_NAME]:
        logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    logger.addHandler(handler)
    return logger
