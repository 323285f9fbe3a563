"""Logging setup for the launcher's own diagnostics."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "ai_gateway_launcher"
LOG_FORMAT = "[%(name)s] %(levelname)s: %(message)s"


def configure_logging(level: str = "WARNING", stream: Optional[TextIO] = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger.

    Safe to call more than once; the previous handler is replaced so repeated
    calls never duplicate output. Stdout is left alone since it belongs to the
    delegate.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_launcher_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._launcher_handler = True  # type: ignore[attr-defined]

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False
    return logger
