"""Logging utilities built on top of :mod:`loguru`."""
from __future__ import annotations

import logging
import sys
from typing import Optional

from loguru import logger


def configure_logging(level: str = "INFO") -> None:
    """Send loguru output to stderr and bridge the standard logging module.

    Standard output carries the JSON documents, so diagnostics must not
    be written there.
    """

    logger.remove()
    logger.add(sys.stderr, level=level, format="{level}: {message}")

    class LoguruHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            logger.opt(depth=6, exception=record.exc_info).log(record.levelname, record.getMessage())

    logging.basicConfig(handlers=[LoguruHandler()], level=level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a standard-library logger tied to loguru."""

    return logging.getLogger(name or __name__)
