"""Logging configuration for the scraper."""

from __future__ import annotations

import logging
import sys

__all__ = ["setup_logging", "get_logger", "LOGGER_NAME"]

LOGGER_NAME = "catalog_scraper"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Attach a console handler to the package logger.

    Calling it again replaces the previous handler, so the CLI can be
    invoked repeatedly in one process without duplicating output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S")
    )
    logger.addHandler(handler)
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
