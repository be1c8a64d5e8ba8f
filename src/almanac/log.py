"""Logging setup shared by the MCP server and the maintenance commands."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the ``almanac`` logger with a single stderr handler.

    stdout is left untouched because the stdio MCP transport owns it.
    """
    logger = logging.getLogger("almanac")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Clear existing handlers so repeated calls do not duplicate output
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    return logger
