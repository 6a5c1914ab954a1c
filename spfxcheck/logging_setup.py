"""Central logging configuration for the CLI."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "spfxcheck"
LOG_FORMAT = "%(levelname)s | %(name)s | %(message)s"


def configure_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """Send package logs to stderr so stdout only carries the report."""

    logger = logging.getLogger(LOGGER_NAME)
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logger.setLevel(level)

    # Avoid stacking handlers when main() runs more than once in a process.
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
