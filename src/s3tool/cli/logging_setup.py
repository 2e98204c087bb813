"""Logging configuration for the s3tool CLI."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Send s3tool logs to stderr, keeping stdout for command output.

    Args:
        verbose: Log at DEBUG level instead of WARNING.
    """
    root_logger = logging.getLogger("s3tool")
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
