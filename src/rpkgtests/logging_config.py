"""Logging setup for the rpkgtests command line.

Library modules only call logging.getLogger(__name__); handlers are
installed here, once, by the CLI.
"""

import logging
import sys


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Send rpkgtests log records to stderr.

    Returns:
        The configured package logger.
    """
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger("rpkgtests")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    return logger
