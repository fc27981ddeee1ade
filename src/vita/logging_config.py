"""Logging setup for Vita.

Library modules only call ``logging.getLogger(__name__)``; nothing is
configured on import. Applications (and the CLI) call ``setup_logging``
once at startup.

Usage:
    from vita.logging_config import setup_logging
    setup_logging(logging.DEBUG)
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int = logging.WARNING, stream=None) -> logging.Logger:
    """Attach a single formatted handler to the ``vita`` logger.

    Calling it again only changes the level; handlers are never duplicated.

    Args:
        level: Logging level for all vita.* loggers
        stream: Output stream (default: stderr, keeping stdout for answers)

    Returns:
        The configured ``vita`` logger
    """
    logger = logging.getLogger("vita")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(handler)
        # Avoid duplicates through the root logger
        logger.propagate = False

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger
