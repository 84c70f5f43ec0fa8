"""Logging configuration for the fastaidx package.

All fastaidx modules log through child loggers of the ``fastaidx`` package
logger. Verbosity is controlled through an environment variable or by
calling :func:`setup_logging` directly.

Example:
    Set logging level via environment variable::

        export FASTAIDX_LOG_LEVEL=DEBUG

    Or configure programmatically::

        from fastaidx.logging_config import setup_logging
        setup_logging(level="DEBUG")
"""

import logging
import os
import sys
from typing import Optional


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SIMPLE_FORMAT = "%(levelname)s: %(message)s"

logger = logging.getLogger("fastaidx")


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    stream: Optional[object] = None,
) -> logging.Logger:
    """Configure logging for the fastaidx package.

    Can be called repeatedly; each call replaces the handler installed by
    the previous one.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to the FASTAIDX_LOG_LEVEL environment variable, or INFO.
        format_string: Custom format string. Defaults to a simple format at
            INFO and above, and a detailed format below.
        stream: Output stream for logs. Defaults to sys.stderr.

    Returns:
        The configured ``fastaidx`` logger.

    Example:
        >>> logger = setup_logging(level="DEBUG")
        >>> logger.debug("seek arithmetic enabled")
    """
    if level is None:
        level = os.getenv("FASTAIDX_LOG_LEVEL", "INFO")
    level = level.upper()

    numeric_level = getattr(logging, level, logging.INFO)

    if format_string is None:
        format_string = SIMPLE_FORMAT if numeric_level >= logging.INFO else DEFAULT_FORMAT

    logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(format_string))

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger for use within the fastaidx package.

    Args:
        name: Optional sub-logger name, e.g. ``"builder"`` gives
            ``fastaidx.builder``.

    Returns:
        A logging.Logger instance.
    """
    if name:
        return logging.getLogger(f"fastaidx.{name}")
    return logger


# Initialize logging with defaults on module import
setup_logging()
