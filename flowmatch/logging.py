"""Logging setup shared by every flowmatch module.

All module loggers live under the ``flowmatch`` namespace and inherit one
handler installed on the package logger. The handler writes to stderr so
stdout carries nothing but solver answers.
"""

import logging
import sys
from typing import Optional, TextIO

_ROOT_LOGGER_NAME = "flowmatch"

_DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Set once the package handler is installed
_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.INFO, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Install the package handler on first call and return the package logger.

    Later calls return the logger untouched, so importing many modules never
    stacks handlers.

    Args:
        level: Initial level of the package logger.
        stream: Handler target; stderr when omitted.
    """
    global _ROOT_LOGGER_CONFIGURED

    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    if _ROOT_LOGGER_CONFIGURED:
        return root_logger

    root_logger.setLevel(level)
    root_logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    root_logger.addHandler(handler)
    # pytest's caplog listens on the stdlib root logger
    root_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a flowmatch module (pass ``__name__``)."""
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the package logger and its handlers."""
    root_logger = setup_root_logger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def level_for_flags(verbose: bool = False, quiet: bool = False) -> int:
    """Map the CLI ``--verbose`` / ``--quiet`` flags to a level.

    ``verbose`` wins when both are given.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


setup_root_logger()
