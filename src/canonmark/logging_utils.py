#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/logging_utils.py
"""Logging setup for the canonmark command line.

Library modules only create module-level loggers under the ``canonmark``
namespace; handlers are installed here, on the package logger, by entry
points. The root logger is left alone so embedding applications keep their
own configuration.

"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "canonmark"

_CONSOLE_FORMAT = "canonmark: %(levelname)s: %(message)s"
_TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name or number into a logging level; unknown names give INFO."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install stderr (and optionally file) handlers on the package logger.

    Handlers from an earlier call are replaced, so repeated calls in one
    process (for instance several ``main()`` invocations) do not duplicate
    output.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "INFO")
    log_file : str, optional
        File that receives a copy of the log output
    trace_mode : bool, default False
        Include timestamps and logger names in every record

    Returns
    -------
    logging.Logger
        The configured ``canonmark`` logger

    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(resolve_log_level(log_level))
    logger.propagate = False

    if trace_mode:
        formatter = logging.Formatter(_TRACE_FORMAT, datefmt=_TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(_CONSOLE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            logger.debug("Logging to file: %s", log_file)

    return logger
