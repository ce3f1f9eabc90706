#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/canonmark/utils/decorators.py
"""Timing helper shared by the API and the command line."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Nothing is measured unless ``logger`` is enabled for DEBUG.

    Parameters
    ----------
    logger : logging.Logger
        Logger receiving the timing message
    operation : str
        Description of the timed operation (e.g., "Parsing")

    Examples
    --------
        >>> logger = logging.getLogger(__name__)
        >>> with debug_timer(logger, "Rendering"):
        ...     text = renderer.render_to_string(doc)

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug("%s completed in %.3fs", operation, elapsed)
    else:
        yield
