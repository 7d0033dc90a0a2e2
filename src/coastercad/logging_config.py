"""Console and file logging for the CLI and batch runs.

Library modules only create ``logging.getLogger(__name__)`` children of
the ``coastercad`` logger; nothing is emitted until an application calls
:func:`setup_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import List, Optional

PACKAGE_LOGGER = "coastercad"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def _handlers(log_file: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    return handlers


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Route coastercad log records to stdout and, optionally, ``log_file``.

    Calling this again swaps out the handlers from the previous call.
    The log file is truncated on each call.
    """

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    for old in list(package_logger.handlers):
        package_logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in _handlers(log_file):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.debug("logging to %d handler(s) at level %s",
                         len(package_logger.handlers), logging.getLevelName(level))
    return package_logger


__all__ = ['setup_logging', 'PACKAGE_LOGGER']
