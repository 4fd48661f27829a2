# MIT License
"""Logging setup for the ``cyclic_costs`` namespace.

Log records go to stderr by default so that results printed on stdout
(the comparison table of ``python -m cyclic_costs``) stay clean.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "cyclic_costs"
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# marks handlers installed here, so a repeat call only replaces its own
_OWNED = "_cyclic_costs_owned"


def _own(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    setattr(handler, _OWNED, True)
    return handler


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Configure the package logger.

    Parameters
    ----------
    level:
        Level for the package logger and its handlers.
    log_file:
        Optional path; records are also written there (file truncated).
    stream:
        Console stream, ``sys.stderr`` at call time if omitted.

    Returns
    -------
    logging.Logger
        The ``cyclic_costs`` logger.  Handlers from an earlier call are
        closed and replaced; handlers added by the application, on this
        logger or its ancestors, are left alone.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for handler in [h for h in logger.handlers if getattr(h, _OWNED, False)]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")
    logger.addHandler(_own(logging.StreamHandler(stream or sys.stderr), level, formatter))
    if log_file:
        logger.addHandler(_own(logging.FileHandler(log_file, mode="w", encoding="utf-8"), level, formatter))
    return logger
