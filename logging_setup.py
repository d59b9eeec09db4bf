#!/usr/bin/env python3
"""
logging_setup.py
================
Configures the root logger with a console handler and a rotating file
handler (``junction.log``, 1 MB, 2 backups).

Call :func:`setup_logging` once at startup before any other ``import``
triggers ``logging.getLogger()``.
"""

import logging
from logging.handlers import RotatingFileHandler

from config import ARBITER_DEBUG_LOG, LOG_FILE


def setup_logging(level: int = logging.INFO, arbiter_debug: bool = True) -> None:
    """Apply a unified log format to both console and file output.

    Parameters
    ----------
    level : int
        Minimum severity level (e.g. ``logging.DEBUG``, ``logging.INFO``).
    arbiter_debug : bool
        Also record every arbitration decision in ``arbiter_debug.log``.
    """
    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    ch.setLevel(level)

    fh = RotatingFileHandler(LOG_FILE, maxBytes=1_000_000, backupCount=2)
    fh.setFormatter(fmt)
    fh.setLevel(level)

    root.handlers.clear()
    root.addHandler(ch)
    root.addHandler(fh)

    # ── Dedicated debug file for grant / release decisions ────────────
    arbiter_logger = logging.getLogger("arbiter")
    for handler in list(arbiter_logger.handlers):
        arbiter_logger.removeHandler(handler)
        handler.close()
    if not arbiter_debug:
        arbiter_logger.setLevel(logging.NOTSET)
        return
    arbiter_logger.setLevel(logging.DEBUG)
    dfh = RotatingFileHandler(
        ARBITER_DEBUG_LOG, maxBytes=5_000_000, backupCount=2
    )
    dfh.setLevel(logging.DEBUG)
    dfh.setFormatter(fmt)
    arbiter_logger.addHandler(dfh)
