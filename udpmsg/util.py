#!/usr/bin/env python3
"""Logging setup shared by the sender, receiver and menu."""

from __future__ import annotations
import logging                           # Python stdlib logging framework
import sys                               # For stdout handle
from logging.handlers import RotatingFileHandler

__all__ = ["LOG", "DEFAULT_LOG_FILE", "configure_logging"]

DEFAULT_LOG_FILE = "udpmsg.log"

# Unified log line format.  Example: [23:59:59] INFO     Receiving stopped
_FORMAT = logging.Formatter("[%(asctime)s] %(levelname)-8s %(message)s", "%H:%M:%S")


def configure_logging(
    log_file: str = DEFAULT_LOG_FILE,
    level: int = logging.INFO,
) -> logging.Logger:
    """Return the "udpmsg" logger with console + rotating file output.

    Safe to call again (e.g. from the CLI with another file or level): old
    handlers are closed and replaced, never stacked.
    """

    logger = logging.getLogger("udpmsg")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # ----- Console handler (stdout) -----
    sh = logging.StreamHandler(sys.stdout)

    # ----- Rotating file handler -----
    # Rotates once file hits 1 MiB, keeps 3 backups.
    fh = RotatingFileHandler(
        log_file,
        maxBytes=1_048_576,
        backupCount=3,
        encoding="utf-8",
        delay=True,                      # No file until the first record
    )

    sh.setFormatter(_FORMAT)
    fh.setFormatter(_FORMAT)

    logger.addHandler(sh)
    logger.addHandler(fh)

    return logger

# Module-level logger so that importers can simply do:
#     from udpmsg.util import LOG
LOG = configure_logging()
