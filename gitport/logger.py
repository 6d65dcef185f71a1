"""Logging configuration for the sidecar process.

Standard output carries protocol frames, so every log record goes to
standard error.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TextIO


class SimpleFormatter(logging.Formatter):
    """Format: LEVEL [timestamp] logger: message"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%dT%H:%M:%S")
        log_line = f"{record.levelname} [{timestamp}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            log_line += "\n" + self.formatException(record.exc_info)
        return log_line


def setup_logging(log_level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure the root logger with a single stderr handler.

    Parameters
    ----------
    log_level:
        Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        Unknown names fall back to INFO.
    stream:
        Destination stream.  Defaults to :data:`sys.stderr`; never stdout.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(SimpleFormatter())
    root_logger.addHandler(handler)

    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(numeric_level))
