"""Logging setup shared by every courselib module."""

import logging
import os
import sys

LOG_LEVEL_ENV = "COURSELIB_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Attach a stderr handler to the package logger (idempotent)."""
    global _configured
    package_logger = logging.getLogger("courselib")
    resolved = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    package_logger.setLevel(resolved)
    if _configured:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
