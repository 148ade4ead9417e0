"""Logging setup: plain text for development, JSON for log aggregators."""

import logging
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from civic_intake.config import get_settings

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """Install a single stdout handler on the ``civic_intake`` logger.

    Arguments left as None are taken from settings. Calling this again
    replaces the previous handler.
    """
    settings = get_settings()
    level = level or settings.log_level
    json_output = settings.log_json if json_output is None else json_output

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JsonFormatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    root = logging.getLogger("civic_intake")
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)
