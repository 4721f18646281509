from __future__ import annotations

import logging
import os
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "RECORDTABLE_LOG_FORMAT"
LOG_LEVEL_ENV = "RECORDTABLE_LOG_LEVEL"

_PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _build_formatter(format_mode: str) -> logging.Formatter:
    if format_mode == "plain":
        return logging.Formatter(_PLAIN_FORMAT)
    return jsonlogger.JsonFormatter(_JSON_FIELDS)


def configure_logging(
        level: Optional[Union[int, str]] = None,
        force_format: Optional[str] = None,
        logger_name: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for apps embedding recordtable tables

    Format selection:
        1) force_format argument ("json" or "plain") if provided
        2) env var RECORDTABLE_LOG_FORMAT
        3) default = "json"

    Level selection:
        1) level argument if provided
        2) env var RECORDTABLE_LOG_LEVEL (e.g. "DEBUG")
        3) default = INFO

    By default the root logger is configured; pass logger_name="recordtable"
    to only route this package's records.
    """
    format_mode = (force_format or os.getenv(LOG_FORMAT_ENV, "json")).lower()
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO").upper()

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setFormatter(_build_formatter(format_mode))

    # Replace existing handlers so records are not emitted twice
    logger.handlers.clear()
    logger.addHandler(handler)
    return logger
