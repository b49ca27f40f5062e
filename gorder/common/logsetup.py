"""Log formatting for the services: JSON by default, text for local runs."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from typing import Any

_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}

_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}


def _level_name(record: logging.LogRecord) -> str:
    return _LEVEL_NAMES.get(record.levelno, record.levelname.lower())


def _timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="seconds")


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {key: value for key, value in vars(record).items() if key not in _RESERVED}


class JSONFormatter(logging.Formatter):
    """One JSON object per record with severity, time, message and extra fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry = _extra_fields(record)
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        entry["time"] = _timestamp(record)
        entry["message"] = record.getMessage()
        entry["severity"] = _level_name(record)
        return json.dumps(entry, default=str, sort_keys=True)


class _TextFormatter(logging.Formatter):
    """Human-readable line with the extra fields appended as key=value."""

    def format(self, record: logging.LogRecord) -> str:
        fields = " ".join(
            f"{key}={value}" for key, value in sorted(_extra_fields(record).items())
        )
        line = f"{_timestamp(record)} {record.levelname:>8} {record.getMessage()}"
        if fields:
            line = f"{line} {fields}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def set_formatter(logger: logging.Logger) -> None:
    """Give every handler of ``logger`` the service formatter, adding one if needed."""
    formatter: logging.Formatter = JSONFormatter()
    if os.environ.get("LOCAL_ENV", "") in _TRUE_VALUES:
        formatter = _TextFormatter()
    if not logger.handlers:
        logger.addHandler(logging.StreamHandler())
    for handler in logger.handlers:
        handler.setFormatter(formatter)


def init_logging() -> logging.Logger:
    """Configure the root logger at debug level and return it."""
    root = logging.getLogger()
    set_formatter(root)
    root.setLevel(logging.DEBUG)
    return root