from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Final, Optional

from .constants import LOGGER_NAME, TRANSACTION_LOGGER_NAME

_STREAM_FORMAT: Final[str] = "[%(asctime)s] %(levelname)s %(message)s"
_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
# Marks handlers installed here so repeated setup replaces rather than stacks them
_HANDLER_MARKER: Final[str] = "_ens_runner_handler"


class FieldsFormatter(logging.Formatter):
    """Stream formatter that appends structured fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        fields = getattr(record, "fields", None)
        if fields:
            text += " " + " ".join(f"{key}={value}" for key, value in fields.items())
        return text


class JsonLinesFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, _DATE_FORMAT),
            "level": record.levelname.lower(),
            "msg": record.getMessage(),
        }
        payload.update(getattr(record, "fields", None) or {})
        return json.dumps(payload, default=str)


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)


def setup_logging(log_file: Optional[Path] = None, verbose: bool = False) -> logging.Logger:
    """Configure the package logger for one CLI invocation."""

    logger = get_logger()
    if not any(isinstance(handler, logging.NullHandler) for handler in logger.handlers):
        logger.addHandler(logging.NullHandler())
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JsonLinesFormatter())
        # The file holds transaction records only, never diagnostics
        file_handler.addFilter(logging.Filter(TRANSACTION_LOGGER_NAME))
        setattr(file_handler, _HANDLER_MARKER, True)
        logger.addHandler(file_handler)

    if verbose:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(FieldsFormatter(_STREAM_FORMAT, _DATE_FORMAT))
        setattr(stream_handler, _HANDLER_MARKER, True)
        logger.addHandler(stream_handler)

    logger.setLevel(logging.INFO)
    return logger


def log_transaction(fields: Dict[str, Any]) -> None:
    """Emit the single structured record describing a sent transaction."""

    get_logger(TRANSACTION_LOGGER_NAME).info("success", extra={"fields": dict(fields)})
