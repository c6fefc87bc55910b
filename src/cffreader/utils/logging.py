"""Logging setup for cffreader.

Loggers write to stdout, as JSON lines or plain text depending on
``settings.log_format``. Read failures attach their error kind and the
offending CFF key through ``extra=``; the JSON formatter lifts those into
the log line.
"""

import json
import logging
import sys
from typing import Any, Dict

from ..config.settings import settings

# Attributes set through ``extra=`` that end up in JSON log lines.
CONTEXT_FIELDS = ("cff_source", "error_kind", "cff_key")


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, ensure_ascii=False)


def get_logger(name: str) -> logging.Logger:
    """Return ``name``'s logger, attaching a stdout handler on first use."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if settings.log_format == "json":
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    return logger
