"""
Logging setup for holidayengine.

Library modules only create loggers (``logging.getLogger(__name__)``) and
never configure handlers. Applications that want output call
``configure_logging()``, optionally with structured JSON lines.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Optional

LOGGER_NAME = "holidayengine"

# LogRecord attributes copied into JSON output when passed via ``extra=``
_EXTRA_FIELDS = ("jurisdiction", "year", "locale", "timezone", "holiday_count", "duration_ms")


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def configure_logging(level: str = "INFO", json_output: bool = False,
                      handler: Optional[logging.Handler] = None) -> logging.Logger:
    """
    Attach a handler to the holidayengine logger.

    Calling it again replaces the handler installed by the previous call
    instead of stacking a second one.

    Args:
        level: Level name (DEBUG, INFO, ...)
        json_output: Use JSONFormatter instead of a plain text format
        handler: Handler to install (defaults to a StreamHandler)
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for existing in list(logger.handlers):
        if getattr(existing, "_holidayengine_handler", False):
            logger.removeHandler(existing)

    handler = handler or logging.StreamHandler()
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    handler._holidayengine_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
