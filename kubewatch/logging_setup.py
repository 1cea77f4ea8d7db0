"""Logging configuration for the kubewatch command line.

Console output uses the plain ``asctime - name - level - message`` layout by
default; ``json_output`` switches to one JSON object per line for log
collectors.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Attributes every LogRecord carries; anything else was passed via ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "taskName"}


class JsonFormatter(logging.Formatter):
    """One JSON object per line: time, level, logger, message and extras."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update((k, v) for k, v in vars(record).items() if k not in _RECORD_ATTRS)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: Optional[str] = None, json_output: bool = False) -> logging.Logger:
    """Configure the root logger.

    Args:
        level: Log level name. Defaults to ``$KW_LOG_LEVEL`` or INFO.
        json_output: Emit JSON lines instead of plain text

    Returns:
        The configured root logger

    Raises:
        ValueError: If the level name is not a valid logging level
    """
    level_name = (level or os.getenv("KW_LOG_LEVEL", "INFO")).upper()
    if level_name not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {level_name}. Must be one of {VALID_LOG_LEVELS}")

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level_name))
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    # httpx logs every request URL at INFO, which includes the access token
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root
