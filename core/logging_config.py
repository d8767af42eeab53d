"""
Core Module - Logging Setup.

============================================================
RESPONSIBILITY
============================================================
Root logger configuration for programs built on the
exchange clients (see ``exchange_services.cli``).

- One stdout handler, replacing any installed before
- ``text``: pipe-separated human-readable lines
- ``json``: one JSON object per line, safe for any message

Library modules never call this; they only log through
``logging.getLogger(__name__)``.

============================================================
"""

import json
import logging
import sys
from datetime import datetime, timezone


TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
) -> logging.Logger:
    """
    Set up root logging with a single stdout handler.

    Args:
        level: Log level name; unknown names fall back to INFO
        log_format: Output format (json or text)

    Returns:
        The exchange_services logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if log_format == "json" else logging.Formatter(TEXT_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    return logging.getLogger("exchange_services")
