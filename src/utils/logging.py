# src/utils/logging.py
"""Logging setup with optional JSON output and per-event correlation IDs.

Provides:
- Plain text or JSON-formatted log output
- Slack event correlation ID via ContextVar, so log lines from one event
  (including its annotation worker thread) can be grouped
"""

import json
import logging
from contextvars import ContextVar
from typing import Any

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Correlation ID of the Slack event being handled
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def set_request_id(request_id: str) -> None:
    """Set the correlation ID for the current context.

    Args:
        request_id: Slack client_msg_id or event timestamp.
    """
    request_id_var.set(request_id)


def get_request_id() -> str:
    """Get the correlation ID for the current context.

    Returns:
        Current request ID, or empty string if not set.
    """
    return request_id_var.get()


class StructuredFormatter(logging.Formatter):
    """JSON formatter with timestamp, level, logger, message and request_id."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = get_request_id()
        if request_id:
            log_data["request_id"] = request_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def configure_logging(level: str | int = logging.INFO, json_format: bool = False) -> None:
    """Configure root logging for the bot process.

    Args:
        level: Logging level name or number (default: INFO).
        json_format: Emit JSON lines via StructuredFormatter instead of text.
    """
    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logging.root.handlers = [handler]
    logging.root.setLevel(level.upper() if isinstance(level, str) else level)
