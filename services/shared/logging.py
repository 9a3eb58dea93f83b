"""
Shared logging utilities for the flow tree service.

Every line carries the service name and the request_id of the build it
belongs to. Output goes to stdout; `LOG_FORMAT=JSON` switches to one JSON
object per line for log aggregation.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord has; anything else came in through `extra`.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "request_id", "service", "taskName"}

DEFAULT_REQUEST_ID = "N/A"


def _record_timestamp(record: logging.LogRecord) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()


class RequestIdFilter(logging.Filter):
    """Make sure every record has a `request_id` attribute ("N/A" if none was given)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = getattr(record, "request_id", DEFAULT_REQUEST_ID)
        return True


class JSONFormatter(logging.Formatter):
    """
    Format records as single-line JSON.

    Fields: timestamp, level, service, request_id, logger, message, plus any
    JSON-serializable values passed through `extra` (e.g. rows_count).
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _record_timestamp(record),
            "level": record.levelname,
            "service": self.service_name,
            "request_id": getattr(record, "request_id", DEFAULT_REQUEST_ID),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key in payload:
                continue
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                continue
            payload[key] = value

        return json.dumps(payload, ensure_ascii=False)


class ServiceFormatter(logging.Formatter):
    """
    Human-readable formatter for development.

    Format: [timestamp] [LEVEL] [service] [request_id=...] message
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, "request_id", DEFAULT_REQUEST_ID)
        line = (
            f"[{_record_timestamp(record)}] [{record.levelname}] "
            f"[{self.service_name}] [request_id={request_id}] {record.getMessage()}"
        )
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    service_name: str,
    log_level: str = "INFO",
    use_json: bool | None = None,
) -> logging.Logger:
    """
    Configure the root logger for a service process.

    Args:
        service_name: Name shown in every line (e.g., "flow-tree-service")
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        use_json: Force JSON output on or off. If None, LOG_FORMAT=JSON enables it.

    Returns:
        The configured root logger

    Example:
        >>> logger = setup_logging("flow-tree-service", log_level="INFO")
        >>> logger.info("Service started", extra={"request_id": "abc-123"})
        [2025-01-15T10:30:00+00:00] [INFO] [flow-tree-service] [request_id=abc-123] Service started
    """
    if use_json is None:
        use_json = os.getenv("LOG_FORMAT", "").upper() == "JSON"

    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(
        JSONFormatter(service_name) if use_json else ServiceFormatter(service_name)
    )
    root.addHandler(handler)

    return root


def get_logger(name: str) -> logging.Logger:
    """Return a module logger; handlers come from `setup_logging()`."""
    return logging.getLogger(name)
