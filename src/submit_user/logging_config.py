"""Structured JSON logging.

Every record carries ``service`` and ``request_id`` (the Lambda
``aws_request_id`` of the current invocation). Field values submitted by
users are never logged.

Usage::

    configure_logging(level="INFO", service_name="submit-user")
    logger = get_logger(__name__)
    logger.info("Created item with id: %s", item_id)
"""

import logging
from contextvars import ContextVar
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

LOG_FIELDS = ("asctime", "levelname", "name", "message", "request_id", "service")

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestContextFilter(logging.Filter):
    def __init__(self, service_name: str):
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        # un request_id passé via `extra` reste prioritaire
        existing = getattr(record, "request_id", None)
        record.request_id = existing if existing else request_id_var.get()
        record.service = self._service_name
        return True


def create_json_formatter() -> JsonFormatter:
    format_string = " ".join(f"%({f})s" for f in LOG_FIELDS)
    return JsonFormatter(format_string, rename_fields=FIELD_RENAME_MAP)


def configure_logging(level: str = "INFO", service_name: str = "submit-user") -> None:
    """Install a single JSON handler on the root logger.

    Raises:
        ValueError: if ``level`` is not a standard level name.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {level}. Valid: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(RequestContextFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # le runtime Lambda installe déjà son propre handler
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def bind_request_id(request_id: Optional[str]):
    """Set the request id for the current invocation; returns the reset token."""
    return request_id_var.set(request_id or "")
