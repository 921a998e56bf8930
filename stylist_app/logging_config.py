"""Structured JSON logging for the outfit stylist.

Every record is a single JSON line carrying the correlation id of the request
being served and, inside :func:`operation_context`, the name of the operation.
Extra fields passed through :func:`log_event` are scrubbed by
:func:`redact_for_log` first: user identifiers and image URLs are masked and
whole wardrobes are reduced to a count.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import time
import uuid
from typing import IO, Any, Dict, Iterator, Optional

CORRELATION_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("correlation_id", default=None)
CURRENT_OPERATION: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("current_operation", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))) | {"message", "asctime"}

REDACTED = "[redacted]"
_MASKED_KEYS = frozenset({"user_id", "email", "image_url"})
_COUNTED_KEYS = frozenset({"wardrobe_items", "items"})
_EMAIL = re.compile(r"[\w.\-]+@[\w.\-]+")
_URL = re.compile(r"^https?://", re.IGNORECASE)


class JsonFormatter(logging.Formatter):
    """Render records as JSON lines with correlation and operation metadata."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        message = record.getMessage()
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
            "event": getattr(record, "event", message),
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        operation = getattr(record, "operation", None) or CURRENT_OPERATION.get()
        if operation:
            entry["operation"] = operation

        for key, value in vars(record).items():
            if key in _RECORD_ATTRS or key in entry:
                continue
            entry[key] = redact_for_log(value)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(level: int | str | None = None, stream: IO[str] | None = None) -> None:
    """Route root logging through a single JSON handler.

    ``level`` falls back to ``LOG_LEVEL`` and then INFO.
    """

    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level or os.getenv("LOG_LEVEL", "INFO"))


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def _scrub_text(value: str) -> str:
    if _URL.match(value):
        return "[redacted-url]"
    return _EMAIL.sub("[redacted-email]", value)


def redact_for_log(payload: Any) -> Any:
    """Return a JSON-friendly copy of ``payload`` that is safe to log."""

    if payload is None or isinstance(payload, (bool, int, float)):
        return payload
    if isinstance(payload, str):
        return _scrub_text(payload)
    if isinstance(payload, dict):
        scrubbed: Dict[str, Any] = {}
        for key, value in payload.items():
            if key in _MASKED_KEYS:
                scrubbed[key] = REDACTED
            elif key in _COUNTED_KEYS and isinstance(value, (list, tuple)):
                scrubbed[key] = f"[{len(value)} items]"
            else:
                scrubbed[key] = redact_for_log(value)
        return scrubbed
    if isinstance(payload, (list, tuple, set, frozenset)):
        return [redact_for_log(value) for value in payload]
    return str(payload)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Adopt ``correlation_id`` if given, otherwise reuse or mint one."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current:
        return current
    minted = uuid.uuid4().hex
    CORRELATION_ID.set(minted)
    return minted


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id to the block, restoring the previous one afterwards."""

    token = CORRELATION_ID.set(correlation_id or CORRELATION_ID.get() or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with redacted structured fields."""

    exc_info = fields.pop("exc_info", None)
    correlation_id = fields.pop("correlation_id", None) or ensure_correlation_id()
    extra = {key: value for key, value in redact_for_log(fields).items() if key not in _RECORD_ATTRS}
    extra.update(event=event, correlation_id=correlation_id)
    logger.log(level, event, exc_info=exc_info, extra=extra)


@contextlib.contextmanager
def operation_context(name: str, logger: logging.Logger | None = None, **attributes: Any) -> Iterator[str]:
    """Tag records emitted inside the block with ``name`` and a correlation id.

    With a ``logger``, an ``operation_finished`` event carrying the elapsed
    milliseconds is logged at DEBUG when the block exits.
    """

    started = time.perf_counter()
    operation_token = CURRENT_OPERATION.set(name)
    try:
        with correlation_context(attributes.pop("correlation_id", None)) as correlation_id:
            try:
                yield correlation_id
            finally:
                if logger is not None:
                    log_event(
                        logger,
                        logging.DEBUG,
                        "operation_finished",
                        correlation_id=correlation_id,
                        duration_ms=round((time.perf_counter() - started) * 1000, 2),
                        **attributes,
                    )
    finally:
        CURRENT_OPERATION.reset(operation_token)


__all__ = [
    "CORRELATION_ID",
    "CURRENT_OPERATION",
    "JsonFormatter",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "operation_context",
    "redact_for_log",
]
