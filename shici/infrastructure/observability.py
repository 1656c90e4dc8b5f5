"""Structured Logging — JSON formatter, secret redaction and setup.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (error_code, field, path, upstream_status) surfaced when present
    - JSON format in production, human-readable in development
    - Once redact_secret(token) is installed, the token never appears in a formatted message

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency
    - setup_logging called once on startup via lifespan; redaction added after the token exists
"""

import logging
import json
from datetime import datetime, timezone
from typing import Iterable

REDACTED = "[redacted]"

_EXTRA_KEYS = (
    "error_code", "category", "field", "url", "path",
    "upstream_status", "status_code", "token_source", "font_family",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, CJK kept readable."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update(
            (key, record.__dict__[key])
            for key in _EXTRA_KEYS
            if record.__dict__.get(key) is not None
        )
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class SecretRedactionFilter(logging.Filter):
    """Replaces a secret in the rendered message and in string extras."""

    def __init__(self, secret: str):
        super().__init__()
        self.secret = secret

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if self.secret in message:
            record.msg = message.replace(self.secret, REDACTED)
            record.args = None
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if isinstance(val, str) and self.secret in val:
                record.__dict__[key] = val.replace(self.secret, REDACTED)
        return True


def redact_secret(
    secret: str, handlers: Iterable[logging.Handler] | None = None,
) -> None:
    """Attach a redaction filter for `secret` to the given (default: root) handlers."""
    if not secret:
        return
    for handler in (logging.root.handlers if handlers is None else handlers):
        handler.addFilter(SecretRedactionFilter(secret))


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
