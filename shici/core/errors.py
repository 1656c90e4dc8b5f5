"""Error Hierarchy — typed, categorized exceptions for every shici failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request-scoped errors carry http_status 500; the HTTP body is always empty
    - Startup errors (token, font) are never caught by the request boundary
    - to_log_extra() produces the fields surfaced by the JSON log formatter

Design Decisions:
    - Single hierarchy with ShiciError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability detail without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories."""
    VALIDATION = "validation"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Context attached to an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    url: str | None = None
    field: str | None = None
    upstream_status: int | None = None
    debug_info: dict[str, Any] | None = None


class ShiciError(Exception):
    """Base exception for all shici errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_log_extra(self) -> dict:
        """Fields passed as `extra=` to the logger."""
        extra: dict[str, Any] = {
            "error_code": self.code,
            "category": self.category.value,
        }
        if self.context.url:
            extra["url"] = self.context.url
        if self.context.field:
            extra["field"] = self.context.field
        if self.context.upstream_status is not None:
            extra["upstream_status"] = self.context.upstream_status
        return extra


# ─── Startup Errors (fatal) ─────────────────────────────────────

class TokenProvisionError(ShiciError):
    """Access token could not be read from cache nor obtained remotely."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Token provisioning failed: {message}",
            "TOKEN_PROVISION_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context,
        )


class FontLoadError(ShiciError):
    """Font file missing or not a parseable TrueType/OpenType font."""
    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cannot load font '{path}': {reason}",
            "FONT_LOAD_FAILED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL,
        )
        self.path = path


# ─── Request Errors (→ HTTP 500, empty body) ────────────────────

class PoemFetchError(ShiciError):
    """Sentence endpoint unreachable, timed out, or returned garbage."""
    def __init__(
        self,
        message: str,
        timed_out: bool = False,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Poem fetch failed: {message}",
            "POEM_FETCH_FAILED",
            ErrorCategory.TIMEOUT if timed_out else ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context,
        )
        self.timed_out = timed_out


class PoemParseError(ShiciError):
    """Sentence payload is missing a field or has the wrong type."""
    def __init__(self, field: str, expected: str):
        super().__init__(
            f"Poem payload field '{field}' missing or not {expected}",
            "POEM_PARSE_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ErrorContext(field=field),
        )
        self.field = field
        self.expected = expected


class GlyphLayoutError(ShiciError):
    """Font outlines could not be laid out for the given text."""
    def __init__(self, message: str):
        super().__init__(
            f"Glyph layout failed: {message}",
            "GLYPH_LAYOUT_FAILED", ErrorCategory.INTERNAL,
        )


class TemplateRenderError(ShiciError):
    """Page template failed to compile or render."""
    def __init__(self, message: str):
        super().__init__(
            f"Template render failed: {message}",
            "TEMPLATE_RENDER_FAILED", ErrorCategory.INTERNAL,
        )
