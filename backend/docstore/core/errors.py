"""Error Hierarchy — typed, categorized exceptions for every docstore failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; storage errors (500-level) are critical
    - to_response() produces the REST envelope
    - Messages never carry filesystem details (absolute paths, errno strings)

Design Decisions:
    - Single hierarchy with DocStoreError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    document_path: str | None = None
    debug_info: dict[str, Any] | None = None


class DocStoreError(Exception):
    """Base exception for all docstore errors."""

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

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "path": self.context.document_path,
                },
            }
        }


def _context_for(path: str | None, context: ErrorContext | None) -> ErrorContext:
    ctx = context or ErrorContext()
    if path is not None:
        ctx.document_path = path
    return ctx


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidPathError(DocStoreError):
    """Sanitization rejected the requested path."""
    def __init__(self, raw_path: str, context: ErrorContext | None = None):
        super().__init__(
            "invalid path", "INVALID_PATH", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, _context_for(raw_path, context), 400,
        )
        self.raw_path = raw_path


class MissingBodyError(DocStoreError):
    """Write requested without a document payload."""
    def __init__(self, path: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            "missing JSON body", "MISSING_BODY", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, _context_for(path, context), 400,
        )


class InvalidBodyError(DocStoreError):
    """Write payload is not valid JSON."""
    def __init__(self, path: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            "request body is not valid JSON", "INVALID_BODY",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING,
            _context_for(path, context), 400,
        )


class PayloadTooLargeError(DocStoreError):
    """Write payload exceeds the configured body limit."""
    def __init__(self, limit: int, context: ErrorContext | None = None):
        super().__init__(
            f"request body exceeds {limit} bytes", "PAYLOAD_TOO_LARGE",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 413,
        )
        self.limit = limit


class ForbiddenError(DocStoreError):
    """Shared-secret check failed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "forbidden", "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class DocumentNotFoundError(DocStoreError):
    """Read target does not exist."""
    def __init__(self, path: str, context: ErrorContext | None = None):
        super().__init__(
            "not found", "DOCUMENT_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, _context_for(path, context), 404,
        )


# ─── Storage Errors (500-level) ─────────────────────────────────

class DocumentReadError(DocStoreError):
    """I/O failure or malformed JSON on an existing document."""
    def __init__(self, path: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            "read failed", "READ_FAILED", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, _context_for(path, context), 500,
        )
        self.reason = reason


class DocumentWriteError(DocStoreError):
    """I/O failure while creating directories or writing the document."""
    def __init__(self, path: str, reason: str, context: ErrorContext | None = None):
        super().__init__(
            "write failed", "WRITE_FAILED", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, _context_for(path, context), 500,
        )
        self.reason = reason
