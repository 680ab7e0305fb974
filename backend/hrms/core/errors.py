"""Error Hierarchy - typed, categorized exceptions for all HRMS failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation, duplicate and not-found errors are detected before any mutation
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with HrmsError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    employee_id: int | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


@dataclass(frozen=True)
class FieldError:
    """One field-level validation failure."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class HrmsError(Exception):
    """Base exception for all HRMS errors."""

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

    def details(self) -> list[dict] | None:
        return None

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        details = self.details()
        if details is not None:
            body["details"] = details
        return {"error": body}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(HrmsError):
    """One or more fields are malformed, missing or out of range."""
    def __init__(
        self, errors: list[FieldError], context: ErrorContext | None = None,
    ):
        message = "; ".join(f"{e.field}: {e.message}" for e in errors)
        super().__init__(
            message or "Validation failed",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.errors = list(errors)

    @classmethod
    def single(cls, field_name: str, message: str) -> "ValidationError":
        return cls([FieldError(field_name, message)])

    def details(self) -> list[dict]:
        return [e.to_dict() for e in self.errors]


class DuplicateKeyError(HrmsError):
    """A uniquely-constrained value is already held by another record."""
    def __init__(
        self, field: str, value: Any, context: ErrorContext | None = None,
    ):
        if value is None:
            message = f"{field} already exists"
        else:
            message = f"{field} already exists: {value}"
        super().__init__(
            message, "DUPLICATE_KEY", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.field = field
        self.value = value

    def details(self) -> list[dict]:
        return [{"field": self.field, "value": self.value}]


class NotFoundError(HrmsError):
    """Requested record does not exist."""
    def __init__(
        self, resource_type: str, key: Any, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{key}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.key = key


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(HrmsError):
    """Record store or file store operation failed."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
