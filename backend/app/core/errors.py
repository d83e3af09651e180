"""Error Hierarchy — typed, categorized exceptions for form builder failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - Core transitions never raise these; they return error dicts that the shell
      converts with from_error_dict()

Design Decisions:
    - Single hierarchy with FormBuilderError base: the FastAPI global handler catches all
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    editor_id: str | None = None
    form_id: str | None = None
    field_id: str | None = None
    debug_info: dict[str, Any] | None = None


class FormBuilderError(Exception):
    """Base exception for all form builder errors."""

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
        self.notifications: list[dict[str, str]] = []

    def to_response(self) -> dict:
        """Convert to standardized REST error response.

        Includes a top-level "notifications" list when the rejected operation
        emitted any.
        """
        response = {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "editor_id": self.context.editor_id,
                    "form_id": self.context.form_id,
                    "field_id": self.context.field_id,
                },
            }
        }
        if self.notifications:
            response["notifications"] = self.notifications
        return response


# ─── Domain Errors (400-level) ──────────────────────────────────

class KnowledgeBaseRequiredError(FormBuilderError):
    """Chat field present without a knowledge base."""
    def __init__(self, message: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message or "Knowledge base is required for forms with chat fields.",
            "KNOWLEDGE_BASE_REQUIRED", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class QuotaExceededError(FormBuilderError):
    """Plan form limit reached."""
    def __init__(self, message: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message or "Form limit reached for the current plan.",
            "QUOTA_EXCEEDED", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 403,
        )


class FieldTypeUnsupportedError(FormBuilderError):
    """Field type outside the supported enumeration."""
    def __init__(self, field_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"Field type '{field_type}' is not supported.",
            "FIELD_TYPE_UNSUPPORTED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field_type = field_type


class DuplicateFieldIdError(FormBuilderError):
    """Field list contains the same id twice."""
    def __init__(self, field_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_id = field_id
        super().__init__(
            f"Field id '{field_id}' is already used in this form.",
            "DUPLICATE_FIELD_ID", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )


class InvalidRequestError(FormBuilderError):
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class ResourceNotFoundError(FormBuilderError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceError(FormBuilderError):
    """Persistence collaborator reported a failed save."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "SAVE_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 503,
        )


def from_error_dict(error: dict, context: ErrorContext | None = None) -> FormBuilderError:
    """Convert a core error descriptor into the matching typed exception."""
    code = error.get("error_code", "")
    message = error.get("message", "")
    if code == "KNOWLEDGE_BASE_REQUIRED":
        return KnowledgeBaseRequiredError(message, context)
    if code == "QUOTA_EXCEEDED":
        return QuotaExceededError(message, context)
    if code == "FIELD_TYPE_UNSUPPORTED":
        return FieldTypeUnsupportedError(error.get("field_type", ""), context)
    if code == "DUPLICATE_FIELD_ID":
        return DuplicateFieldIdError(error.get("field_id", ""), context)
    if code == "SAVE_FAILED":
        return PersistenceError(message, context)
    return InvalidRequestError(message, code or "INVALID_REQUEST", context)
