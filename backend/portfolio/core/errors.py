"""Error Hierarchy — typed, categorized exceptions for all portfolio failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status
    - to_response() produces the wire envelope {"message", "errors"?}
    - Domain errors (4xx) carry user-facing messages; infrastructure errors (5xx)
      never reach the caller verbatim (the generic handler hides them)

Design Decisions:
    - Single hierarchy with PortfolioError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - FieldError as frozen dataclass: validators build lists of them, the error
      serializes them without knowing which validator produced them
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    DATABASE = "database"
    NOTIFICATION = "notification"
    INTERNAL = "internal"


@dataclass(frozen=True)
class FieldError:
    """One rejected input field and the reason."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class PortfolioError(Exception):
    """Base exception for all portfolio errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {"message": self.message}


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(PortfolioError):
    """Input rejected by one or more field validators."""
    def __init__(self, errors: list[FieldError], message: str = "Validation failed"):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION, 400,
        )
        self.errors = list(errors)

    @property
    def fields(self) -> list[str]:
        return [e.field for e in self.errors]

    def to_response(self) -> dict:
        return {
            "message": self.message,
            "errors": [e.to_dict() for e in self.errors],
        }


class ResourceNotFoundError(PortfolioError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, identifier: str):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404,
        )
        self.resource_type = resource_type
        self.identifier = identifier


class SlugConflictError(PortfolioError):
    """Another post already owns this slug."""
    def __init__(self, slug: str):
        super().__init__(
            "Slug already exists", "SLUG_CONFLICT", ErrorCategory.CONFLICT, 409,
        )
        self.slug = slug


class UnauthorizedError(PortfolioError):
    """Admin credential missing or wrong."""
    def __init__(self):
        super().__init__(
            "Admin authentication required",
            "UNAUTHORIZED", ErrorCategory.UNAUTHORIZED, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(PortfolioError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE, 500,
        )
        self.operation = operation


class NotificationError(PortfolioError):
    """Outbound mail could not be delivered to the relay."""
    def __init__(self, message: str, recipient: str):
        super().__init__(
            f"Notification to {recipient} failed: {message}",
            "NOTIFICATION_ERROR", ErrorCategory.NOTIFICATION, 500,
        )
        self.recipient = recipient
