"""Error Hierarchy - typed, categorized exceptions for every Inquiry API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory) and http_status
    - to_response() produces the {success, message, error(s)} envelope
    - Store failures never leak exception text unless debug is enabled

Design Decisions:
    - Single hierarchy with InquiryApiError base: one global handler catches all
    - Errors double as values: the service hands them to the boundary inside an
      Outcome instead of raising them (see core/outcome.py)
"""

from enum import Enum

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and logging."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class InquiryApiError(Exception):
    """Base exception for all Inquiry API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        http_status: int = 500,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.http_status = http_status
        self.detail = detail

    def to_response(self, debug: bool = False) -> dict:
        """Convert to the standard failure envelope."""
        body: dict = {"success": False, "message": self.message}
        if self.detail is not None:
            body["error"] = self.detail
        return body


# ─── Caller Errors (400-level) ──────────────────────────────────

class InquiryValidationError(InquiryApiError):
    """Request payload violates field rules."""
    def __init__(self, errors: dict[str, list[str]]):
        super().__init__(
            "Validation failed", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, 422,
        )
        self.errors = errors

    def to_response(self, debug: bool = False) -> dict:
        return {
            "success": False,
            "message": self.message,
            "errors": self.errors,
        }


class ResourceNotFoundError(InquiryApiError):
    """Requested resource does not exist (or is soft-deleted)."""
    def __init__(self, resource_type: str, resource_id: int | str):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404,
            detail=f"No {resource_type.lower()} found with ID: {resource_id}",
        )
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(InquiryApiError):
    """Database operation failed. Wraps the original exception when known."""
    def __init__(
        self,
        message: str,
        operation: str,
        cause: BaseException | None = None,
    ):
        super().__init__(
            message, "DATABASE_ERROR", ErrorCategory.DATABASE, 500,
        )
        self.operation = operation
        self.cause = cause

    def to_response(self, debug: bool = False) -> dict:
        if debug:
            error = str(self.cause) if self.cause is not None else self.message
        else:
            error = GENERIC_ERROR_MESSAGE
        return {"success": False, "message": self.message, "error": error}
