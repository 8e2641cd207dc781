"""Outcome - tagged result returned by the service layer to the boundary.

Invariants:
    - kind == OK implies error is None
    - kind != OK implies error is the InquiryApiError that selects the HTTP status
    - store_error keeps the original exception as DatabaseError.cause

Design Decisions:
    - Values over raised exceptions for expected failures: routes branch on
      kind instead of stacking except clauses
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from inquiry_api.core.errors import (
    DatabaseError,
    InquiryApiError,
    InquiryValidationError,
    ResourceNotFoundError,
)

T = TypeVar("T")


class OutcomeKind(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    STORE_ERROR = "store_error"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    kind: OutcomeKind
    value: T | None = None
    error: InquiryApiError | None = None

    @property
    def is_ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    @classmethod
    def ok(cls, value: T) -> "Outcome[T]":
        return cls(OutcomeKind.OK, value=value)

    @classmethod
    def not_found(cls, resource_id: int) -> "Outcome[T]":
        return cls(
            OutcomeKind.NOT_FOUND,
            error=ResourceNotFoundError("Inquiry", resource_id),
        )

    @classmethod
    def validation_failed(cls, errors: dict[str, list[str]]) -> "Outcome[T]":
        return cls(
            OutcomeKind.VALIDATION_FAILED,
            error=InquiryValidationError(errors),
        )

    @classmethod
    def store_error(
        cls, message: str, operation: str, cause: BaseException,
    ) -> "Outcome[T]":
        return cls(
            OutcomeKind.STORE_ERROR,
            error=DatabaseError(message, operation, cause),
        )
