"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from shell, dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Every read through a repository excludes soft-deleted rows

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass plain fakes
    - transaction() lives on the repository so the service controls the unit
      of work without touching the session directly
"""

from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import Any, Protocol

from inquiry_api.core.domain_types import InquiryId
from inquiry_api.core.inquiry_query import InquiryFilters, Page, PageRequest


class InquiryLike(Protocol):
    """Structural contract for Inquiry records handed to the boundary."""
    id: int
    name: str
    email: str
    phone: str | None
    category: str
    subject: str
    message: str
    status: str
    priority: str
    resolved_at: datetime | None
    resolution_notes: str | None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None


class InquiryRepository(Protocol):
    """Contract for inquiry persistence - implemented by shell."""
    def transaction(self) -> AbstractAsyncContextManager[None]: ...
    async def list(
        self, filters: InquiryFilters, page: PageRequest,
    ) -> Page[InquiryLike]: ...
    async def find_by_id(
        self, inquiry_id: InquiryId, for_update: bool = False,
    ) -> InquiryLike | None: ...
    async def create(self, fields: dict[str, Any]) -> InquiryLike: ...
    async def update(
        self, inquiry_id: InquiryId, fields: dict[str, Any],
    ) -> InquiryLike | None: ...
    async def soft_delete(self, inquiry_id: InquiryId) -> InquiryLike | None: ...
    async def count(self) -> int: ...
    async def counts_by(self, dimension: str) -> dict[str, int]: ...
