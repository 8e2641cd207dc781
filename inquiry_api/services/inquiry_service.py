"""Inquiry Service - list, fetch, create, update, soft-delete and statistics.

Invariants:
    - Every public method returns an Outcome, never raises for not-found or store failures
    - Mutations run inside repository.transaction(): all changes commit or none do
    - Update stamps resolved_at in the same transaction as the status change
    - Store failures are logged with operation, input and error before being returned

Design Decisions:
    - Repository injected through the constructor, no module-level DB access
    - clock injected so tests can pin resolved_at
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from inquiry_api.core.domain_types import InquiryId
from inquiry_api.core.inquiry_query import Page, build_filters, build_page_request
from inquiry_api.core.inquiry_rules import apply_status_transition
from inquiry_api.core.inquiry_stats import compute_inquiry_stats
from inquiry_api.core.outcome import Outcome
from inquiry_api.core.repository_protocols import InquiryLike, InquiryRepository

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InquiryService:
    """Inquiry use cases over an injected repository."""

    def __init__(
        self,
        repository: InquiryRepository,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.repository = repository
        self.clock = clock

    async def list_inquiries(
        self, raw_filters: dict[str, Any], page: Any = None, per_page: Any = None,
    ) -> Outcome[Page[InquiryLike]]:
        """Filtered, sorted page of inquiries. Filters and paging are normalized here."""
        filters = build_filters(raw_filters)
        page_request = build_page_request(page, per_page)
        try:
            result = await self.repository.list(filters, page_request)
        except Exception as e:
            logger.error(
                "Error fetching inquiries",
                extra={"operation": "list", "filters": filters.to_log(), "error": str(e)},
                exc_info=True,
            )
            return Outcome.store_error("Failed to retrieve inquiries", "list", e)
        return Outcome.ok(result)

    async def get_inquiry(self, inquiry_id: InquiryId) -> Outcome[InquiryLike]:
        try:
            inquiry = await self.repository.find_by_id(inquiry_id)
        except Exception as e:
            logger.error(
                "Error fetching inquiry",
                extra={"operation": "show", "inquiry_id": inquiry_id, "error": str(e)},
                exc_info=True,
            )
            return Outcome.store_error("Failed to retrieve inquiry", "show", e)
        if inquiry is None:
            return Outcome.not_found(inquiry_id)
        return Outcome.ok(inquiry)

    async def create_inquiry(self, fields: dict[str, Any]) -> Outcome[InquiryLike]:
        try:
            async with self.repository.transaction():
                inquiry = await self.repository.create(fields)
                logger.info(
                    "New inquiry created",
                    extra={
                        "inquiry_id": inquiry.id,
                        "category": inquiry.category,
                        "email": inquiry.email,
                    },
                )
        except Exception as e:
            logger.error(
                "Error creating inquiry",
                extra={"operation": "create", "input": fields, "error": str(e)},
                exc_info=True,
            )
            return Outcome.store_error("Failed to create inquiry", "create", e)
        return Outcome.ok(inquiry)

    async def update_inquiry(
        self, inquiry_id: InquiryId, fields: dict[str, Any],
    ) -> Outcome[InquiryLike]:
        """Apply a partial update; entering `resolved` stamps resolved_at."""
        try:
            async with self.repository.transaction():
                current = await self.repository.find_by_id(inquiry_id, for_update=True)
                if current is None:
                    return Outcome.not_found(inquiry_id)
                old_status = current.status
                changes = apply_status_transition(old_status, fields, self.clock())
                inquiry = await self.repository.update(inquiry_id, changes)
                if inquiry is None:
                    return Outcome.not_found(inquiry_id)
                logger.info(
                    "Inquiry updated",
                    extra={
                        "inquiry_id": inquiry_id,
                        "updated_fields": sorted(fields),
                        "old_status": old_status,
                        "new_status": inquiry.status,
                    },
                )
        except Exception as e:
            logger.error(
                "Error updating inquiry",
                extra={
                    "operation": "update", "inquiry_id": inquiry_id,
                    "input": fields, "error": str(e),
                },
                exc_info=True,
            )
            return Outcome.store_error("Failed to update inquiry", "update", e)
        return Outcome.ok(inquiry)

    async def delete_inquiry(self, inquiry_id: InquiryId) -> Outcome[bool]:
        try:
            async with self.repository.transaction():
                inquiry = await self.repository.soft_delete(inquiry_id)
                if inquiry is None:
                    return Outcome.not_found(inquiry_id)
                logger.info(
                    "Inquiry deleted",
                    extra={"inquiry_id": inquiry_id, "category": inquiry.category},
                )
        except Exception as e:
            logger.error(
                "Error deleting inquiry",
                extra={"operation": "delete", "inquiry_id": inquiry_id, "error": str(e)},
                exc_info=True,
            )
            return Outcome.store_error("Failed to delete inquiry", "delete", e)
        return Outcome.ok(True)

    async def get_statistics(self) -> Outcome[dict]:
        """Total plus by-status/category/priority counts, recomputed on every call."""
        try:
            stats = compute_inquiry_stats(
                total=await self.repository.count(),
                by_status=await self.repository.counts_by("status"),
                by_category=await self.repository.counts_by("category"),
                by_priority=await self.repository.counts_by("priority"),
            )
        except Exception as e:
            logger.error(
                "Error fetching inquiry statistics",
                extra={"operation": "statistics", "error": str(e)},
                exc_info=True,
            )
            return Outcome.store_error("Failed to retrieve statistics", "statistics", e)
        return Outcome.ok(stats)
