"""SQL Inquiry Repository - SQLAlchemy implementation of InquiryRepository.

Invariants:
    - Every query filters deleted_at IS NULL (soft-deleted rows are invisible)
    - ORDER BY only ever receives a column from SORTABLE_COLUMNS
    - Mutations flush but never commit; transaction() owns commit/rollback
    - counts_by accepts only the statistics dimensions

Design Decisions:
    - Substring search via ColumnOperators.contains(autoescape=True): user input
      containing % or _ is matched literally
    - id as secondary sort key keeps pagination stable on duplicate sort values
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator

from sqlalchemy import asc, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from inquiry_api.core.domain_types import (
    SEARCHABLE_COLUMNS, SORTABLE_COLUMNS, InquiryId, SortOrder,
)
from inquiry_api.core.inquiry_query import InquiryFilters, Page, PageRequest
from inquiry_api.core.inquiry_stats import STAT_DIMENSIONS
from inquiry_api.models.inquiry import Inquiry


class SqlInquiryRepository:
    """Inquiry persistence over a single AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Commit on success, roll back and re-raise on any failure."""
        try:
            yield
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    def _conditions(self, filters: InquiryFilters) -> list:
        conditions = [Inquiry.deleted_at.is_(None)]
        if filters.category is not None:
            conditions.append(Inquiry.category == filters.category)
        if filters.status is not None:
            conditions.append(Inquiry.status == filters.status)
        if filters.priority is not None:
            conditions.append(Inquiry.priority == filters.priority)
        if filters.search is not None:
            conditions.append(or_(*(
                getattr(Inquiry, column).contains(filters.search, autoescape=True)
                for column in SEARCHABLE_COLUMNS
            )))
        return conditions

    async def list(
        self, filters: InquiryFilters, page: PageRequest,
    ) -> Page[Inquiry]:
        """One page of non-deleted inquiries matching every filter."""
        if filters.sort_by not in SORTABLE_COLUMNS:
            raise ValueError(f"Column '{filters.sort_by}' is not sortable")
        conditions = self._conditions(filters)

        total = await self.db.scalar(
            select(func.count()).select_from(Inquiry).where(*conditions),
        )

        direction = asc if filters.sort_order is SortOrder.ASC else desc
        query = (
            select(Inquiry)
            .where(*conditions)
            .order_by(
                direction(getattr(Inquiry, filters.sort_by)),
                direction(Inquiry.id),
            )
            .limit(page.per_page)
            .offset(page.offset)
        )
        result = await self.db.execute(query)
        return Page(
            items=result.scalars().all(),
            total=total or 0,
            page=page.page,
            per_page=page.per_page,
        )

    async def find_by_id(
        self, inquiry_id: InquiryId, for_update: bool = False,
    ) -> Inquiry | None:
        query = select(Inquiry).where(
            Inquiry.id == inquiry_id, Inquiry.deleted_at.is_(None),
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def create(self, fields: dict[str, Any]) -> Inquiry:
        inquiry = Inquiry(**fields)
        self.db.add(inquiry)
        await self.db.flush()
        await self.db.refresh(inquiry)
        return inquiry

    async def update(
        self, inquiry_id: InquiryId, fields: dict[str, Any],
    ) -> Inquiry | None:
        inquiry = await self.find_by_id(inquiry_id, for_update=True)
        if inquiry is None:
            return None
        for key, value in fields.items():
            setattr(inquiry, key, value)
        await self.db.flush()
        await self.db.refresh(inquiry)
        return inquiry

    async def soft_delete(self, inquiry_id: InquiryId) -> Inquiry | None:
        inquiry = await self.find_by_id(inquiry_id, for_update=True)
        if inquiry is None:
            return None
        inquiry.deleted_at = datetime.now(timezone.utc)
        await self.db.flush()
        return inquiry

    async def count(self) -> int:
        total = await self.db.scalar(
            select(func.count())
            .select_from(Inquiry)
            .where(Inquiry.deleted_at.is_(None)),
        )
        return total or 0

    async def counts_by(self, dimension: str) -> dict[str, int]:
        """Row counts grouped by one of status, category, priority."""
        if dimension not in STAT_DIMENSIONS:
            raise ValueError(f"Unknown statistics dimension '{dimension}'")
        column = getattr(Inquiry, dimension)
        result = await self.db.execute(
            select(column, func.count())
            .where(Inquiry.deleted_at.is_(None))
            .group_by(column),
        )
        return {value: count for value, count in result.all()}
