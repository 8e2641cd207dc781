"""Inquiry ORM - persists customer support inquiries.

Invariants:
    - id is an autoincrement integer primary key
    - status defaults to pending, priority defaults to medium
    - resolved_at is written only by the service status-transition rule
    - deleted_at non-null means soft-deleted; rows are never purged by the API

Design Decisions:
    - Enum columns stored as plain strings: values constrained at the API
      boundary, no native DB enum to migrate when a value is added
    - Indexes on the filter and default sort columns
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from inquiry_api.core.domain_types import InquiryPriority, InquiryStatus
from inquiry_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Inquiry(Base):
    """Customer inquiry submitted through the contact form."""
    __tablename__ = "inquiries"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    category: Mapped[str] = mapped_column(
        String(32), nullable=False, index=True,
    )
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, index=True,
        default=InquiryStatus.PENDING.value,
    )
    priority: Mapped[str] = mapped_column(
        String(20), nullable=False, index=True,
        default=InquiryPriority.MEDIUM.value,
    )
    resolved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    resolution_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Inquiry(id={self.id}, subject='{self.subject}', status='{self.status}')>"
