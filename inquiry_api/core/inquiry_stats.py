"""Inquiry Stats - pure assembly of the statistics snapshot from raw counts.

Invariants:
    - Every breakdown lists all enum values, missing ones count 0
    - Values outside the enum are dropped from breakdowns
    - Never raises on empty input
"""

from enum import Enum

from inquiry_api.core.domain_types import (
    InquiryCategory, InquiryPriority, InquiryStatus,
)

STAT_DIMENSIONS: dict[str, type[Enum]] = {
    "status": InquiryStatus,
    "category": InquiryCategory,
    "priority": InquiryPriority,
}


def fill_breakdown(enum_cls: type[Enum], counts: dict[str, int]) -> dict[str, int]:
    return {member.value: int(counts.get(member.value, 0)) for member in enum_cls}


def compute_inquiry_stats(
    total: int,
    by_status: dict[str, int],
    by_category: dict[str, int],
    by_priority: dict[str, int],
) -> dict:
    """Build the statistics payload. Pure, no IO."""
    return {
        "total": total,
        "by_status": fill_breakdown(InquiryStatus, by_status),
        "by_category": fill_breakdown(InquiryCategory, by_category),
        "by_priority": fill_breakdown(InquiryPriority, by_priority),
    }
