"""Domain Types - enums and constants shared by every layer.

Invariants:
    - InquiryId wraps the integer primary key
    - Every enumerated column value lives in exactly one Enum here
    - SORTABLE_COLUMNS is the only set of names that may reach ORDER BY

Design Decisions:
    - str Enums: serialize to JSON and compare against DB strings without converters
    - Display values kept verbatim ("Market Data"), they are stored as-is
"""

import sys
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

InquiryId = NewType("InquiryId", int)


# ─── Enums ───────────────────────────────────────────────────────

class InquiryCategory(str, Enum):
    """Topic the customer picked when submitting the inquiry."""
    TRADING = "Trading"
    MARKET_DATA = "Market Data"
    TECHNICAL_ISSUES = "Technical Issues"
    GENERAL_QUESTIONS = "General Questions"


class InquiryStatus(str, Enum):
    """Support workflow states - maps to DB `status` column."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class InquiryPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# ─── Query Constants ─────────────────────────────────────────────

SORTABLE_COLUMNS: frozenset[str] = frozenset({
    "id", "name", "email", "category", "subject",
    "status", "priority", "created_at", "updated_at",
})
SEARCHABLE_COLUMNS: tuple[str, ...] = ("name", "email", "subject", "message")

DEFAULT_SORT_BY = "created_at"
DEFAULT_SORT_ORDER = SortOrder.DESC
DEFAULT_PER_PAGE = 15
MIN_PER_PAGE = 1
MAX_PER_PAGE = 100
# Keeps the OFFSET within a signed 64-bit integer
MAX_PAGE = sys.maxsize // MAX_PER_PAGE
