"""Inquiry Query - pure normalization of list parameters and page arithmetic.

Invariants:
    - per_page is always within [MIN_PER_PAGE, MAX_PER_PAGE]
    - page is always within [1, MAX_PAGE]
    - sort_by is always a member of SORTABLE_COLUMNS
    - Empty strings are treated as "filter absent"

Design Decisions:
    - Unknown sort fields fall back to the default instead of failing the request
    - Decimal strings truncate ("10.5" is 10), non-numeric ones parse as 0
      and clamp to the minimum
"""

import math
from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar

from inquiry_api.core.domain_types import (
    DEFAULT_PER_PAGE,
    DEFAULT_SORT_BY,
    DEFAULT_SORT_ORDER,
    MAX_PAGE,
    MAX_PER_PAGE,
    MIN_PER_PAGE,
    SORTABLE_COLUMNS,
    SortOrder,
)

T = TypeVar("T")


@dataclass(frozen=True)
class InquiryFilters:
    """Normalized list filters. None means the filter is not applied."""
    category: str | None = None
    status: str | None = None
    priority: str | None = None
    search: str | None = None
    sort_by: str = DEFAULT_SORT_BY
    sort_order: SortOrder = DEFAULT_SORT_ORDER

    def to_log(self) -> dict:
        return {
            "category": self.category,
            "status": self.status,
            "priority": self.priority,
            "search": self.search,
            "sort_by": self.sort_by,
            "sort_order": self.sort_order.value,
        }


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    per_page: int = DEFAULT_PER_PAGE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the numbers needed for pagination metadata."""
    items: Sequence[T]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def first_item(self) -> int | None:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + 1

    @property
    def last_item(self) -> int | None:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + len(self.items)


def _to_int(raw: Any, fallback: int) -> int:
    if raw is None or raw == "":
        return fallback
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    try:
        return int(text)
    except ValueError:
        try:
            return int(float(text))
        except (ValueError, OverflowError):
            return 0


def clamp_per_page(raw: Any) -> int:
    """Clamp a raw per_page value into [1, 100]; absent means the default."""
    value = _to_int(raw, DEFAULT_PER_PAGE)
    return min(max(value, MIN_PER_PAGE), MAX_PER_PAGE)


def normalize_page(raw: Any) -> int:
    return min(max(_to_int(raw, 1), 1), MAX_PAGE)


def resolve_sort(sort_by: str | None, sort_order: str | None) -> tuple[str, SortOrder]:
    """Restrict sort_by to known columns and coerce the direction."""
    column = (sort_by or "").strip()
    if column not in SORTABLE_COLUMNS:
        column = DEFAULT_SORT_BY
    direction = (sort_order or "").strip().lower()
    order = SortOrder.ASC if direction == SortOrder.ASC.value else SortOrder.DESC
    return column, order


def _blank_to_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def build_filters(raw: dict[str, Any]) -> InquiryFilters:
    """Turn untyped query parameters into InquiryFilters."""
    sort_by, sort_order = resolve_sort(raw.get("sort_by"), raw.get("sort_order"))
    return InquiryFilters(
        category=_blank_to_none(raw.get("category")),
        status=_blank_to_none(raw.get("status")),
        priority=_blank_to_none(raw.get("priority")),
        search=_blank_to_none(raw.get("search")),
        sort_by=sort_by,
        sort_order=sort_order,
    )


def build_page_request(page: Any, per_page: Any) -> PageRequest:
    return PageRequest(page=normalize_page(page), per_page=clamp_per_page(per_page))
