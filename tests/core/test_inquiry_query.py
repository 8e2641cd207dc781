"""Inquiry Query - tests for pure list-parameter normalization.

Tests cover:
    - per_page clamping (out of range, malformed, absent)
    - page normalization
    - sort field allow-list and direction coercion
    - blank filters treated as absent
    - Page arithmetic (last_page, from/to)
"""

import pytest

from inquiry_api.core.domain_types import MAX_PAGE, SortOrder
from inquiry_api.core.inquiry_query import (
    InquiryFilters,
    Page,
    build_filters,
    build_page_request,
    clamp_per_page,
    normalize_page,
    resolve_sort,
)


# ─── clamp_per_page ──────────────────────────────────────────────

@pytest.mark.parametrize("raw, expected", [
    (500, 100),
    (0, 1),
    (-3, 1),
    ("25", 25),
    (" 40 ", 40),
    ("abc", 1),
    ("10.5", 10),
    ("1e400", 1),
    (None, 15),
    ("", 15),
])
def test_clamp_per_page(raw, expected):
    assert clamp_per_page(raw) == expected


def test_normalize_page_defaults_and_floors():
    assert normalize_page(None) == 1
    assert normalize_page("3") == 3
    assert normalize_page("0") == 1
    assert normalize_page("nope") == 1


def test_normalize_page_caps_huge_values():
    assert normalize_page("99999999999999999999") == MAX_PAGE
    assert normalize_page(str(2**63 - 1)) == MAX_PAGE
    request = build_page_request("99999999999999999999", "100")
    assert request.offset < 2**63


def test_page_request_offset():
    request = build_page_request("3", "10")
    assert request.offset == 20


# ─── resolve_sort ────────────────────────────────────────────────

def test_resolve_sort_defaults_to_created_at_desc():
    assert resolve_sort(None, None) == ("created_at", SortOrder.DESC)


def test_resolve_sort_rejects_unknown_column():
    column, _ = resolve_sort("name; DROP TABLE inquiries", "asc")
    assert column == "created_at"


def test_resolve_sort_rejects_non_sortable_column():
    column, _ = resolve_sort("message", "asc")
    assert column == "created_at"


def test_resolve_sort_accepts_known_column_case_insensitive_order():
    assert resolve_sort("priority", "ASC") == ("priority", SortOrder.ASC)


def test_resolve_sort_unknown_direction_is_desc():
    assert resolve_sort("name", "sideways") == ("name", SortOrder.DESC)


# ─── build_filters ───────────────────────────────────────────────

def test_build_filters_blank_values_are_absent():
    filters = build_filters({"category": "", "status": "  ", "search": None})
    assert filters == InquiryFilters()


def test_build_filters_keeps_values():
    filters = build_filters({
        "category": "Trading", "status": "pending", "priority": "high",
        "search": "login", "sort_by": "subject", "sort_order": "asc",
    })
    assert filters.category == "Trading"
    assert filters.status == "pending"
    assert filters.priority == "high"
    assert filters.search == "login"
    assert filters.sort_by == "subject"
    assert filters.sort_order is SortOrder.ASC


# ─── Page ────────────────────────────────────────────────────────

def test_page_bounds_for_partial_last_page():
    page = Page(items=["a", "b"], total=12, page=3, per_page=5)
    assert page.last_page == 3
    assert page.first_item == 11
    assert page.last_item == 12


def test_empty_page_has_no_bounds_and_one_page():
    page = Page(items=[], total=0, page=1, per_page=15)
    assert page.last_page == 1
    assert page.first_item is None
    assert page.last_item is None
