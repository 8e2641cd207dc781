"""Inquiry Routes - HTTP contract of /api/inquiries.

Tests cover:
    - create: 201 envelope, defaults applied, 422 field-keyed errors
    - list: data/meta/links structure, filters, search, sorting, clamped paging
    - show/update/delete: 404 for missing or soft-deleted ids
    - resolved_at stamped on entering `resolved` and kept afterwards
    - statistics ignore soft-deleted rows
    - store failures: 500 with a generic error unless debug is enabled
"""

import pytest

from inquiry_api.api.routes.inquiries import get_inquiry_service
from inquiry_api.config import Settings, get_settings
from inquiry_api.core.domain_types import MAX_PAGE
from inquiry_api.main import app
from inquiry_api.services.inquiry_service import InquiryService
from tests.services.fake_repository import FakeInquiryRepository

VALID_PAYLOAD = {
    "name": "John Doe",
    "email": "john@example.com",
    "phone": "+1234567890",
    "category": "Trading",
    "subject": "How to place an order?",
    "message": "I need help understanding how to place a market order.",
}


# ─── create ──────────────────────────────────────────────────────

async def test_create_inquiry_returns_201_envelope(client, load_inquiry):
    res = await client.post("/api/inquiries", json=VALID_PAYLOAD)
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["message"] == "Inquiry submitted successfully"

    data = body["data"]
    assert data["name"] == "John Doe"
    assert data["status"] == "pending"
    assert data["priority"] == "medium"
    assert data["resolved_at"] is None
    assert "deleted_at" not in data

    stored = await load_inquiry(data["id"])
    assert stored.email == "john@example.com"
    assert stored.category == "Trading"


async def test_create_accepts_explicit_priority(client):
    res = await client.post(
        "/api/inquiries", json={**VALID_PAYLOAD, "priority": "urgent"},
    )
    assert res.status_code == 201
    assert res.json()["data"]["priority"] == "urgent"


async def test_create_ignores_status_and_resolved_at(client):
    res = await client.post(
        "/api/inquiries",
        json={
            **VALID_PAYLOAD,
            "status": "resolved",
            "resolved_at": "2020-01-01T00:00:00Z",
        },
    )
    assert res.status_code == 201
    assert res.json()["data"]["status"] == "pending"
    assert res.json()["data"]["resolved_at"] is None


async def test_create_with_missing_fields_returns_422(client):
    res = await client.post("/api/inquiries", json={})
    assert res.status_code == 422
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert set(body["errors"]) == {"name", "email", "category", "subject", "message"}
    assert body["errors"]["name"] == ["Please provide your name."]


async def test_create_with_invalid_values_reports_each_field(client):
    res = await client.post(
        "/api/inquiries",
        json={
            **VALID_PAYLOAD,
            "email": "not-an-email",
            "category": "Crypto",
            "message": "Too short",
        },
    )
    assert res.status_code == 422
    errors = res.json()["errors"]
    assert errors["email"] == ["Please provide a valid email address."]
    assert errors["category"][0].startswith("The selected category is invalid.")
    assert errors["message"] == ["The message must be at least 10 characters long."]


async def test_create_stores_blank_phone_as_null(client, load_inquiry):
    res = await client.post("/api/inquiries", json={**VALID_PAYLOAD, "phone": ""})
    assert res.status_code == 201
    assert res.json()["data"]["phone"] is None
    stored = await load_inquiry(res.json()["data"]["id"])
    assert stored.phone is None


async def test_create_rejects_null_priority_and_long_email(client):
    res = await client.post(
        "/api/inquiries",
        json={
            **VALID_PAYLOAD,
            "priority": None,
            "email": "a" * 250 + "@example.com",
        },
    )
    assert res.status_code == 422
    errors = res.json()["errors"]
    assert errors["priority"] == ["This field may not be null."]
    assert errors["email"] == [
        "The email address may not be greater than 255 characters.",
    ]


# ─── list ────────────────────────────────────────────────────────

async def test_list_returns_paginated_structure(client, make_inquiry):
    for _ in range(3):
        await make_inquiry()

    res = await client.get("/api/inquiries")
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Inquiries retrieved successfully"
    payload = body["data"]
    assert len(payload["data"]) == 3
    assert payload["meta"] == {
        "current_page": 1,
        "last_page": 1,
        "per_page": 15,
        "total": 3,
        "from": 1,
        "to": 3,
    }
    assert set(payload["links"]) == {"first", "last", "prev", "next"}
    assert payload["links"]["prev"] is None
    assert payload["links"]["next"] is None


async def test_list_empty_has_null_range(client):
    res = await client.get("/api/inquiries")
    meta = res.json()["data"]["meta"]
    assert meta["total"] == 0
    assert meta["from"] is None
    assert meta["to"] is None


async def test_list_filters_by_category(client, make_inquiry):
    await make_inquiry(category="Trading")
    await make_inquiry(category="Market Data")

    res = await client.get("/api/inquiries", params={"category": "Trading"})
    items = res.json()["data"]["data"]
    assert [item["category"] for item in items] == ["Trading"]


async def test_list_combines_category_and_status(client, make_inquiry):
    match = await make_inquiry(category="Trading", status="pending")
    await make_inquiry(category="Trading", status="resolved")
    await make_inquiry(category="Market Data", status="pending")

    res = await client.get(
        "/api/inquiries", params={"category": "Trading", "status": "pending"},
    )
    items = res.json()["data"]["data"]
    assert [item["id"] for item in items] == [match.id]


async def test_list_search_matches_subject(client, make_inquiry):
    match = await make_inquiry(subject="Margin call question")
    await make_inquiry(subject="Unrelated topic")

    res = await client.get("/api/inquiries", params={"search": "Margin"})
    items = res.json()["data"]["data"]
    assert [item["id"] for item in items] == [match.id]


async def test_list_sorts_by_requested_column(client, make_inquiry):
    await make_inquiry(name="Bravo")
    await make_inquiry(name="Alpha")
    await make_inquiry(name="Charlie")

    res = await client.get(
        "/api/inquiries", params={"sort_by": "name", "sort_order": "asc"},
    )
    names = [item["name"] for item in res.json()["data"]["data"]]
    assert names == ["Alpha", "Bravo", "Charlie"]


async def test_list_unknown_sort_field_falls_back(client, make_inquiry):
    await make_inquiry()
    await make_inquiry()

    res = await client.get(
        "/api/inquiries",
        params={"sort_by": "id; DROP TABLE inquiries", "sort_order": "sideways"},
    )
    assert res.status_code == 200
    assert res.json()["data"]["meta"]["total"] == 2


@pytest.mark.parametrize("raw, expected", [
    ("500", 100),
    ("0", 1),
    ("-3", 1),
    ("abc", 1),
    ("10.5", 10),
    ("25", 25),
])
async def test_list_clamps_per_page(client, make_inquiry, raw, expected):
    await make_inquiry()
    res = await client.get("/api/inquiries", params={"per_page": raw})
    assert res.status_code == 200
    assert res.json()["data"]["meta"]["per_page"] == expected


@pytest.mark.parametrize("raw", ["99999999999999999999", str(2**63 - 1)])
async def test_list_huge_page_returns_empty_page(client, make_inquiry, raw):
    await make_inquiry()
    res = await client.get("/api/inquiries", params={"page": raw})
    assert res.status_code == 200
    payload = res.json()["data"]
    assert payload["data"] == []
    assert payload["meta"]["current_page"] == MAX_PAGE
    assert payload["meta"]["total"] == 1
    assert payload["meta"]["from"] is None
    assert payload["links"]["next"] is None


async def test_list_links_point_to_neighbouring_pages(client, make_inquiry):
    for _ in range(3):
        await make_inquiry()

    res = await client.get("/api/inquiries", params={"per_page": "1", "page": "2"})
    payload = res.json()["data"]
    assert payload["meta"]["current_page"] == 2
    assert payload["meta"]["last_page"] == 3
    assert payload["meta"]["from"] == 2
    assert "page=1" in payload["links"]["prev"]
    assert "page=3" in payload["links"]["next"]
    assert "per_page=1" in payload["links"]["next"]


# ─── show ────────────────────────────────────────────────────────

async def test_show_returns_inquiry(client, make_inquiry):
    inquiry = await make_inquiry(subject="Specific subject")
    res = await client.get(f"/api/inquiries/{inquiry.id}")
    assert res.status_code == 200
    assert res.json()["message"] == "Inquiry retrieved successfully"
    assert res.json()["data"]["subject"] == "Specific subject"


async def test_show_missing_returns_404(client):
    res = await client.get("/api/inquiries/999")
    assert res.status_code == 404
    assert res.json() == {
        "success": False,
        "message": "Inquiry not found",
        "error": "No inquiry found with ID: 999",
    }


async def test_show_non_numeric_id_returns_422(client):
    res = await client.get("/api/inquiries/abc")
    assert res.status_code == 422
    assert "inquiry_id" in res.json()["errors"]


# ─── update ──────────────────────────────────────────────────────

async def test_put_updates_fields(client, make_inquiry, load_inquiry):
    inquiry = await make_inquiry()
    res = await client.put(
        f"/api/inquiries/{inquiry.id}",
        json={"status": "in_progress", "priority": "high"},
    )
    assert res.status_code == 200
    assert res.json()["message"] == "Inquiry updated successfully"
    assert res.json()["data"]["status"] == "in_progress"

    stored = await load_inquiry(inquiry.id)
    assert stored.priority == "high"
    assert stored.resolved_at is None


async def test_resolving_stamps_resolved_at_and_keeps_it(client, make_inquiry):
    inquiry = await make_inquiry()

    res = await client.patch(
        f"/api/inquiries/{inquiry.id}",
        json={"status": "resolved", "resolution_notes": "Sent instructions."},
    )
    resolved_at = res.json()["data"]["resolved_at"]
    assert resolved_at is not None
    assert res.json()["data"]["resolution_notes"] == "Sent instructions."

    res = await client.patch(
        f"/api/inquiries/{inquiry.id}", json={"status": "in_progress"},
    )
    assert res.json()["data"]["status"] == "in_progress"
    assert res.json()["data"]["resolved_at"] == resolved_at


async def test_update_blank_resolution_notes_clears_them(client, make_inquiry, load_inquiry):
    inquiry = await make_inquiry(resolution_notes="Old notes")
    res = await client.patch(
        f"/api/inquiries/{inquiry.id}", json={"resolution_notes": ""},
    )
    assert res.status_code == 200
    assert res.json()["data"]["resolution_notes"] is None
    assert (await load_inquiry(inquiry.id)).resolution_notes is None


async def test_update_cannot_set_resolved_at_directly(client, make_inquiry):
    inquiry = await make_inquiry()
    res = await client.patch(
        f"/api/inquiries/{inquiry.id}",
        json={"resolved_at": "2020-01-01T00:00:00Z", "priority": "low"},
    )
    assert res.status_code == 200
    assert res.json()["data"]["resolved_at"] is None


async def test_update_invalid_status_returns_422(client, make_inquiry):
    inquiry = await make_inquiry()
    res = await client.patch(
        f"/api/inquiries/{inquiry.id}", json={"status": "archived"},
    )
    assert res.status_code == 422
    assert res.json()["errors"]["status"][0].startswith("The selected status is invalid.")


async def test_update_missing_returns_404(client):
    res = await client.put("/api/inquiries/999", json={"status": "closed"})
    assert res.status_code == 404
    assert res.json()["message"] == "Inquiry not found"


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_soft_deletes(client, make_inquiry, load_inquiry):
    inquiry = await make_inquiry()

    res = await client.delete(f"/api/inquiries/{inquiry.id}")
    assert res.status_code == 200
    assert res.json() == {"success": True, "message": "Inquiry deleted successfully"}

    assert (await client.get(f"/api/inquiries/{inquiry.id}")).status_code == 404
    listed = await client.get("/api/inquiries")
    assert listed.json()["data"]["meta"]["total"] == 0

    stored = await load_inquiry(inquiry.id)
    assert stored is not None
    assert stored.deleted_at is not None


async def test_delete_missing_returns_404(client):
    res = await client.delete("/api/inquiries/999")
    assert res.status_code == 404


async def test_update_deleted_returns_404(client, make_inquiry):
    inquiry = await make_inquiry()
    await client.delete(f"/api/inquiries/{inquiry.id}")
    res = await client.patch(
        f"/api/inquiries/{inquiry.id}", json={"status": "closed"},
    )
    assert res.status_code == 404


# ─── statistics ──────────────────────────────────────────────────

async def test_statistics_excludes_deleted(client, make_inquiry):
    await make_inquiry(status="pending", category="Trading", priority="high")
    await make_inquiry(status="resolved", category="Market Data", priority="low")
    gone = await make_inquiry(status="pending", category="Trading", priority="urgent")
    await client.delete(f"/api/inquiries/{gone.id}")

    res = await client.get("/api/inquiries/statistics")
    assert res.status_code == 200
    assert res.json()["message"] == "Statistics retrieved successfully"
    stats = res.json()["data"]
    assert stats["total"] == 2
    assert sum(stats["by_status"].values()) == stats["total"]
    assert stats["by_status"] == {
        "pending": 1, "in_progress": 0, "resolved": 1, "closed": 0,
    }
    assert stats["by_category"]["Trading"] == 1
    assert stats["by_category"]["Technical Issues"] == 0
    assert stats["by_priority"]["urgent"] == 0


# ─── store failures ──────────────────────────────────────────────

@pytest.fixture
def failing_repo(client):
    repo = FakeInquiryRepository()
    app.dependency_overrides[get_inquiry_service] = lambda: InquiryService(repo)
    return repo


async def test_store_failure_hides_details(client, failing_repo):
    failing_repo.fail_on.add("create")
    res = await client.post("/api/inquiries", json=VALID_PAYLOAD)
    assert res.status_code == 500
    assert res.json() == {
        "success": False,
        "message": "Failed to create inquiry",
        "error": "An error occurred while processing your request",
    }


async def test_store_failure_shows_details_in_debug(client, failing_repo):
    failing_repo.fail_on.add("list")
    app.dependency_overrides[get_settings] = lambda: Settings(debug=True)

    res = await client.get("/api/inquiries")
    assert res.status_code == 500
    assert res.json()["message"] == "Failed to retrieve inquiries"
    assert res.json()["error"] == "list exploded"
