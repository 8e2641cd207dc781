"""Inquiry Routes - list, create, statistics, show, update, delete.

Invariants:
    - Request bodies are validated by Pydantic before reaching the handler
    - Handlers never touch the DB session directly, they call InquiryService
    - /statistics is registered before /{inquiry_id} so it is not parsed as an id
    - HTTP status is selected from the Outcome kind (see api/responses.py)

Design Decisions:
    - Service built per request through Depends: tests override get_db or
      get_inquiry_service without monkeypatching modules
    - per_page/page accepted as raw strings and normalized by the core,
      out-of-range or malformed values are clamped rather than rejected
"""

from functools import partial

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from inquiry_api.api.responses import (
    outcome_response, paginated_payload, serialize_inquiry,
)
from inquiry_api.config import Settings, get_settings
from inquiry_api.core.domain_types import DEFAULT_SORT_BY, DEFAULT_SORT_ORDER, InquiryId
from inquiry_api.infrastructure.database import get_db
from inquiry_api.schemas.inquiry import InquiryCreate, InquiryUpdate
from inquiry_api.services.inquiry_repository import SqlInquiryRepository
from inquiry_api.services.inquiry_service import InquiryService

router = APIRouter(prefix="/api/inquiries", tags=["inquiries"])


def get_inquiry_service(db: AsyncSession = Depends(get_db)) -> InquiryService:
    """FastAPI dependency wiring the SQL repository into the service."""
    return InquiryService(SqlInquiryRepository(db))


@router.get("")
async def list_inquiries(
    request: Request,
    category: str | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    priority: str | None = Query(None),
    search: str | None = Query(None),
    sort_by: str = Query(DEFAULT_SORT_BY),
    sort_order: str = Query(DEFAULT_SORT_ORDER.value),
    per_page: str | None = Query(None),
    page: str | None = Query(None),
    service: InquiryService = Depends(get_inquiry_service),
    settings: Settings = Depends(get_settings),
):
    """List inquiries with filters, search, sorting and pagination."""
    outcome = await service.list_inquiries(
        {
            "category": category,
            "status": status_filter,
            "priority": priority,
            "search": search,
            "sort_by": sort_by,
            "sort_order": sort_order,
        },
        page=page,
        per_page=per_page,
    )
    return outcome_response(
        outcome, "Inquiries retrieved successfully",
        debug=settings.debug,
        serialize=partial(paginated_payload, request=request),
    )


@router.post("")
async def create_inquiry(
    body: InquiryCreate,
    service: InquiryService = Depends(get_inquiry_service),
    settings: Settings = Depends(get_settings),
):
    """Submit a new inquiry."""
    outcome = await service.create_inquiry(body.to_fields())
    return outcome_response(
        outcome, "Inquiry submitted successfully",
        debug=settings.debug,
        serialize=serialize_inquiry,
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/statistics")
async def inquiry_statistics(
    service: InquiryService = Depends(get_inquiry_service),
    settings: Settings = Depends(get_settings),
):
    """Counts by status, category and priority."""
    outcome = await service.get_statistics()
    return outcome_response(
        outcome, "Statistics retrieved successfully",
        debug=settings.debug,
        serialize=lambda stats: stats,
    )


@router.get("/{inquiry_id}")
async def get_inquiry(
    inquiry_id: int,
    service: InquiryService = Depends(get_inquiry_service),
    settings: Settings = Depends(get_settings),
):
    outcome = await service.get_inquiry(InquiryId(inquiry_id))
    return outcome_response(
        outcome, "Inquiry retrieved successfully",
        debug=settings.debug,
        serialize=serialize_inquiry,
    )


@router.api_route("/{inquiry_id}", methods=["PUT", "PATCH"])
async def update_inquiry(
    inquiry_id: int,
    body: InquiryUpdate,
    service: InquiryService = Depends(get_inquiry_service),
    settings: Settings = Depends(get_settings),
):
    """Partial update. Moving into `resolved` stamps resolved_at."""
    outcome = await service.update_inquiry(InquiryId(inquiry_id), body.to_fields())
    return outcome_response(
        outcome, "Inquiry updated successfully",
        debug=settings.debug,
        serialize=serialize_inquiry,
    )


@router.delete("/{inquiry_id}")
async def delete_inquiry(
    inquiry_id: int,
    service: InquiryService = Depends(get_inquiry_service),
    settings: Settings = Depends(get_settings),
):
    """Soft delete: the row stays in storage with deleted_at set."""
    outcome = await service.delete_inquiry(InquiryId(inquiry_id))
    return outcome_response(
        outcome, "Inquiry deleted successfully", debug=settings.debug,
    )
