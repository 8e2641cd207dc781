"""Response Envelopes - {success, message, data?, error(s)?} for every endpoint.

Invariants:
    - Successful responses always carry success=True and a message
    - Failed outcomes take status code and body from their InquiryApiError
    - Pagination links are absolute URLs derived from the incoming request
"""

from typing import Any, Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse

from inquiry_api.core.errors import InquiryApiError
from inquiry_api.core.inquiry_query import Page
from inquiry_api.core.outcome import Outcome
from inquiry_api.schemas.inquiry import InquiryResponse


def serialize_inquiry(inquiry: Any) -> dict:
    return InquiryResponse.model_validate(inquiry).model_dump(mode="json")


def success_response(
    message: str, data: Any = None, status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    content: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=content)


def error_response(error: InquiryApiError, debug: bool = False) -> JSONResponse:
    return JSONResponse(
        status_code=error.http_status, content=error.to_response(debug),
    )


def outcome_response(
    outcome: Outcome,
    message: str,
    *,
    debug: bool = False,
    serialize: Callable[[Any], Any] | None = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Render an Outcome: OK → envelope with data, otherwise the error envelope."""
    if not outcome.is_ok:
        return error_response(outcome.error, debug)
    data = serialize(outcome.value) if serialize else None
    return success_response(message, data, status_code)


def _page_url(request: Request, page: int) -> str:
    return str(request.url.include_query_params(page=page))


def paginated_payload(page: Page, request: Request) -> dict:
    """List payload: items under data, plus meta and links."""
    last_page = page.last_page
    return {
        "data": [serialize_inquiry(item) for item in page.items],
        "meta": {
            "current_page": page.page,
            "last_page": last_page,
            "per_page": page.per_page,
            "total": page.total,
            "from": page.first_item,
            "to": page.last_item,
        },
        "links": {
            "first": _page_url(request, 1),
            "last": _page_url(request, last_page),
            "prev": _page_url(request, page.page - 1) if page.page > 1 else None,
            "next": (
                _page_url(request, page.page + 1) if page.page < last_page else None
            ),
        },
    }
