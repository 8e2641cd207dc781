"""Error Handlers - global exception handlers for the Inquiry API.

Invariants:
    - InquiryApiError → its own status and {success: false, ...} envelope
    - RequestValidationError → 422 with a field-keyed map of every invalid field
    - Exception (catch-all) → 500, exception text only in debug mode

Design Decisions:
    - Three-layer handler: domain (InquiryApiError), validation (Pydantic), catch-all (Exception)
    - Validation errors go through Outcome.validation_failed so the envelope
      matches failures produced by the service
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from inquiry_api.api.responses import error_response
from inquiry_api.config import get_settings
from inquiry_api.core.errors import GENERIC_ERROR_MESSAGE, InquiryApiError
from inquiry_api.core.outcome import Outcome
from inquiry_api.schemas.inquiry import VALIDATION_MESSAGES

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_api_error_handler(app: FastAPI) -> None:
    @app.exception_handler(InquiryApiError)
    async def api_error_handler(request: Request, exc: InquiryApiError):
        """Handle domain/infrastructure errors raised outside the service."""
        logger.error(
            f"InquiryApiError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return error_response(exc, get_settings().debug)


def _register_validation_error_handler(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        outcome = Outcome.validation_failed(build_field_errors(exc.errors()))
        return error_response(outcome.error)


def _register_generic_error_handler(app: FastAPI) -> None:
    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all, never leaks internal details outside debug mode."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Internal server error",
                "error": str(exc) if get_settings().debug else GENERIC_ERROR_MESSAGE,
            },
        )


def _field_name(loc: tuple) -> str:
    # loc is ("body", "email") for payload fields, ("path", "inquiry_id") etc.
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


def build_field_errors(errors: list[dict]) -> dict[str, list[str]]:
    """Group Pydantic errors by field, using friendly messages where defined."""
    grouped: dict[str, list[str]] = {}
    for error in errors:
        field = _field_name(tuple(error.get("loc", ())))
        message = VALIDATION_MESSAGES.get(
            (field, error.get("type", "")), error.get("msg", "Invalid value"),
        )
        messages = grouped.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return grouped
