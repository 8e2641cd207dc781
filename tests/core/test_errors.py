"""Error envelopes and Outcome construction.

Tests cover:
    - not-found envelope names the id
    - validation envelope carries the field-keyed errors map
    - store errors hide exception text unless debug is on
    - Outcome kinds map to the matching error and HTTP status
"""

from inquiry_api.core.errors import (
    GENERIC_ERROR_MESSAGE,
    DatabaseError,
    InquiryValidationError,
    ResourceNotFoundError,
)
from inquiry_api.core.outcome import Outcome, OutcomeKind


def test_not_found_envelope():
    error = ResourceNotFoundError("Inquiry", 999)
    assert error.http_status == 404
    assert error.to_response() == {
        "success": False,
        "message": "Inquiry not found",
        "error": "No inquiry found with ID: 999",
    }


def test_validation_envelope_lists_fields():
    error = InquiryValidationError({"email": ["Please provide a valid email address."]})
    assert error.http_status == 422
    body = error.to_response()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert body["errors"] == {"email": ["Please provide a valid email address."]}


def test_database_error_hides_detail_without_debug():
    error = DatabaseError("Failed to update inquiry", "update", RuntimeError("deadlock"))
    assert error.http_status == 500
    assert error.to_response()["error"] == GENERIC_ERROR_MESSAGE
    assert error.to_response(debug=True)["error"] == "deadlock"


def test_outcome_ok_has_no_error():
    outcome = Outcome.ok({"id": 1})
    assert outcome.is_ok
    assert outcome.kind is OutcomeKind.OK
    assert outcome.error is None


def test_outcome_failures_carry_errors():
    assert Outcome.not_found(5).error.http_status == 404
    assert Outcome.validation_failed({"name": ["x"]}).error.http_status == 422
    store = Outcome.store_error("Failed to delete inquiry", "delete", ValueError("boom"))
    assert store.kind is OutcomeKind.STORE_ERROR
    assert store.error.cause.args == ("boom",)
    assert not store.is_ok
