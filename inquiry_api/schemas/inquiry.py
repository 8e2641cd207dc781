"""Inquiry Schemas - Pydantic models with field-level validation for API boundaries.

Invariants:
    - InquiryCreate: name/email/category/subject/message required, message >= 10 chars
    - InquiryUpdate: every field optional, explicit null rejected for required columns
    - Explicit null priority is rejected on create as well
    - Blank phone/resolution_notes are stored as null
    - resolved_at is never accepted from callers (unknown fields are ignored)
    - Strings are whitespace-stripped before length checks

Design Decisions:
    - Enums from core/domain_types for category/status/priority: Pydantic validates natively
    - VALIDATION_MESSAGES keyed by (field, error type): user-facing text lives next to the rules
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from inquiry_api.core.domain_types import (
    InquiryCategory, InquiryPriority, InquiryStatus,
)

EMAIL_MAX_LENGTH = 255


def _choices(enum_cls) -> str:
    return ", ".join(member.value for member in enum_cls)


VALIDATION_MESSAGES: dict[tuple[str, str], str] = {
    ("name", "missing"): "Please provide your name.",
    ("name", "string_too_short"): "Please provide your name.",
    ("email", "missing"): "Please provide your email address.",
    ("email", "value_error"): "Please provide a valid email address.",
    ("category", "missing"): "Please select an inquiry category.",
    ("category", "enum"): (
        "The selected category is invalid. Valid categories are: "
        + _choices(InquiryCategory)
    ),
    ("subject", "missing"): "Please provide a subject for your inquiry.",
    ("subject", "string_too_short"): "Please provide a subject for your inquiry.",
    ("message", "missing"): "Please provide a message describing your inquiry.",
    ("message", "string_too_short"): "The message must be at least 10 characters long.",
    ("status", "enum"): (
        "The selected status is invalid. Valid statuses are: "
        + _choices(InquiryStatus)
    ),
    ("priority", "enum"): (
        "The selected priority is invalid. Valid priorities are: "
        + _choices(InquiryPriority)
    ),
}


def _check_email_length(v):
    if isinstance(v, str) and len(v.strip()) > EMAIL_MAX_LENGTH:
        raise PydanticCustomError(
            "email_too_long",
            "The email address may not be greater than {max_length} characters.",
            {"max_length": EMAIL_MAX_LENGTH},
        )
    return v


def _reject_null(v):
    if v is None:
        raise PydanticCustomError("null_not_allowed", "This field may not be null.")
    return v


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class InquiryCreate(BaseModel):
    """Inquiry submission - validates every field rule at once."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(None, max_length=20)
    category: InquiryCategory
    subject: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=10)
    priority: InquiryPriority | None = None

    # Before EmailStr: overlong input reports as too long, not malformed
    @field_validator("email", mode="before")
    @classmethod
    def email_max_length(cls, v):
        return _check_email_length(v)

    @field_validator("phone", mode="before")
    @classmethod
    def blank_phone_is_null(cls, v):
        return _blank_to_none(v)

    @field_validator("priority", mode="before")
    @classmethod
    def reject_null_priority(cls, v):
        return _reject_null(v)

    def to_fields(self) -> dict:
        """Column values for the repository; unset priority falls to the model default."""
        return self.model_dump(mode="json", exclude_none=True)


class InquiryUpdate(BaseModel):
    """Partial update - only fields present in the payload are applied."""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=20)
    category: InquiryCategory | None = None
    subject: str | None = Field(None, min_length=1, max_length=255)
    message: str | None = Field(None, min_length=10)
    status: InquiryStatus | None = None
    priority: InquiryPriority | None = None
    resolution_notes: str | None = None

    @field_validator(
        "name", "email", "category", "subject", "message", "status", "priority",
        mode="before",
    )
    @classmethod
    def reject_explicit_null(cls, v):
        return _reject_null(v)

    @field_validator("email", mode="before")
    @classmethod
    def email_max_length(cls, v):
        return _check_email_length(v)

    @field_validator("phone", "resolution_notes", mode="before")
    @classmethod
    def blank_is_null(cls, v):
        return _blank_to_none(v)

    def to_fields(self) -> dict:
        return self.model_dump(mode="json", exclude_unset=True)


class InquiryResponse(BaseModel):
    """Inquiry response - public-facing record, deleted_at never exposed."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str | None
    category: str
    subject: str
    message: str
    status: str
    priority: str
    resolved_at: datetime | None
    resolution_notes: str | None
    created_at: datetime
    updated_at: datetime
