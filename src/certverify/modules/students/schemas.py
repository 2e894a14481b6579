"""
Student Schemas

Pydantic schemas for the admin student endpoints.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from certverify.modules.students.models import Gender, GraduationStatus


def _strip_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class StudentCreate(BaseModel):
    """Request body for POST /admin/students."""

    full_name: str = Field(..., min_length=1, max_length=200)
    admission_number: str = Field(..., min_length=1, max_length=50)
    certificate_number: str | None = Field(None, max_length=50)
    graduation_year: int | None = Field(None, ge=1900, le=2100)
    graduation_status: GraduationStatus = GraduationStatus.PENDING
    gender: Gender | None = None
    photo_url: str | None = Field(None, max_length=2000)

    @field_validator("full_name", "admission_number", mode="before")
    @classmethod
    def strip_required(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("certificate_number", "photo_url", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _strip_or_none(value) if isinstance(value, str) else value


class StudentUpdate(BaseModel):
    """Request body for PATCH /admin/students/{id}.

    Only the fields present in the request are changed. Sending an empty
    certificate_number clears it.
    """

    full_name: str | None = Field(None, min_length=1, max_length=200)
    admission_number: str | None = Field(None, min_length=1, max_length=50)
    certificate_number: str | None = Field(None, max_length=50)
    graduation_year: int | None = Field(None, ge=1900, le=2100)
    graduation_status: GraduationStatus | None = None
    gender: Gender | None = None
    photo_url: str | None = Field(None, max_length=2000)

    @field_validator("full_name", "admission_number", mode="before")
    @classmethod
    def strip_required(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("certificate_number", "photo_url", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        return _strip_or_none(value) if isinstance(value, str) else value

    @field_validator("full_name", "admission_number", "graduation_status")
    @classmethod
    def not_null(cls, value):
        # Omit these fields to leave them unchanged; null is not a valid value
        if value is None:
            raise ValueError("field cannot be null")
        return value


class StudentResponse(BaseModel):
    """A student record as seen by admins."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    full_name: str
    admission_number: str
    certificate_number: str | None = None
    graduation_year: int | None = None
    graduation_status: GraduationStatus
    gender: Gender | None = None
    photo_url: str | None = None
    created_at: datetime
    updated_at: datetime
    verification_url: str = Field(..., description="Shareable public verification link")


class StudentListResponse(BaseModel):
    """Paginated list of students."""

    students: list[StudentResponse]
    total: int = Field(..., ge=0)
    skip: int = Field(..., ge=0)
    limit: int = Field(..., ge=1, le=100)


class DashboardStats(BaseModel):
    """Counts shown on the admin dashboard."""

    total_students: int = Field(..., ge=0)
    total_graduates: int = Field(..., ge=0)
    certificates_issued: int = Field(..., ge=0, description="Students with a certificate number")
    revoked_certificates: int = Field(..., ge=0)
    unread_messages: int = Field(..., ge=0)
