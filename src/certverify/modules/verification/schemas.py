"""
Verification Schemas

Pydantic models for certificate search results and the public
verification view.
"""

import enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SearchKind(str, enum.Enum):
    """Which unique column a public search matches against."""

    ADMISSION_NUMBER = "admission_number"
    CERTIFICATE_NUMBER = "certificate_number"


class StatusTone(str, enum.Enum):
    """Visual tone the front end uses for a status banner."""

    SUCCESS = "success"
    DANGER = "danger"
    WARNING = "warning"
    NEUTRAL = "neutral"


class LookupResult(BaseModel):
    """Outcome of a search: either Found(student_id) or NotFound."""

    model_config = ConfigDict(frozen=True)

    found: bool
    student_id: UUID | None = None

    @classmethod
    def found_record(cls, student_id: UUID) -> "LookupResult":
        return cls(found=True, student_id=student_id)

    @classmethod
    def not_found(cls) -> "LookupResult":
        return cls(found=False)


class StatusPresentation(BaseModel):
    """How a graduation status is presented on the verification page."""

    model_config = ConfigDict(frozen=True)

    label: str
    tone: StatusTone
    description: str
    message: str | None = None


class VerificationView(BaseModel):
    """Public verification view of a single student record."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    full_name: str
    admission_number: str
    certificate_number: str | None = None
    graduation_year: int | None = None
    graduation_status: str
    photo_url: str | None = None
    status_presentation: StatusPresentation


class SearchResponse(BaseModel):
    """Response for GET /verify/search.

    A miss is an expected outcome, so it is reported with found=false
    rather than an error status.
    """

    found: bool
    student_id: UUID | None = None
    verification_path: str | None = Field(None, description="Path of the verification page")
    message: str | None = None
