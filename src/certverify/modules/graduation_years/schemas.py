"""
Graduation Year Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from certverify.modules.graduation_years.models import MAX_GRADUATION_YEAR, MIN_GRADUATION_YEAR


class GraduationYearCreate(BaseModel):
    year: int = Field(..., ge=MIN_GRADUATION_YEAR, le=MAX_GRADUATION_YEAR)


class GraduationYearResponse(BaseModel):
    """A graduation year with the number of active students assigned to it."""

    id: UUID
    year: int
    student_count: int = Field(0, ge=0)
    created_at: datetime
