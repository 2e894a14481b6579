"""
School Settings Schemas
"""

from pydantic import BaseModel, Field, field_validator


class VerificationMessageResponse(BaseModel):
    """The message shown under graduated students on the verification page."""

    value: str
    is_default: bool = Field(..., description="True when no custom message has been saved")


class VerificationMessageUpdate(BaseModel):
    value: str = Field(..., min_length=1, max_length=1000)

    @field_validator("value", mode="before")
    @classmethod
    def strip_value(cls, value):
        return value.strip() if isinstance(value, str) else value
