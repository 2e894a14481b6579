"""
Contact Message Schemas
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class ContactMessageCreate(BaseModel):
    """Body of the public contact form."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    subject: str = Field(..., min_length=1, max_length=300)
    message: str = Field(..., min_length=1, max_length=5000)

    @field_validator("name", "subject", "message", mode="before")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if isinstance(value, str) else value


class ContactMessageSubmitted(BaseModel):
    """Acknowledgement returned to the site visitor."""

    id: UUID
    message: str = "Thank you for your message. We will get back to you soon."


class ContactMessageResponse(BaseModel):
    """A contact message as seen by admins."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    subject: str
    message: str
    is_read: bool
    admin_response: str | None = None
    responded_at: datetime | None = None
    created_at: datetime


class ContactMessageListResponse(BaseModel):
    """Paginated list of contact messages."""

    messages: list[ContactMessageResponse]
    total: int = Field(..., ge=0)
    skip: int = Field(..., ge=0)
    limit: int = Field(..., ge=1, le=100)


class RespondRequest(BaseModel):
    """Admin response to a contact message."""

    response: str = Field(..., min_length=1, max_length=5000)

    @field_validator("response", mode="before")
    @classmethod
    def strip_response(cls, value):
        return value.strip() if isinstance(value, str) else value
