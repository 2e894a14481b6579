"""
School Settings Models

Key/value settings edited from the admin back office.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from certverify.modules.shared import BaseModel

VERIFICATION_MESSAGE_KEY = "verification_message"
DEFAULT_VERIFICATION_MESSAGE = (
    "This confirms that the above student successfully graduated from ALHIDAYA CENTRE."
)


class SchoolSetting(BaseModel):
    """A single keyed setting value."""

    __tablename__ = "school_settings"

    setting_key: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    setting_value: Mapped[str] = mapped_column(Text, nullable=False)
