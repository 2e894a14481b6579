"""
Graduation Year Models
"""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column

from certverify.modules.shared import BaseModel

MIN_GRADUATION_YEAR = 1900
MAX_GRADUATION_YEAR = 2100


class GraduationYear(BaseModel):
    """A graduation year used to group students in the back office."""

    __tablename__ = "graduation_years"

    year: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
