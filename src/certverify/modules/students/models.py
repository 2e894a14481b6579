"""
Student Models

Student records whose certificates can be verified publicly.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from certverify.modules.shared import BaseModel


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class GraduationStatus(str, enum.Enum):
    """Graduation status of a student; drives what the verification page shows."""

    PENDING = "pending"
    GRADUATED = "graduated"
    REVOKED = "revoked"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"


class Student(BaseModel):
    """
    Student record.

    admission_number and certificate_number are unique among rows that are
    not soft-deleted; the partial unique indexes below are the source of
    truth for that rule.
    """

    __tablename__ = "students"

    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    admission_number: Mapped[str] = mapped_column(String(50), nullable=False)
    certificate_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    graduation_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    graduation_status: Mapped[GraduationStatus] = mapped_column(
        Enum(GraduationStatus, name="graduation_status", values_callable=_enum_values),
        nullable=False,
        default=GraduationStatus.PENDING,
    )
    gender: Mapped[Gender | None] = mapped_column(
        Enum(Gender, name="gender", values_callable=_enum_values), nullable=True
    )
    photo_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Soft delete marker
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index(
            "uq_students_admission_number_active",
            "admission_number",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
        ),
        Index(
            "uq_students_certificate_number_active",
            "certificate_number",
            unique=True,
            postgresql_where=text("deleted_at IS NULL AND certificate_number IS NOT NULL"),
        ),
        Index("ix_students_graduation_status", "graduation_status"),
        Index("ix_students_graduation_year", "graduation_year"),
    )

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, admission_number={self.admission_number})>"
