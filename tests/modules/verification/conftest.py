"""
Fixtures for verification tests.
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest

from certverify.modules.students.models import GraduationStatus, Student
from certverify.modules.verification.service import VerificationResolver

GRADUATED_ID = UUID("11111111-1111-1111-1111-111111111111")
REVOKED_ID = UUID("22222222-2222-2222-2222-222222222222")
PENDING_ID = UUID("33333333-3333-3333-3333-333333333333")


def make_student(
    student_id: UUID,
    *,
    full_name: str,
    admission_number: str,
    certificate_number: str | None,
    graduation_year: int | None,
    graduation_status,
    photo_url: str | None = None,
):
    """Build a Student stand-in with the given fields."""
    student = MagicMock(spec=Student)
    student.id = student_id
    student.full_name = full_name
    student.admission_number = admission_number
    student.certificate_number = certificate_number
    student.graduation_year = graduation_year
    student.graduation_status = graduation_status
    student.photo_url = photo_url
    student.deleted_at = None
    return student


@pytest.fixture
def graduated_student():
    return make_student(
        GRADUATED_ID,
        full_name="Amina Yusuf",
        admission_number="ADM-2024-001",
        certificate_number="CERT-2024-001",
        graduation_year=2024,
        graduation_status=GraduationStatus.GRADUATED,
        photo_url="https://cdn.example.org/photos/amina.jpg",
    )


@pytest.fixture
def revoked_student():
    return make_student(
        REVOKED_ID,
        full_name="Ibrahim Bello",
        admission_number="ADM-2023-014",
        certificate_number="CERT-2023-014",
        graduation_year=2023,
        graduation_status=GraduationStatus.REVOKED,
    )


@pytest.fixture
def pending_student():
    return make_student(
        PENDING_ID,
        full_name="Fatima Sani",
        admission_number="ADM-2025-007",
        certificate_number=None,
        graduation_year=None,
        graduation_status=GraduationStatus.PENDING,
    )


@pytest.fixture
def students(graduated_student, revoked_student, pending_student):
    return [graduated_student, revoked_student, pending_student]


@pytest.fixture
def records(students):
    """In-memory record source matching on exact column values."""

    async def get_by_unique_column(model, column, value):
        return next((s for s in students if getattr(s, column) == value), None)

    async def get_by_id(model, record_id):
        return next((s for s in students if s.id == record_id), None)

    source = MagicMock()
    source.get_by_unique_column = AsyncMock(side_effect=get_by_unique_column)
    source.get_by_id = AsyncMock(side_effect=get_by_id)
    return source


@pytest.fixture
def settings_source():
    """Settings source with no stored verification message."""
    source = MagicMock()
    source.get_setting = AsyncMock(return_value=None)
    return source


@pytest.fixture
def resolver(records, settings_source):
    return VerificationResolver(records, settings_source)
