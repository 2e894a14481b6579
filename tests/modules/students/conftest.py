"""
Fixtures for students tests.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from certverify.modules.students.models import Gender, GraduationStatus, Student
from certverify.modules.students.schemas import StudentCreate


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.rollback = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def student_id():
    return uuid4()


@pytest.fixture
def sample_student(student_id):
    """An active graduated student."""
    student = MagicMock(spec=Student)
    student.id = student_id
    student.full_name = "Amina Yusuf"
    student.admission_number = "ADM-2024-001"
    student.certificate_number = "CERT-2024-001"
    student.graduation_year = 2024
    student.graduation_status = GraduationStatus.GRADUATED
    student.gender = Gender.FEMALE
    student.photo_url = None
    student.deleted_at = None
    student.created_at = datetime(2024, 7, 1, tzinfo=UTC)
    student.updated_at = datetime(2024, 7, 1, tzinfo=UTC)
    return student


@pytest.fixture
def sample_student_create():
    return StudentCreate(
        full_name="Amina Yusuf",
        admission_number="ADM-2024-001",
        certificate_number="CERT-2024-001",
        graduation_year=2024,
        graduation_status=GraduationStatus.GRADUATED,
        gender=Gender.FEMALE,
    )
