"""
Tests for students service functions.

These tests verify:
- Listing with pagination bounds
- Duplicate detection on create and update
- Partial updates
- Soft delete
- Dashboard statistics
"""

from unittest.mock import AsyncMock, patch
from uuid import UUID

import pytest
from sqlalchemy.exc import IntegrityError

from certverify.modules.students.models import GraduationStatus
from certverify.modules.students.schemas import StudentUpdate
from certverify.modules.students.service import (
    DuplicateStudentError,
    StudentNotFoundError,
    admin_create_student,
    admin_delete_student,
    admin_get_dashboard_stats,
    admin_get_student,
    admin_list_students,
    admin_update_student,
    build_verification_url,
    to_response,
)

REPOSITORY = "certverify.modules.students.service.repository"


# ============================================
# Test admin_list_students
# ============================================


@pytest.mark.asyncio
async def test_list_students_passes_filters(mock_db, sample_student):
    with patch(REPOSITORY) as mock_repo:
        mock_repo.list_for_admin = AsyncMock(return_value=([sample_student], 1))

        result = await admin_list_students(
            mock_db,
            search="  amina ",
            status=GraduationStatus.GRADUATED,
            graduation_year=2024,
            skip=0,
            limit=10,
        )

        assert result["students"] == [sample_student]
        assert result["total"] == 1
        mock_repo.list_for_admin.assert_called_once_with(
            mock_db,
            search="amina",
            status=GraduationStatus.GRADUATED,
            graduation_year=2024,
            skip=0,
            limit=10,
        )


@pytest.mark.asyncio
async def test_list_students_caps_pagination(mock_db):
    with patch(REPOSITORY) as mock_repo:
        mock_repo.list_for_admin = AsyncMock(return_value=([], 0))

        result = await admin_list_students(mock_db, search="   ", skip=-5, limit=500)

        assert result["limit"] == 100
        assert result["skip"] == 0
        assert mock_repo.list_for_admin.call_args.kwargs["search"] is None


# ============================================
# Test admin_get_student
# ============================================


@pytest.mark.asyncio
async def test_get_student_success(mock_db, student_id, sample_student):
    with patch(REPOSITORY) as mock_repo:
        mock_repo.get_active_by_id = AsyncMock(return_value=sample_student)

        result = await admin_get_student(mock_db, student_id)

        assert result == sample_student
        mock_repo.get_active_by_id.assert_called_once_with(mock_db, student_id)


@pytest.mark.asyncio
async def test_get_student_not_found(mock_db, student_id):
    with patch(REPOSITORY) as mock_repo:
        mock_repo.get_active_by_id = AsyncMock(return_value=None)

        with pytest.raises(StudentNotFoundError) as exc_info:
            await admin_get_student(mock_db, student_id)

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_code == "STUDENT_NOT_FOUND"


# ============================================
# Test admin_create_student
# ============================================


@pytest.mark.asyncio
async def test_create_student_success(mock_db, sample_student_create, sample_student):
    with patch(REPOSITORY) as mock_repo:
        mock_repo.find_conflicts = AsyncMock(return_value=[])
        mock_repo.create = AsyncMock(return_value=sample_student)

        result = await admin_create_student(mock_db, sample_student_create)

        assert result == sample_student
        mock_repo.find_conflicts.assert_called_once_with(
            mock_db,
            admission_number="ADM-2024-001",
            certificate_number="CERT-2024-001",
        )
        mock_repo.create.assert_called_once_with(mock_db, sample_student_create)


@pytest.mark.asyncio
async def test_create_student_duplicate_admission_number(mock_db, sample_student_create):
    with patch(REPOSITORY) as mock_repo:
        mock_repo.find_conflicts = AsyncMock(return_value=["admission_number"])
        mock_repo.create = AsyncMock()

        with pytest.raises(DuplicateStudentError) as exc_info:
            await admin_create_student(mock_db, sample_student_create)

        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == "DUPLICATE_STUDENT"
        assert exc_info.value.fields == ["admission_number"]
        assert "admission number" in exc_info.value.message
        mock_repo.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_student_unique_index_race(mock_db, sample_student_create):
    """A concurrent insert caught by the unique index is still a duplicate."""
    with patch(REPOSITORY) as mock_repo:
        mock_repo.find_conflicts = AsyncMock(return_value=[])
        mock_repo.create = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("duplicate key"))
        )

        with pytest.raises(DuplicateStudentError):
            await admin_create_student(mock_db, sample_student_create)

        mock_db.rollback.assert_awaited_once()


# ============================================
# Test admin_update_student
# ============================================


@pytest.mark.asyncio
async def test_update_student_applies_only_sent_fields(mock_db, student_id, sample_student):
    data = StudentUpdate(graduation_status=GraduationStatus.REVOKED)

    with patch(REPOSITORY) as mock_repo:
        mock_repo.get_active_by_id = AsyncMock(return_value=sample_student)
        mock_repo.find_conflicts = AsyncMock(return_value=[])
        mock_repo.update = AsyncMock(return_value=sample_student)

        await admin_update_student(mock_db, student_id, data)

        mock_repo.update.assert_called_once_with(
            mock_db, sample_student, {"graduation_status": GraduationStatus.REVOKED}
        )


@pytest.mark.asyncio
async def test_update_student_blank_certificate_clears_it(mock_db, student_id, sample_student):
    data = StudentUpdate(certificate_number="   ")

    with patch(REPOSITORY) as mock_repo:
        mock_repo.get_active_by_id = AsyncMock(return_value=sample_student)
        mock_repo.find_conflicts = AsyncMock(return_value=[])
        mock_repo.update = AsyncMock(return_value=sample_student)

        await admin_update_student(mock_db, student_id, data)

        mock_repo.update.assert_called_once_with(
            mock_db, sample_student, {"certificate_number": None}
        )


@pytest.mark.asyncio
async def test_update_student_duplicate_excludes_itself(mock_db, student_id, sample_student):
    data = StudentUpdate(certificate_number="CERT-2023-014")

    with patch(REPOSITORY) as mock_repo:
        mock_repo.get_active_by_id = AsyncMock(return_value=sample_student)
        mock_repo.find_conflicts = AsyncMock(return_value=["certificate_number"])
        mock_repo.update = AsyncMock()

        with pytest.raises(DuplicateStudentError):
            await admin_update_student(mock_db, student_id, data)

        mock_repo.find_conflicts.assert_called_once_with(
            mock_db,
            admission_number=None,
            certificate_number="CERT-2023-014",
            exclude_id=student_id,
        )
        mock_repo.update.assert_not_called()


@pytest.mark.asyncio
async def test_update_student_empty_body_is_noop(mock_db, student_id, sample_student):
    with patch(REPOSITORY) as mock_repo:
        mock_repo.get_active_by_id = AsyncMock(return_value=sample_student)
        mock_repo.update = AsyncMock()

        result = await admin_update_student(mock_db, student_id, StudentUpdate())

        assert result == sample_student
        mock_repo.update.assert_not_called()


@pytest.mark.asyncio
async def test_update_deleted_student_not_found(mock_db, student_id):
    with patch(REPOSITORY) as mock_repo:
        mock_repo.get_active_by_id = AsyncMock(return_value=None)

        with pytest.raises(StudentNotFoundError):
            await admin_update_student(mock_db, student_id, StudentUpdate(full_name="New Name"))


# ============================================
# Test admin_delete_student
# ============================================


@pytest.mark.asyncio
async def test_delete_student_soft_deletes(mock_db, student_id, sample_student):
    with patch(REPOSITORY) as mock_repo:
        mock_repo.get_active_by_id = AsyncMock(return_value=sample_student)
        mock_repo.soft_delete = AsyncMock(return_value=sample_student)

        await admin_delete_student(mock_db, student_id)

        mock_repo.soft_delete.assert_called_once_with(mock_db, sample_student)


@pytest.mark.asyncio
async def test_delete_already_deleted_student(mock_db, student_id):
    with patch(REPOSITORY) as mock_repo:
        mock_repo.get_active_by_id = AsyncMock(return_value=None)
        mock_repo.soft_delete = AsyncMock()

        with pytest.raises(StudentNotFoundError):
            await admin_delete_student(mock_db, student_id)

        mock_repo.soft_delete.assert_not_called()


# ============================================
# Test admin_get_dashboard_stats
# ============================================


@pytest.mark.asyncio
async def test_dashboard_stats_include_unread_messages(mock_db):
    counts = {
        "total_students": 120,
        "total_graduates": 80,
        "certificates_issued": 78,
        "revoked_certificates": 2,
    }

    with (
        patch(REPOSITORY) as mock_repo,
        patch("certverify.modules.students.service.contact_repository") as mock_contacts,
    ):
        mock_repo.get_dashboard_counts = AsyncMock(return_value=dict(counts))
        mock_contacts.count_unread = AsyncMock(return_value=4)

        result = await admin_get_dashboard_stats(mock_db)

        assert result == {**counts, "unread_messages": 4}


# ============================================
# Test verification URLs
# ============================================


def test_build_verification_url():
    student_id = UUID("11111111-1111-1111-1111-111111111111")

    with patch("certverify.modules.students.service.settings") as mock_settings:
        mock_settings.public_site_url = "https://verify.alhidaya.test/"

        url = build_verification_url(student_id)

    assert url == "https://verify.alhidaya.test/verify/11111111-1111-1111-1111-111111111111"


def test_to_response_includes_verification_url(sample_student):
    response = to_response(sample_student)

    assert response.id == sample_student.id
    assert response.admission_number == "ADM-2024-001"
    assert response.verification_url.endswith(f"/verify/{sample_student.id}")
