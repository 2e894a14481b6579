"""
Students Service Layer

Back office operations on student records.

Uniqueness of admission and certificate numbers is checked up front so the
admin gets a clear conflict message, and the partial unique indexes catch
the race where two admins save the same number at once.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from certverify.core.config import settings
from certverify.core.exceptions import ServiceError
from certverify.modules.contact_messages import repository as contact_repository
from certverify.modules.students import repository
from certverify.modules.students.models import GraduationStatus, Student
from certverify.modules.students.schemas import StudentCreate, StudentResponse, StudentUpdate

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

_FIELD_LABELS = {
    "admission_number": "admission number",
    "certificate_number": "certificate number",
}


class StudentNotFoundError(ServiceError):
    """Raised when a student does not exist or was deleted."""

    def __init__(self, student_id: UUID | None = None):
        message = f"Student {student_id} not found" if student_id else "Student not found"
        super().__init__(
            message=message,
            error_code="STUDENT_NOT_FOUND",
            status_code=404,
        )


class DuplicateStudentError(ServiceError):
    """Raised when an admission or certificate number is already in use."""

    def __init__(self, fields: list[str] | None = None):
        if fields:
            labels = " and ".join(_FIELD_LABELS.get(f, f) for f in fields)
            message = f"A student with this {labels} already exists."
        else:
            message = "A student with this admission or certificate number already exists."
        super().__init__(
            message=message,
            error_code="DUPLICATE_STUDENT",
            status_code=409,
        )
        self.fields = fields or []


def build_verification_url(student_id: UUID) -> str:
    """Public link to a student's verification page, as printed in QR codes."""
    return f"{settings.public_site_url.rstrip('/')}/verify/{student_id}"


def to_response(student: Student) -> StudentResponse:
    """Convert a Student model to its admin response schema."""
    return StudentResponse(
        id=student.id,
        full_name=student.full_name,
        admission_number=student.admission_number,
        certificate_number=student.certificate_number,
        graduation_year=student.graduation_year,
        graduation_status=student.graduation_status,
        gender=student.gender,
        photo_url=student.photo_url,
        created_at=student.created_at,
        updated_at=student.updated_at,
        verification_url=build_verification_url(student.id),
    )


async def _get_student_or_raise(db: AsyncSession, student_id: UUID) -> Student:
    student = await repository.get_active_by_id(db, student_id)
    if student is None:
        raise StudentNotFoundError(student_id)
    return student


async def admin_list_students(
    db: AsyncSession,
    *,
    search: str | None = None,
    status: GraduationStatus | None = None,
    graduation_year: int | None = None,
    skip: int = 0,
    limit: int = 20,
) -> dict:
    """
    Get a paginated list of active students.

    Returns:
        Dict with students list, total count, skip, and limit
    """
    limit = min(max(1, limit), MAX_PAGE_SIZE)
    skip = max(0, skip)
    if search is not None:
        search = search.strip() or None

    students, total = await repository.list_for_admin(
        db,
        search=search,
        status=status,
        graduation_year=graduation_year,
        skip=skip,
        limit=limit,
    )

    logger.info(f"Found {total} students, returning {len(students)}")

    return {
        "students": students,
        "total": total,
        "skip": skip,
        "limit": limit,
    }


async def admin_get_student(db: AsyncSession, student_id: UUID) -> Student:
    """
    Get a single active student.

    Raises:
        StudentNotFoundError: If the student does not exist or was deleted
    """
    return await _get_student_or_raise(db, student_id)


async def admin_create_student(db: AsyncSession, data: StudentCreate) -> Student:
    """
    Create a student record.

    Raises:
        DuplicateStudentError: If the admission or certificate number is taken
    """
    conflicts = await repository.find_conflicts(
        db,
        admission_number=data.admission_number,
        certificate_number=data.certificate_number,
    )
    if conflicts:
        logger.warning(f"Duplicate student rejected: {conflicts}")
        raise DuplicateStudentError(conflicts)

    try:
        student = await repository.create(db, data)
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Unique index rejected student {data.admission_number}: {e.orig}")
        raise DuplicateStudentError() from e

    logger.info(f"Student created: id={student.id}, admission_number={student.admission_number}")
    return student


async def admin_update_student(
    db: AsyncSession,
    student_id: UUID,
    data: StudentUpdate,
) -> Student:
    """
    Apply a partial update to a student.

    Only fields present in the request body are changed.

    Raises:
        StudentNotFoundError: If the student does not exist or was deleted
        DuplicateStudentError: If a new number is taken by another student
    """
    student = await _get_student_or_raise(db, student_id)
    changes = data.model_dump(exclude_unset=True)

    if not changes:
        return student

    conflicts = await repository.find_conflicts(
        db,
        admission_number=changes.get("admission_number"),
        certificate_number=changes.get("certificate_number"),
        exclude_id=student_id,
    )
    if conflicts:
        logger.warning(f"Duplicate numbers rejected for student {student_id}: {conflicts}")
        raise DuplicateStudentError(conflicts)

    try:
        student = await repository.update(db, student, changes)
    except IntegrityError as e:
        await db.rollback()
        logger.warning(f"Unique index rejected update of student {student_id}: {e.orig}")
        raise DuplicateStudentError() from e

    logger.info(f"Student {student_id} updated: fields={sorted(changes)}")
    return student


async def admin_delete_student(db: AsyncSession, student_id: UUID) -> None:
    """
    Soft delete a student. Its numbers become free for reuse.

    Raises:
        StudentNotFoundError: If the student does not exist or was already deleted
    """
    student = await _get_student_or_raise(db, student_id)
    await repository.soft_delete(db, student)
    logger.info(f"Student {student_id} soft-deleted")


async def admin_get_dashboard_stats(db: AsyncSession) -> dict:
    """Student and inbox counts for the admin dashboard."""
    stats = await repository.get_dashboard_counts(db)
    stats["unread_messages"] = await contact_repository.count_unread(db)
    return stats
