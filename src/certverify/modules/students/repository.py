"""
Students Repository

Database operations for student records. Soft-deleted rows are excluded
from every query here; they only stay in the table for audit purposes.
"""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import case, desc, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import GraduationStatus, Student
from .schemas import StudentCreate


async def create(db: AsyncSession, data: StudentCreate) -> Student:
    """Create a new student record."""
    student = Student(
        full_name=data.full_name,
        admission_number=data.admission_number,
        certificate_number=data.certificate_number,
        graduation_year=data.graduation_year,
        graduation_status=data.graduation_status,
        gender=data.gender,
        photo_url=data.photo_url,
    )

    db.add(student)
    await db.commit()
    await db.refresh(student)

    return student


async def get_active_by_id(db: AsyncSession, id: UUID) -> Student | None:
    """Get a student by ID unless it has been soft-deleted."""
    result = await db.execute(
        select(Student).where(Student.id == id, Student.deleted_at.is_(None))
    )
    return result.scalar_one_or_none()


async def find_conflicts(
    db: AsyncSession,
    *,
    admission_number: str | None = None,
    certificate_number: str | None = None,
    exclude_id: UUID | None = None,
) -> list[str]:
    """
    Return the names of the unique fields already used by another active student.

    Args:
        db: Database session
        admission_number: Admission number to check (skipped if None)
        certificate_number: Certificate number to check (skipped if None)
        exclude_id: Student being updated, ignored in the check
    """
    conditions = []
    if admission_number is not None:
        conditions.append(Student.admission_number == admission_number)
    if certificate_number is not None:
        conditions.append(Student.certificate_number == certificate_number)

    if not conditions:
        return []

    query = select(Student.admission_number, Student.certificate_number).where(
        Student.deleted_at.is_(None),
        or_(*conditions),
    )
    if exclude_id is not None:
        query = query.where(Student.id != exclude_id)

    result = await db.execute(query)

    conflicts: list[str] = []
    for row in result.all():
        if admission_number is not None and row.admission_number == admission_number:
            conflicts.append("admission_number")
        if certificate_number is not None and row.certificate_number == certificate_number:
            conflicts.append("certificate_number")

    return sorted(set(conflicts))


async def list_for_admin(
    db: AsyncSession,
    *,
    search: str | None = None,
    status: GraduationStatus | None = None,
    graduation_year: int | None = None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[Student], int]:
    """
    Get active students with filters and pagination, newest first.

    Args:
        db: Database session
        search: Case-insensitive match on name, admission or certificate number
        status: Filter by graduation status
        graduation_year: Filter by graduation year
        skip: Records to skip
        limit: Maximum records to return

    Returns:
        Tuple of (students, total count matching filters)
    """
    query = select(Student).where(Student.deleted_at.is_(None))

    if status:
        query = query.where(Student.graduation_status == status)

    if graduation_year is not None:
        query = query.where(Student.graduation_year == graduation_year)

    if search:
        search_pattern = f"%{search}%"
        query = query.where(
            or_(
                Student.full_name.ilike(search_pattern),
                Student.admission_number.ilike(search_pattern),
                Student.certificate_number.ilike(search_pattern),
            )
        )

    count_query = select(func.count()).select_from(query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    query = query.order_by(desc(Student.created_at)).offset(skip).limit(limit)

    result = await db.execute(query)
    students = list(result.scalars().all())

    return students, total


async def update(db: AsyncSession, student: Student, changes: dict) -> Student:
    """Apply field changes to a student and persist them."""
    for field, value in changes.items():
        setattr(student, field, value)

    await db.commit()
    await db.refresh(student)

    return student


async def soft_delete(db: AsyncSession, student: Student) -> Student:
    """Mark a student as deleted. The row is kept."""
    student.deleted_at = datetime.now(UTC)

    await db.commit()
    await db.refresh(student)

    return student


async def count_active_for_year(db: AsyncSession, year: int) -> int:
    """Count active students assigned to a graduation year."""
    result = await db.execute(
        select(func.count()).where(
            Student.graduation_year == year,
            Student.deleted_at.is_(None),
        )
    )
    return result.scalar() or 0


async def count_by_graduation_year(db: AsyncSession) -> dict[int, int]:
    """Map each graduation year to its number of active students."""
    result = await db.execute(
        select(Student.graduation_year, func.count())
        .where(Student.deleted_at.is_(None), Student.graduation_year.is_not(None))
        .group_by(Student.graduation_year)
    )
    return {year: count for year, count in result.all()}


async def get_dashboard_counts(db: AsyncSession) -> dict:
    """
    Get student counts for the admin dashboard in a single query.

    Returns:
        Dict with total_students, total_graduates, certificates_issued
        and revoked_certificates
    """
    query = select(
        func.count().label("total_students"),
        func.count(
            case((Student.graduation_status == GraduationStatus.GRADUATED, 1)),
        ).label("total_graduates"),
        func.count(Student.certificate_number).label("certificates_issued"),
        func.count(
            case((Student.graduation_status == GraduationStatus.REVOKED, 1)),
        ).label("revoked_certificates"),
    ).where(Student.deleted_at.is_(None))

    result = await db.execute(query)
    row = result.one()

    return {
        "total_students": row.total_students,
        "total_graduates": row.total_graduates,
        "certificates_issued": row.certificates_issued,
        "revoked_certificates": row.revoked_certificates,
    }
