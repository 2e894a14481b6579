"""
Graduation Years Service Layer

The list of graduation years the back office groups students by. A year
cannot be removed while active students still belong to it.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from certverify.core.exceptions import ServiceError
from certverify.modules.graduation_years import repository
from certverify.modules.graduation_years.models import GraduationYear
from certverify.modules.graduation_years.schemas import GraduationYearResponse
from certverify.modules.students import repository as student_repository

logger = logging.getLogger(__name__)


class GraduationYearNotFoundError(ServiceError):
    def __init__(self, year_id: UUID | None = None):
        message = f"Graduation year {year_id} not found" if year_id else "Graduation year not found"
        super().__init__(
            message=message,
            error_code="YEAR_NOT_FOUND",
            status_code=404,
        )


class DuplicateYearError(ServiceError):
    def __init__(self, year: int):
        super().__init__(
            message=f"Graduation year {year} already exists.",
            error_code="DUPLICATE_YEAR",
            status_code=409,
        )


class YearHasStudentsError(ServiceError):
    """Raised when deleting a year that active students still reference."""

    def __init__(self, year: int, student_count: int):
        super().__init__(
            message=(
                f"Cannot delete {year}: {student_count} student(s) are assigned to it. "
                "Reassign or delete them first."
            ),
            error_code="YEAR_HAS_STUDENTS",
            status_code=409,
        )
        self.student_count = student_count


def _to_response(graduation_year: GraduationYear, student_count: int) -> GraduationYearResponse:
    return GraduationYearResponse(
        id=graduation_year.id,
        year=graduation_year.year,
        student_count=student_count,
        created_at=graduation_year.created_at,
    )


async def admin_list_years(db: AsyncSession) -> list[GraduationYearResponse]:
    """All years, most recent first, with their active student counts."""
    years = await repository.list_all(db)
    counts = await student_repository.count_by_graduation_year(db)
    return [_to_response(y, counts.get(y.year, 0)) for y in years]


async def admin_add_year(db: AsyncSession, year: int) -> GraduationYearResponse:
    """
    Add a graduation year.

    Raises:
        DuplicateYearError: If the year already exists
    """
    if await repository.get_by_year(db, year) is not None:
        raise DuplicateYearError(year)

    try:
        graduation_year = await repository.create(db, year)
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateYearError(year) from e

    logger.info(f"Graduation year {year} added")
    student_count = await student_repository.count_active_for_year(db, year)
    return _to_response(graduation_year, student_count)


async def admin_delete_year(db: AsyncSession, year_id: UUID) -> None:
    """
    Delete a graduation year.

    Raises:
        GraduationYearNotFoundError: If the year does not exist
        YearHasStudentsError: If active students are assigned to the year
    """
    graduation_year = await repository.get_by_id(db, year_id)
    if graduation_year is None:
        raise GraduationYearNotFoundError(year_id)

    student_count = await student_repository.count_active_for_year(db, graduation_year.year)
    if student_count > 0:
        logger.warning(
            f"Refused to delete graduation year {graduation_year.year}: "
            f"{student_count} active students"
        )
        raise YearHasStudentsError(graduation_year.year, student_count)

    await repository.delete(db, graduation_year)
    logger.info(f"Graduation year {graduation_year.year} deleted")
