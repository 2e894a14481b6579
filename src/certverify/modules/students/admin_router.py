"""
Students Admin Router

Endpoints for school administrators to manage student records.
All endpoints require a valid admin token.

Endpoints:
- GET /admin/students - List students with filters and pagination
- GET /admin/students/stats - Dashboard statistics
- GET /admin/students/{id} - Get a student
- POST /admin/students - Create a student
- PATCH /admin/students/{id} - Update a student
- DELETE /admin/students/{id} - Soft delete a student
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from certverify.core.auth import AdminUser, get_current_admin_user
from certverify.core.database import get_db
from certverify.core.exceptions import ServiceError, to_http_exception
from certverify.core.rate_limit import enforce_rate_limit
from certverify.modules.students import service
from certverify.modules.students.models import GraduationStatus
from certverify.modules.students.schemas import (
    DashboardStats,
    StudentCreate,
    StudentListResponse,
    StudentResponse,
    StudentUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_CREATE = (30, 60)  # 30 creates per minute
RATE_LIMIT_UPDATE = (60, 60)  # 60 updates per minute
RATE_LIMIT_DELETE = (20, 60)  # 20 deletes per minute

ADMIN_RESPONSES = {
    401: {"description": "Unauthorized - invalid or missing token"},
    403: {"description": "Forbidden - not an admin"},
}


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )


@router.get(
    "",
    response_model=StudentListResponse,
    summary="List Students",
    description="""
Get a paginated list of students, newest first. Deleted students are hidden.

**Filters:**
- `search`: Case-insensitive match on name, admission number or certificate number
- `status`: Graduation status
- `graduation_year`: Graduation year
""",
    responses=ADMIN_RESPONSES,
)
async def list_students(
    search: str | None = Query(None, max_length=100, description="Search term"),
    status: GraduationStatus | None = Query(None, description="Filter by graduation status"),
    graduation_year: int | None = Query(None, ge=1900, le=2100, description="Filter by year"),
    skip: int = Query(0, ge=0, description="Records to skip"),
    limit: int = Query(20, ge=1, le=100, description="Maximum records to return"),
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> StudentListResponse:
    """List students with filters and pagination."""
    try:
        result = await service.admin_list_students(
            db,
            search=search,
            status=status,
            graduation_year=graduation_year,
            skip=skip,
            limit=limit,
        )

        logger.info(
            f"Admin {admin.id} listed students: "
            f"total={result['total']}, returned={len(result['students'])}"
        )

        return StudentListResponse(
            students=[service.to_response(s) for s in result["students"]],
            total=result["total"],
            skip=result["skip"],
            limit=result["limit"],
        )

    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error listing students: {e}")
        raise _internal_error() from e


@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Get Dashboard Statistics",
    responses=ADMIN_RESPONSES,
)
async def get_stats(
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> DashboardStats:
    """Get counts for the admin dashboard."""
    try:
        stats = await service.admin_get_dashboard_stats(db)
        logger.info(f"Admin {admin.id} fetched dashboard stats")
        return DashboardStats(**stats)

    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error getting dashboard stats: {e}")
        raise _internal_error() from e


@router.get(
    "/{student_id}",
    response_model=StudentResponse,
    summary="Get Student",
    responses={**ADMIN_RESPONSES, 404: {"description": "Student not found"}},
)
async def get_student(
    student_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> StudentResponse:
    """Get a student, including the shareable verification URL."""
    try:
        student = await service.admin_get_student(db, student_id)
        return service.to_response(student)

    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error getting student {student_id}: {e}")
        raise _internal_error() from e


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Student",
    description="""
Create a student record.

Admission and certificate numbers must not be used by another student.
A blank certificate number is stored as null (no certificate issued yet).
""",
    responses={
        **ADMIN_RESPONSES,
        409: {"description": "Admission or certificate number already in use"},
        429: {"description": "Rate limit exceeded"},
    },
)
async def create_student(
    data: StudentCreate,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> StudentResponse:
    """Create a student."""
    await enforce_rate_limit(f"admin:students_create:{admin.id}", *RATE_LIMIT_CREATE)

    try:
        student = await service.admin_create_student(db, data)
        logger.info(f"Admin {admin.id} created student {student.id}")
        return service.to_response(student)

    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error creating student: {e}")
        raise _internal_error() from e


@router.patch(
    "/{student_id}",
    response_model=StudentResponse,
    summary="Update Student",
    responses={
        **ADMIN_RESPONSES,
        404: {"description": "Student not found"},
        409: {"description": "Admission or certificate number already in use"},
        429: {"description": "Rate limit exceeded"},
    },
)
async def update_student(
    student_id: UUID,
    data: StudentUpdate,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> StudentResponse:
    """Update the fields present in the body."""
    await enforce_rate_limit(f"admin:students_update:{admin.id}", *RATE_LIMIT_UPDATE)

    try:
        student = await service.admin_update_student(db, student_id, data)
        logger.info(f"Admin {admin.id} updated student {student_id}")
        return service.to_response(student)

    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error updating student {student_id}: {e}")
        raise _internal_error() from e


@router.delete(
    "/{student_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Student",
    description="Soft delete a student. Its verification page stops resolving.",
    responses={
        **ADMIN_RESPONSES,
        404: {"description": "Student not found"},
        429: {"description": "Rate limit exceeded"},
    },
)
async def delete_student(
    student_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> None:
    """Soft delete a student."""
    await enforce_rate_limit(f"admin:students_delete:{admin.id}", *RATE_LIMIT_DELETE)

    try:
        await service.admin_delete_student(db, student_id)
        logger.info(f"Admin {admin.id} deleted student {student_id}")

    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error deleting student {student_id}: {e}")
        raise _internal_error() from e
