"""
Graduation Years Admin Router

Endpoints:
- GET /admin/graduation-years - List years with student counts
- POST /admin/graduation-years - Add a year
- DELETE /admin/graduation-years/{id} - Delete a year without students
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from certverify.core.auth import AdminUser, get_current_admin_user
from certverify.core.database import get_db
from certverify.core.exceptions import ServiceError, to_http_exception
from certverify.core.rate_limit import enforce_rate_limit
from certverify.modules.graduation_years import service
from certverify.modules.graduation_years.schemas import (
    GraduationYearCreate,
    GraduationYearResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_MUTATE = (20, 60)  # 20 adds/deletes per minute


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
    response_model=list[GraduationYearResponse],
    summary="List Graduation Years",
)
async def list_years(
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> list[GraduationYearResponse]:
    """List graduation years, most recent first."""
    try:
        return await service.admin_list_years(db)
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error listing graduation years: {e}")
        raise _internal_error() from e


@router.post(
    "",
    response_model=GraduationYearResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add Graduation Year",
    responses={
        409: {"description": "Year already exists"},
        422: {"description": "Year outside 1900-2100"},
    },
)
async def add_year(
    data: GraduationYearCreate,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> GraduationYearResponse:
    """Add a graduation year."""
    await enforce_rate_limit(f"admin:graduation_years:{admin.id}", *RATE_LIMIT_MUTATE)

    try:
        result = await service.admin_add_year(db, data.year)
        logger.info(f"Admin {admin.id} added graduation year {data.year}")
        return result
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error adding graduation year {data.year}: {e}")
        raise _internal_error() from e


@router.delete(
    "/{year_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Graduation Year",
    responses={
        404: {"description": "Year not found"},
        409: {"description": "Students are still assigned to the year"},
    },
)
async def delete_year(
    year_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> None:
    """Delete a graduation year that has no active students."""
    await enforce_rate_limit(f"admin:graduation_years:{admin.id}", *RATE_LIMIT_MUTATE)

    try:
        await service.admin_delete_year(db, year_id)
        logger.info(f"Admin {admin.id} deleted graduation year {year_id}")
    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error deleting graduation year {year_id}: {e}")
        raise _internal_error() from e
