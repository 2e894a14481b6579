"""
School Settings Admin Router

Endpoints:
- GET /admin/settings/verification-message - Current verification message
- PUT /admin/settings/verification-message - Replace the verification message
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from certverify.core.auth import AdminUser, get_current_admin_user
from certverify.core.database import get_db
from certverify.core.rate_limit import enforce_rate_limit
from certverify.modules.settings import service
from certverify.modules.settings.schemas import (
    VerificationMessageResponse,
    VerificationMessageUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_UPDATE = (10, 60)  # 10 updates per minute


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )


@router.get(
    "/verification-message",
    response_model=VerificationMessageResponse,
    summary="Get Verification Message",
)
async def get_verification_message(
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> VerificationMessageResponse:
    try:
        return await service.get_verification_message(db)
    except Exception as e:
        logger.exception(f"Error reading verification message: {e}")
        raise _internal_error() from e


@router.put(
    "/verification-message",
    response_model=VerificationMessageResponse,
    summary="Update Verification Message",
    description="Replace the message shown on verification pages of graduated students.",
    responses={422: {"description": "Blank or too long message"}},
)
async def update_verification_message(
    data: VerificationMessageUpdate,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> VerificationMessageResponse:
    await enforce_rate_limit(f"admin:settings_update:{admin.id}", *RATE_LIMIT_UPDATE)

    try:
        result = await service.update_verification_message(db, data.value)
        logger.info(f"Admin {admin.id} updated the verification message")
        return result
    except Exception as e:
        logger.exception(f"Error updating verification message: {e}")
        raise _internal_error() from e
