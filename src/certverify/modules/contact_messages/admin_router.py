"""
Contact Messages Admin Router

Endpoints:
- GET /admin/contact-messages - List messages (optionally unread only)
- GET /admin/contact-messages/{id} - Read a message (marks it read)
- POST /admin/contact-messages/{id}/respond - Save a response
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from certverify.core.auth import AdminUser, get_current_admin_user
from certverify.core.database import get_db
from certverify.core.exceptions import ServiceError, to_http_exception
from certverify.core.rate_limit import enforce_rate_limit
from certverify.modules.contact_messages import service
from certverify.modules.contact_messages.schemas import (
    ContactMessageListResponse,
    ContactMessageResponse,
    RespondRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_RESPOND = (30, 60)  # 30 responses per minute


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
    response_model=ContactMessageListResponse,
    summary="List Contact Messages",
)
async def list_messages(
    unread_only: bool = Query(False, description="Only return unread messages"),
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> ContactMessageListResponse:
    """List messages, newest first."""
    try:
        result = await service.admin_list_messages(
            db, unread_only=unread_only, skip=skip, limit=limit
        )
        return ContactMessageListResponse(
            messages=[ContactMessageResponse.model_validate(m) for m in result["messages"]],
            total=result["total"],
            skip=result["skip"],
            limit=result["limit"],
        )

    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error listing contact messages: {e}")
        raise _internal_error() from e


@router.get(
    "/{message_id}",
    response_model=ContactMessageResponse,
    summary="Read Contact Message",
    responses={404: {"description": "Message not found"}},
)
async def get_message(
    message_id: UUID,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> ContactMessageResponse:
    """Get a message and mark it as read."""
    try:
        message = await service.admin_get_message(db, message_id)
        return ContactMessageResponse.model_validate(message)

    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error reading contact message {message_id}: {e}")
        raise _internal_error() from e


@router.post(
    "/{message_id}/respond",
    response_model=ContactMessageResponse,
    summary="Respond to Contact Message",
    responses={
        400: {"description": "Blank response"},
        404: {"description": "Message not found"},
        429: {"description": "Rate limit exceeded"},
    },
)
async def respond_to_message(
    message_id: UUID,
    data: RespondRequest,
    db: AsyncSession = Depends(get_db),
    admin: AdminUser = Depends(get_current_admin_user),
) -> ContactMessageResponse:
    """Save the admin's response to a message."""
    await enforce_rate_limit(f"admin:contact_respond:{admin.id}", *RATE_LIMIT_RESPOND)

    try:
        message = await service.admin_respond(db, message_id, data.response)
        logger.info(f"Admin {admin.id} responded to contact message {message_id}")
        return ContactMessageResponse.model_validate(message)

    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error responding to contact message {message_id}: {e}")
        raise _internal_error() from e
