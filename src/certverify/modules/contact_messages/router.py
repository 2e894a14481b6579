"""
Contact Form Router

Public endpoint behind the site's contact page.

Endpoints:
- POST /contact-messages - Send a message to the school
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from certverify.core.config import settings
from certverify.core.database import get_db
from certverify.core.exceptions import ServiceError, to_http_exception
from certverify.core.rate_limit import client_ip_key, rate_limit
from certverify.modules.contact_messages import service
from certverify.modules.contact_messages.schemas import (
    ContactMessageCreate,
    ContactMessageSubmitted,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ContactMessageSubmitted,
    status_code=status.HTTP_201_CREATED,
    summary="Send a Contact Message",
    responses={
        422: {"description": "Validation error"},
        429: {"description": "Too many messages from this client"},
    },
)
@rate_limit(
    limit=settings.contact_rate_limit,
    window_seconds=60,
    key_func=client_ip_key("contact_message"),
)
async def submit_contact_message(
    request: Request,
    data: ContactMessageCreate,
    db: AsyncSession = Depends(get_db),
) -> ContactMessageSubmitted:
    """Store a message for the school's admins."""
    try:
        message = await service.submit_message(db, data)
        return ContactMessageSubmitted(id=message.id)

    except ServiceError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Error saving contact message: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred. Please try again later.",
            },
        ) from e
