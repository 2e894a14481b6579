"""
Contact Messages Service Layer

Public contact form submissions and the admin inbox.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from certverify.core.exceptions import ServiceError
from certverify.modules.contact_messages import repository
from certverify.modules.contact_messages.models import ContactMessage
from certverify.modules.contact_messages.schemas import ContactMessageCreate

logger = logging.getLogger(__name__)


class MessageNotFoundError(ServiceError):
    """Raised when a contact message does not exist."""

    def __init__(self, message_id: UUID | None = None):
        message = f"Message {message_id} not found" if message_id else "Message not found"
        super().__init__(
            message=message,
            error_code="MESSAGE_NOT_FOUND",
            status_code=404,
        )


class EmptyResponseError(ServiceError):
    """Raised when an admin submits a blank response."""

    def __init__(self):
        super().__init__(
            message="Please enter a response.",
            error_code="INVALID_INPUT",
            status_code=400,
        )


async def submit_message(db: AsyncSession, data: ContactMessageCreate) -> ContactMessage:
    """Store a message from the public contact form."""
    message = await repository.create(db, data)
    # Log the id only; the body may contain personal details
    logger.info(f"Contact message received: id={message.id}")
    return message


async def admin_list_messages(
    db: AsyncSession,
    *,
    unread_only: bool = False,
    skip: int = 0,
    limit: int = 20,
) -> dict:
    """Get a page of messages, newest first."""
    limit = min(max(1, limit), 100)
    skip = max(0, skip)

    messages, total = await repository.list_messages(
        db, unread_only=unread_only, skip=skip, limit=limit
    )

    return {
        "messages": messages,
        "total": total,
        "skip": skip,
        "limit": limit,
    }


async def admin_get_message(db: AsyncSession, message_id: UUID) -> ContactMessage:
    """
    Get a message and mark it as read.

    Raises:
        MessageNotFoundError: If the message does not exist
    """
    message = await repository.get_by_id(db, message_id)
    if message is None:
        raise MessageNotFoundError(message_id)

    if not message.is_read:
        message = await repository.mark_read(db, message)

    return message


async def admin_respond(db: AsyncSession, message_id: UUID, response: str) -> ContactMessage:
    """
    Record the admin's response to a message.

    Raises:
        EmptyResponseError: If the response is blank
        MessageNotFoundError: If the message does not exist
    """
    response = response.strip()
    if not response:
        raise EmptyResponseError()

    message = await repository.get_by_id(db, message_id)
    if message is None:
        raise MessageNotFoundError(message_id)

    message = await repository.save_response(db, message, response)
    logger.info(f"Response saved for contact message {message_id}")
    return message
