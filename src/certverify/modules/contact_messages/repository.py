"""
Contact Messages Repository

Database operations for messages sent through the public contact form.
"""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import ContactMessage
from .schemas import ContactMessageCreate


async def create(db: AsyncSession, data: ContactMessageCreate) -> ContactMessage:
    """Store a new contact message."""
    message = ContactMessage(
        name=data.name,
        email=data.email,
        subject=data.subject,
        message=data.message,
        is_read=False,
    )

    db.add(message)
    await db.commit()
    await db.refresh(message)

    return message


async def get_by_id(db: AsyncSession, id: UUID) -> ContactMessage | None:
    """Get a message by ID."""
    return await db.get(ContactMessage, id)


async def list_messages(
    db: AsyncSession,
    *,
    unread_only: bool = False,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[ContactMessage], int]:
    """Get messages newest first, with the total matching count."""
    query = select(ContactMessage)
    if unread_only:
        query = query.where(ContactMessage.is_read.is_(False))

    count_query = select(func.count()).select_from(query.subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    query = query.order_by(desc(ContactMessage.created_at)).offset(skip).limit(limit)
    result = await db.execute(query)

    return list(result.scalars().all()), total


async def mark_read(db: AsyncSession, message: ContactMessage) -> ContactMessage:
    """Flag a message as read."""
    message.is_read = True

    await db.commit()
    await db.refresh(message)

    return message


async def save_response(db: AsyncSession, message: ContactMessage, response: str) -> ContactMessage:
    """Store the admin's response. Answering a message also marks it read."""
    message.admin_response = response
    message.responded_at = datetime.now(UTC)
    message.is_read = True

    await db.commit()
    await db.refresh(message)

    return message


async def count_unread(db: AsyncSession) -> int:
    """Count unread messages."""
    result = await db.execute(
        select(func.count()).select_from(ContactMessage).where(ContactMessage.is_read.is_(False))
    )
    return result.scalar() or 0
