"""
School Settings Service Layer
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from certverify.modules.settings import repository
from certverify.modules.settings.models import (
    DEFAULT_VERIFICATION_MESSAGE,
    VERIFICATION_MESSAGE_KEY,
)
from certverify.modules.settings.schemas import VerificationMessageResponse

logger = logging.getLogger(__name__)


async def get_verification_message(db: AsyncSession) -> VerificationMessageResponse:
    """Return the saved verification message, or the default when none is saved."""
    setting = await repository.get_by_key(db, VERIFICATION_MESSAGE_KEY)

    if setting is None or not setting.setting_value.strip():
        return VerificationMessageResponse(value=DEFAULT_VERIFICATION_MESSAGE, is_default=True)

    return VerificationMessageResponse(value=setting.setting_value, is_default=False)


async def update_verification_message(db: AsyncSession, value: str) -> VerificationMessageResponse:
    """Save a new verification message."""
    setting = await repository.upsert(db, VERIFICATION_MESSAGE_KEY, value)
    logger.info("Verification message updated")
    return VerificationMessageResponse(value=setting.setting_value, is_default=False)
