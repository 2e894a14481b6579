"""
School Settings Repository

Database operations for keyed school settings.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from certverify.core.exceptions import DataAccessError

from .models import SchoolSetting

logger = logging.getLogger(__name__)


async def get_by_key(db: AsyncSession, key: str) -> SchoolSetting | None:
    """Get a setting row by key."""
    result = await db.execute(select(SchoolSetting).where(SchoolSetting.setting_key == key))
    return result.scalar_one_or_none()


async def upsert(db: AsyncSession, key: str, value: str) -> SchoolSetting:
    """
    Create the setting or replace its value.

    A concurrent first save of the same key loses the insert race on the
    unique setting_key; it then updates the row the other writer created.
    """
    setting = await get_by_key(db, key)

    if setting is None:
        setting = SchoolSetting(setting_key=key, setting_value=value)
        db.add(setting)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            logger.info(f"Setting '{key}' was created concurrently, updating it instead")
            setting = await get_by_key(db, key)
            if setting is None:
                raise
            setting.setting_value = value
            await db.commit()
    else:
        setting.setting_value = value
        await db.commit()

    await db.refresh(setting)
    return setting


class SettingsStore:
    """
    Read-only settings lookups for the verification resolver.

    Opens a session per read so it can run alongside other lookups.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get_setting(self, key: str) -> str | None:
        """
        Return the value of a setting, or None if it is not set.

        Raises:
            DataAccessError: If the database read fails
        """
        try:
            async with self._session_factory() as session:
                setting = await get_by_key(session, key)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to read setting '{key}': {e}")
            raise DataAccessError() from e

        return setting.setting_value if setting else None
