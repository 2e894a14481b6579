"""
Seed School Settings

Inserts the default verification message so admins see it in the
settings screen. Existing values are left untouched.

Usage:
    python scripts/seed_settings.py
"""

import asyncio
import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from certverify.core.database import async_session_maker, close_db
from certverify.modules.settings import repository
from certverify.modules.settings.models import (
    DEFAULT_VERIFICATION_MESSAGE,
    VERIFICATION_MESSAGE_KEY,
)

DEFAULT_SETTINGS = {
    VERIFICATION_MESSAGE_KEY: DEFAULT_VERIFICATION_MESSAGE,
}


async def seed_settings() -> None:
    """Create each default setting that is not stored yet."""
    async with async_session_maker() as db:
        for key, value in DEFAULT_SETTINGS.items():
            existing = await repository.get_by_key(db, key)

            if existing:
                print(f"Setting already exists: {key}")
                continue

            await repository.upsert(db, key, value)
            print(f"Setting created: {key}")

    await close_db()


if __name__ == "__main__":
    asyncio.run(seed_settings())
