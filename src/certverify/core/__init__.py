"""
Core module - Configuration, database, security, and utilities.
"""

from certverify.core.config import get_settings, settings
from certverify.core.database import Base, close_db, get_db, init_db
from certverify.core.exceptions import DataAccessError, ServiceError
from certverify.core.redis import close_redis, get_redis_client, init_redis
from certverify.core.security import decode_token

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    # Errors
    "ServiceError",
    "DataAccessError",
    # Redis
    "get_redis_client",
    "init_redis",
    "close_redis",
    # Security
    "decode_token",
]
