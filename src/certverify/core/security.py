"""
Token Validation

Admin sessions are owned by the hosted auth backend, which issues signed
JWT access tokens. This service never issues tokens; it only verifies the
signature, expiry and audience of the ones it receives.
"""

import logging
from typing import Any

from jose import JWTError, jwt

from certverify.core.config import settings

logger = logging.getLogger(__name__)


def decode_token(token: str) -> dict[str, Any] | None:
    """
    Decode and validate a JWT.

    Args:
        token: Encoded JWT string

    Returns:
        The token claims, or None if the token is invalid or expired
    """
    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except JWTError as e:
        logger.debug(f"Token rejected: {e}")
        return None
