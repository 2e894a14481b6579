"""
Admin Authentication

FastAPI dependencies guarding the back office endpoints.
Tokens are issued by the hosted auth backend; this module validates them
with security.decode_token and enforces the admin role.

SECURITY NOTE:
- Development mode test tokens are ONLY accepted when PYTHON_ENV=development
- Production environments MUST set PYTHON_ENV=production to disable them
"""

import logging
import os
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from certverify.core.config import settings
from certverify.core.security import decode_token

logger = logging.getLogger(__name__)

security = HTTPBearer(
    auto_error=True,
    description="JWT Bearer token issued by the auth backend",
)


@dataclass
class AdminUser:
    """
    The caller of an admin endpoint, built from verified token claims.

    Attributes:
        id: Subject of the token (auth backend user id)
        email: Email claim, empty if the token has none
        role: Application role; only settings.admin_role is let through
    """

    id: UUID
    email: str
    role: str

    def __str__(self) -> str:
        return f"admin {self.id} <{self.email}> ({self.role})"


def _is_dev_mode_safe() -> bool:
    """
    Check if development test tokens may be accepted.

    Both the parsed settings and the raw PYTHON_ENV variable must agree
    that we are not running in production or staging.
    """
    env_var = os.getenv("PYTHON_ENV", "").lower()

    is_safe = (
        settings.is_development
        and not settings.is_production
        and env_var not in ("production", "staging")
    )

    if is_safe:
        logger.warning(
            "SECURITY: the 'dev-token' bearer token is accepted (PYTHON_ENV=development)"
        )

    return is_safe


_DEVELOPMENT_MODE = _is_dev_mode_safe()

_DEV_ADMIN = AdminUser(
    id=UUID("00000000-0000-0000-0000-000000000001"),
    email="admin@certverify.dev",
    role=settings.admin_role,
)


def _extract_role(payload: dict[str, Any]) -> str:
    """
    Read the application role from token claims.

    The auth backend puts custom roles in app_metadata; the top-level
    "role" claim is only used when app_metadata carries none.
    """
    app_metadata = payload.get("app_metadata") or {}
    return app_metadata.get("role") or payload.get("role", "")


def _invalid_token(error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _validate_jwt_token(token: str) -> AdminUser:
    """
    Validate a JWT and build the user from its claims.

    Raises:
        HTTPException 401: If token is invalid, expired or missing claims
    """
    if _DEVELOPMENT_MODE and token == "dev-token":
        logger.debug("Accepted development admin token")
        return _DEV_ADMIN

    payload = decode_token(token)

    if payload is None:
        logger.warning("Rejected admin token: bad signature, audience or expiry")
        raise _invalid_token("INVALID_TOKEN", "Invalid or expired authentication token.")

    try:
        subject = payload.get("sub")
        if not subject:
            raise ValueError("token has no subject")

        return AdminUser(
            id=UUID(subject),
            email=payload.get("email", ""),
            role=_extract_role(payload),
        )
    except ValueError as e:
        logger.warning(f"Rejected admin token claims: {e}")
        raise _invalid_token(
            "INVALID_TOKEN_CLAIMS", "Token contains invalid or missing claims."
        ) from e


async def get_current_admin_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AdminUser:
    """
    FastAPI dependency that validates the bearer token and returns the admin.

    Usage:
        @router.get("/admin/students")
        async def list_students(admin: AdminUser = Depends(get_current_admin_user)):
            ...

    Raises:
        HTTPException 401: Token rejected by decode_token or missing a usable subject
        HTTPException 403: Token is valid but the role is not the admin role
    """
    user = await _validate_jwt_token(credentials.credentials)

    if user.role != settings.admin_role:
        logger.warning(
            f"Admin access refused for {user.id}: role '{user.role}' "
            f"is not '{settings.admin_role}'"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "ADMIN_ACCESS_REQUIRED",
                "message": "Administrator access is required for this endpoint.",
            },
        )

    logger.debug(f"Admin {user.id} authenticated")
    return user


__all__ = [
    "AdminUser",
    "get_current_admin_user",
]
