"""
Service Error Base

Every service-layer error carries a machine readable code and the HTTP
status the routers should answer with.
"""

from fastapi import HTTPException


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class DataAccessError(ServiceError):
    """Raised when the database (or the backend behind it) fails."""

    def __init__(self, message: str = "The service is temporarily unavailable. Please try again."):
        super().__init__(
            message=message,
            error_code="SERVICE_UNAVAILABLE",
            status_code=503,
        )


def to_http_exception(e: ServiceError) -> HTTPException:
    """Convert a service error into the structured HTTP error body."""
    return HTTPException(
        status_code=e.status_code,
        detail={
            "error": e.error_code,
            "message": e.message,
        },
    )
