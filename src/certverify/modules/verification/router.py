"""
Certificate Verification Router

Public endpoints (no authentication) used by the verification site and by
QR codes printed on certificates.

Endpoints:
- GET /verify/search - Find a certificate by admission or certificate number
- GET /verify/{student_id} - Verification view for a student

Security:
- Search is rate limited per client IP to slow down number enumeration
- Verification pages ask search engines not to index them
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from certverify.core.config import settings
from certverify.core.database import async_session_maker
from certverify.core.exceptions import DataAccessError, to_http_exception
from certverify.core.rate_limit import client_ip_key, rate_limit
from certverify.modules.verification.schemas import SearchKind, SearchResponse, VerificationView
from certverify.modules.verification.service import (
    RecordNotFoundError,
    ValidationError,
    VerificationResolver,
    build_resolver,
)

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND_MESSAGE = (
    "The certificate you're looking for could not be found. Please check the "
    "verification link or contact the school for assistance."
)


def get_resolver() -> VerificationResolver:
    """FastAPI dependency providing the database-backed resolver."""
    return build_resolver(async_session_maker)


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred. Please try again later.",
        },
    )


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search for a Certificate",
    description="""
Find a certificate by exact admission number or certificate number.

On a match the response carries the student id and the path of the
verification page. A miss returns `found: false`; it is not an error.
""",
    responses={
        400: {"description": "Blank search value or unsupported search type"},
        429: {"description": "Too many searches from this client"},
        503: {"description": "Database temporarily unavailable"},
    },
)
@rate_limit(
    limit=settings.search_rate_limit,
    window_seconds=60,
    key_func=client_ip_key("verify_search"),
)
async def search_certificate(
    request: Request,
    kind: str = Query(
        SearchKind.ADMISSION_NUMBER.value,
        description="Column to search: admission_number or certificate_number",
    ),
    value: str = Query(..., max_length=100, description="Admission or certificate number"),
    resolver: VerificationResolver = Depends(get_resolver),
) -> SearchResponse:
    """Search for a certificate by exact number."""
    try:
        result = await resolver.find_by_key(kind, value)
    except ValidationError as e:
        logger.warning(f"Rejected certificate search: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": e.error_code, "message": e.message},
        ) from e
    except DataAccessError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error searching certificates: {e}")
        raise _internal_error() from e

    if not result.found:
        return SearchResponse(
            found=False,
            message="No certificate found with the provided details.",
        )

    return SearchResponse(
        found=True,
        student_id=result.student_id,
        verification_path=f"/verify/{result.student_id}",
    )


@router.get(
    "/{student_id}",
    response_model=VerificationView,
    summary="Verify a Certificate",
    description="""
Get the public verification view for a student.

The view includes the student's public details and a status presentation:

| status | label | tone |
|---|---|---|
| graduated | Graduated | success (shows the verification message) |
| revoked | Revoked | danger (shows a warning) |
| pending | Pending | warning |
| other | Unknown | neutral |

Malformed ids and unknown students both return 404, with distinct error codes.
""",
    responses={
        404: {"description": "Certificate not found or malformed link"},
        503: {"description": "Database temporarily unavailable"},
    },
)
async def get_verification_view(
    student_id: str,
    response: Response,
    resolver: VerificationResolver = Depends(get_resolver),
) -> VerificationView:
    """Return the verification view for a student."""
    try:
        view = await resolver.get_verification_view(student_id)
    except (ValidationError, RecordNotFoundError) as e:
        logger.info(f"Verification page not found for {student_id!r}: {e.error_code}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": e.error_code, "message": NOT_FOUND_MESSAGE},
        ) from e
    except DataAccessError as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.exception(f"Unexpected error building verification view: {e}")
        raise _internal_error() from e

    response.headers["X-Robots-Tag"] = "noindex, nofollow"
    return view
