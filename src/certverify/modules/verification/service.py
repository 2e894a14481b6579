"""
Certificate Verification Service

Resolves public verification requests against student records.

This module implements:
1. Search (find_by_key):
   - Exact match on admission number or certificate number
   - Returns Found(student_id) or NotFound, never a partial match

2. Verification view (get_verification_view):
   - Fetches the student and the verification message concurrently
   - Classifies the graduation status into label, tone and message
   - Falls back to the default verification message when none is configured

Errors:
- ValidationError: malformed input (blank search value, unknown kind, bad id)
- RecordNotFoundError: well-formed request, no matching non-deleted record
- DataAccessError: the database failed; safe to retry the whole request

The resolver never writes. Collaborators are injected so it can be
exercised without a database.
"""

import asyncio
import logging
from typing import Any, Protocol
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from certverify.core.data_access import DataAccess
from certverify.core.exceptions import ServiceError
from certverify.modules.settings.models import (
    DEFAULT_VERIFICATION_MESSAGE,
    VERIFICATION_MESSAGE_KEY,
)
from certverify.modules.settings.repository import SettingsStore
from certverify.modules.students.models import Student
from certverify.modules.verification.helpers import classify_status, status_value
from certverify.modules.verification.schemas import (
    LookupResult,
    SearchKind,
    VerificationView,
)

logger = logging.getLogger(__name__)


class VerificationServiceError(ServiceError):
    """Base exception for verification errors."""


class ValidationError(VerificationServiceError):
    """Raised when a verification request is malformed."""

    def __init__(self, message: str = "Please check your input and try again."):
        super().__init__(
            message=message,
            error_code="INVALID_INPUT",
            status_code=400,
        )


class RecordNotFoundError(VerificationServiceError):
    """Raised when no non-deleted student matches a well-formed request."""

    def __init__(self, student_id: UUID | None = None):
        self.student_id = student_id
        super().__init__(
            message="No certificate found with the provided details.",
            error_code="CERTIFICATE_NOT_FOUND",
            status_code=404,
        )


class RecordSource(Protocol):
    """Read access to unique-keyed records."""

    async def get_by_unique_column(self, model: type, column: str, value: Any) -> Any: ...

    async def get_by_id(self, model: type, record_id: UUID) -> Any: ...


class SettingSource(Protocol):
    """Read access to keyed settings."""

    async def get_setting(self, key: str) -> str | None: ...


def _parse_kind(kind: SearchKind | str) -> SearchKind:
    try:
        return SearchKind(kind)
    except ValueError as e:
        raise ValidationError(f"Unsupported search type: {kind}") from e


def _parse_student_id(record_id: UUID | str) -> UUID:
    if isinstance(record_id, UUID):
        return record_id
    try:
        return UUID(str(record_id))
    except ValueError as e:
        raise ValidationError("Invalid verification link.") from e


class VerificationResolver:
    """Finds student records and builds their public verification view."""

    def __init__(self, records: RecordSource, settings: SettingSource):
        self._records = records
        self._settings = settings

    async def find_by_key(self, kind: SearchKind | str, value: str | None) -> LookupResult:
        """
        Look up a student by admission number or certificate number.

        Args:
            kind: Column to match (admission_number or certificate_number)
            value: Search value; surrounding whitespace is ignored

        Returns:
            LookupResult.found_record(id) on an exact match, otherwise
            LookupResult.not_found()

        Raises:
            ValidationError: If kind is unknown or value is blank
            DataAccessError: If the lookup itself fails
        """
        search_kind = _parse_kind(kind)
        search_value = (value or "").strip()
        if not search_value:
            raise ValidationError("Please enter a search value.")

        student = await self._records.get_by_unique_column(
            Student, search_kind.value, search_value
        )

        if student is None:
            logger.info(f"No certificate found: {search_kind.value}={search_value}")
            return LookupResult.not_found()

        logger.info(f"Certificate found: {search_kind.value}={search_value} -> {student.id}")
        return LookupResult.found_record(student.id)

    async def get_verification_view(self, record_id: UUID | str) -> VerificationView:
        """
        Build the public verification view for a student.

        The student and the verification message are read concurrently. A
        failed or empty settings read falls back to the default message; a
        missing student or a failed student read fails the whole request.

        Raises:
            ValidationError: If record_id is not a valid UUID
            RecordNotFoundError: If no non-deleted student has this id
            DataAccessError: If the student read fails
        """
        student_id = _parse_student_id(record_id)

        student_result, message_result = await asyncio.gather(
            self._records.get_by_id(Student, student_id),
            self._settings.get_setting(VERIFICATION_MESSAGE_KEY),
            return_exceptions=True,
        )

        if isinstance(student_result, BaseException):
            raise student_result

        if student_result is None:
            logger.info(f"Verification requested for unknown student {student_id}")
            raise RecordNotFoundError(student_id)

        verification_message = self._resolve_message(message_result)
        student: Student = student_result

        return VerificationView(
            id=student.id,
            full_name=student.full_name,
            admission_number=student.admission_number,
            certificate_number=student.certificate_number or None,
            graduation_year=student.graduation_year or None,
            graduation_status=status_value(student.graduation_status),
            photo_url=student.photo_url or None,
            status_presentation=classify_status(
                student.graduation_status, verification_message
            ),
        )

    @staticmethod
    def _resolve_message(message_result: str | BaseException | None) -> str:
        if isinstance(message_result, BaseException):
            if not isinstance(message_result, Exception):
                raise message_result
            logger.warning(
                f"Could not load verification message, using default: {message_result}"
            )
            return DEFAULT_VERIFICATION_MESSAGE

        if message_result and message_result.strip():
            return message_result
        return DEFAULT_VERIFICATION_MESSAGE


def build_resolver(session_factory: async_sessionmaker[AsyncSession]) -> VerificationResolver:
    """Wire the resolver to the database collaborators."""
    return VerificationResolver(
        records=DataAccess(session_factory),
        settings=SettingsStore(session_factory),
    )
