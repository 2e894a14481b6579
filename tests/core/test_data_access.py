"""
Tests for the data access collaborator.
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from certverify.core.data_access import DataAccess, is_unique_column
from certverify.core.exceptions import DataAccessError
from certverify.modules.contact_messages.models import ContactMessage
from certverify.modules.graduation_years.models import GraduationYear
from certverify.modules.settings.models import SchoolSetting
from certverify.modules.students.models import Student


def _session_factory(session):
    """Session factory whose sessions are async context managers yielding `session`."""
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    factory.return_value.__aexit__.return_value = False
    return factory


def _compiled(query) -> str:
    return str(query.compile(dialect=postgresql.dialect()))


@pytest.fixture
def session():
    session = AsyncMock()
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    session.execute = AsyncMock(return_value=result)
    return session


class TestIsUniqueColumn:
    """Tests for is_unique_column."""

    def test_primary_key_is_unique(self):
        assert is_unique_column(Student.__table__, "id") is True

    def test_partial_unique_index_counts(self):
        assert is_unique_column(Student.__table__, "admission_number") is True
        assert is_unique_column(Student.__table__, "certificate_number") is True

    def test_column_unique_flag_counts(self):
        assert is_unique_column(SchoolSetting.__table__, "setting_key") is True
        assert is_unique_column(GraduationYear.__table__, "year") is True

    def test_plain_and_indexed_columns_are_not_unique(self):
        assert is_unique_column(Student.__table__, "full_name") is False
        assert is_unique_column(Student.__table__, "graduation_year") is False
        assert is_unique_column(ContactMessage.__table__, "email") is False

    def test_missing_column(self):
        assert is_unique_column(Student.__table__, "nickname") is False


class TestDataAccess:
    """Tests for DataAccess lookups."""

    @pytest.mark.asyncio
    async def test_get_by_unique_column_returns_row(self, session):
        student = MagicMock(spec=Student)
        session.execute.return_value.scalar_one_or_none.return_value = student
        data_access = DataAccess(_session_factory(session))

        result = await data_access.get_by_unique_column(Student, "admission_number", "ADM-1")

        assert result is student

    @pytest.mark.asyncio
    async def test_get_by_unique_column_excludes_deleted_rows(self, session):
        data_access = DataAccess(_session_factory(session))

        await data_access.get_by_unique_column(Student, "certificate_number", "CERT-1")

        sql = _compiled(session.execute.call_args.args[0])
        assert "students.certificate_number =" in sql
        assert "students.deleted_at IS NULL" in sql

    @pytest.mark.asyncio
    async def test_get_by_id_excludes_deleted_rows(self, session):
        data_access = DataAccess(_session_factory(session))

        result = await data_access.get_by_id(Student, uuid4())

        assert result is None
        sql = _compiled(session.execute.call_args.args[0])
        assert "students.id =" in sql
        assert "students.deleted_at IS NULL" in sql

    @pytest.mark.asyncio
    async def test_models_without_soft_delete_are_not_filtered(self, session):
        data_access = DataAccess(_session_factory(session))

        await data_access.get_by_unique_column(SchoolSetting, "setting_key", "verification_message")

        sql = _compiled(session.execute.call_args.args[0])
        assert "deleted_at" not in sql

    @pytest.mark.asyncio
    async def test_non_unique_column_is_rejected(self, session):
        data_access = DataAccess(_session_factory(session))

        with pytest.raises(ValueError):
            await data_access.get_by_unique_column(Student, "full_name", "Amina Yusuf")

        session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_database_error_becomes_data_access_error(self, session):
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        data_access = DataAccess(_session_factory(session))

        with pytest.raises(DataAccessError) as exc_info:
            await data_access.get_by_id(Student, uuid4())

        assert exc_info.value.error_code == "SERVICE_UNAVAILABLE"
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_connection_failure_becomes_data_access_error(self, session):
        session.execute.side_effect = ConnectionRefusedError(111, "Connect call failed")
        data_access = DataAccess(_session_factory(session))

        with pytest.raises(DataAccessError):
            await data_access.get_by_unique_column(Student, "admission_number", "ADM-2024-001")

    @pytest.mark.asyncio
    async def test_each_lookup_opens_its_own_session(self, session):
        factory = _session_factory(session)
        data_access = DataAccess(factory)

        await data_access.get_by_id(Student, uuid4())
        await data_access.get_by_unique_column(Student, "admission_number", "ADM-1")

        assert factory.call_count == 2
