"""
Unit Tests for Base Service.

Tests database error translation and the shared validation helpers.
"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from modules.backend.services.base import BaseService
from modules.backend.core.exceptions import (
    ConflictError,
    DatabaseError,
    ValidationError,
)


@pytest.fixture
def service(mock_db_session):
    return BaseService(mock_db_session)


async def _raise(exc):
    raise exc


class TestExecuteDbOperation:
    """Tests for _execute_db_operation."""

    @pytest.mark.asyncio
    async def test_returns_result_on_success(self, service):
        async def operation():
            return {"id": "123"}

        assert await service._execute_db_operation("fetch", operation()) == {"id": "123"}

    @pytest.mark.asyncio
    async def test_unique_violation_becomes_conflict(self, service):
        exc = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))

        with pytest.raises(ConflictError):
            await service._execute_db_operation("register_user", _raise(exc))

    @pytest.mark.asyncio
    async def test_other_integrity_error_keeps_driver_message(self, service):
        exc = IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))

        with pytest.raises(DatabaseError) as exc_info:
            await service._execute_db_operation("create_entry", _raise(exc))

        assert "constraint violation" in exc_info.value.message
        assert exc_info.value.details == {"error": "FOREIGN KEY constraint failed"}

    @pytest.mark.asyncio
    async def test_storage_failure_becomes_database_error(self, service):
        exc = OperationalError("SELECT", {}, Exception("database is locked"))

        with pytest.raises(DatabaseError) as exc_info:
            await service._execute_db_operation("list_entries", _raise(exc))

        assert exc_info.value.message == "Database operation failed: list_entries"
        assert "database is locked" in exc_info.value.details["error"]

    @pytest.mark.asyncio
    async def test_application_errors_pass_through(self, service):
        with pytest.raises(ValidationError):
            await service._execute_db_operation("find", _raise(ValidationError("Invalid sort field")))

    @pytest.mark.asyncio
    async def test_generic_sqlalchemy_error(self, service):
        with pytest.raises(DatabaseError):
            await service._execute_db_operation("fetch", _raise(SQLAlchemyError("Connection lost")))


class TestValidateRequired:
    """Tests for _validate_required."""

    def test_passes_when_all_fields_present(self, service):
        service._validate_required({"title": "T", "content": "C"}, ["title", "content"])

    @pytest.mark.parametrize("value", [None, "", "   \n"])
    def test_blank_values_are_missing(self, service, value):
        with pytest.raises(ValidationError) as exc_info:
            service._validate_required({"title": "T", "content": value}, ["title", "content"])

        assert exc_info.value.details["missing_fields"] == ["content"]

    def test_reports_all_missing_fields(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service._validate_required({}, ["title", "content"])

        assert exc_info.value.details["missing_fields"] == ["title", "content"]


class TestValidateStringLength:
    """Tests for _validate_string_length."""

    def test_passes_when_length_in_bounds(self, service):
        service._validate_string_length("hello", "title", min_length=1, max_length=255)

    def test_raises_when_too_short(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service._validate_string_length("abc", "password", min_length=6)

        assert exc_info.value.details == {"password": "Minimum length is 6"}

    def test_raises_when_too_long(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service._validate_string_length("a" * 256, "title", max_length=255)

        assert "too long" in exc_info.value.message
