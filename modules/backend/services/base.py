"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, handle transactions, and implement
business rules.

Usage:
    from modules.backend.services.base import BaseService

    class UserService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.user_repo = UserRepository(session)
"""

from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from modules.backend.core.exceptions import (
    ConflictError,
    DatabaseError,
    ValidationError,
)
from modules.backend.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Logging context
    - Error wrapping for database operations
    - Common validation patterns
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the service with a database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Any,
    ) -> T:
        """
        Execute a database operation with error handling.

        Wraps database operations to convert SQLAlchemy exceptions
        to application-specific exceptions. Nothing is retried.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute

        Returns:
            Result of the coroutine

        Raises:
            ConflictError: For unique constraint violations
            DatabaseError: For other database errors
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            error_str = str(e).lower()
            if "unique" in error_str or "duplicate" in error_str:
                raise ConflictError("Resource already exists")
            raise DatabaseError(
                f"Database constraint violation: {operation}",
                details={"error": str(e.orig)},
            )
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(
                f"Database operation failed: {operation}",
                details={"error": str(e)},
            )

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
    ) -> None:
        """
        Validate that required fields are present and not empty.

        Args:
            fields: Dictionary of field names to values
            field_names: List of required field names

        Raises:
            ValidationError: If any required field is missing or empty
        """
        missing = []
        for name in field_names:
            value = fields.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(name)

        if missing:
            raise ValidationError(
                "Required fields missing",
                details={"missing_fields": missing},
            )

    def _validate_string_length(
        self,
        value: str,
        field_name: str,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> None:
        """
        Validate string length constraints.

        Raises:
            ValidationError: If string length is out of bounds
        """
        if min_length is not None and len(value) < min_length:
            raise ValidationError(
                f"{field_name} too short",
                details={field_name: f"Minimum length is {min_length}"},
            )
        if max_length is not None and len(value) > max_length:
            raise ValidationError(
                f"{field_name} too long",
                details={field_name: f"Maximum length is {max_length}"},
            )

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """Log a service operation with context."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
