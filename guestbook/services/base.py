"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, run validation and convert database
failures into application errors.

Usage:
    from guestbook.services.base import BaseService

    class CommentService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = CommentRepository(session)
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from guestbook.core.exceptions import DatabaseError
from guestbook.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session access
    - Logging context
    - Error wrapping for database operations
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
        coro: Awaitable[T],
    ) -> T:
        """
        Execute a database operation with error handling.

        Application errors (e.g. NotFoundError) pass through untouched.
        SQLAlchemy errors and connection failures the driver raises as
        OSError (refused, reset, timed out) become DatabaseError carrying
        the operation name and the driver message.

        Args:
            operation: Operation name, used as the error prefix
            coro: Awaitable to execute

        Returns:
            Result of the awaitable

        Raises:
            DatabaseError: For any database failure
        """
        try:
            return await coro
        except SQLAlchemyError as e:
            detail = str(getattr(e, "orig", None) or e)
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": detail},
            )
            raise DatabaseError(operation, detail) from e
        except OSError as e:
            detail = str(e) or type(e).__name__
            self._logger.error(
                "Database unreachable",
                extra={"operation": operation, "error": detail},
            )
            raise DatabaseError(operation, detail) from e

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """Log a service operation with context at info level."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )
