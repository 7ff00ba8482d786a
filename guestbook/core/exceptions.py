"""
Custom Exceptions.

Application-specific exception classes. Each one is translated to an
HTTP response by guestbook.core.exception_handlers.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Not Found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when a well-formed request violates field constraints."""

    def __init__(self, message: str = "Validation failed") -> None:
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class RequestDecodeError(ApplicationError):
    """Raised when a request body or parameter cannot be decoded."""

    def __init__(self, message: str = "Malformed request") -> None:
        super().__init__(message, code="REQ_DECODE_ERROR")


class DatabaseError(ApplicationError):
    """
    Raised when a database operation fails.

    Carries the name of the failed operation so the response body can be
    prefixed with it (e.g. ``insert: CHECK constraint failed``).
    """

    def __init__(self, operation: str, detail: str = "Database error") -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation}: {detail}", code="SYS_DATABASE_ERROR")
