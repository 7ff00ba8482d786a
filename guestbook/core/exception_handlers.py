"""
Exception Handlers.

FastAPI exception handlers that convert application exceptions to HTTP
responses. Validation failures are returned as JSON ``{"error": ...}`` so
clients can show the message; every other failure is plain text.

Usage:
    from guestbook.core.exception_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from guestbook.core.exceptions import (
    ApplicationError,
    DatabaseError,
    NotFoundError,
    RequestDecodeError,
    ValidationError,
)
from guestbook.core.logging import get_logger
from guestbook.schemas.base import ErrorResponse

logger = get_logger(__name__)

# Map exception types to HTTP status codes
EXCEPTION_STATUS_MAP: dict[type[ApplicationError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    RequestDecodeError: 400,
    DatabaseError: 400,
}


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state or headers."""
    if hasattr(request.state, "request_id"):
        return request.state.request_id
    return request.headers.get("x-request-id")


def _decode_error_body(exc: RequestDecodeError) -> str:
    return f"decode: {exc.message}"


async def application_error_handler(
    request: Request,
    exc: ApplicationError,
) -> Response:
    """
    Handle all ApplicationError subclasses.

    Status comes from EXCEPTION_STATUS_MAP (500 for unknown subclasses).
    Decode and storage errors are logged as errors, validation failures
    as warnings, missing resources as info.
    """
    status_code = EXCEPTION_STATUS_MAP.get(type(exc), 500)
    request_id = _get_request_id(request)

    log_extra = {
        "code": exc.code,
        "message": exc.message,
        "status": status_code,
        "path": request.url.path,
        "method": request.method,
    }
    if request_id:
        log_extra["request_id"] = request_id

    if isinstance(exc, NotFoundError):
        logger.info("Resource not found", extra=log_extra)
        return PlainTextResponse("Not Found", status_code=status_code)

    if isinstance(exc, ValidationError):
        logger.warning("Validation failed", extra=log_extra)
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(error=exc.message).model_dump(),
        )

    logger.error("Request failed", extra=log_extra)

    if isinstance(exc, RequestDecodeError):
        return PlainTextResponse(_decode_error_body(exc), status_code=status_code)

    return PlainTextResponse(exc.message, status_code=status_code)


async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> Response:
    """
    Handle FastAPI request validation errors (e.g. a non-integer path id).

    These are decode errors: the request could not be turned into
    arguments, so it is answered like any other malformed request.
    """
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in err.get('loc', []))}: {err.get('msg', 'invalid')}"
        for err in exc.errors()
    )
    return await application_error_handler(request, RequestDecodeError(details))


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> Response:
    """
    Handle unexpected exceptions.

    Logs the full traceback and returns a generic 500 without internals.
    """
    logger.exception(
        "Unhandled exception",
        extra={
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
            "request_id": _get_request_id(request),
        },
    )
    return PlainTextResponse("Internal Server Error", status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    logger.debug("Exception handlers registered")
