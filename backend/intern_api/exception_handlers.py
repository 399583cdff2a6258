"""
Name: FastAPI Exception Handlers

Responsibilities:
  - Convert domain exceptions to HTTP responses
  - Map request-body validation failures to 400
  - Centralized logging of errors with correlation IDs

Collaborators:
  - main.py: Registers these handlers
  - exceptions.py: InternRegisterError taxonomy
  - error_responses.py: response body shape

Constraints:
  - Unexpected errors never leak their message to the client
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    database_error,
    error_response,
    forbidden,
    internal_error,
    rate_limited,
)
from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseError,
    InternRegisterError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)
from .logger import logger


def _as_response(status_code: int, code: ErrorCode, exc: InternRegisterError) -> JSONResponse:
    return error_response(AppHTTPException(status_code, code, exc.message))


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _as_response(400, ErrorCode.VALIDATION_ERROR, exc)


async def authentication_error_handler(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    return _as_response(401, ErrorCode.UNAUTHORIZED, exc)


async def authorization_error_handler(
    request: Request, exc: AuthorizationError
) -> JSONResponse:
    logger.warning("Access denied", extra={"reason": exc.message})
    return error_response(forbidden(exc.message))


async def rate_limit_error_handler(request: Request, exc: RateLimitError) -> JSONResponse:
    return error_response(rate_limited(exc.message, exc.lockout_seconds))


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _as_response(404, ErrorCode.NOT_FOUND, exc)


async def conflict_error_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return _as_response(exc.status_code, ErrorCode.CONFLICT, exc)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Handle database errors with structured response."""
    logger.error(
        "Database error", extra={"error_id": exc.error_id, "error_message": exc.message}
    )
    return error_response(database_error(error_id=exc.error_id))


async def domain_error_handler(request: Request, exc: InternRegisterError) -> JSONResponse:
    logger.error(
        "Unhandled domain error",
        extra={"error_id": exc.error_id, "error_message": exc.message},
    )
    return error_response(internal_error())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return error_response(AppHTTPException(400, ErrorCode.VALIDATION_ERROR, message))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception", extra={"error_type": type(exc).__name__})
    return error_response(internal_error())


def register_exception_handlers(app) -> None:
    """
    Register all exception handlers on the FastAPI app.

    Usage:
        from .exception_handlers import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(AuthorizationError, authorization_error_handler)
    app.add_exception_handler(RateLimitError, rate_limit_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(ConflictError, conflict_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(InternRegisterError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
