"""
Name: Domain Exceptions

Responsibilities:
  - Define the error taxonomy raised by domain and application code
  - Generate unique error IDs for tracking

Collaborators:
  - exception_handlers.py: maps each class to an HTTP status
  - application.use_cases: raise these instead of generic exceptions

Notes:
  - error_id is UUID for log correlation
"""

from uuid import uuid4


class InternRegisterError(Exception):
    """Base exception for the intern register service."""

    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, error_id: str | None = None):
        self.message = message
        self.error_id = error_id or str(uuid4())
        super().__init__(message)


class ValidationError(InternRegisterError):
    """Missing or malformed input."""

    error_code: str = "VALIDATION_ERROR"


class AuthenticationError(InternRegisterError):
    """Bad credentials or invalid token."""

    error_code: str = "UNAUTHORIZED"


class AuthorizationError(InternRegisterError):
    """Caller's role does not allow the action."""

    error_code: str = "FORBIDDEN"


class RateLimitError(InternRegisterError):
    """Login attempts from a client are locked out."""

    error_code: str = "RATE_LIMITED"

    def __init__(self, message: str, lockout_seconds: int):
        super().__init__(message)
        self.lockout_seconds = lockout_seconds


class NotFoundError(InternRegisterError):
    """Referenced entity does not exist."""

    error_code: str = "NOT_FOUND"


class ConflictError(InternRegisterError):
    """Request conflicts with current state (duplicate account, illegal transition)."""

    error_code: str = "CONFLICT"

    def __init__(self, message: str, status_code: int = 409):
        super().__init__(message)
        self.status_code = status_code


class DatabaseError(InternRegisterError):
    """Database connection or query error."""

    error_code: str = "DATABASE_ERROR"
