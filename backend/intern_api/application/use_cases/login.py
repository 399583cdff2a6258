"""
Name: Login Use Case

Responsibilities:
  - Gate credential checks behind the per-IP rate limiter
  - Run a password hash comparison on every attempt that passes the
    lockout and field checks
  - Issue a bearer token on success and clear the IP's failure state

Collaborators:
  - rate_limit.LoginRateLimiter
  - domain.repositories.UserRepository
  - auth_users: verify_password, create_access_token

Constraints:
  - Unknown user and wrong password produce the same message
  - A token is only ever issued after verify_password returned True
"""

from dataclasses import dataclass
from typing import Optional

from ...auth_users import create_access_token, verify_against_dummy, verify_password
from ...domain.repositories import UserRepository
from ...exceptions import AuthenticationError, RateLimitError, ValidationError
from ...logger import logger
from ...metrics import record_login_outcome
from ...rate_limit import LoginRateLimiter

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass
class LoginInput:
    username: Optional[str]
    password: Optional[str]
    client_ip: str


@dataclass
class LoginResult:
    token: str
    role: str
    username: str
    email: str


class LoginUseCase:
    """R: Rate-limited credential check and token issuance."""

    def __init__(self, users: UserRepository, rate_limiter: LoginRateLimiter):
        self.users = users
        self.rate_limiter = rate_limiter

    def _fail(self, ip: str, reason: str) -> None:
        self.rate_limiter.record_failed_attempt(ip)
        logger.warning("Login failed", extra={"reason": reason, "client_ip": ip})

    def execute(self, input_data: LoginInput) -> LoginResult:
        ip = input_data.client_ip

        remaining = self.rate_limiter.check_lockout(ip)
        if remaining:
            record_login_outcome("locked_out")
            logger.warning(
                "Login blocked by lockout",
                extra={"client_ip": ip, "remaining_seconds": remaining},
            )
            raise RateLimitError(
                "Too many failed login attempts. "
                f"Please try again in {remaining // 60} minutes.",
                lockout_seconds=remaining,
            )

        username = (input_data.username or "").strip()
        password = input_data.password or ""
        if not username or not password.strip():
            self._fail(ip, "missing_fields")
            record_login_outcome("missing_fields")
            raise ValidationError("Username and password are required")

        user = self.users.get_by_username(username)
        if user is None:
            verify_against_dummy(password)
            self._fail(ip, "unknown_user")
            record_login_outcome("invalid_credentials")
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not verify_password(password, user.password_hash):
            self._fail(ip, "bad_password")
            record_login_outcome("invalid_credentials")
            raise AuthenticationError(INVALID_CREDENTIALS)

        self.rate_limiter.clear_attempts(ip)
        record_login_outcome("success")
        logger.info("Login succeeded", extra={"role": user.role.value})

        return LoginResult(
            token=create_access_token(user),
            role=user.role.value,
            username=user.username,
            email=user.display_email,
        )
