"""
Name: User Authentication (JWT)

Responsibilities:
  - Hash and verify passwords using Argon2
  - Issue and validate JWT access tokens (username + role, fixed lifetime)
  - Authenticate every protected request from its bearer token
  - Provide the FastAPI dependency for authenticated routes

Collaborators:
  - config.py: JWT secret and lifetime
  - container.py: user repository
  - error_responses.py: 401 responses

Constraints:
  - Invalid, malformed and expired tokens all look the same to the client
  - validate_token never raises
"""

from dataclasses import dataclass
from functools import lru_cache
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from fastapi import Depends, Header, Request

from .config import get_settings
from .container import get_user_repository
from .context import username_var
from .domain.repositories import UserRepository
from .error_responses import unauthorized
from .logger import logger
from .users import User, UserRole

JWT_ALGORITHM = "HS256"
BEARER_PREFIX = "Bearer "

_password_hasher = PasswordHasher()


@dataclass(frozen=True)
class AuthSettings:
    jwt_secret: str
    jwt_expiration_hours: int


@dataclass(frozen=True)
class TokenClaims:
    username: str
    role: str
    expires_at: datetime


def get_auth_settings() -> AuthSettings:
    settings = get_settings()
    return AuthSettings(
        jwt_secret=settings.jwt_secret,
        jwt_expiration_hours=settings.jwt_expiration_hours,
    )


def hash_password(password: str) -> str:
    """R: Hash a password using Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """R: Verify password against stored hash."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


@lru_cache
def _dummy_password_hash() -> str:
    return _password_hasher.hash("intern-api-dummy-password")


def verify_against_dummy(password: str) -> None:
    """R: Burn one hash comparison when no user matched (uniform login timing)."""
    verify_password(password, _dummy_password_hash())


def create_access_token(
    user: User,
    settings: AuthSettings | None = None,
    issued_at: datetime | None = None,
) -> str:
    """R: Create a signed JWT binding username and role."""
    auth_settings = settings or get_auth_settings()
    now = issued_at or datetime.now(timezone.utc)
    expires_at = now + timedelta(hours=auth_settings.jwt_expiration_hours)
    payload = {
        "sub": user.username,
        "role": user.role.value,
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, auth_settings.jwt_secret, algorithm=JWT_ALGORITHM)


def decode_token(token: str, settings: AuthSettings | None = None) -> TokenClaims | None:
    """R: Verify signature and expiry; None on any failure."""
    auth_settings = settings or get_auth_settings()
    try:
        payload = jwt.decode(
            token,
            auth_settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.InvalidTokenError:
        return None

    username = payload.get("sub")
    role = payload.get("role")
    if not isinstance(username, str) or not username or not isinstance(role, str):
        return None
    return TokenClaims(
        username=username,
        role=role,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )


def validate_token(token: str, settings: AuthSettings | None = None) -> bool:
    return decode_token(token, settings) is not None


def get_token_username(token: str, settings: AuthSettings | None = None) -> str | None:
    claims = decode_token(token, settings)
    return claims.username if claims else None


def get_token_role(token: str, settings: AuthSettings | None = None) -> str | None:
    claims = decode_token(token, settings)
    return claims.role if claims else None


def sanitize_header(value: str) -> str:
    """R: Drop everything from the first CR/LF onward, then trim."""
    for separator in ("\r", "\n"):
        value = value.split(separator, 1)[0]
    return value.strip()


def extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    header = sanitize_header(authorization)
    if not header.startswith(BEARER_PREFIX):
        return None
    return header[len(BEARER_PREFIX):].strip() or None


def authenticate_request(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
    users: UserRepository = Depends(get_user_repository),
) -> User | None:
    """
    R: Resolve the caller from the bearer token.

    Returns None for anonymous requests (no header, non-Bearer header,
    preflight). A present but invalid token fails closed with 401.
    """
    if request.method == "OPTIONS":
        return None

    token = extract_bearer_token(authorization)
    if token is None:
        return None

    claims = decode_token(token)
    if claims is None:
        logger.warning("Rejected invalid bearer token")
        raise unauthorized("Invalid or expired token")

    user = users.get_by_username(claims.username) or users.get_by_email(
        claims.username
    )
    if user is None:
        logger.warning("Valid token for unknown user")
        raise unauthorized("User not found")

    if UserRole.parse(claims.role) != user.role:
        logger.warning("Token role does not match stored role")
        raise unauthorized("Invalid or expired token")

    request.state.user = user
    request.state.authorities = [user.role.authority]
    username_var.set(user.username)
    return user


def require_user() -> Callable:
    """R: FastAPI dependency that requires an authenticated user."""

    def dependency(user: User | None = Depends(authenticate_request)) -> User:
        if user is None:
            raise unauthorized("Not authenticated")
        return user

    return dependency

