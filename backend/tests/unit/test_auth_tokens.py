"""
Name: Token and Request Authentication Tests

Responsibilities:
  - Token issue/validate round trip and expiry
  - Authorization header sanitizing (CRLF injection)
  - authenticate_request outcomes: anonymous, invalid token, unknown user
"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
import pytest

from intern_api.auth_users import (
    AuthSettings,
    authenticate_request,
    create_access_token,
    decode_token,
    extract_bearer_token,
    get_token_role,
    get_token_username,
    hash_password,
    sanitize_header,
    validate_token,
    verify_password,
)
from intern_api.error_responses import AppHTTPException
from intern_api.infrastructure.repositories import InMemoryUserRepository
from intern_api.users import User, UserRole

pytestmark = pytest.mark.unit

SETTINGS = AuthSettings(jwt_secret="token-test-secret", jwt_expiration_hours=24)


def _user(username="ada@univen.ac.za", role=UserRole.SUPERVISOR, user_id=1) -> User:
    return User(
        id=user_id,
        username=username,
        email=username,
        password_hash="unused",
        role=role,
    )


class TestTokens:
    def test_valid_token_round_trip(self):
        token = create_access_token(_user(), settings=SETTINGS)

        assert validate_token(token, SETTINGS) is True
        assert get_token_username(token, SETTINGS) == "ada@univen.ac.za"
        assert get_token_role(token, SETTINGS) == "SUPERVISOR"

    def test_expiry_matches_configured_window(self):
        issued = datetime(2030, 1, 1, tzinfo=timezone.utc)
        token = create_access_token(_user(), settings=SETTINGS, issued_at=issued)

        payload = jwt.decode(
            token, SETTINGS.jwt_secret, algorithms=["HS256"], options={"verify_exp": False}
        )
        assert payload["exp"] - payload["iat"] == 24 * 3600

    def test_token_rejected_after_expiry(self):
        issued = datetime.now(timezone.utc) - timedelta(hours=25)
        token = create_access_token(_user(), settings=SETTINGS, issued_at=issued)

        assert validate_token(token, SETTINGS) is False
        assert get_token_username(token, SETTINGS) is None

    def test_token_signed_with_other_secret_is_rejected(self):
        other = AuthSettings(jwt_secret="another-secret", jwt_expiration_hours=24)
        token = create_access_token(_user(), settings=other)
        assert decode_token(token, SETTINGS) is None

    def test_garbage_token_is_rejected(self):
        assert validate_token("not-a-jwt", SETTINGS) is False


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("Secret1!x")
        assert hashed != "Secret1!x"
        assert verify_password("Secret1!x", hashed) is True
        assert verify_password("wrong", hashed) is False

    def test_malformed_hash_is_a_mismatch(self):
        assert verify_password("Secret1!x", "not-a-hash") is False


class TestHeaderSanitizing:
    def test_crlf_injection_is_cut(self):
        assert sanitize_header("Bearer abc\r\nX-Injected: 1") == "Bearer abc"

    def test_bare_newline_is_cut(self):
        assert sanitize_header("Bearer abc\nX-Injected: 1") == "Bearer abc"

    def test_extract_bearer_token(self):
        assert extract_bearer_token("Bearer abc\r\nX-Injected: 1") == "abc"
        assert extract_bearer_token("Basic abc") is None
        assert extract_bearer_token(None) is None
        assert extract_bearer_token("Bearer ") is None


def _request(method="GET"):
    return SimpleNamespace(method=method, state=SimpleNamespace())


class TestAuthenticateRequest:
    @pytest.fixture
    def repo(self):
        return InMemoryUserRepository()

    def test_options_bypasses_verification(self, repo):
        assert authenticate_request(_request("OPTIONS"), "Bearer garbage", repo) is None

    def test_missing_header_is_anonymous(self, repo):
        assert authenticate_request(_request(), None, repo) is None

    def test_invalid_token_is_401(self, repo):
        with pytest.raises(AppHTTPException) as exc_info:
            authenticate_request(_request(), "Bearer garbage", repo)
        assert exc_info.value.status_code == 401

    def test_token_for_unknown_user_is_401(self, repo):
        token = create_access_token(_user("ghost@univen.ac.za"))
        with pytest.raises(AppHTTPException) as exc_info:
            authenticate_request(_request(), f"Bearer {token}", repo)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "User not found"

    def test_valid_token_populates_identity(self, repo):
        stored = repo.create(_user(user_id=None))
        token = create_access_token(stored)
        request = _request()

        user = authenticate_request(request, f"Bearer {token}\r\nX-Injected: 1", repo)

        assert user.id == stored.id
        assert request.state.user.username == "ada@univen.ac.za"
        assert request.state.authorities == ["ROLE_SUPERVISOR"]

    def test_role_mismatch_is_401(self, repo):
        stored = repo.create(_user(user_id=None, role=UserRole.INTERN))
        forged = create_access_token(
            User(
                id=stored.id,
                username=stored.username,
                email=stored.email,
                password_hash="unused",
                role=UserRole.ADMIN,
            )
        )
        with pytest.raises(AppHTTPException) as exc_info:
            authenticate_request(_request(), f"Bearer {forged}", repo)
        assert exc_info.value.status_code == 401
