"""Settings endpoint tests: profile, notification preferences, terms."""

from datetime import datetime, timezone

import pytest

from intern_api.application.use_cases import TermsAcceptanceUseCase
from intern_api.container import get_user_settings_repository
from intern_api.infrastructure.repositories import InMemoryUserSettingsRepository
from intern_api.users import User, UserRole

pytestmark = pytest.mark.unit


def test_get_profile(client, make_user, auth_header):
    user = make_user("lerato@univen.ac.za", UserRole.SUPERVISOR)

    response = client.get("/api/settings/profile", headers=auth_header(user))

    assert response.status_code == 200
    body = response.json()
    assert body["username"] == "lerato@univen.ac.za"
    assert body["role"] == "SUPERVISOR"
    assert body["avatarUrl"] is None


def test_partial_update_keeps_other_fields(client, make_user, auth_header):
    user = make_user("lerato@univen.ac.za")
    headers = auth_header(user)

    client.put(
        "/api/settings/profile",
        json={"name": "Lerato M", "phone": "0155551234"},
        headers=headers,
    )
    response = client.put(
        "/api/settings/profile",
        json={"avatarUrl": "https://cdn.example/avatar.png"},
        headers=headers,
    )

    body = response.json()
    assert body["name"] == "Lerato M"
    assert body["phone"] == "0155551234"
    assert body["avatarUrl"] == "https://cdn.example/avatar.png"


def test_requires_token(client):
    assert client.get("/api/settings/profile").status_code == 401


class TestNotifications:
    def test_defaults_before_first_save(self, client, make_user, auth_header):
        user = make_user("thabo@univen.ac.za")

        response = client.get("/api/settings/notifications", headers=auth_header(user))

        assert response.status_code == 200
        assert response.json() == {
            "emailLeaveUpdates": True,
            "emailAttendanceAlerts": True,
            "frequency": "INSTANT",
        }

    def test_partial_update_keeps_other_fields(self, client, make_user, auth_header):
        user = make_user("thabo@univen.ac.za")
        headers = auth_header(user)

        client.put(
            "/api/settings/notifications",
            json={"emailLeaveUpdates": False},
            headers=headers,
        )
        response = client.put(
            "/api/settings/notifications",
            json={"frequency": "weekly"},
            headers=headers,
        )

        assert response.json() == {
            "emailLeaveUpdates": False,
            "emailAttendanceAlerts": True,
            "frequency": "WEEKLY",
        }
        assert client.get("/api/settings/notifications", headers=headers).json() == (
            response.json()
        )

    def test_unknown_frequency_is_400(self, client, make_user, auth_header):
        user = make_user("thabo@univen.ac.za")

        response = client.put(
            "/api/settings/notifications",
            json={"frequency": "HOURLY"},
            headers=auth_header(user),
        )

        assert response.status_code == 400
        assert response.json()["error"] == (
            "Invalid frequency. Must be one of: INSTANT, DAILY, WEEKLY"
        )

    def test_preferences_are_per_user(self, client, make_user, auth_header):
        first = make_user("a@univen.ac.za")
        second = make_user("b@univen.ac.za")
        client.put(
            "/api/settings/notifications",
            json={"emailAttendanceAlerts": False},
            headers=auth_header(first),
        )

        body = client.get("/api/settings/notifications", headers=auth_header(second)).json()

        assert body["emailAttendanceAlerts"] is True


class TestTerms:
    def test_not_accepted_by_default(self, client, make_user, auth_header):
        user = make_user("thabo@univen.ac.za")

        body = client.get("/api/settings/terms", headers=auth_header(user)).json()

        assert body == {"accepted": False, "acceptedAt": None, "version": "v1"}

    def test_accept_records_version_time_and_ip(self, client, make_user, auth_header):
        user = make_user("thabo@univen.ac.za")
        headers = {**auth_header(user), "X-Forwarded-For": "203.0.113.7, 10.0.0.1"}

        response = client.put("/api/settings/terms", json={"version": "v2"}, headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["accepted"] is True
        assert body["version"] == "v2"
        assert body["acceptedAt"] is not None

        stored = get_user_settings_repository().get_terms_acceptance(user.id)
        assert stored.ip_address == "203.0.113.7"

    def test_accept_without_body_keeps_version(self, client, make_user, auth_header):
        user = make_user("thabo@univen.ac.za")

        body = client.put("/api/settings/terms", headers=auth_header(user)).json()

        assert body["accepted"] is True
        assert body["version"] == "v1"


def test_terms_use_case_uses_clock():
    accepted_at = datetime(2030, 1, 2, 3, 4, tzinfo=timezone.utc)
    settings = InMemoryUserSettingsRepository()
    user = User(
        id=5, username="x@univen.ac.za", email=None, password_hash="h", role=UserRole.ADMIN
    )

    saved = TermsAcceptanceUseCase(settings, clock=lambda: accepted_at).accept(
        user, version="  ", ip_address=None
    )

    assert saved.accepted_at == accepted_at
    assert saved.version == "v1"
    assert settings.get_terms_acceptance(5).accepted is True


@pytest.mark.parametrize("path", ["/api/settings/notifications", "/api/settings/terms"])
def test_settings_require_token(client, path):
    assert client.get(path).status_code == 401
