"""
Name: Registration Service Tests

Responsibilities:
  - Password strength rules, in order
  - Email verification codes: TTL, replacement, single use, sweep
  - Profile provisioning per role (department + default supervisor)
  - Registration survives a provisioning failure
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from intern_api.application.email_verification import EmailVerificationService
from intern_api.application.password_policy import password_violation
from intern_api.application.profile_provisioning import (
    ProfileDetails,
    ProfileProvisioner,
    default_supervisor_email,
)
from intern_api.application.use_cases import RegisterUserInput, RegisterUserUseCase
from intern_api.exceptions import DatabaseError
from intern_api.infrastructure.repositories import (
    InMemoryProfileRepository,
    InMemoryUserRepository,
    InMemoryVerificationCodeRepository,
)
from intern_api.users import User, UserRole

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "password, expected",
    [
        (None, "Password is required"),
        ("   ", "Password is required"),
        ("Ab1!", "Password must be at least 8 characters long"),
        ("ABCDEFG1!", "Password must contain at least one lowercase letter"),
        ("abcdefg1!", "Password must contain at least one uppercase letter"),
        ("Abcdefgh!", "Password must contain at least one digit"),
        ("Abcdefg12", "Password must contain at least one special character (@$!%*?&)"),
        ("Abcdefg1!", None),
    ],
)
def test_password_violation(password, expected):
    assert password_violation(password) == expected


class FakeClock:
    def __init__(self):
        self.now = datetime(2030, 5, 1, 8, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


class TestEmailVerification:
    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def service(self, clock):
        return EmailVerificationService(
            InMemoryVerificationCodeRepository(), ttl_minutes=10, clock=clock
        )

    def test_code_valid_until_ttl(self, service, clock):
        code = service.issue_code("a@univen.ac.za")

        clock.now += timedelta(minutes=9, seconds=59)
        assert service.check_code("a@univen.ac.za", code) is True

        clock.now += timedelta(seconds=1)
        assert service.check_code("a@univen.ac.za", code) is False

    def test_new_code_replaces_old(self, service):
        first = service.issue_code("a@univen.ac.za")
        second = service.issue_code("a@univen.ac.za")

        if first != second:
            assert service.check_code("a@univen.ac.za", first) is False
        assert service.check_code("a@univen.ac.za", second) is True

    def test_consume_is_single_use(self, service):
        code = service.issue_code("a@univen.ac.za")

        assert service.consume_code("a@univen.ac.za", code) is True
        assert service.consume_code("a@univen.ac.za", code) is False

    def test_code_bound_to_email(self, service):
        code = service.issue_code("a@univen.ac.za")
        assert service.check_code("b@univen.ac.za", code) is False

    def test_cleanup_removes_only_expired(self, service, clock):
        service.issue_code("old@univen.ac.za")
        clock.now += timedelta(minutes=5)
        fresh = service.issue_code("new@univen.ac.za")
        clock.now += timedelta(minutes=6)

        assert service.cleanup_expired() == 1
        assert service.check_code("new@univen.ac.za", fresh) is True


class TestProvisioning:
    @pytest.fixture
    def profiles(self):
        return InMemoryProfileRepository()

    def _user(self, username, role):
        return User(id=1, username=username, email=username, password_hash="x", role=role)

    def test_intern_gets_department_and_default_supervisor(self, profiles):
        provisioner = ProfileProvisioner(profiles)

        provisioner.provision(
            self._user("sipho@univen.ac.za", UserRole.INTERN),
            ProfileDetails(name="Sipho", department="Data Science"),
        )

        intern = profiles.get_intern_by_email("sipho@univen.ac.za")
        department = profiles.get_department_by_name("Data Science")
        supervisor = profiles.get_supervisor_by_email(
            "supervisor@datascience.univen.ac.za"
        )
        assert intern.name == "Sipho"
        assert intern.department_id == department.id
        assert intern.supervisor_id == supervisor.id

    def test_intern_reuses_existing_supervisor(self, profiles):
        provisioner = ProfileProvisioner(profiles, default_department="ICT")
        provisioner.provision(self._user("boss@univen.ac.za", UserRole.SUPERVISOR), ProfileDetails())
        provisioner.provision(self._user("new@univen.ac.za", UserRole.INTERN), ProfileDetails())

        boss = profiles.get_supervisor_by_email("boss@univen.ac.za")
        assert profiles.get_intern_by_email("new@univen.ac.za").supervisor_id == boss.id
        assert profiles.get_supervisor_by_email(default_supervisor_email("ICT")) is None

    def test_name_defaults_to_email_local_part(self, profiles):
        ProfileProvisioner(profiles).provision(
            self._user("zanele@univen.ac.za", UserRole.ADMIN), ProfileDetails()
        )
        assert profiles.get_admin_by_email("zanele@univen.ac.za").name == "zanele"

    def test_existing_profile_is_left_alone(self, profiles):
        provisioner = ProfileProvisioner(profiles)
        user = self._user("admin@univen.ac.za", UserRole.ADMIN)
        provisioner.provision(user, ProfileDetails(name="First"))
        provisioner.provision(user, ProfileDetails(name="Second"))

        assert profiles.get_admin_by_email("admin@univen.ac.za").name == "First"


def test_registration_survives_provisioning_failure():
    users = InMemoryUserRepository()
    verification = EmailVerificationService(InMemoryVerificationCodeRepository())
    provisioner = MagicMock(spec=ProfileProvisioner)
    provisioner.provision.side_effect = DatabaseError("profile insert failed")
    code = verification.issue_code("kea@univen.ac.za")

    result = RegisterUserUseCase(users, verification, provisioner).execute(
        RegisterUserInput(
            username="kea@univen.ac.za",
            verification_code=code,
            password="Secret1!x",
            role="ADMIN",
        )
    )

    assert result.role is UserRole.ADMIN
    assert users.get_by_username("kea@univen.ac.za") is not None
    provisioner.provision.assert_called_once()
