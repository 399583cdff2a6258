"""
Name: Dependency Injection Container

Responsibilities:
  - Wire repositories and services for the application
  - Select in-memory repositories when APP_ENV is test/testing
  - Provide FastAPI-friendly factory functions

Collaborators:
  - infrastructure.repositories: Postgres* and InMemory* implementations
  - infrastructure.storage: LocalFileStorage
  - application: EmailVerificationService

Constraints:
  - Manual DI (no library like dependency-injector)
  - Singletons via functools.lru_cache
  - Must not import use cases or routes (auth_users depends on this module)

Notes:
  - This is the composition root for infrastructure
  - Tests override these with app.dependency_overrides
"""

from functools import lru_cache

from .application.email_verification import EmailVerificationService
from .config import get_settings
from .domain.repositories import (
    AttendanceRepository,
    LeaveRequestRepository,
    ProfileRepository,
    UserRepository,
    UserSettingsRepository,
    VerificationCodeRepository,
)
from .domain.services import FileStorage
from .infrastructure.repositories import (
    InMemoryAttendanceRepository,
    InMemoryLeaveRequestRepository,
    InMemoryProfileRepository,
    InMemoryUserRepository,
    InMemoryUserSettingsRepository,
    InMemoryVerificationCodeRepository,
    PostgresAttendanceRepository,
    PostgresLeaveRequestRepository,
    PostgresProfileRepository,
    PostgresUserRepository,
    PostgresUserSettingsRepository,
    PostgresVerificationCodeRepository,
)
from .infrastructure.storage import LocalFileStorage


def _use_in_memory() -> bool:
    return get_settings().is_test()


@lru_cache
def get_user_repository() -> UserRepository:
    """R: Get singleton instance of user repository."""
    if _use_in_memory():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache
def get_profile_repository() -> ProfileRepository:
    """R: Get singleton instance of profile repository."""
    if _use_in_memory():
        return InMemoryProfileRepository()
    return PostgresProfileRepository()


@lru_cache
def get_leave_repository() -> LeaveRequestRepository:
    """R: Get singleton instance of leave request repository."""
    if _use_in_memory():
        return InMemoryLeaveRequestRepository(profiles=get_profile_repository())
    return PostgresLeaveRequestRepository()


@lru_cache
def get_attendance_repository() -> AttendanceRepository:
    """R: Get singleton instance of attendance repository."""
    if _use_in_memory():
        return InMemoryAttendanceRepository()
    return PostgresAttendanceRepository()


@lru_cache
def get_verification_repository() -> VerificationCodeRepository:
    """R: Get singleton instance of verification code repository."""
    if _use_in_memory():
        return InMemoryVerificationCodeRepository()
    return PostgresVerificationCodeRepository()


@lru_cache
def get_user_settings_repository() -> UserSettingsRepository:
    """R: Get singleton instance of user settings repository."""
    if _use_in_memory():
        return InMemoryUserSettingsRepository()
    return PostgresUserSettingsRepository()


@lru_cache
def get_file_storage() -> FileStorage:
    return LocalFileStorage(get_settings().upload_dir)


def get_email_verification_service() -> EmailVerificationService:
    return EmailVerificationService(
        get_verification_repository(),
        ttl_minutes=get_settings().verification_code_ttl_minutes,
    )


def reset_container() -> None:
    """R: Drop cached singletons (tests)."""
    for factory in (
        get_user_repository,
        get_profile_repository,
        get_leave_repository,
        get_attendance_repository,
        get_verification_repository,
        get_user_settings_repository,
        get_file_storage,
    ):
        factory.cache_clear()
