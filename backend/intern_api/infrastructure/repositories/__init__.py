"""Infrastructure repositories"""

from .postgres_user_repo import PostgresUserRepository
from .postgres_profile_repo import PostgresProfileRepository
from .postgres_leave_repo import PostgresLeaveRequestRepository
from .postgres_attendance_repo import PostgresAttendanceRepository
from .postgres_verification_repo import PostgresVerificationCodeRepository
from .postgres_settings_repo import PostgresUserSettingsRepository
from .in_memory_user_repo import InMemoryUserRepository
from .in_memory_profile_repo import InMemoryProfileRepository
from .in_memory_leave_repo import InMemoryLeaveRequestRepository
from .in_memory_attendance_repo import InMemoryAttendanceRepository
from .in_memory_verification_repo import InMemoryVerificationCodeRepository
from .in_memory_settings_repo import InMemoryUserSettingsRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresProfileRepository",
    "PostgresLeaveRequestRepository",
    "PostgresAttendanceRepository",
    "PostgresVerificationCodeRepository",
    "PostgresUserSettingsRepository",
    "InMemoryUserRepository",
    "InMemoryProfileRepository",
    "InMemoryLeaveRequestRepository",
    "InMemoryAttendanceRepository",
    "InMemoryVerificationCodeRepository",
    "InMemoryUserSettingsRepository",
]
