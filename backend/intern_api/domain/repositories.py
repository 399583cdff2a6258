"""
Name: Domain Repository Interfaces

Responsibilities:
  - Define contracts for data persistence
  - Provide abstraction over storage technology
  - Enable dependency inversion (use cases don't depend on PostgreSQL)

Collaborators:
  - domain.entities, users.User
  - Implementations in infrastructure.repositories (postgres + in_memory)

Constraints:
  - Pure interfaces (Protocol), no implementation
  - Must not leak infrastructure details

Notes:
  - Using typing.Protocol for structural subtyping
  - The store is the source of truth; callers never cache leave state
"""

from datetime import datetime
from typing import List, Optional, Protocol, Tuple

from ..users import User
from .entities import (
    Admin,
    Attendance,
    Department,
    Intern,
    LeaveRequest,
    LeaveStatus,
    NotificationPreference,
    Supervisor,
    TermsAcceptance,
    VerificationCode,
)


class UserRepository(Protocol):
    """R: Interface for user accounts."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        ...

    def get_by_username(self, username: str) -> Optional[User]:
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        ...

    def create(self, user: User) -> User:
        """
        R: Persist a new user and return it with its id.

        Raises:
            ConflictError: If the username is already taken
        """
        ...

    def update_profile(
        self,
        user_id: int,
        name: Optional[str],
        phone: Optional[str],
        avatar_url: Optional[str],
    ) -> Optional[User]:
        """R: Update profile fields; None if the user does not exist."""
        ...


class ProfileRepository(Protocol):
    """
    R: Interface for role-specific profiles and departments.

    Grouped because registration provisions them together.
    """

    def get_department_by_name(self, name: str) -> Optional[Department]:
        ...

    def create_department(self, name: str) -> Department:
        ...

    def get_intern(self, intern_id: int) -> Optional[Intern]:
        ...

    def get_intern_by_email(self, email: str) -> Optional[Intern]:
        ...

    def create_intern(self, intern: Intern) -> Intern:
        ...

    def get_supervisor_by_email(self, email: str) -> Optional[Supervisor]:
        ...

    def first_supervisor_in_department(self, department_id: int) -> Optional[Supervisor]:
        ...

    def create_supervisor(self, supervisor: Supervisor) -> Supervisor:
        ...

    def get_admin_by_email(self, email: str) -> Optional[Admin]:
        ...

    def create_admin(self, admin: Admin) -> Admin:
        ...


class LeaveRequestRepository(Protocol):
    """
    R: Interface for leave requests.

    Reads return records with intern_name / intern_email joined in when the
    intern reference resolves.
    """

    def create(self, leave: LeaveRequest) -> LeaveRequest:
        ...

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        ...

    def update_status(self, request_id: int, status: LeaveStatus) -> None:
        ...

    def set_attachment(self, request_id: int, attachment_path: str) -> None:
        ...

    def get_by_attachment(self, attachment_path: str) -> Optional[LeaveRequest]:
        ...

    def list(
        self,
        status: Optional[LeaveStatus] = None,
        intern_id: Optional[int] = None,
    ) -> List[LeaveRequest]:
        """R: Filter by status, intern, both or neither (newest first)."""
        ...

    def search(
        self,
        status: Optional[LeaveStatus],
        intern_id: Optional[int],
        page: int,
        size: int,
    ) -> Tuple[List[LeaveRequest], int]:
        """
        R: Paginated search ordered by from_date descending.

        Returns:
            (page content, total matching rows)
        """
        ...


class AttendanceRepository(Protocol):
    """R: Interface for attendance records."""

    def create(self, attendance: Attendance) -> Attendance:
        ...

    def get(self, attendance_id: int) -> Optional[Attendance]:
        ...

    def update(self, attendance: Attendance) -> Attendance:
        ...

    def list(self, intern_id: Optional[int] = None) -> List[Attendance]:
        ...


class VerificationCodeRepository(Protocol):
    """R: Interface for email verification codes (one per email)."""

    def replace(self, code: VerificationCode) -> None:
        """R: Store code, discarding any previous code for the email."""
        ...

    def get(self, email: str) -> Optional[VerificationCode]:
        ...

    def delete(self, email: str) -> None:
        ...

    def delete_expired(self, now: datetime) -> int:
        """R: Remove expired codes and return how many were removed."""
        ...


class UserSettingsRepository(Protocol):
    """R: Interface for per-user notification preferences and terms acceptance."""

    def get_notification_preference(self, user_id: int) -> Optional[NotificationPreference]:
        ...

    def save_notification_preference(
        self, preference: NotificationPreference
    ) -> NotificationPreference:
        """R: Insert or replace the user's preference row."""
        ...

    def get_terms_acceptance(self, user_id: int) -> Optional[TermsAcceptance]:
        ...

    def save_terms_acceptance(self, terms: TermsAcceptance) -> TermsAcceptance:
        """R: Insert or replace the user's terms row."""
        ...
