"""
Name: Domain Entities

Responsibilities:
  - Define core entities (Department, Supervisor, Intern, Admin,
    LeaveRequest, Attendance, VerificationCode)
  - Define the closed enumerations used on the wire and in storage

Collaborators:
  - None (pure domain layer, no external dependencies)

Constraints:
  - No dependencies on infrastructure or frameworks
  - Relations are plain ids; joined display fields are Optional

Notes:
  - LeaveRequest.intern_name / intern_email are filled by the repository
    when the intern reference resolves, and stay None otherwise
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class _ParsableEnum(str, Enum):
    @classmethod
    def parse(cls, value: Optional[str]):
        """R: Case-insensitive lookup; None for blank or unknown values."""
        if not value:
            return None
        return cls.__members__.get(value.strip().upper())

    @classmethod
    def names(cls) -> str:
        return ", ".join(cls.__members__)


class LeaveType(_ParsableEnum):
    ANNUAL = "ANNUAL"
    SICK = "SICK"
    CASUAL = "CASUAL"
    EMERGENCY = "EMERGENCY"
    OTHER = "OTHER"
    UNPAID = "UNPAID"
    STUDY = "STUDY"


class LeaveStatus(_ParsableEnum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING


class AttendanceStatus(_ParsableEnum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"


class NotificationFrequency(_ParsableEnum):
    INSTANT = "INSTANT"
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"


@dataclass
class Department:
    id: Optional[int]
    name: str


@dataclass
class Supervisor:
    id: Optional[int]
    name: str
    email: str
    department_id: Optional[int] = None


@dataclass
class Intern:
    """
    R: Intern profile, linked to a User account by email.

    Attributes:
        id: Intern identifier (referenced by leave and attendance)
        name: Display name
        email: Unique email, equal to the owning user's username
        department_id: Owning department
        supervisor_id: Assigned supervisor
    """

    id: Optional[int]
    name: str
    email: str
    department_id: Optional[int] = None
    supervisor_id: Optional[int] = None


@dataclass
class Admin:
    id: Optional[int]
    name: str
    email: str


@dataclass
class LeaveRequest:
    """
    R: A leave request owned by an intern.

    Attributes:
        id: Request identifier
        intern_id: Owning intern
        leave_type: Enumerated reason
        from_date: First day (inclusive)
        to_date: Last day (inclusive), never before from_date
        status: PENDING until approved or rejected
        attachment_path: Stored attachment filename (optional)
        created_at / updated_at: Timestamps
        intern_name / intern_email: Joined from interns, None if unresolved
    """

    id: Optional[int]
    intern_id: Optional[int]
    leave_type: LeaveType
    from_date: date
    to_date: date
    status: LeaveStatus = LeaveStatus.PENDING
    attachment_path: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    intern_name: Optional[str] = None
    intern_email: Optional[str] = None


@dataclass
class Attendance:
    id: Optional[int]
    intern_id: int
    date: date
    time_in: datetime
    status: AttendanceStatus = AttendanceStatus.SIGNED_IN
    time_out: Optional[datetime] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def is_signed_out(self) -> bool:
        return self.status is AttendanceStatus.SIGNED_OUT


@dataclass
class VerificationCode:
    """R: One outstanding code per email, single use."""

    email: str
    code: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass
class NotificationPreference:
    """R: Per-user email notification settings; defaults apply until saved."""

    user_id: int
    email_leave_updates: bool = True
    email_attendance_alerts: bool = True
    frequency: NotificationFrequency = NotificationFrequency.INSTANT


@dataclass
class TermsAcceptance:
    user_id: int
    accepted: bool = False
    accepted_at: Optional[datetime] = None
    version: str = "v1"
    ip_address: Optional[str] = None
