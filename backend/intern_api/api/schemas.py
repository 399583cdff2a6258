"""
Name: API Schemas

Responsibilities:
  - Request/response bodies for every endpoint (pydantic v2)
  - camelCase on the wire, snake_case in Python
  - Convert domain records into explicit per-endpoint shapes

Notes:
  - Request fields are Optional so missing values reach the use cases,
    which answer with the documented messages instead of a generic 422
"""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..application.use_cases import LeavePage
from ..domain.entities import (
    Attendance,
    LeaveRequest,
    NotificationPreference,
    TermsAcceptance,
)
from ..users import User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Auth


class LoginRequest(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoginResponse(CamelModel):
    token: str
    role: str
    username: str
    email: str


class MeResponse(CamelModel):
    id: int
    username: str
    email: str
    role: str


class SendCodeRequest(CamelModel):
    email: Optional[str] = None


class SendCodeResponse(CamelModel):
    message: str
    code: Optional[str] = None


class VerifyCodeRequest(CamelModel):
    email: Optional[str] = None
    code: Optional[str] = None


class VerifyCodeResponse(CamelModel):
    valid: bool
    message: str


class RegisterRequest(CamelModel):
    username: Optional[str] = None
    verification_code: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    name: Optional[str] = None
    surname: Optional[str] = None
    department: Optional[str] = None


class RegisterResponse(CamelModel):
    message: str
    user_id: str
    role: str


# Leave


class LeaveSubmitRequest(CamelModel):
    intern_id: Optional[int] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    leave_type: Optional[str] = None


class LeaveRequestResponse(CamelModel):
    request_id: int
    leave_type: str
    from_date: dt.date
    to_date: dt.date
    status: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
    attachment_path: Optional[str] = None
    intern_id: Optional[int] = None
    intern_name: Optional[str] = None
    intern_email: Optional[str] = None

    @classmethod
    def from_leave(cls, leave: LeaveRequest) -> "LeaveRequestResponse":
        """R: Intern fields stay null when the intern reference did not resolve."""
        resolved = leave.intern_email is not None or leave.intern_name is not None
        return cls(
            request_id=leave.id,
            leave_type=leave.leave_type.value,
            from_date=leave.from_date,
            to_date=leave.to_date,
            status=leave.status.value,
            created_at=leave.created_at,
            updated_at=leave.updated_at,
            attachment_path=leave.attachment_path,
            intern_id=leave.intern_id if resolved else None,
            intern_name=leave.intern_name,
            intern_email=leave.intern_email,
        )


class LeavePageResponse(CamelModel):
    content: List[LeaveRequestResponse]
    page: int
    size: int
    total_elements: int
    total_pages: int

    @classmethod
    def from_page(cls, page: LeavePage) -> "LeavePageResponse":
        return cls(
            content=[LeaveRequestResponse.from_leave(r) for r in page.content],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
        )


# Attendance


class SignInRequest(CamelModel):
    intern_id: Optional[int] = None
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class SignOutRequest(CamelModel):
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class AttendanceResponse(CamelModel):
    attendance_id: int
    intern_id: int
    date: dt.date
    time_in: dt.datetime
    time_out: Optional[dt.datetime] = None
    status: str
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_attendance(cls, record: Attendance) -> "AttendanceResponse":
        return cls(
            attendance_id=record.id,
            intern_id=record.intern_id,
            date=record.date,
            time_in=record.time_in,
            time_out=record.time_out,
            status=record.status.value,
            location=record.location,
            latitude=record.latitude,
            longitude=record.longitude,
        )


# Settings


class ProfileResponse(CamelModel):
    id: int
    username: str
    email: str
    role: str
    name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "ProfileResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.display_email,
            role=user.role.value,
            name=user.name,
            phone=user.phone,
            avatar_url=user.avatar_url,
        )


class ProfileUpdateRequest(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None


class NotificationPreferencesResponse(CamelModel):
    email_leave_updates: bool
    email_attendance_alerts: bool
    frequency: str

    @classmethod
    def from_preference(
        cls, preference: NotificationPreference
    ) -> "NotificationPreferencesResponse":
        return cls(
            email_leave_updates=preference.email_leave_updates,
            email_attendance_alerts=preference.email_attendance_alerts,
            frequency=preference.frequency.value,
        )


class NotificationPreferencesUpdateRequest(CamelModel):
    email_leave_updates: Optional[bool] = None
    email_attendance_alerts: Optional[bool] = None
    frequency: Optional[str] = None


class TermsResponse(CamelModel):
    accepted: bool
    accepted_at: Optional[dt.datetime] = None
    version: str

    @classmethod
    def from_terms(cls, terms: TermsAcceptance) -> "TermsResponse":
        return cls(
            accepted=terms.accepted,
            accepted_at=terms.accepted_at,
            version=terms.version,
        )


class TermsAcceptRequest(CamelModel):
    version: Optional[str] = None
