"""Application use cases"""

from .attendance import (
    GeoPoint,
    ListAttendanceUseCase,
    SignInInput,
    SignInUseCase,
    SignOutUseCase,
)
from .decide_leave import DecideLeaveUseCase
from .leave_attachments import (
    DownloadAttachmentUseCase,
    UploadAttachmentInput,
    UploadAttachmentUseCase,
)
from .list_leave import LeavePage, ListLeaveRequestsUseCase, SearchLeaveRequestsUseCase
from .login import LoginInput, LoginResult, LoginUseCase
from .profile_settings import (
    NotificationPreferencesUseCase,
    TermsAcceptanceUseCase,
    UpdateNotificationsInput,
    UpdateProfileInput,
    UpdateProfileUseCase,
)
from .register_user import RegisterUserInput, RegisterUserResult, RegisterUserUseCase
from .submit_leave import SubmitLeaveInput, SubmitLeaveUseCase

__all__ = [
    "DecideLeaveUseCase",
    "DownloadAttachmentUseCase",
    "GeoPoint",
    "LeavePage",
    "ListAttendanceUseCase",
    "ListLeaveRequestsUseCase",
    "LoginInput",
    "LoginResult",
    "LoginUseCase",
    "NotificationPreferencesUseCase",
    "RegisterUserInput",
    "RegisterUserResult",
    "RegisterUserUseCase",
    "SearchLeaveRequestsUseCase",
    "SignInInput",
    "SignInUseCase",
    "SignOutUseCase",
    "SubmitLeaveInput",
    "SubmitLeaveUseCase",
    "TermsAcceptanceUseCase",
    "UpdateNotificationsInput",
    "UpdateProfileInput",
    "UpdateProfileUseCase",
    "UploadAttachmentInput",
    "UploadAttachmentUseCase",
]
