"""
Name: API Dependencies

Responsibilities:
  - Build use cases from container-provided repositories (per request)
  - Resolve the calling Actor for role-scoped endpoints

Collaborators:
  - container.py: repository/service singletons
  - auth_users.require_user: authenticated caller

Notes:
  - Repositories are injected with Depends so tests can swap them through
    app.dependency_overrides
"""

from fastapi import Depends

from ..application.actors import resolve_actor
from ..application.email_verification import EmailVerificationService
from ..application.profile_provisioning import ProfileProvisioner
from ..application.use_cases import (
    DecideLeaveUseCase,
    DownloadAttachmentUseCase,
    ListAttendanceUseCase,
    ListLeaveRequestsUseCase,
    LoginUseCase,
    NotificationPreferencesUseCase,
    RegisterUserUseCase,
    SearchLeaveRequestsUseCase,
    SignInUseCase,
    SignOutUseCase,
    SubmitLeaveUseCase,
    TermsAcceptanceUseCase,
    UpdateProfileUseCase,
    UploadAttachmentUseCase,
)
from ..auth_users import require_user
from ..config import get_settings
from ..container import (
    get_attendance_repository,
    get_file_storage,
    get_leave_repository,
    get_profile_repository,
    get_user_repository,
    get_user_settings_repository,
    get_verification_repository,
)
from ..domain.leave_policy import Actor
from ..domain.repositories import (
    AttendanceRepository,
    LeaveRequestRepository,
    ProfileRepository,
    UserRepository,
    UserSettingsRepository,
    VerificationCodeRepository,
)
from ..domain.services import FileStorage
from ..rate_limit import LoginRateLimiter, get_login_rate_limiter
from ..users import User

current_user = require_user()


def current_actor(
    user: User = Depends(current_user),
    profiles: ProfileRepository = Depends(get_profile_repository),
) -> Actor:
    return resolve_actor(user, profiles)


def get_verification_service(
    repository: VerificationCodeRepository = Depends(get_verification_repository),
) -> EmailVerificationService:
    return EmailVerificationService(
        repository, ttl_minutes=get_settings().verification_code_ttl_minutes
    )


def get_login_use_case(
    users: UserRepository = Depends(get_user_repository),
    rate_limiter: LoginRateLimiter = Depends(get_login_rate_limiter),
) -> LoginUseCase:
    return LoginUseCase(users, rate_limiter)


def get_register_use_case(
    users: UserRepository = Depends(get_user_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
    verification: EmailVerificationService = Depends(get_verification_service),
) -> RegisterUserUseCase:
    provisioner = ProfileProvisioner(
        profiles, default_department=get_settings().default_department
    )
    return RegisterUserUseCase(users, verification, provisioner)


def get_submit_leave_use_case(
    leaves: LeaveRequestRepository = Depends(get_leave_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
) -> SubmitLeaveUseCase:
    return SubmitLeaveUseCase(leaves, profiles)


def get_decide_leave_use_case(
    leaves: LeaveRequestRepository = Depends(get_leave_repository),
) -> DecideLeaveUseCase:
    return DecideLeaveUseCase(leaves)


def get_list_leave_use_case(
    leaves: LeaveRequestRepository = Depends(get_leave_repository),
) -> ListLeaveRequestsUseCase:
    return ListLeaveRequestsUseCase(leaves)


def get_search_leave_use_case(
    leaves: LeaveRequestRepository = Depends(get_leave_repository),
) -> SearchLeaveRequestsUseCase:
    return SearchLeaveRequestsUseCase(leaves)


def get_upload_attachment_use_case(
    leaves: LeaveRequestRepository = Depends(get_leave_repository),
    storage: FileStorage = Depends(get_file_storage),
) -> UploadAttachmentUseCase:
    return UploadAttachmentUseCase(leaves, storage)


def get_download_attachment_use_case(
    leaves: LeaveRequestRepository = Depends(get_leave_repository),
    storage: FileStorage = Depends(get_file_storage),
) -> DownloadAttachmentUseCase:
    return DownloadAttachmentUseCase(leaves, storage)


def get_sign_in_use_case(
    attendance: AttendanceRepository = Depends(get_attendance_repository),
    profiles: ProfileRepository = Depends(get_profile_repository),
) -> SignInUseCase:
    return SignInUseCase(attendance, profiles)


def get_sign_out_use_case(
    attendance: AttendanceRepository = Depends(get_attendance_repository),
) -> SignOutUseCase:
    return SignOutUseCase(attendance)


def get_list_attendance_use_case(
    attendance: AttendanceRepository = Depends(get_attendance_repository),
) -> ListAttendanceUseCase:
    return ListAttendanceUseCase(attendance)


def get_update_profile_use_case(
    users: UserRepository = Depends(get_user_repository),
) -> UpdateProfileUseCase:
    return UpdateProfileUseCase(users)


def get_notification_preferences_use_case(
    settings: UserSettingsRepository = Depends(get_user_settings_repository),
) -> NotificationPreferencesUseCase:
    return NotificationPreferencesUseCase(settings)


def get_terms_acceptance_use_case(
    settings: UserSettingsRepository = Depends(get_user_settings_repository),
) -> TermsAcceptanceUseCase:
    return TermsAcceptanceUseCase(settings)
