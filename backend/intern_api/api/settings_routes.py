"""Settings for the authenticated user: profile, notifications, terms."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from ..application.use_cases import (
    NotificationPreferencesUseCase,
    TermsAcceptanceUseCase,
    UpdateNotificationsInput,
    UpdateProfileInput,
    UpdateProfileUseCase,
)
from ..rate_limit import get_client_ip
from ..users import User
from .dependencies import (
    current_user,
    get_notification_preferences_use_case,
    get_terms_acceptance_use_case,
    get_update_profile_use_case,
)
from .schemas import (
    NotificationPreferencesResponse,
    NotificationPreferencesUpdateRequest,
    ProfileResponse,
    ProfileUpdateRequest,
    TermsAcceptRequest,
    TermsResponse,
)

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/profile", response_model=ProfileResponse)
def get_profile(user: User = Depends(current_user)):
    return ProfileResponse.from_user(user)


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    req: ProfileUpdateRequest,
    user: User = Depends(current_user),
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
):
    updated = use_case.execute(
        user,
        UpdateProfileInput(name=req.name, phone=req.phone, avatar_url=req.avatar_url),
    )
    return ProfileResponse.from_user(updated)


@router.get("/notifications", response_model=NotificationPreferencesResponse)
def get_notifications(
    user: User = Depends(current_user),
    use_case: NotificationPreferencesUseCase = Depends(
        get_notification_preferences_use_case
    ),
):
    return NotificationPreferencesResponse.from_preference(use_case.get(user))


@router.put("/notifications", response_model=NotificationPreferencesResponse)
def update_notifications(
    req: NotificationPreferencesUpdateRequest,
    user: User = Depends(current_user),
    use_case: NotificationPreferencesUseCase = Depends(
        get_notification_preferences_use_case
    ),
):
    saved = use_case.update(
        user,
        UpdateNotificationsInput(
            email_leave_updates=req.email_leave_updates,
            email_attendance_alerts=req.email_attendance_alerts,
            frequency=req.frequency,
        ),
    )
    return NotificationPreferencesResponse.from_preference(saved)


@router.get("/terms", response_model=TermsResponse)
def get_terms(
    user: User = Depends(current_user),
    use_case: TermsAcceptanceUseCase = Depends(get_terms_acceptance_use_case),
):
    return TermsResponse.from_terms(use_case.get(user))


@router.put("/terms", response_model=TermsResponse)
def accept_terms(
    request: Request,
    req: Optional[TermsAcceptRequest] = Body(None),
    user: User = Depends(current_user),
    use_case: TermsAcceptanceUseCase = Depends(get_terms_acceptance_use_case),
):
    saved = use_case.accept(
        user,
        version=req.version if req else None,
        ip_address=get_client_ip(request),
    )
    return TermsResponse.from_terms(saved)
