"""
Name: Settings Use Cases

Responsibilities:
  - Update the authenticated user's display profile (name, phone, avatar)
  - Read and update email notification preferences
  - Read and record terms-of-use acceptance

Collaborators:
  - domain.repositories.UserRepository, UserSettingsRepository

Notes:
  - Reads return defaults for users that never saved settings; nothing is
    written until the first update
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Optional

from ...domain.entities import (
    NotificationFrequency,
    NotificationPreference,
    TermsAcceptance,
)
from ...domain.repositories import UserRepository, UserSettingsRepository
from ...exceptions import NotFoundError, ValidationError
from ...logger import logger
from ...users import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class UpdateProfileInput:
    name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None


class UpdateProfileUseCase:
    """R: Fields left as None keep their stored value."""

    def __init__(self, users: UserRepository):
        self.users = users

    def execute(self, user: User, input_data: UpdateProfileInput) -> User:
        updated = self.users.update_profile(
            user.id,
            name=input_data.name if input_data.name is not None else user.name,
            phone=input_data.phone if input_data.phone is not None else user.phone,
            avatar_url=(
                input_data.avatar_url
                if input_data.avatar_url is not None
                else user.avatar_url
            ),
        )
        if updated is None:
            raise NotFoundError("User not found")
        return updated


@dataclass
class UpdateNotificationsInput:
    email_leave_updates: Optional[bool] = None
    email_attendance_alerts: Optional[bool] = None
    frequency: Optional[str] = None


class NotificationPreferencesUseCase:
    """R: Partial updates; omitted fields keep their stored (or default) value."""

    def __init__(self, settings: UserSettingsRepository):
        self.settings = settings

    def get(self, user: User) -> NotificationPreference:
        stored = self.settings.get_notification_preference(user.id)
        return stored or NotificationPreference(user_id=user.id)

    def update(
        self, user: User, input_data: UpdateNotificationsInput
    ) -> NotificationPreference:
        current = self.get(user)

        frequency = current.frequency
        if input_data.frequency is not None:
            frequency = NotificationFrequency.parse(input_data.frequency)
            if frequency is None:
                raise ValidationError(
                    f"Invalid frequency. Must be one of: {NotificationFrequency.names()}"
                )

        updated = replace(
            current,
            email_leave_updates=(
                input_data.email_leave_updates
                if input_data.email_leave_updates is not None
                else current.email_leave_updates
            ),
            email_attendance_alerts=(
                input_data.email_attendance_alerts
                if input_data.email_attendance_alerts is not None
                else current.email_attendance_alerts
            ),
            frequency=frequency,
        )
        return self.settings.save_notification_preference(updated)


class TermsAcceptanceUseCase:
    def __init__(
        self,
        settings: UserSettingsRepository,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.settings = settings
        self._clock = clock

    def get(self, user: User) -> TermsAcceptance:
        stored = self.settings.get_terms_acceptance(user.id)
        return stored or TermsAcceptance(user_id=user.id)

    def accept(
        self, user: User, version: Optional[str], ip_address: Optional[str]
    ) -> TermsAcceptance:
        """R: Mark terms accepted now; a blank version keeps the stored one."""
        current = self.get(user)
        accepted = replace(
            current,
            accepted=True,
            accepted_at=self._clock(),
            version=version.strip() if version and version.strip() else current.version,
            ip_address=ip_address,
        )
        saved = self.settings.save_terms_acceptance(accepted)
        logger.info(
            "Terms accepted",
            extra={"user_id": user.id, "version": saved.version},
        )
        return saved
