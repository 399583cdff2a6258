"""
Name: In-Memory User Settings Repository

Responsibilities:
  - Hold notification preferences and terms acceptance keyed by user id
"""

from __future__ import annotations

from dataclasses import replace
from threading import Lock
from typing import Dict, Optional

from ...domain.entities import NotificationPreference, TermsAcceptance


class InMemoryUserSettingsRepository:
    """R: Thread-safe in-memory UserSettingsRepository; returns copies."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._preferences: Dict[int, NotificationPreference] = {}
        self._terms: Dict[int, TermsAcceptance] = {}

    def get_notification_preference(self, user_id: int) -> Optional[NotificationPreference]:
        with self._lock:
            preference = self._preferences.get(user_id)
            return replace(preference) if preference else None

    def save_notification_preference(
        self, preference: NotificationPreference
    ) -> NotificationPreference:
        with self._lock:
            self._preferences[preference.user_id] = replace(preference)
        return preference

    def get_terms_acceptance(self, user_id: int) -> Optional[TermsAcceptance]:
        with self._lock:
            terms = self._terms.get(user_id)
            return replace(terms) if terms else None

    def save_terms_acceptance(self, terms: TermsAcceptance) -> TermsAcceptance:
        with self._lock:
            self._terms[terms.user_id] = replace(terms)
        return terms
