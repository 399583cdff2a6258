"""
Name: PostgreSQL User Settings Repository

Responsibilities:
  - Upsert notification preferences and terms acceptance (one row per user)
"""

from __future__ import annotations

from typing import Optional

from psycopg_pool import ConnectionPool

from ...domain.entities import (
    NotificationFrequency,
    NotificationPreference,
    TermsAcceptance,
)
from ...exceptions import DatabaseError
from ...logger import logger


class PostgresUserSettingsRepository:
    """R: PostgreSQL implementation of UserSettingsRepository."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ..db.pool import get_pool

        return get_pool()

    def _fetch_one(self, operation: str, query: str, params: tuple) -> Optional[tuple]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, params).fetchone()
        except Exception as exc:
            logger.error(
                f"PostgresUserSettingsRepository: {operation} failed",
                extra={"error": str(exc)},
            )
            raise DatabaseError(f"Failed to {operation}: {exc}")

    def get_notification_preference(self, user_id: int) -> Optional[NotificationPreference]:
        row = self._fetch_one(
            "load notification preferences",
            """
            SELECT user_id, email_leave_updates, email_attendance_alerts, frequency
            FROM notification_preferences
            WHERE user_id = %s
            """,
            (user_id,),
        )
        if not row:
            return None
        return NotificationPreference(
            user_id=row[0],
            email_leave_updates=row[1],
            email_attendance_alerts=row[2],
            frequency=NotificationFrequency.parse(row[3]) or NotificationFrequency.INSTANT,
        )

    def save_notification_preference(
        self, preference: NotificationPreference
    ) -> NotificationPreference:
        self._fetch_one(
            "save notification preferences",
            """
            INSERT INTO notification_preferences
                (user_id, email_leave_updates, email_attendance_alerts, frequency)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (user_id) DO UPDATE SET
                email_leave_updates = EXCLUDED.email_leave_updates,
                email_attendance_alerts = EXCLUDED.email_attendance_alerts,
                frequency = EXCLUDED.frequency
            RETURNING user_id
            """,
            (
                preference.user_id,
                preference.email_leave_updates,
                preference.email_attendance_alerts,
                preference.frequency.value,
            ),
        )
        return preference

    def get_terms_acceptance(self, user_id: int) -> Optional[TermsAcceptance]:
        row = self._fetch_one(
            "load terms acceptance",
            """
            SELECT user_id, accepted, accepted_at, version, ip_address
            FROM terms_acceptance
            WHERE user_id = %s
            """,
            (user_id,),
        )
        if not row:
            return None
        return TermsAcceptance(
            user_id=row[0],
            accepted=row[1],
            accepted_at=row[2],
            version=row[3],
            ip_address=row[4],
        )

    def save_terms_acceptance(self, terms: TermsAcceptance) -> TermsAcceptance:
        self._fetch_one(
            "save terms acceptance",
            """
            INSERT INTO terms_acceptance
                (user_id, accepted, accepted_at, version, ip_address)
            VALUES (%s, %s, %s, %s, %s)
            ON CONFLICT (user_id) DO UPDATE SET
                accepted = EXCLUDED.accepted,
                accepted_at = EXCLUDED.accepted_at,
                version = EXCLUDED.version,
                ip_address = EXCLUDED.ip_address
            RETURNING user_id
            """,
            (
                terms.user_id,
                terms.accepted,
                terms.accepted_at,
                terms.version,
                terms.ip_address,
            ),
        )
        return terms
