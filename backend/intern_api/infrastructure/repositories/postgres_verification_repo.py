"""
Name: PostgreSQL Verification Code Repository

Responsibilities:
  - Store one verification code per email (upsert)
  - Delete codes on use and sweep expired ones
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from psycopg_pool import ConnectionPool

from ...domain.entities import VerificationCode
from ...exceptions import DatabaseError
from ...logger import logger


class PostgresVerificationCodeRepository:
    """R: PostgreSQL implementation of VerificationCodeRepository."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ..db.pool import get_pool

        return get_pool()

    def replace(self, code: VerificationCode) -> None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                conn.execute(
                    """
                    INSERT INTO verification_codes (email, code, expires_at)
                    VALUES (%s, %s, %s)
                    ON CONFLICT (email)
                    DO UPDATE SET code = EXCLUDED.code, expires_at = EXCLUDED.expires_at
                    """,
                    (code.email, code.code, code.expires_at),
                )
        except Exception as exc:
            logger.error(
                "PostgresVerificationCodeRepository: store failed",
                extra={"error": str(exc)},
            )
            raise DatabaseError(f"Failed to store verification code: {exc}")

    def get(self, email: str) -> Optional[VerificationCode]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                row = conn.execute(
                    "SELECT email, code, expires_at FROM verification_codes WHERE email = %s",
                    (email,),
                ).fetchone()
        except Exception as exc:
            logger.error(
                "PostgresVerificationCodeRepository: lookup failed",
                extra={"error": str(exc)},
            )
            raise DatabaseError(f"Failed to load verification code: {exc}")

        if not row:
            return None
        return VerificationCode(email=row[0], code=row[1], expires_at=row[2])

    def delete(self, email: str) -> None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                conn.execute("DELETE FROM verification_codes WHERE email = %s", (email,))
        except Exception as exc:
            logger.error(
                "PostgresVerificationCodeRepository: delete failed",
                extra={"error": str(exc)},
            )
            raise DatabaseError(f"Failed to delete verification code: {exc}")

    def delete_expired(self, now: datetime) -> int:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                cursor = conn.execute(
                    "DELETE FROM verification_codes WHERE expires_at <= %s", (now,)
                )
                return cursor.rowcount
        except Exception as exc:
            logger.error(
                "PostgresVerificationCodeRepository: sweep failed",
                extra={"error": str(exc)},
            )
            raise DatabaseError(f"Failed to delete expired codes: {exc}")
