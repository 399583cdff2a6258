"""
Name: Email Verification Service

Responsibilities:
  - Issue 6-digit codes (one outstanding code per email, fixed TTL)
  - Check codes, consume them on registration (single use)
  - Sweep expired codes

Collaborators:
  - domain.repositories.VerificationCodeRepository
  - jobs.MaintenanceSweeper: calls cleanup_expired periodically

Notes:
  - Delivery is out of scope; the code is logged at INFO without its value
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable

from ..domain.entities import VerificationCode
from ..domain.repositories import VerificationCodeRepository
from ..logger import logger

CODE_DIGITS = 6


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class EmailVerificationService:
    """R: Verification code lifecycle."""

    def __init__(
        self,
        repository: VerificationCodeRepository,
        ttl_minutes: int = 10,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.repository = repository
        self.ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock

    def issue_code(self, email: str) -> str:
        """R: Generate a fresh code for email, replacing any previous one."""
        code = f"{secrets.randbelow(10 ** CODE_DIGITS):0{CODE_DIGITS}d}"
        self.repository.replace(
            VerificationCode(email=email, code=code, expires_at=self._clock() + self.ttl)
        )
        logger.info("Verification code issued", extra={"email": email})
        return code

    def _lookup(self, email: str, code: str) -> VerificationCode | None:
        stored = self.repository.get(email)
        if stored is None or not secrets.compare_digest(stored.code, code):
            return None
        if stored.is_expired(self._clock()):
            self.repository.delete(email)
            logger.info("Verification code expired", extra={"email": email})
            return None
        return stored

    def check_code(self, email: str, code: str) -> bool:
        """R: True if the code matches and is live; does not consume it."""
        return self._lookup(email, code) is not None

    def consume_code(self, email: str, code: str) -> bool:
        """R: Like check_code, but deletes the code on success."""
        if self._lookup(email, code) is None:
            return False
        self.repository.delete(email)
        return True

    def cleanup_expired(self) -> int:
        removed = self.repository.delete_expired(self._clock())
        if removed:
            logger.info("Expired verification codes removed", extra={"removed": removed})
        return removed
