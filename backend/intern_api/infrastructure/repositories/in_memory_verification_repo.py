"""
Name: In-Memory Verification Code Repository

Responsibilities:
  - Hold one verification code per email in memory
"""

from __future__ import annotations

from datetime import datetime
from threading import Lock
from typing import Dict, Optional

from ...domain.entities import VerificationCode


class InMemoryVerificationCodeRepository:
    """R: Thread-safe in-memory VerificationCodeRepository."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._codes: Dict[str, VerificationCode] = {}

    def replace(self, code: VerificationCode) -> None:
        with self._lock:
            self._codes[code.email] = code

    def get(self, email: str) -> Optional[VerificationCode]:
        with self._lock:
            return self._codes.get(email)

    def delete(self, email: str) -> None:
        with self._lock:
            self._codes.pop(email, None)

    def delete_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [email for email, code in self._codes.items() if code.is_expired(now)]
            for email in expired:
                del self._codes[email]
            return len(expired)
