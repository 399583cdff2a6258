"""
Name: In-Memory User Repository

Responsibilities:
  - Store users in memory (tests / APP_ENV=test)
  - Enforce unique usernames like the users table does

Constraints:
  - Thread-safe: access guarded by a Lock
  - Returns copies so callers never mutate stored records
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from itertools import count
from threading import Lock
from typing import Dict, Optional

from ...exceptions import ConflictError
from ...users import User


class InMemoryUserRepository:
    """R: Thread-safe in-memory UserRepository."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[int, User] = {}
        self._ids = count(1)

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def get_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return replace(user)
        return None

    def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return replace(user)
        return None

    def create(self, user: User) -> User:
        with self._lock:
            if any(u.username == user.username for u in self._users.values()):
                raise ConflictError("Username already exists", status_code=400)
            stored = replace(
                user,
                id=next(self._ids),
                created_at=user.created_at or datetime.now(timezone.utc),
            )
            self._users[stored.id] = stored
            return replace(stored)

    def update_profile(
        self,
        user_id: int,
        name: Optional[str],
        phone: Optional[str],
        avatar_url: Optional[str],
    ) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            updated = replace(user, name=name, phone=phone, avatar_url=avatar_url)
            self._users[user_id] = updated
            return replace(updated)
