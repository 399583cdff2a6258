"""
Name: User Models

Responsibilities:
  - Define user roles and user entity for authentication
  - Keep auth-specific data shapes centralized
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    """R: Supported user roles for JWT auth."""

    ADMIN = "ADMIN"
    SUPERVISOR = "SUPERVISOR"
    INTERN = "INTERN"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["UserRole"]:
        """R: Case-insensitive lookup; None for blank or unknown values."""
        if not value:
            return None
        return cls.__members__.get(value.strip().upper())

    @property
    def authority(self) -> str:
        return f"ROLE_{self.value}"


@dataclass
class User:
    """R: User record used by authentication flows."""

    id: Optional[int]
    username: str
    email: Optional[str]
    password_hash: str
    role: UserRole
    name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def display_email(self) -> str:
        return self.email or self.username
