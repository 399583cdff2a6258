"""
Name: Password Strength Policy

Responsibilities:
  - Check a candidate password against the strength rules, in order,
    and report the first violated rule
"""

import re
from typing import Optional

SPECIAL_CHARACTERS = "@$!%*?&"
MIN_LENGTH = 8

_RULES = (
    (re.compile(r"[a-z]"), "Password must contain at least one lowercase letter"),
    (re.compile(r"[A-Z]"), "Password must contain at least one uppercase letter"),
    (re.compile(r"\d"), "Password must contain at least one digit"),
    (
        re.compile(f"[{re.escape(SPECIAL_CHARACTERS)}]"),
        f"Password must contain at least one special character ({SPECIAL_CHARACTERS})",
    ),
)


def password_violation(password: Optional[str]) -> Optional[str]:
    """R: First violated rule as a user-facing message, or None if strong enough."""
    if password is None or not password.strip():
        return "Password is required"
    if len(password) < MIN_LENGTH:
        return f"Password must be at least {MIN_LENGTH} characters long"
    for pattern, message in _RULES:
        if not pattern.search(password):
            return message
    return None
