"""
Name: Leave Access and Transition Policy

Responsibilities:
  - Decide which intern's records a caller may see or act on
  - Decide whether a leave status change is allowed
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..users import UserRole
from .entities import LeaveStatus


@dataclass(frozen=True)
class Actor:
    """R: Caller context for access decisions."""

    user_id: int | None
    role: UserRole
    intern_id: int | None = None

    @property
    def is_intern(self) -> bool:
        return self.role == UserRole.INTERN


class Transition(str, Enum):
    """R: Outcome of a requested status change."""

    APPLY = "APPLY"
    NO_OP = "NO_OP"
    CONFLICT = "CONFLICT"


def can_decide_leave(actor: Actor | None) -> bool:
    """R: Only ADMIN and SUPERVISOR approve or reject."""
    if actor is None:
        return False
    return actor.role in (UserRole.ADMIN, UserRole.SUPERVISOR)


def scoped_intern_id(actor: Actor, requested_intern_id: int | None) -> int | None:
    """
    R: Intern filter to apply for a read.

    INTERN callers are forced to their own id whatever they asked for;
    ADMIN and SUPERVISOR keep the requested filter (None means all).
    """
    if actor.is_intern:
        return actor.intern_id
    return requested_intern_id


def can_access_intern(actor: Actor, intern_id: int | None) -> bool:
    if not actor.is_intern:
        return True
    return actor.intern_id is not None and actor.intern_id == intern_id


def decide_transition(current: LeaveStatus, target: LeaveStatus) -> Transition:
    """
    R: PENDING moves to either terminal state; repeating the same decision
    is a no-op; crossing between terminal states is a conflict.
    """
    if target is LeaveStatus.PENDING:
        return Transition.CONFLICT
    if current is target:
        return Transition.NO_OP
    if current is LeaveStatus.PENDING:
        return Transition.APPLY
    return Transition.CONFLICT
