"""
Name: Actor Resolution

Responsibilities:
  - Turn an authenticated User into a policy Actor
  - Link INTERN users to their intern profile (by email)

Constraints:
  - An INTERN without a profile cannot act on intern-scoped data
"""

from ..domain.leave_policy import Actor
from ..domain.repositories import ProfileRepository
from ..exceptions import AuthorizationError
from ..users import User, UserRole


def resolve_actor(user: User, profiles: ProfileRepository) -> Actor:
    if user.role != UserRole.INTERN:
        return Actor(user_id=user.id, role=user.role)

    intern = profiles.get_intern_by_email(user.username)
    if intern is None and user.email and user.email != user.username:
        intern = profiles.get_intern_by_email(user.email)
    if intern is None:
        raise AuthorizationError("No intern profile linked to this account")
    return Actor(user_id=user.id, role=user.role, intern_id=intern.id)
