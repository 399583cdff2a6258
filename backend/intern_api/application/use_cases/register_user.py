"""
Name: Register User Use Case

Responsibilities:
  - Run the registration precondition chain, stopping at the first failure
  - Persist the user, then provision the role-specific profile

Collaborators:
  - application.email_verification.EmailVerificationService
  - application.password_policy
  - application.profile_provisioning.ProfileProvisioner
  - domain.repositories.UserRepository

Constraints:
  - Profile provisioning failures are logged; the committed account stands
"""

import re
from dataclasses import dataclass, field
from typing import Optional

from ...auth_users import hash_password
from ...domain.repositories import UserRepository
from ...exceptions import ConflictError, InternRegisterError, ValidationError
from ...logger import logger
from ...users import User, UserRole
from ..email_verification import EmailVerificationService
from ..password_policy import password_violation
from ..profile_provisioning import ProfileDetails, ProfileProvisioner

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")


@dataclass
class RegisterUserInput:
    username: Optional[str]
    verification_code: Optional[str]
    password: Optional[str]
    role: Optional[str]
    details: ProfileDetails = field(default_factory=ProfileDetails)


@dataclass
class RegisterUserResult:
    user_id: int
    role: UserRole


class RegisterUserUseCase:
    """R: Email-verified account creation with profile provisioning."""

    def __init__(
        self,
        users: UserRepository,
        verification: EmailVerificationService,
        provisioner: ProfileProvisioner,
    ):
        self.users = users
        self.verification = verification
        self.provisioner = provisioner

    def execute(self, input_data: RegisterUserInput) -> RegisterUserResult:
        email = (input_data.username or "").strip()
        if not email:
            raise ValidationError("Email is required")
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Invalid email format")

        code = (input_data.verification_code or "").strip()
        if not code:
            raise ValidationError("Verification code is required")
        if not self.verification.check_code(email, code):
            raise ValidationError("Invalid verification code")

        problem = password_violation(input_data.password)
        if problem:
            raise ValidationError(problem)

        if not (input_data.role or "").strip():
            raise ValidationError("Role is required")
        role = UserRole.parse(input_data.role)
        if role is None:
            raise ValidationError("Invalid role. Must be ADMIN, SUPERVISOR, or INTERN")

        if self.users.get_by_username(email) is not None:
            raise ConflictError("Username already exists", status_code=400)

        # R: Consumed only once every other check has passed
        if not self.verification.consume_code(email, code):
            raise ValidationError("Invalid verification code")

        user = self.users.create(
            User(
                id=None,
                username=email,
                email=email,
                password_hash=hash_password(input_data.password),
                role=role,
            )
        )
        logger.info("User registered", extra={"user_id": user.id, "role": role.value})

        try:
            self.provisioner.provision(user, input_data.details)
        except InternRegisterError:
            logger.exception(
                "Profile provisioning failed", extra={"user_id": user.id}
            )

        return RegisterUserResult(user_id=user.id, role=user.role)
