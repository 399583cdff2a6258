"""
Name: Profile Provisioning

Responsibilities:
  - Create the role-specific profile (Intern / Supervisor / Admin) for a
    newly registered user
  - Find or create the department; give interns a supervisor, creating a
    department default supervisor when none exists

Collaborators:
  - domain.repositories.ProfileRepository
  - application.use_cases.register_user

Constraints:
  - Idempotent per email: an existing profile is left untouched
"""

from dataclasses import dataclass
from typing import Optional

from ..domain.entities import Admin, Department, Intern, Supervisor
from ..domain.repositories import ProfileRepository
from ..logger import logger
from ..users import User, UserRole

DEFAULT_SUPERVISOR_NAME = "Default Supervisor"
DEFAULT_SUPERVISOR_DOMAIN = "univen.ac.za"


@dataclass
class ProfileDetails:
    name: Optional[str] = None
    surname: Optional[str] = None
    department: Optional[str] = None


def full_name(user: User, details: ProfileDetails) -> str:
    name = details.name or user.username.split("@")[0]
    if details.surname:
        return f"{name} {details.surname}"
    return name


def default_supervisor_email(department_name: str) -> str:
    slug = department_name.lower().replace(" ", "")
    return f"supervisor@{slug}.{DEFAULT_SUPERVISOR_DOMAIN}"


class ProfileProvisioner:
    """R: Role-specific profile creation after registration."""

    def __init__(self, profiles: ProfileRepository, default_department: str = "ICT"):
        self.profiles = profiles
        self.default_department = default_department

    def provision(self, user: User, details: ProfileDetails) -> None:
        if user.role == UserRole.INTERN:
            self._provision_intern(user, details)
        elif user.role == UserRole.SUPERVISOR:
            self._provision_supervisor(user, details)
        elif user.role == UserRole.ADMIN:
            self._provision_admin(user, details)

    def _department(self, details: ProfileDetails) -> Department:
        name = details.department or self.default_department
        department = self.profiles.get_department_by_name(name)
        if department is None:
            department = self.profiles.create_department(name)
            logger.info("Department created", extra={"department": name})
        return department

    def _provision_intern(self, user: User, details: ProfileDetails) -> None:
        if self.profiles.get_intern_by_email(user.username) is not None:
            logger.info("Intern profile already exists", extra={"email": user.username})
            return

        department = self._department(details)
        supervisor = self.profiles.first_supervisor_in_department(department.id)
        if supervisor is None:
            supervisor = self.profiles.create_supervisor(
                Supervisor(
                    id=None,
                    name=DEFAULT_SUPERVISOR_NAME,
                    email=default_supervisor_email(department.name),
                    department_id=department.id,
                )
            )
            logger.info(
                "Default supervisor created", extra={"department": department.name}
            )

        intern = self.profiles.create_intern(
            Intern(
                id=None,
                name=full_name(user, details),
                email=user.username,
                department_id=department.id,
                supervisor_id=supervisor.id,
            )
        )
        logger.info(
            "Intern profile created",
            extra={"intern_id": intern.id, "department": department.name},
        )

    def _provision_supervisor(self, user: User, details: ProfileDetails) -> None:
        if self.profiles.get_supervisor_by_email(user.username) is not None:
            logger.info("Supervisor profile already exists", extra={"email": user.username})
            return

        department = self._department(details)
        supervisor = self.profiles.create_supervisor(
            Supervisor(
                id=None,
                name=full_name(user, details),
                email=user.username,
                department_id=department.id,
            )
        )
        logger.info("Supervisor profile created", extra={"supervisor_id": supervisor.id})

    def _provision_admin(self, user: User, details: ProfileDetails) -> None:
        if self.profiles.get_admin_by_email(user.username) is not None:
            logger.info("Admin profile already exists", extra={"email": user.username})
            return

        admin = self.profiles.create_admin(
            Admin(id=None, name=full_name(user, details), email=user.username)
        )
        logger.info("Admin profile created", extra={"admin_id": admin.id})
