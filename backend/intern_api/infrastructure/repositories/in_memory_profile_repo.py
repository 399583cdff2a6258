"""
Name: In-Memory Profile Repository

Responsibilities:
  - Departments, supervisors, interns and admins held in memory
  - Serve intern lookups for the in-memory leave repository join
"""

from __future__ import annotations

from dataclasses import replace
from itertools import count
from threading import Lock
from typing import Dict, Optional

from ...domain.entities import Admin, Department, Intern, Supervisor


class InMemoryProfileRepository:
    """R: Thread-safe in-memory ProfileRepository."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._departments: Dict[int, Department] = {}
        self._supervisors: Dict[int, Supervisor] = {}
        self._interns: Dict[int, Intern] = {}
        self._admins: Dict[int, Admin] = {}
        self._ids = count(1)

    def get_department_by_name(self, name: str) -> Optional[Department]:
        with self._lock:
            for department in self._departments.values():
                if department.name == name:
                    return replace(department)
        return None

    def create_department(self, name: str) -> Department:
        with self._lock:
            for department in self._departments.values():
                if department.name == name:
                    return replace(department)
            department = Department(id=next(self._ids), name=name)
            self._departments[department.id] = department
            return replace(department)

    def get_intern(self, intern_id: int) -> Optional[Intern]:
        with self._lock:
            intern = self._interns.get(intern_id)
            return replace(intern) if intern else None

    def get_intern_by_email(self, email: str) -> Optional[Intern]:
        with self._lock:
            for intern in self._interns.values():
                if intern.email == email:
                    return replace(intern)
        return None

    def create_intern(self, intern: Intern) -> Intern:
        with self._lock:
            intern_id = intern.id
            while intern_id is None or intern_id in self._interns:
                intern_id = next(self._ids)
            stored = replace(intern, id=intern_id)
            self._interns[stored.id] = stored
            return replace(stored)

    def delete_intern(self, intern_id: int) -> None:
        """R: Test helper to simulate a dangling intern reference."""
        with self._lock:
            self._interns.pop(intern_id, None)

    def get_supervisor_by_email(self, email: str) -> Optional[Supervisor]:
        with self._lock:
            for supervisor in self._supervisors.values():
                if supervisor.email == email:
                    return replace(supervisor)
        return None

    def first_supervisor_in_department(self, department_id: int) -> Optional[Supervisor]:
        with self._lock:
            matches = sorted(
                (s for s in self._supervisors.values() if s.department_id == department_id),
                key=lambda s: s.id,
            )
            return replace(matches[0]) if matches else None

    def create_supervisor(self, supervisor: Supervisor) -> Supervisor:
        with self._lock:
            stored = replace(supervisor, id=next(self._ids))
            self._supervisors[stored.id] = stored
            return replace(stored)

    def get_admin_by_email(self, email: str) -> Optional[Admin]:
        with self._lock:
            for admin in self._admins.values():
                if admin.email == email:
                    return replace(admin)
        return None

    def create_admin(self, admin: Admin) -> Admin:
        with self._lock:
            stored = replace(admin, id=next(self._ids))
            self._admins[stored.id] = stored
            return replace(stored)
