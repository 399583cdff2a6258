"""
Name: PostgreSQL Profile Repository

Responsibilities:
  - Departments, supervisors, interns and admins used by registration,
    leave submission and caller scoping
"""

from __future__ import annotations

from typing import Optional

from psycopg_pool import ConnectionPool

from ...domain.entities import Admin, Department, Intern, Supervisor
from ...exceptions import DatabaseError
from ...logger import logger


class PostgresProfileRepository:
    """R: PostgreSQL implementation of ProfileRepository."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ..db.pool import get_pool

        return get_pool()

    def _one(self, operation: str, query: str, params: tuple):
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                return conn.execute(query, params).fetchone()
        except Exception as exc:
            logger.error(
                "PostgresProfileRepository: query failed",
                extra={"error": str(exc), "operation": operation},
            )
            raise DatabaseError(f"{operation} failed: {exc}")

    # Departments

    def get_department_by_name(self, name: str) -> Optional[Department]:
        row = self._one(
            "Department lookup",
            "SELECT id, name FROM departments WHERE name = %s",
            (name,),
        )
        return Department(id=row[0], name=row[1]) if row else None

    def create_department(self, name: str) -> Department:
        row = self._one(
            "Department creation",
            """
            INSERT INTO departments (name) VALUES (%s)
            ON CONFLICT (name) DO UPDATE SET name = EXCLUDED.name
            RETURNING id, name
            """,
            (name,),
        )
        return Department(id=row[0], name=row[1])

    # Interns

    def _row_to_intern(self, row) -> Intern:
        return Intern(
            id=row[0],
            name=row[1],
            email=row[2],
            department_id=row[3],
            supervisor_id=row[4],
        )

    def get_intern(self, intern_id: int) -> Optional[Intern]:
        row = self._one(
            "Intern lookup",
            "SELECT id, name, email, department_id, supervisor_id FROM interns WHERE id = %s",
            (intern_id,),
        )
        return self._row_to_intern(row) if row else None

    def get_intern_by_email(self, email: str) -> Optional[Intern]:
        row = self._one(
            "Intern lookup",
            "SELECT id, name, email, department_id, supervisor_id FROM interns WHERE email = %s",
            (email,),
        )
        return self._row_to_intern(row) if row else None

    def create_intern(self, intern: Intern) -> Intern:
        row = self._one(
            "Intern creation",
            """
            INSERT INTO interns (name, email, department_id, supervisor_id)
            VALUES (%s, %s, %s, %s)
            RETURNING id, name, email, department_id, supervisor_id
            """,
            (intern.name, intern.email, intern.department_id, intern.supervisor_id),
        )
        return self._row_to_intern(row)

    # Supervisors

    def _row_to_supervisor(self, row) -> Supervisor:
        return Supervisor(id=row[0], name=row[1], email=row[2], department_id=row[3])

    def get_supervisor_by_email(self, email: str) -> Optional[Supervisor]:
        row = self._one(
            "Supervisor lookup",
            "SELECT id, name, email, department_id FROM supervisors WHERE email = %s",
            (email,),
        )
        return self._row_to_supervisor(row) if row else None

    def first_supervisor_in_department(self, department_id: int) -> Optional[Supervisor]:
        row = self._one(
            "Supervisor lookup",
            """
            SELECT id, name, email, department_id FROM supervisors
            WHERE department_id = %s
            ORDER BY id
            LIMIT 1
            """,
            (department_id,),
        )
        return self._row_to_supervisor(row) if row else None

    def create_supervisor(self, supervisor: Supervisor) -> Supervisor:
        row = self._one(
            "Supervisor creation",
            """
            INSERT INTO supervisors (name, email, department_id)
            VALUES (%s, %s, %s)
            RETURNING id, name, email, department_id
            """,
            (supervisor.name, supervisor.email, supervisor.department_id),
        )
        return self._row_to_supervisor(row)

    # Admins

    def get_admin_by_email(self, email: str) -> Optional[Admin]:
        row = self._one(
            "Admin lookup",
            "SELECT id, name, email FROM admins WHERE email = %s",
            (email,),
        )
        return Admin(id=row[0], name=row[1], email=row[2]) if row else None

    def create_admin(self, admin: Admin) -> Admin:
        row = self._one(
            "Admin creation",
            "INSERT INTO admins (name, email) VALUES (%s, %s) RETURNING id, name, email",
            (admin.name, admin.email),
        )
        return Admin(id=row[0], name=row[1], email=row[2])
