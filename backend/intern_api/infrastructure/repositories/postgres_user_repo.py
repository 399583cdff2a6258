"""
Name: PostgreSQL User Repository

Responsibilities:
  - Load users by id, username or email
  - Create users (unique username) and update profile fields
  - Map database rows into User records
"""

from __future__ import annotations

from typing import Optional

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ...exceptions import ConflictError, DatabaseError
from ...logger import logger
from ...users import User, UserRole

_USER_COLUMNS = "id, username, email, password_hash, role, name, phone, avatar_url, created_at"


class PostgresUserRepository:
    """R: PostgreSQL implementation of UserRepository."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ..db.pool import get_pool

        return get_pool()

    def _row_to_user(self, row) -> User:
        role = UserRole.parse(row[4])
        if role is None:
            raise DatabaseError(f"Invalid user role in database: {row[4]}")

        return User(
            id=row[0],
            username=row[1],
            email=row[2],
            password_hash=row[3],
            role=role,
            name=row[5],
            phone=row[6],
            avatar_url=row[7],
            created_at=row[8],
        )

    def _fetch_one(self, where: str, value) -> Optional[User]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                row = conn.execute(
                    f"SELECT {_USER_COLUMNS} FROM users WHERE {where} = %s",
                    (value,),
                ).fetchone()
        except Exception as exc:
            logger.error(
                "PostgresUserRepository: lookup failed",
                extra={"error": str(exc), "column": where},
            )
            raise DatabaseError(f"User lookup failed: {exc}")

        return self._row_to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._fetch_one("id", user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self._fetch_one("username", username)

    def get_by_email(self, email: str) -> Optional[User]:
        return self._fetch_one("email", email)

    def create(self, user: User) -> User:
        """R: Insert a user; a duplicate username becomes ConflictError."""
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                row = conn.execute(
                    f"""
                    INSERT INTO users (username, email, password_hash, role, name, phone, avatar_url)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_USER_COLUMNS}
                    """,
                    (
                        user.username,
                        user.email,
                        user.password_hash,
                        user.role.value,
                        user.name,
                        user.phone,
                        user.avatar_url,
                    ),
                ).fetchone()
        except pg_errors.UniqueViolation as exc:
            raise ConflictError("Username already exists", status_code=400) from exc
        except Exception as exc:
            logger.error(
                "PostgresUserRepository: create failed", extra={"error": str(exc)}
            )
            raise DatabaseError(f"User creation failed: {exc}")

        if not row:
            raise DatabaseError("User creation failed: no row returned")
        return self._row_to_user(row)

    def update_profile(
        self,
        user_id: int,
        name: Optional[str],
        phone: Optional[str],
        avatar_url: Optional[str],
    ) -> Optional[User]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                row = conn.execute(
                    f"""
                    UPDATE users
                    SET name = %s, phone = %s, avatar_url = %s
                    WHERE id = %s
                    RETURNING {_USER_COLUMNS}
                    """,
                    (name, phone, avatar_url, user_id),
                ).fetchone()
        except Exception as exc:
            logger.error(
                "PostgresUserRepository: profile update failed",
                extra={"error": str(exc), "user_id": user_id},
            )
            raise DatabaseError(f"Profile update failed: {exc}")

        return self._row_to_user(row) if row else None
