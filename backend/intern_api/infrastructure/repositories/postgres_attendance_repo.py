"""
Name: PostgreSQL Attendance Repository

Responsibilities:
  - Implement AttendanceRepository for PostgreSQL
"""

from __future__ import annotations

from typing import Optional

from psycopg_pool import ConnectionPool

from ...domain.entities import Attendance, AttendanceStatus
from ...exceptions import DatabaseError
from ...logger import logger

_COLUMNS = (
    "id, intern_id, date, time_in, time_out, status, location, latitude, longitude"
)


class PostgresAttendanceRepository:
    """R: PostgreSQL implementation of AttendanceRepository."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ..db.pool import get_pool

        return get_pool()

    def _row_to_attendance(self, row: tuple) -> Attendance:
        status = AttendanceStatus.parse(row[5])
        if status is None:
            raise DatabaseError(f"Invalid attendance status in database: {row[5]}")

        return Attendance(
            id=row[0],
            intern_id=row[1],
            date=row[2],
            time_in=row[3],
            time_out=row[4],
            status=status,
            location=row[6],
            latitude=row[7],
            longitude=row[8],
        )

    def _query(self, operation: str, query: str, params, many: bool = False):
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                cursor = conn.execute(query, params)
                return cursor.fetchall() if many else cursor.fetchone()
        except Exception as exc:
            logger.error(
                "PostgresAttendanceRepository: query failed",
                extra={"error": str(exc), "operation": operation},
            )
            raise DatabaseError(f"Attendance {operation} failed: {exc}")

    def create(self, attendance: Attendance) -> Attendance:
        row = self._query(
            "create",
            f"""
            INSERT INTO attendance
                (intern_id, date, time_in, time_out, status, location, latitude, longitude)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING {_COLUMNS}
            """,
            (
                attendance.intern_id,
                attendance.date,
                attendance.time_in,
                attendance.time_out,
                attendance.status.value,
                attendance.location,
                attendance.latitude,
                attendance.longitude,
            ),
        )
        return self._row_to_attendance(row)

    def get(self, attendance_id: int) -> Optional[Attendance]:
        row = self._query(
            "lookup", f"SELECT {_COLUMNS} FROM attendance WHERE id = %s", (attendance_id,)
        )
        return self._row_to_attendance(row) if row else None

    def update(self, attendance: Attendance) -> Attendance:
        row = self._query(
            "update",
            f"""
            UPDATE attendance
            SET time_out = %s, status = %s, location = %s, latitude = %s, longitude = %s
            WHERE id = %s
            RETURNING {_COLUMNS}
            """,
            (
                attendance.time_out,
                attendance.status.value,
                attendance.location,
                attendance.latitude,
                attendance.longitude,
                attendance.id,
            ),
        )
        if not row:
            raise DatabaseError(f"Attendance {attendance.id} vanished during update")
        return self._row_to_attendance(row)

    def list(self, intern_id: Optional[int] = None) -> list[Attendance]:
        if intern_id is None:
            rows = self._query(
                "list",
                f"SELECT {_COLUMNS} FROM attendance ORDER BY time_in DESC",
                (),
                many=True,
            )
        else:
            rows = self._query(
                "list",
                f"SELECT {_COLUMNS} FROM attendance WHERE intern_id = %s ORDER BY time_in DESC",
                (intern_id,),
                many=True,
            )
        return [self._row_to_attendance(row) for row in rows]
