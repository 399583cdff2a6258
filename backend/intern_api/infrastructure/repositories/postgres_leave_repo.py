"""
Name: PostgreSQL Leave Request Repository

Responsibilities:
  - Implement LeaveRequestRepository for PostgreSQL
  - Join intern name/email in reads (LEFT JOIN, so dangling references
    still return the request)
  - Paginated search ordered by from_date descending
  - Read paths skip rows whose enum columns do not parse; writes stay strict
"""

from __future__ import annotations

from typing import Optional

from psycopg_pool import ConnectionPool

from ...domain.entities import LeaveRequest, LeaveStatus, LeaveType
from ...exceptions import DatabaseError
from ...logger import logger

_SELECT = """
    SELECT lr.id, lr.intern_id, lr.leave_type, lr.from_date, lr.to_date,
           lr.status, lr.attachment_path, lr.created_at, lr.updated_at,
           i.name, i.email
    FROM leave_requests lr
    LEFT JOIN interns i ON i.id = lr.intern_id
"""


class PostgresLeaveRequestRepository:
    """R: PostgreSQL implementation of LeaveRequestRepository."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ..db.pool import get_pool

        return get_pool()

    def _row_to_leave(self, row: tuple) -> LeaveRequest:
        (
            request_id,
            intern_id,
            leave_type,
            from_date,
            to_date,
            status,
            attachment_path,
            created_at,
            updated_at,
            intern_name,
            intern_email,
        ) = row

        parsed_type = LeaveType.parse(leave_type)
        parsed_status = LeaveStatus.parse(status)
        if parsed_type is None or parsed_status is None:
            raise DatabaseError(
                f"Invalid leave request {request_id} in database: {leave_type}/{status}"
            )

        return LeaveRequest(
            id=request_id,
            intern_id=intern_id,
            leave_type=parsed_type,
            from_date=from_date,
            to_date=to_date,
            status=parsed_status,
            attachment_path=attachment_path,
            created_at=created_at,
            updated_at=updated_at,
            intern_name=intern_name,
            intern_email=intern_email,
        )

    def _rows_to_leaves(self, rows: list[tuple]) -> list[LeaveRequest]:
        """R: Read-path conversion; an unparseable row is logged and skipped."""
        leaves: list[LeaveRequest] = []
        for row in rows:
            try:
                leaves.append(self._row_to_leave(row))
            except DatabaseError as exc:
                logger.warning(
                    "PostgresLeaveRequestRepository: skipping unreadable row",
                    extra={"error_message": exc.message, "error_id": exc.error_id},
                )
        return leaves

    def _where(
        self, status: Optional[LeaveStatus], intern_id: Optional[int]
    ) -> tuple[str, list[object]]:
        conditions: list[str] = []
        params: list[object] = []

        if status is not None:
            conditions.append("lr.status = %s")
            params.append(status.value)
        if intern_id is not None:
            conditions.append("lr.intern_id = %s")
            params.append(intern_id)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        return where_clause, params

    def create(self, leave: LeaveRequest) -> LeaveRequest:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                row = conn.execute(
                    """
                    INSERT INTO leave_requests
                        (intern_id, leave_type, from_date, to_date, status, attachment_path)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    RETURNING id
                    """,
                    (
                        leave.intern_id,
                        leave.leave_type.value,
                        leave.from_date,
                        leave.to_date,
                        leave.status.value,
                        leave.attachment_path,
                    ),
                ).fetchone()
                created = conn.execute(f"{_SELECT} WHERE lr.id = %s", (row[0],)).fetchone()
        except Exception as exc:
            logger.error(
                "PostgresLeaveRequestRepository: create failed",
                extra={"error": str(exc), "intern_id": leave.intern_id},
            )
            raise DatabaseError(f"Failed to create leave request: {exc}")

        return self._row_to_leave(created)

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                row = conn.execute(f"{_SELECT} WHERE lr.id = %s", (request_id,)).fetchone()
        except Exception as exc:
            logger.error(
                "PostgresLeaveRequestRepository: get failed",
                extra={"error": str(exc), "request_id": request_id},
            )
            raise DatabaseError(f"Failed to get leave request: {exc}")

        return self._row_to_leave(row) if row else None

    def update_status(self, request_id: int, status: LeaveStatus) -> None:
        self._execute(
            "update status",
            "UPDATE leave_requests SET status = %s, updated_at = now() WHERE id = %s",
            (status.value, request_id),
        )

    def set_attachment(self, request_id: int, attachment_path: str) -> None:
        self._execute(
            "set attachment",
            "UPDATE leave_requests SET attachment_path = %s, updated_at = now() WHERE id = %s",
            (attachment_path, request_id),
        )

    def _execute(self, operation: str, query: str, params: tuple) -> None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                conn.execute(query, params)
        except Exception as exc:
            logger.error(
                f"PostgresLeaveRequestRepository: {operation} failed",
                extra={"error": str(exc)},
            )
            raise DatabaseError(f"Failed to {operation}: {exc}")

    def get_by_attachment(self, attachment_path: str) -> Optional[LeaveRequest]:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                row = conn.execute(
                    f"{_SELECT} WHERE lr.attachment_path = %s", (attachment_path,)
                ).fetchone()
        except Exception as exc:
            logger.error(
                "PostgresLeaveRequestRepository: attachment lookup failed",
                extra={"error": str(exc)},
            )
            raise DatabaseError(f"Failed to look up attachment: {exc}")

        return self._row_to_leave(row) if row else None

    def list(
        self,
        status: Optional[LeaveStatus] = None,
        intern_id: Optional[int] = None,
    ) -> list[LeaveRequest]:
        where_clause, params = self._where(status, intern_id)
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                rows = conn.execute(
                    f"{_SELECT} {where_clause} ORDER BY lr.created_at DESC, lr.id DESC",
                    params,
                ).fetchall()
        except Exception as exc:
            logger.warning(
                "PostgresLeaveRequestRepository: Failed to list leave requests",
                extra={"error": str(exc), "intern_id": intern_id},
            )
            raise DatabaseError(f"Failed to list leave requests: {exc}")

        return self._rows_to_leaves(rows)

    def search(
        self,
        status: Optional[LeaveStatus],
        intern_id: Optional[int],
        page: int,
        size: int,
    ) -> tuple[list[LeaveRequest], int]:
        where_clause, params = self._where(status, intern_id)
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                total = conn.execute(
                    f"SELECT count(*) FROM leave_requests lr {where_clause}", params
                ).fetchone()[0]
                rows = conn.execute(
                    f"""
                    {_SELECT} {where_clause}
                    ORDER BY lr.from_date DESC, lr.id DESC
                    LIMIT %s OFFSET %s
                    """,
                    [*params, size, page * size],
                ).fetchall()
        except Exception as exc:
            logger.warning(
                "PostgresLeaveRequestRepository: Failed to search leave requests",
                extra={"error": str(exc), "intern_id": intern_id},
            )
            raise DatabaseError(f"Failed to search leave requests: {exc}")

        return self._rows_to_leaves(rows), total
