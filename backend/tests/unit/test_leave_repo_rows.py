"""
Name: Leave Repository Row Conversion Tests

Responsibilities:
  - Read paths skip rows whose enum columns do not parse
  - Single-row reads stay strict

Notes:
  - The connection pool is a MagicMock; no database is needed
"""

from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from intern_api.domain.entities import LeaveStatus
from intern_api.exceptions import DatabaseError
from intern_api.infrastructure.repositories import PostgresLeaveRequestRepository

pytestmark = pytest.mark.unit

NOW = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


def _row(request_id, leave_type="SICK", status="PENDING"):
    return (
        request_id,
        7,
        leave_type,
        date(2024, 6, 1),
        date(2024, 6, 3),
        status,
        None,
        NOW,
        NOW,
        "Sipho",
        "sipho@univen.ac.za",
    )


def _repo_returning(*, fetchall=None, fetchone=None):
    conn = MagicMock()
    conn.execute.return_value.fetchall.return_value = fetchall or []
    conn.execute.return_value.fetchone.return_value = fetchone
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    return PostgresLeaveRequestRepository(pool=pool)


def test_list_skips_unparseable_rows():
    repo = _repo_returning(
        fetchall=[
            _row(1),
            _row(2, leave_type="MATERNITY"),
            _row(3, status="CANCELLED"),
            _row(4, leave_type="annual"),
        ]
    )

    leaves = repo.list()

    assert [leave.id for leave in leaves] == [1, 4]
    assert leaves[0].intern_name == "Sipho"


def test_search_skips_unparseable_rows():
    rows = [_row(5, leave_type="MATERNITY"), _row(6, status="APPROVED")]
    repo = _repo_returning(fetchall=rows, fetchone=(2,))

    content, total = repo.search(LeaveStatus.APPROVED, None, page=0, size=10)

    assert [leave.id for leave in content] == [6]
    assert total == 2


def test_single_row_read_stays_strict():
    repo = _repo_returning(fetchone=_row(9, leave_type="MATERNITY"))

    with pytest.raises(DatabaseError):
        repo.get(9)
