"""
Name: In-Memory Leave Request Repository

Responsibilities:
  - Store leave requests in memory (tests / APP_ENV=test)
  - Emulate the LEFT JOIN on interns: display fields are filled only when
    the intern still resolves
  - Keep ordering aligned with Postgres (search: from_date DESC, id DESC)
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from itertools import count
from threading import Lock
from typing import Dict, List, Optional, Tuple

from ...domain.entities import LeaveRequest, LeaveStatus
from .in_memory_profile_repo import InMemoryProfileRepository


class InMemoryLeaveRequestRepository:
    """R: Thread-safe in-memory LeaveRequestRepository."""

    def __init__(self, profiles: Optional[InMemoryProfileRepository] = None) -> None:
        self._lock = Lock()
        self._requests: Dict[int, LeaveRequest] = {}
        self._ids = count(1)
        self._profiles = profiles

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _joined(self, leave: LeaveRequest) -> LeaveRequest:
        intern = None
        if self._profiles is not None and leave.intern_id is not None:
            intern = self._profiles.get_intern(leave.intern_id)
        return replace(
            leave,
            intern_name=intern.name if intern else None,
            intern_email=intern.email if intern else None,
        )

    def _matching(
        self, status: Optional[LeaveStatus], intern_id: Optional[int]
    ) -> List[LeaveRequest]:
        with self._lock:
            items = list(self._requests.values())
        return [
            leave
            for leave in items
            if (status is None or leave.status is status)
            and (intern_id is None or leave.intern_id == intern_id)
        ]

    def create(self, leave: LeaveRequest) -> LeaveRequest:
        now = self._now()
        with self._lock:
            stored = replace(
                leave,
                id=next(self._ids),
                created_at=now,
                updated_at=now,
                intern_name=None,
                intern_email=None,
            )
            self._requests[stored.id] = stored
        return self._joined(stored)

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        with self._lock:
            leave = self._requests.get(request_id)
        return self._joined(leave) if leave else None

    def update_status(self, request_id: int, status: LeaveStatus) -> None:
        with self._lock:
            leave = self._requests.get(request_id)
            if leave is not None:
                self._requests[request_id] = replace(
                    leave, status=status, updated_at=self._now()
                )

    def set_attachment(self, request_id: int, attachment_path: str) -> None:
        with self._lock:
            leave = self._requests.get(request_id)
            if leave is not None:
                self._requests[request_id] = replace(
                    leave, attachment_path=attachment_path, updated_at=self._now()
                )

    def get_by_attachment(self, attachment_path: str) -> Optional[LeaveRequest]:
        with self._lock:
            found = next(
                (r for r in self._requests.values() if r.attachment_path == attachment_path),
                None,
            )
        return self._joined(found) if found else None

    def list(
        self,
        status: Optional[LeaveStatus] = None,
        intern_id: Optional[int] = None,
    ) -> List[LeaveRequest]:
        items = sorted(
            self._matching(status, intern_id),
            key=lambda r: (r.created_at, r.id),
            reverse=True,
        )
        return [self._joined(r) for r in items]

    def search(
        self,
        status: Optional[LeaveStatus],
        intern_id: Optional[int],
        page: int,
        size: int,
    ) -> Tuple[List[LeaveRequest], int]:
        items = sorted(
            self._matching(status, intern_id),
            key=lambda r: (r.from_date, r.id),
            reverse=True,
        )
        start = page * size
        return [self._joined(r) for r in items[start:start + size]], len(items)
