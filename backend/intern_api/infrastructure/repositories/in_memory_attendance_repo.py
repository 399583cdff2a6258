"""
Name: In-Memory Attendance Repository

Responsibilities:
  - Store attendance records in memory (tests / APP_ENV=test)
"""

from __future__ import annotations

from dataclasses import replace
from itertools import count
from threading import Lock
from typing import Dict, List, Optional

from ...domain.entities import Attendance
from ...exceptions import DatabaseError


class InMemoryAttendanceRepository:
    """R: Thread-safe in-memory AttendanceRepository."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._records: Dict[int, Attendance] = {}
        self._ids = count(1)

    def create(self, attendance: Attendance) -> Attendance:
        with self._lock:
            stored = replace(attendance, id=next(self._ids))
            self._records[stored.id] = stored
            return replace(stored)

    def get(self, attendance_id: int) -> Optional[Attendance]:
        with self._lock:
            record = self._records.get(attendance_id)
            return replace(record) if record else None

    def update(self, attendance: Attendance) -> Attendance:
        with self._lock:
            if attendance.id not in self._records:
                raise DatabaseError(f"Attendance {attendance.id} vanished during update")
            self._records[attendance.id] = replace(attendance)
            return replace(attendance)

    def list(self, intern_id: Optional[int] = None) -> List[Attendance]:
        with self._lock:
            items = [
                replace(r)
                for r in self._records.values()
                if intern_id is None or r.intern_id == intern_id
            ]
        return sorted(items, key=lambda r: (r.time_in, r.id), reverse=True)
