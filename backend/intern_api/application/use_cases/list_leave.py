"""
Name: Leave Request Queries

Responsibilities:
  - List leave requests by status and/or intern
  - Paginated search ordered by from_date descending

Constraints:
  - INTERN callers are always scoped to their own intern id
"""

from dataclasses import dataclass
from typing import List, Optional

from ...domain.entities import LeaveRequest, LeaveStatus
from ...domain.leave_policy import Actor, scoped_intern_id
from ...domain.repositories import LeaveRequestRepository
from ...exceptions import ValidationError

DEFAULT_PAGE = 0
DEFAULT_SIZE = 10


def parse_status(value: Optional[str]) -> Optional[LeaveStatus]:
    if value is None or not value.strip():
        return None
    status = LeaveStatus.parse(value)
    if status is None:
        raise ValidationError(f"Invalid status. Must be one of: {LeaveStatus.names()}")
    return status


@dataclass
class LeavePage:
    content: List[LeaveRequest]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return (self.total_elements + self.size - 1) // self.size


class ListLeaveRequestsUseCase:
    """R: Unpaginated listing (status only, intern only, both or neither)."""

    def __init__(self, leaves: LeaveRequestRepository):
        self.leaves = leaves

    def execute(
        self,
        actor: Actor,
        status: Optional[str] = None,
        intern_id: Optional[int] = None,
    ) -> List[LeaveRequest]:
        return self.leaves.list(
            status=parse_status(status),
            intern_id=scoped_intern_id(actor, intern_id),
        )


class SearchLeaveRequestsUseCase:
    """R: Paginated search."""

    def __init__(self, leaves: LeaveRequestRepository):
        self.leaves = leaves

    def execute(
        self,
        actor: Actor,
        status: Optional[str] = None,
        intern_id: Optional[int] = None,
        page: int = DEFAULT_PAGE,
        size: int = DEFAULT_SIZE,
    ) -> LeavePage:
        if page < 0:
            raise ValidationError("page must be >= 0")
        if size < 1:
            raise ValidationError("size must be >= 1")

        content, total = self.leaves.search(
            parse_status(status),
            scoped_intern_id(actor, intern_id),
            page,
            size,
        )
        return LeavePage(content=content, page=page, size=size, total_elements=total)
