"""
Name: Submit Leave Request Use Case

Responsibilities:
  - Validate an intern's leave submission and store it as PENDING

Collaborators:
  - domain.repositories.LeaveRequestRepository, ProfileRepository
  - domain.leave_policy: INTERN callers submit for themselves only

Constraints:
  - Each precondition fails with its own domain error; nothing is
    written unless all of them pass
"""

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ...domain.entities import LeaveRequest, LeaveStatus, LeaveType
from ...domain.leave_policy import Actor, scoped_intern_id
from ...domain.repositories import LeaveRequestRepository, ProfileRepository
from ...exceptions import NotFoundError, ValidationError
from ...logger import logger

DATE_FORMAT = "%Y-%m-%d"
_DATE_SHAPE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_leave_date(value: str) -> date:
    """R: Strict yyyy-MM-dd parsing."""
    text = value.strip()
    if not _DATE_SHAPE.match(text):
        raise ValidationError("Invalid date format. Expected format: yyyy-MM-dd")
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as exc:
        raise ValidationError("Invalid date format. Expected format: yyyy-MM-dd") from exc


@dataclass
class SubmitLeaveInput:
    intern_id: Optional[int]
    from_date: Optional[str]
    to_date: Optional[str]
    leave_type: Optional[str]


class SubmitLeaveUseCase:
    """R: Create a PENDING leave request."""

    def __init__(self, leaves: LeaveRequestRepository, profiles: ProfileRepository):
        self.leaves = leaves
        self.profiles = profiles

    def execute(self, input_data: SubmitLeaveInput, actor: Actor) -> LeaveRequest:
        intern_id = scoped_intern_id(actor, input_data.intern_id)
        if intern_id is None:
            raise ValidationError("internId is required")
        if not (input_data.from_date or "").strip():
            raise ValidationError("fromDate is required")
        if not (input_data.to_date or "").strip():
            raise ValidationError("toDate is required")
        if not (input_data.leave_type or "").strip():
            raise ValidationError("leaveType is required")

        if self.profiles.get_intern(intern_id) is None:
            raise NotFoundError(f"Intern not found with id: {intern_id}")

        from_date = parse_leave_date(input_data.from_date)
        to_date = parse_leave_date(input_data.to_date)
        if to_date < from_date:
            raise ValidationError("toDate cannot be before fromDate")

        leave_type = LeaveType.parse(input_data.leave_type)
        if leave_type is None:
            raise ValidationError(
                f"Invalid leaveType. Must be one of: {LeaveType.names()}"
            )

        leave = self.leaves.create(
            LeaveRequest(
                id=None,
                intern_id=intern_id,
                leave_type=leave_type,
                from_date=from_date,
                to_date=to_date,
                status=LeaveStatus.PENDING,
            )
        )
        logger.info(
            "Leave request submitted",
            extra={"request_id": leave.id, "intern_id": intern_id},
        )
        return leave
