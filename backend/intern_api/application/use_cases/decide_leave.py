"""
Name: Decide Leave Request Use Case

Responsibilities:
  - Approve or reject a leave request (ADMIN / SUPERVISOR only)
  - Re-read after the write so callers see committed state

Collaborators:
  - domain.leave_policy: can_decide_leave, decide_transition
  - metrics: leave transition counter

Notes:
  - Concurrent decisions on one request are last-write-wins
"""

from ...domain.entities import LeaveRequest, LeaveStatus
from ...domain.leave_policy import Actor, Transition, can_decide_leave, decide_transition
from ...domain.repositories import LeaveRequestRepository
from ...exceptions import AuthorizationError, ConflictError, NotFoundError
from ...logger import logger
from ...metrics import record_leave_transition


class DecideLeaveUseCase:
    """R: PENDING -> APPROVED / REJECTED."""

    def __init__(self, leaves: LeaveRequestRepository):
        self.leaves = leaves

    def _load(self, request_id: int) -> LeaveRequest:
        leave = self.leaves.get(request_id)
        if leave is None:
            raise NotFoundError(f"Leave request not found with id: {request_id}")
        return leave

    def execute(self, request_id: int, target: LeaveStatus, actor: Actor) -> LeaveRequest:
        if not can_decide_leave(actor):
            raise AuthorizationError(
                "Only ADMIN or SUPERVISOR users can approve or reject leave requests"
            )

        leave = self._load(request_id)
        outcome = decide_transition(leave.status, target)

        if outcome is Transition.NO_OP:
            return leave
        if outcome is Transition.CONFLICT:
            raise ConflictError(
                f"Leave request {request_id} is already {leave.status.value}"
            )

        self.leaves.update_status(request_id, target)
        record_leave_transition(target.value)
        logger.info(
            "Leave request decided",
            extra={"request_id": request_id, "status": target.value},
        )
        return self._load(request_id)
