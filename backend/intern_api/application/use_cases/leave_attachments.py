"""
Name: Leave Attachment Use Cases

Responsibilities:
  - Store an uploaded file for a leave request and record its name
  - Serve a stored attachment back to an authorized caller

Collaborators:
  - domain.services.FileStorage
  - domain.repositories.LeaveRequestRepository
"""

from dataclasses import dataclass
from typing import Optional

from ...domain.entities import LeaveRequest
from ...domain.leave_policy import Actor, can_access_intern
from ...domain.repositories import LeaveRequestRepository
from ...domain.services import FileStorage
from ...exceptions import AuthorizationError, NotFoundError, ValidationError


@dataclass
class UploadAttachmentInput:
    request_id: int
    filename: Optional[str]
    content: bytes


class UploadAttachmentUseCase:
    """R: Attach a file to a leave request."""

    def __init__(self, leaves: LeaveRequestRepository, storage: FileStorage):
        self.leaves = leaves
        self.storage = storage

    def execute(self, input_data: UploadAttachmentInput, actor: Actor) -> LeaveRequest:
        if not input_data.content:
            raise ValidationError("File is required")

        leave = self.leaves.get(input_data.request_id)
        if leave is None:
            raise NotFoundError(f"Leave request not found with id: {input_data.request_id}")
        if not can_access_intern(actor, leave.intern_id):
            raise AuthorizationError("Cannot attach files to another intern's leave request")

        stored_name = self.storage.save(input_data.filename or "", input_data.content)
        self.leaves.set_attachment(leave.id, stored_name)
        return self.leaves.get(leave.id)


class DownloadAttachmentUseCase:
    """R: Read an attachment; interns only see their own."""

    def __init__(self, leaves: LeaveRequestRepository, storage: FileStorage):
        self.leaves = leaves
        self.storage = storage

    def execute(self, filename: str, actor: Actor) -> bytes:
        if not filename or not filename.strip():
            raise ValidationError("Filename is required")
        if "/" in filename or "\\" in filename:
            raise ValidationError("Invalid filename")

        if actor.is_intern:
            owner = self.leaves.get_by_attachment(filename)
            if owner is None or not can_access_intern(actor, owner.intern_id):
                raise NotFoundError(f"File not found: {filename}")

        return self.storage.load(filename)
