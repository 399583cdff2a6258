"""
Name: Leave Request Routes

Responsibilities:
  - Submit, list, search and decide leave requests
  - Upload/download leave attachments

Collaborators:
  - application.use_cases: Submit/List/Search/Decide leave, attachments
  - api.dependencies.current_actor: caller identity + intern scoping

Constraints:
  - Every route requires a bearer token
  - INTERN callers are scoped to their own intern id inside the use cases
"""

from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile

from ..application.use_cases import (
    DecideLeaveUseCase,
    DownloadAttachmentUseCase,
    ListLeaveRequestsUseCase,
    SearchLeaveRequestsUseCase,
    SubmitLeaveInput,
    SubmitLeaveUseCase,
    UploadAttachmentInput,
    UploadAttachmentUseCase,
)
from ..domain.entities import LeaveStatus
from ..domain.leave_policy import Actor
from ..error_responses import bad_request
from .dependencies import (
    current_actor,
    current_user,
    get_decide_leave_use_case,
    get_download_attachment_use_case,
    get_list_leave_use_case,
    get_search_leave_use_case,
    get_submit_leave_use_case,
    get_upload_attachment_use_case,
)
from .schemas import LeavePageResponse, LeaveRequestResponse, LeaveSubmitRequest


def content_disposition(filename: str) -> str:
    """R: Latin-1 safe header; non-ASCII names travel in filename* (RFC 6266)."""
    fallback = "".join(
        ch if 0x20 <= ord(ch) < 0x7F and ch not in "\"\\" else "_" for ch in filename
    )
    encoded = quote(filename, safe="")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


router = APIRouter(
    prefix="/api/leave",
    tags=["leave"],
    dependencies=[Depends(current_user)],
)


def _to_responses(records) -> List[LeaveRequestResponse]:
    return [LeaveRequestResponse.from_leave(r) for r in records]


@router.post("", response_model=LeaveRequestResponse)
def submit_leave(
    req: LeaveSubmitRequest,
    actor: Actor = Depends(current_actor),
    use_case: SubmitLeaveUseCase = Depends(get_submit_leave_use_case),
):
    leave = use_case.execute(
        SubmitLeaveInput(
            intern_id=req.intern_id,
            from_date=req.from_date,
            to_date=req.to_date,
            leave_type=req.leave_type,
        ),
        actor,
    )
    return LeaveRequestResponse.from_leave(leave)


@router.get("", response_model=List[LeaveRequestResponse])
def list_leave(
    status: Optional[str] = Query(None),
    intern_id: Optional[int] = Query(None, alias="internId"),
    actor: Actor = Depends(current_actor),
    use_case: ListLeaveRequestsUseCase = Depends(get_list_leave_use_case),
):
    return _to_responses(use_case.execute(actor, status=status, intern_id=intern_id))


@router.get("/search", response_model=LeavePageResponse)
def search_leave(
    status: Optional[str] = Query(None),
    intern_id: Optional[int] = Query(None, alias="internId"),
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    actor: Actor = Depends(current_actor),
    use_case: SearchLeaveRequestsUseCase = Depends(get_search_leave_use_case),
):
    result = use_case.execute(
        actor, status=status, intern_id=intern_id, page=page, size=size
    )
    return LeavePageResponse.from_page(result)


@router.get("/intern/{intern_id}", response_model=List[LeaveRequestResponse])
def list_intern_leave(
    intern_id: int,
    actor: Actor = Depends(current_actor),
    use_case: ListLeaveRequestsUseCase = Depends(get_list_leave_use_case),
):
    return _to_responses(use_case.execute(actor, intern_id=intern_id))


@router.put("/approve/{request_id}", response_model=LeaveRequestResponse)
def approve_leave(
    request_id: int,
    actor: Actor = Depends(current_actor),
    use_case: DecideLeaveUseCase = Depends(get_decide_leave_use_case),
):
    return LeaveRequestResponse.from_leave(
        use_case.execute(request_id, LeaveStatus.APPROVED, actor)
    )


@router.put("/reject/{request_id}", response_model=LeaveRequestResponse)
def reject_leave(
    request_id: int,
    actor: Actor = Depends(current_actor),
    use_case: DecideLeaveUseCase = Depends(get_decide_leave_use_case),
):
    return LeaveRequestResponse.from_leave(
        use_case.execute(request_id, LeaveStatus.REJECTED, actor)
    )


@router.post("/{request_id}/attachment", response_model=LeaveRequestResponse)
def upload_attachment(
    request_id: int,
    file: Optional[UploadFile] = File(None),
    actor: Actor = Depends(current_actor),
    use_case: UploadAttachmentUseCase = Depends(get_upload_attachment_use_case),
):
    if file is None:
        raise bad_request("File is required")
    leave = use_case.execute(
        UploadAttachmentInput(
            request_id=request_id,
            filename=file.filename,
            content=file.file.read(),
        ),
        actor,
    )
    return LeaveRequestResponse.from_leave(leave)


@router.get("/attachment/{filename}")
def download_attachment(
    filename: str,
    actor: Actor = Depends(current_actor),
    use_case: DownloadAttachmentUseCase = Depends(get_download_attachment_use_case),
):
    content = use_case.execute(filename, actor)
    return Response(
        content=content,
        media_type="application/octet-stream",
        headers={"Content-Disposition": content_disposition(filename)},
    )
