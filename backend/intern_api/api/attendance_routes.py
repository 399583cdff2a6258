"""
Name: Attendance Routes

Responsibilities:
  - Sign in / sign out with optional geolocation
  - List attendance records (all for staff, own for interns)
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends

from ..application.use_cases import (
    GeoPoint,
    ListAttendanceUseCase,
    SignInInput,
    SignInUseCase,
    SignOutUseCase,
)
from ..domain.leave_policy import Actor
from .dependencies import (
    current_actor,
    current_user,
    get_list_attendance_use_case,
    get_sign_in_use_case,
    get_sign_out_use_case,
)
from .schemas import AttendanceResponse, SignInRequest, SignOutRequest

router = APIRouter(
    prefix="/api/attendance",
    tags=["attendance"],
    dependencies=[Depends(current_user)],
)


@router.get("", response_model=List[AttendanceResponse])
def list_attendance(
    actor: Actor = Depends(current_actor),
    use_case: ListAttendanceUseCase = Depends(get_list_attendance_use_case),
):
    return [AttendanceResponse.from_attendance(r) for r in use_case.execute(actor)]


@router.get("/intern/{intern_id}", response_model=List[AttendanceResponse])
def list_intern_attendance(
    intern_id: int,
    actor: Actor = Depends(current_actor),
    use_case: ListAttendanceUseCase = Depends(get_list_attendance_use_case),
):
    return [
        AttendanceResponse.from_attendance(r)
        for r in use_case.execute(actor, intern_id=intern_id)
    ]


@router.post("/signin", response_model=AttendanceResponse)
def sign_in(
    req: SignInRequest,
    actor: Actor = Depends(current_actor),
    use_case: SignInUseCase = Depends(get_sign_in_use_case),
):
    record = use_case.execute(
        SignInInput(
            intern_id=req.intern_id,
            geo=GeoPoint(
                location=req.location,
                latitude=req.latitude,
                longitude=req.longitude,
            ),
        ),
        actor,
    )
    return AttendanceResponse.from_attendance(record)


@router.put("/signout/{attendance_id}", response_model=AttendanceResponse)
def sign_out(
    attendance_id: int,
    req: Optional[SignOutRequest] = Body(None),
    actor: Actor = Depends(current_actor),
    use_case: SignOutUseCase = Depends(get_sign_out_use_case),
):
    req = req or SignOutRequest()
    geo = GeoPoint(location=req.location, latitude=req.latitude, longitude=req.longitude)
    return AttendanceResponse.from_attendance(
        use_case.execute(attendance_id, geo, actor)
    )
