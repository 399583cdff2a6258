"""
Name: Attendance Use Cases

Responsibilities:
  - Sign an intern in (time-in, optional location/coordinates)
  - Sign out (time-out, SIGNED_OUT, optional location update)
  - List attendance, scoped for INTERN callers

Collaborators:
  - domain.repositories.AttendanceRepository, ProfileRepository
  - domain.leave_policy: intern scoping rules
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ...domain.entities import Attendance, AttendanceStatus
from ...domain.leave_policy import Actor, can_access_intern, scoped_intern_id
from ...domain.repositories import AttendanceRepository, ProfileRepository
from ...exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ...logger import logger


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class GeoPoint:
    location: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def validate(self) -> None:
        if self.latitude is not None and not -90 <= self.latitude <= 90:
            raise ValidationError("latitude must be between -90 and 90")
        if self.longitude is not None and not -180 <= self.longitude <= 180:
            raise ValidationError("longitude must be between -180 and 180")


@dataclass
class SignInInput:
    intern_id: Optional[int]
    geo: GeoPoint


class SignInUseCase:
    """R: Open an attendance record for today."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        profiles: ProfileRepository,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.attendance = attendance
        self.profiles = profiles
        self._clock = clock

    def execute(self, input_data: SignInInput, actor: Actor) -> Attendance:
        intern_id = scoped_intern_id(actor, input_data.intern_id)
        if intern_id is None:
            raise ValidationError("internId is required")
        input_data.geo.validate()

        if self.profiles.get_intern(intern_id) is None:
            raise NotFoundError(f"Intern not found with id: {intern_id}")

        now = self._clock()
        record = self.attendance.create(
            Attendance(
                id=None,
                intern_id=intern_id,
                date=now.date(),
                time_in=now,
                status=AttendanceStatus.SIGNED_IN,
                location=input_data.geo.location,
                latitude=input_data.geo.latitude,
                longitude=input_data.geo.longitude,
            )
        )
        logger.info(
            "Intern signed in",
            extra={"attendance_id": record.id, "intern_id": intern_id},
        )
        return record


class SignOutUseCase:
    """R: Close an open attendance record."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.attendance = attendance
        self._clock = clock

    def execute(self, attendance_id: int, geo: GeoPoint, actor: Actor) -> Attendance:
        geo.validate()

        record = self.attendance.get(attendance_id)
        if record is None:
            raise NotFoundError(f"Attendance record not found with id: {attendance_id}")
        if not can_access_intern(actor, record.intern_id):
            raise AuthorizationError("Cannot sign out another intern's attendance")
        if record.is_signed_out:
            raise ConflictError(f"Attendance record {attendance_id} is already signed out")

        record.time_out = self._clock()
        record.status = AttendanceStatus.SIGNED_OUT
        if geo.location is not None:
            record.location = geo.location
        if geo.latitude is not None:
            record.latitude = geo.latitude
        if geo.longitude is not None:
            record.longitude = geo.longitude

        updated = self.attendance.update(record)
        logger.info(
            "Intern signed out",
            extra={"attendance_id": attendance_id, "intern_id": record.intern_id},
        )
        return updated


class ListAttendanceUseCase:
    def __init__(self, attendance: AttendanceRepository):
        self.attendance = attendance

    def execute(self, actor: Actor, intern_id: Optional[int] = None) -> List[Attendance]:
        return self.attendance.list(scoped_intern_id(actor, intern_id))
