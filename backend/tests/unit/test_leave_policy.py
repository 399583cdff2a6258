"""
Name: Leave Policy Tests

Responsibilities:
  - Transition table (apply / no-op / conflict)
  - Intern scoping and decision rights
  - Closed enum parsing
"""

import pytest

from intern_api.domain.entities import LeaveStatus, LeaveType
from intern_api.domain.leave_policy import (
    Actor,
    Transition,
    can_access_intern,
    can_decide_leave,
    decide_transition,
    scoped_intern_id,
)
from intern_api.users import UserRole

pytestmark = pytest.mark.unit

PENDING, APPROVED, REJECTED = LeaveStatus.PENDING, LeaveStatus.APPROVED, LeaveStatus.REJECTED


@pytest.mark.parametrize(
    "current, target, expected",
    [
        (PENDING, APPROVED, Transition.APPLY),
        (PENDING, REJECTED, Transition.APPLY),
        (APPROVED, APPROVED, Transition.NO_OP),
        (REJECTED, REJECTED, Transition.NO_OP),
        (APPROVED, REJECTED, Transition.CONFLICT),
        (REJECTED, APPROVED, Transition.CONFLICT),
        (APPROVED, PENDING, Transition.CONFLICT),
    ],
)
def test_decide_transition(current, target, expected):
    assert decide_transition(current, target) is expected


def test_only_staff_decide():
    assert can_decide_leave(Actor(user_id=1, role=UserRole.ADMIN))
    assert can_decide_leave(Actor(user_id=2, role=UserRole.SUPERVISOR))
    assert not can_decide_leave(Actor(user_id=3, role=UserRole.INTERN, intern_id=9))
    assert not can_decide_leave(None)


def test_interns_are_forced_to_own_id():
    intern = Actor(user_id=3, role=UserRole.INTERN, intern_id=9)
    staff = Actor(user_id=1, role=UserRole.SUPERVISOR)

    assert scoped_intern_id(intern, 4) == 9
    assert scoped_intern_id(intern, None) == 9
    assert scoped_intern_id(staff, 4) == 4
    assert scoped_intern_id(staff, None) is None


def test_can_access_intern():
    intern = Actor(user_id=3, role=UserRole.INTERN, intern_id=9)

    assert can_access_intern(intern, 9)
    assert not can_access_intern(intern, 4)
    assert not can_access_intern(intern, None)
    assert can_access_intern(Actor(user_id=1, role=UserRole.ADMIN), 4)


class TestEnumParsing:
    def test_parse_is_case_insensitive(self):
        assert LeaveType.parse(" sick ") is LeaveType.SICK
        assert LeaveStatus.parse("approved") is APPROVED
        assert UserRole.parse("Intern") is UserRole.INTERN

    @pytest.mark.parametrize("value", [None, "", "HOLIDAY"])
    def test_unknown_values_parse_to_none(self, value):
        assert LeaveType.parse(value) is None

    def test_terminal_statuses(self):
        assert not PENDING.is_terminal
        assert APPROVED.is_terminal and REJECTED.is_terminal
