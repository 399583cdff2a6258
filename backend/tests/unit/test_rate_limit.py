"""
Name: Login Rate Limiter Tests

Responsibilities:
  - Lockout after max failed attempts, expiry after the lockout window
  - Per-IP isolation and clearing on success
  - Client IP resolution order
"""

import threading
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from intern_api.application.use_cases import LoginInput, LoginUseCase
from intern_api.exceptions import RateLimitError
from intern_api.rate_limit import LoginRateLimiter, get_client_ip

pytestmark = pytest.mark.unit


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return LoginRateLimiter(max_attempts=5, lockout_seconds=15 * 60, clock=clock)


class TestLockout:
    def test_four_failures_do_not_lock(self, limiter):
        for _ in range(4):
            limiter.record_failed_attempt("10.0.0.1")
        assert limiter.is_locked_out("10.0.0.1") is False

    def test_fifth_failure_locks_for_fifteen_minutes(self, limiter, clock):
        for _ in range(5):
            limiter.record_failed_attempt("10.0.0.1")

        assert limiter.is_locked_out("10.0.0.1") is True
        assert limiter.remaining_lockout_seconds("10.0.0.1") == 900

        clock.advance(899)
        assert limiter.is_locked_out("10.0.0.1") is True
        assert limiter.remaining_lockout_seconds("10.0.0.1") == 1

        clock.advance(1)
        assert limiter.is_locked_out("10.0.0.1") is False
        assert limiter.remaining_lockout_seconds("10.0.0.1") == 0

    def test_expired_lockout_starts_fresh(self, limiter, clock):
        for _ in range(5):
            limiter.record_failed_attempt("10.0.0.1")
        clock.advance(901)
        assert limiter.is_locked_out("10.0.0.1") is False

        limiter.record_failed_attempt("10.0.0.1")
        assert limiter.is_locked_out("10.0.0.1") is False

    def test_ips_are_independent(self, limiter):
        for _ in range(5):
            limiter.record_failed_attempt("10.0.0.1")
        assert limiter.is_locked_out("10.0.0.2") is False

    def test_clear_attempts_resets_counter(self, limiter):
        for _ in range(4):
            limiter.record_failed_attempt("10.0.0.1")
        limiter.clear_attempts("10.0.0.1")
        limiter.record_failed_attempt("10.0.0.1")
        assert limiter.is_locked_out("10.0.0.1") is False

    def test_concurrent_failures_are_all_counted(self, clock):
        limiter = LoginRateLimiter(max_attempts=200, lockout_seconds=60, clock=clock)
        threads = [
            threading.Thread(
                target=lambda: [limiter.record_failed_attempt("1.1.1.1") for _ in range(20)]
            )
            for _ in range(10)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert limiter.is_locked_out("1.1.1.1") is True

    def test_check_lockout_reports_time_left_in_one_read(self, limiter, clock):
        for _ in range(5):
            limiter.record_failed_attempt("10.0.0.1")
        clock.advance(899.5)

        assert limiter.check_lockout("10.0.0.1") == 1

        clock.advance(0.5)
        assert limiter.check_lockout("10.0.0.1") == 0
        assert limiter.tracked_ips() == 0

    def test_locked_out_caller_never_sees_zero_seconds(self):
        calls = iter([1000.0, 1000.0 + 59.999])
        limiter = LoginRateLimiter(max_attempts=1, lockout_seconds=60, clock=lambda: next(calls))
        limiter.record_failed_attempt("10.0.0.1")

        assert limiter.check_lockout("10.0.0.1") == 1

    @pytest.mark.parametrize("kwargs", [{"max_attempts": 0}, {"lockout_seconds": 0}])
    def test_rejects_non_positive_configuration(self, kwargs):
        with pytest.raises(ValueError):
            LoginRateLimiter(**kwargs)


def _request(headers=None, host="192.168.1.9"):
    client = SimpleNamespace(host=host) if host else None
    return SimpleNamespace(headers=headers or {}, client=client)


class TestClientIp:
    def test_prefers_first_forwarded_for_entry(self):
        request = _request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "X-Real-IP": "1.2.3.4"})
        assert get_client_ip(request) == "203.0.113.7"

    def test_falls_back_to_real_ip(self):
        assert get_client_ip(_request({"X-Real-IP": " 1.2.3.4 "})) == "1.2.3.4"

    def test_falls_back_to_peer_address(self):
        assert get_client_ip(_request()) == "192.168.1.9"

    def test_unknown_without_peer(self):
        assert get_client_ip(_request(host=None)) == "unknown"


class TestPrune:
    def test_drops_idle_entries_below_threshold(self, limiter, clock):
        for _ in range(4):
            limiter.record_failed_attempt("10.0.0.1")
        clock.advance(900)

        assert limiter.prune() == 1
        assert limiter.tracked_ips() == 0

    def test_keeps_recent_failures(self, limiter, clock):
        limiter.record_failed_attempt("10.0.0.1")
        clock.advance(60)

        assert limiter.prune() == 0
        assert limiter.tracked_ips() == 1

    def test_keeps_active_lockouts(self, limiter, clock):
        for _ in range(5):
            limiter.record_failed_attempt("10.0.0.1")
        clock.advance(120)

        assert limiter.prune(idle_seconds=60) == 0
        assert limiter.is_locked_out("10.0.0.1") is True

    def test_drops_expired_lockouts(self, limiter, clock):
        for _ in range(5):
            limiter.record_failed_attempt("10.0.0.1")
        clock.advance(901)

        assert limiter.prune() == 1


def test_login_reads_lockout_once():
    limiter = MagicMock(spec=LoginRateLimiter)
    limiter.check_lockout.return_value = 1
    users = MagicMock()

    with pytest.raises(RateLimitError) as exc_info:
        LoginUseCase(users, limiter).execute(
            LoginInput(username="a@univen.ac.za", password="x", client_ip="10.0.0.1")
        )

    assert exc_info.value.lockout_seconds == 1
    limiter.check_lockout.assert_called_once_with("10.0.0.1")
    limiter.remaining_lockout_seconds.assert_not_called()
    users.get_by_username.assert_not_called()
