"""
Name: Login Rate Limiter

Responsibilities:
  - Count failed login attempts per client IP
  - Lock an IP out for a fixed duration once the threshold is reached
  - Resolve the client IP from proxy headers
  - Forget idle, unlocked entries on prune() so the map stays bounded

Collaborators:
  - config.py: LOGIN_MAX_ATTEMPTS, LOGIN_LOCKOUT_MINUTES
  - main.py: creates one limiter per app and stores it on app.state
  - application.use_cases.login: consults and updates the limiter

Constraints:
  - In-memory storage (resets on restart, no persistence)
  - Thread-safe: every read-modify-write on a key runs under one lock

Notes:
  - clock is injectable so tests can advance time without sleeping
"""

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from starlette.requests import Request

from .logger import logger


@dataclass
class AttemptState:
    """R: Failure counter and lockout expiry for a single IP."""

    failures: int = 0
    locked_until: Optional[float] = None
    last_failure: float = 0.0


class LoginRateLimiter:
    """
    R: Per-IP failed-login counter with time-boxed lockout.

    Attributes:
        max_attempts: Failures that trigger a lockout
        lockout_seconds: Lockout duration
    """

    def __init__(
        self,
        max_attempts: int = 5,
        lockout_seconds: int = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_attempts <= 0:
            raise ValueError("max_attempts must be positive")
        if lockout_seconds <= 0:
            raise ValueError("lockout_seconds must be positive")

        self.max_attempts = max_attempts
        self.lockout_seconds = lockout_seconds
        self._clock = clock
        self._entries: dict[str, AttemptState] = {}
        self._lock = threading.Lock()

    def check_lockout(self, ip: str) -> int:
        """
        R: Seconds left on an active lockout (at least 1), or 0.

        Check and remaining time come from one locked read, so a locked-out
        caller never sees 0. Expired lockouts are cleared.
        """
        with self._lock:
            entry = self._entries.get(ip)
            if entry is None or entry.locked_until is None:
                return 0
            remaining = entry.locked_until - self._clock()
            if remaining > 0:
                return max(1, math.ceil(remaining))
            del self._entries[ip]
            return 0

    def is_locked_out(self, ip: str) -> bool:
        """R: True while a lockout is active; clears state once it has expired."""
        return self.check_lockout(ip) > 0

    def record_failed_attempt(self, ip: str) -> None:
        with self._lock:
            now = self._clock()
            entry = self._entries.setdefault(ip, AttemptState())
            entry.failures += 1
            entry.last_failure = now
            if entry.failures >= self.max_attempts:
                entry.locked_until = now + self.lockout_seconds
                locked = True
            else:
                locked = False
            failures = entry.failures

        if locked:
            logger.warning(
                "Client locked out after failed logins",
                extra={"client_ip": ip, "failures": failures},
            )

    def clear_attempts(self, ip: str) -> None:
        with self._lock:
            self._entries.pop(ip, None)

    def remaining_lockout_seconds(self, ip: str) -> int:
        """R: Seconds (rounded up) until the lockout expires, 0 if not locked out."""
        with self._lock:
            entry = self._entries.get(ip)
            if entry is None or entry.locked_until is None:
                return 0
            remaining = entry.locked_until - self._clock()
            if remaining <= 0:
                return 0
            return max(1, math.ceil(remaining))

    def prune(self, idle_seconds: Optional[float] = None) -> int:
        """
        R: Drop entries with no active lockout whose last failure is older
        than idle_seconds (default: the lockout window). Returns the count.
        """
        idle = self.lockout_seconds if idle_seconds is None else idle_seconds
        with self._lock:
            now = self._clock()
            stale = [
                ip
                for ip, entry in self._entries.items()
                if (entry.locked_until is None or entry.locked_until <= now)
                and now - entry.last_failure >= idle
            ]
            for ip in stale:
                del self._entries[ip]
        return len(stale)

    def tracked_ips(self) -> int:
        with self._lock:
            return len(self._entries)

    def reset(self) -> None:
        with self._lock:
            self._entries.clear()


def get_client_ip(request: Request) -> str:
    """
    R: Client IP for throttling.

    Order: first X-Forwarded-For entry, X-Real-IP, socket peer.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def get_login_rate_limiter(request: Request) -> LoginRateLimiter:
    """R: FastAPI dependency returning the app-owned limiter."""
    return request.app.state.login_rate_limiter
