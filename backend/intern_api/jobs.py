"""
Name: Background Jobs

Responsibilities:
  - Periodically delete expired email verification codes
  - Prune idle login rate-limit entries on the same tick

Collaborators:
  - application.email_verification.EmailVerificationService
  - rate_limit.LoginRateLimiter
  - main.py: starts/stops the sweeper in the app lifespan

Constraints:
  - Daemon thread; stop() wakes it immediately via an Event
  - A failed sweep is logged and retried on the next tick
"""

import threading
from typing import Callable, Optional

from .application.email_verification import EmailVerificationService
from .exceptions import InternRegisterError
from .logger import logger
from .rate_limit import LoginRateLimiter


class MaintenanceSweeper:
    """R: Runs the housekeeping tasks every interval_seconds until stopped."""

    def __init__(
        self,
        service_factory: Callable[[], EmailVerificationService],
        interval_seconds: float = 3600,
        rate_limiter: Optional[LoginRateLimiter] = None,
    ):
        self._service_factory = service_factory
        self.interval_seconds = interval_seconds
        self.rate_limiter = rate_limiter
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def run_once(self) -> int:
        """R: One tick; returns the number of verification codes removed."""
        if self.rate_limiter is not None:
            pruned = self.rate_limiter.prune()
            if pruned:
                logger.info("Pruned idle rate-limit entries", extra={"count": pruned})

        try:
            return self._service_factory().cleanup_expired()
        except InternRegisterError as exc:
            logger.error(
                "Verification code sweep failed",
                extra={"error_id": exc.error_id, "error_message": exc.message},
            )
            return 0

    def _loop(self) -> None:
        while not self._stop.wait(self.interval_seconds):
            self.run_once()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._loop, name="maintenance-sweeper", daemon=True
        )
        self._thread.start()
        logger.info(
            "Maintenance sweeper started",
            extra={"interval_seconds": self.interval_seconds},
        )

    def stop(self, timeout: float = 5.0) -> None:
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join(timeout)
        self._thread = None
        logger.info("Maintenance sweeper stopped")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
