"""Run-wide timeout shared by every external call."""

import time
from typing import Optional

from .exceptions import DeadlineExceeded


class Deadline:
    """A fixed point in time after which external calls are aborted.

    ``timeout_seconds`` of 0 (or ``None``) disables the limit.
    """

    def __init__(self, timeout_seconds: Optional[float] = None):
        self.timeout_seconds = timeout_seconds or 0
        self._expires_at: Optional[float] = None
        if self.timeout_seconds > 0:
            self._expires_at = time.monotonic() + self.timeout_seconds

    @property
    def enabled(self) -> bool:
        return self._expires_at is not None

    def remaining(self) -> Optional[float]:
        """Seconds left, or None when unbounded. Never negative."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def check(self, operation: str) -> None:
        """Raise DeadlineExceeded if the deadline has already passed."""
        if self.expired:
            raise DeadlineExceeded(operation, self.timeout_seconds)

    def timeout_for(self, operation: str) -> Optional[float]:
        """Timeout to hand to ``subprocess.run`` for the next call."""
        self.check(operation)
        return self.remaining()


def unbounded() -> Deadline:
    return Deadline(0)
