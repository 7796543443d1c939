"""Hotspot-phase exceptions: data-source exhaustion, report output."""

from pathlib import Path
from typing import Optional

from .base import PunchTrunkError


class HotspotError(PunchTrunkError):
    """Base class for hotspot computation errors."""

    pass


class ChangeSetError(HotspotError):
    """Raised when every changed-file query failed for a non-history reason."""

    def __init__(self, attempts: int, reason: str):
        super().__init__(
            "git diff failed",
            details={"attempts": str(attempts), "reason": reason},
        )
        self.attempts = attempts
        self.reason = reason


class ChurnError(HotspotError):
    """Raised when every churn query failed for a non-history reason."""

    def __init__(self, attempts: int, reason: str):
        super().__init__(
            "git log failed",
            details={"attempts": str(attempts), "reason": reason},
        )
        self.attempts = attempts
        self.reason = reason


class ReportWriteError(HotspotError):
    """Raised when the report cannot be written anywhere."""

    def __init__(self, path: Path, reason: str, fallback: Optional[Path] = None):
        details = {"path": str(path), "reason": reason}
        if fallback is not None:
            details["fallback"] = str(fallback)
        super().__init__(f"Cannot write report: {path}", details=details)
        self.path = path
        self.reason = reason
        self.fallback = fallback
