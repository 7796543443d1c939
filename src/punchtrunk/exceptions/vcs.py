"""Version-control and cancellation exceptions."""

from enum import Enum
from typing import Optional, Sequence

from .base import PunchTrunkError


class VcsErrorKind(Enum):
    """Why a git query failed."""

    NO_HISTORY = "no_history"  # empty repo, unknown ref, shallow clone
    UNAVAILABLE = "unavailable"  # git executable missing
    FAILED = "failed"


class VcsError(PunchTrunkError):
    """Raised when a git query exits unsuccessfully.

    ``kind`` is decided once, where the subprocess output is still at hand,
    so callers never have to match on stderr text themselves.
    """

    def __init__(
        self,
        kind: VcsErrorKind,
        args: Sequence[str],
        stderr: str = "",
        returncode: Optional[int] = None,
    ):
        command = "git " + " ".join(args)
        details = {"kind": kind.value}
        if returncode is not None:
            details["returncode"] = str(returncode)
        if stderr.strip():
            details["stderr"] = stderr.strip()
        super().__init__(f"{command} failed", details=details)
        self.kind = kind
        self.command = command
        self.stderr = stderr
        self.returncode = returncode

    @property
    def is_no_history(self) -> bool:
        return self.kind is VcsErrorKind.NO_HISTORY


class DeadlineExceeded(PunchTrunkError):
    """Raised when the run's timeout fires during an external call."""

    def __init__(self, operation: str, timeout_seconds: float):
        super().__init__(
            f"Timed out during {operation}",
            details={"timeout_seconds": f"{timeout_seconds:g}"},
        )
        self.operation = operation
        self.timeout_seconds = timeout_seconds
