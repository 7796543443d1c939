"""Errors raised while driving the external trunk CLI."""

from typing import Optional

from .base import PunchTrunkError


class TrunkError(PunchTrunkError):
    """Raised when ``trunk`` is missing or exits non-zero."""

    def __init__(self, command: str, reason: str, returncode: Optional[int] = None):
        details = {"command": command, "reason": reason}
        if returncode is not None:
            details["returncode"] = str(returncode)
        super().__init__(f"{command} failed", details=details)
        self.command = command
        self.reason = reason
        self.returncode = returncode
