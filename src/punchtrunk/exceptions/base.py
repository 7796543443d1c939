"""Root of the PunchTrunk exception hierarchy."""

from typing import Dict, Optional


class PunchTrunkError(Exception):
    """Any failure a phase can report without crashing the run.

    ``details`` carries short string facts (command, path, return code) that
    are appended to the message and attached to ``mode.error`` log events.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def log_fields(self) -> Dict[str, str]:
        """Flat fields for structured logging; detail keys are prefixed."""
        fields = {"error": self.message}
        fields.update({f"error_{k}": v for k, v in self.details.items()})
        return fields

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} ({', '.join(f'{k}={v}' for k, v in self.details.items())})"
