"""Version-control interface consumed by the hotspot engine."""

from abc import ABC, abstractmethod
from typing import Optional

from ..exceptions import VcsErrorKind

# Substrings git prints when there is no history to look at yet: an empty
# repository, an unknown ref, or a shallow clone missing the parent.
NO_HISTORY_MARKERS = (
    "does not have any commits yet",
    "bad revision",
    "unknown revision",
    "ambiguous argument",
    "no such ref",
    "shallow updates were not allowed",
)


def classify_failure(stderr: str) -> VcsErrorKind:
    """Map git's stderr onto a VcsErrorKind."""
    lowered = stderr.lower()
    if any(marker in lowered for marker in NO_HISTORY_MARKERS):
        return VcsErrorKind.NO_HISTORY
    return VcsErrorKind.FAILED


class VersionControl(ABC):
    """Queries the hotspot engine needs from version control.

    Implementations raise ``VcsError`` on failure, tagged with the kind of
    failure, and ``DeadlineExceeded`` when the run's timeout fires.
    """

    @abstractmethod
    def diff_name_only(self, revspec: str) -> str:
        """Return ``git diff --name-only <revspec>`` output."""

    @abstractmethod
    def log_numstat(self, since: Optional[str] = None) -> str:
        """Return per-commit numstat lines, optionally limited to ``since``."""
