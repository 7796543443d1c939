"""Version-control access: git queries with tagged failures."""

from .base import NO_HISTORY_MARKERS, VersionControl, classify_failure
from .git import GitClient

__all__ = [
    "GitClient",
    "NO_HISTORY_MARKERS",
    "VersionControl",
    "classify_failure",
]
