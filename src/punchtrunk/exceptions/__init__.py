"""Exception hierarchy for PunchTrunk."""

from .base import PunchTrunkError
from .config import ConfigFileError, ConfigurationError, InvalidConfigError
from .hotspots import ChangeSetError, ChurnError, HotspotError, ReportWriteError
from .trunk import TrunkError
from .vcs import DeadlineExceeded, VcsError, VcsErrorKind

__all__ = [
    "PunchTrunkError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
    "HotspotError",
    "ChangeSetError",
    "ChurnError",
    "ReportWriteError",
    "TrunkError",
    "VcsError",
    "VcsErrorKind",
    "DeadlineExceeded",
]
