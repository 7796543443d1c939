"""Hotspot scoring: churn, complexity, and change-set bias."""

from .changeset import resolve_changed_files
from .churn import aggregate_churn, parse_numstat
from .complexity import estimate_all, estimate_complexity
from .engine import compute_hotspots
from .models import ChangeSetResult, ChurnResult, Hotspot, HotspotRun
from .ranking import CHANGED_FILE_BIAS, rank_hotspots

__all__ = [
    "CHANGED_FILE_BIAS",
    "ChangeSetResult",
    "ChurnResult",
    "Hotspot",
    "HotspotRun",
    "aggregate_churn",
    "compute_hotspots",
    "estimate_all",
    "estimate_complexity",
    "parse_numstat",
    "rank_hotspots",
    "resolve_changed_files",
]
