"""
PunchTrunk - trunk orchestration with git hotspot reports.

Runs ``trunk fmt`` and ``trunk check`` and ranks files by churn-weighted
token density, writing the ranking as a SARIF 2.1.0 report.
"""

__version__ = "0.1.0"

from .config import RunConfig, load_config
from .hotspots import Hotspot, HotspotRun, compute_hotspots
from .phases import RunSummary, run_phases
from .report import emit_report

__all__ = [
    "RunConfig",
    "load_config",
    "Hotspot",
    "HotspotRun",
    "compute_hotspots",
    "emit_report",
    "RunSummary",
    "run_phases",
]
