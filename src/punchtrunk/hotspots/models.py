"""Data models for hotspot computation."""

from dataclasses import dataclass, field

ChurnTable = dict[str, int]  # path -> added + removed lines


@dataclass(frozen=True)
class Hotspot:
    """A file paired with its risk score."""

    file: str  # repo-relative, forward slashes
    churn: int
    complexity: float
    score: float  # signed; see ranking.score_file


@dataclass(frozen=True)
class ChangeSetResult:
    files: frozenset[str]
    degraded: bool = False  # at least one diff attempt failed


@dataclass(frozen=True)
class ChurnResult:
    churn: ChurnTable
    degraded: bool = False  # window query failed or history missing


@dataclass
class HotspotRun:
    """Outcome of one hotspot computation."""

    hotspots: list[Hotspot]
    changed_files: int = 0
    churned_files: int = 0
    changes_degraded: bool = False
    churn_degraded: bool = False
    warnings: list[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return self.changes_degraded or self.churn_degraded
