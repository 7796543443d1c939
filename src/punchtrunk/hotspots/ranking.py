"""Combine churn and complexity into a ranked hotspot list."""

from __future__ import annotations

import math
from collections.abc import Callable, Collection, Mapping

from ..math import Statistics
from .models import Hotspot

# Multiplier for files in the current change set; enough to break
# near-ties with dormant files, not to overturn large churn gaps.
CHANGED_FILE_BIAS = 1.15

DEFAULT_LIMIT = 500


def score_file(churn: int, complexity_z: float, changed: bool = False) -> float:
    """Score = ln(1 + churn) * (1 + z), times the bias for changed files.

    ``1 + z`` goes negative for files well below the mean complexity, which
    flips the sign of the score; a biased negative score then ranks lower
    than its unbiased form. Callers rely on that exact arithmetic, so it is
    not clamped.
    """
    score = math.log1p(churn) * (1.0 + complexity_z)
    if changed:
        score *= CHANGED_FILE_BIAS
    return score


def sort_key(hotspot: Hotspot) -> tuple[float, str]:
    """Score descending, then path ascending for equal scores."""
    return (-hotspot.score, hotspot.file)


def rank_hotspots(
    churn: Mapping[str, int],
    complexity: Mapping[str, float],
    changed: Collection[str] = frozenset(),
    exists: Callable[[str], bool] | None = None,
    limit: int = DEFAULT_LIMIT,
) -> list[Hotspot]:
    """Score every churned file and return the top ``limit`` hotspots.

    Args:
        churn: Churn per path
        complexity: Complexity per path; missing paths count as 0.0
        changed: Paths in the current change set
        exists: Predicate for "file is still on disk"; files failing it are
            dropped after normalisation (None keeps everything)
        limit: Maximum results

    Returns:
        Hotspots sorted by score descending, ties by path.
    """
    # Normalise over every churned file, including ones no longer on disk
    values = [complexity.get(path, 0.0) for path in churn]
    mean, std = Statistics.mean_std(values)

    hotspots: list[Hotspot] = []
    for path, file_churn in churn.items():
        if exists is not None and not exists(path):
            continue
        file_churn = max(int(file_churn), 0)
        file_complexity = complexity.get(path, 0.0)
        z = Statistics.z_score(file_complexity, mean, std)
        hotspots.append(
            Hotspot(
                file=to_slash(path),
                churn=file_churn,
                complexity=file_complexity,
                score=score_file(file_churn, z, path in changed),
            )
        )

    hotspots.sort(key=sort_key)
    return hotspots[:limit]


def to_slash(path: str) -> str:
    """Forward-slash a path regardless of host separator."""
    return path.replace("\\", "/")
